import json

import pytest

from emma.importer.membership import (
    WarriorLookup,
    build_warrior_lookup,
    link_members,
    load_memberships,
    run_membership_link,
)
from emma.schemas.legacy import LegacyMembership

from factories import legacy_member


def warrior(warrior_id: str, **legacy) -> dict:
    return {"id": warrior_id, "mkpconnect_data": legacy_member(**legacy)}


@pytest.fixture
def lookup() -> WarriorLookup:
    lookup = WarriorLookup()
    lookup.add(warrior("w-civicrm", civicrm_user_id=7, member_email="shared@example.org"))
    lookup.add(warrior("w-email", member_email="Solo@Example.org"))
    return lookup


def test_civicrm_id_wins_over_email(lookup):
    found = lookup.find(legacy_member(civicrm_user_id=7, member_email="solo@example.org"))
    assert found == "w-civicrm"


def test_members_link_by_email_when_civicrm_id_is_absent_or_unknown(lookup):
    assert lookup.find(legacy_member(member_email=" SOLO@example.org")) == "w-email"
    assert lookup.find(legacy_member(civicrm_user_id=99, member_email="solo@example.org")) == "w-email"
    assert lookup.find(legacy_member(civicrm_user_id=99)) is None


def test_link_members_reports_unmatched(lookup):
    membership = LegacyMembership(
        group_id=1,
        members=[
            legacy_member(civicrm_user_id="7"),
            legacy_member(member_email="nobody@example.org"),
            legacy_member(civicrm_user_id=42),
            legacy_member(),
        ],
    )

    matched, missing = link_members(membership, lookup)

    assert matched == ["w-civicrm"]
    assert missing == ["email:nobody@example.org", "civicrm:42", "drupal:5001"]


def test_build_lookup_and_memberships_skip_broken_files(tmp_path, write_json):
    warriors_dir = tmp_path / "warriors"
    write_json(warriors_dir, "a.json", warrior("w-1", civicrm_user_id=1, member_email="a@example.org"))
    (warriors_dir / "b.json").write_text("{", encoding="utf-8")
    roster_dir = tmp_path / "membership"
    write_json(roster_dir, "1.json", {"group_id": 1, "members": []})
    write_json(roster_dir, "2.json", {"members": []})

    lookup = build_warrior_lookup(warriors_dir)
    memberships = load_memberships(roster_dir)

    assert lookup.by_civicrm_id == {"1": "w-1"}
    assert lookup.by_email == {"a@example.org": "w-1"}
    assert list(memberships) == ["1"]


@pytest.fixture
def tree(tmp_path, write_json):
    write_json(tmp_path / "warriors", "a.json", warrior("w-1", civicrm_user_id=1))
    write_json(tmp_path / "warriors", "b.json", warrior("w-2", member_email="b@example.org"))
    write_json(
        tmp_path / "membership",
        "101.json",
        {
            "group_id": 101,
            "members": [
                legacy_member(civicrm_user_id=1),
                legacy_member(member_email="B@example.org"),
                legacy_member(civicrm_user_id=3),
            ],
        },
    )
    igroups = tmp_path / "i-groups"
    write_json(igroups, "linked.json", {"id": "g-1", "members": [], "mkpconnect_data": {"mkp_connect_id": "101"}})
    write_json(igroups, "lonely.json", {"id": "g-2", "members": [], "mkpconnect_data": {"mkp_connect_id": 202}})
    write_json(igroups, "legacyless.json", {"id": "g-3", "members": []})
    return tmp_path


def test_run_membership_link_rewrites_igroups(tree):
    stats = run_membership_link(tree / "i-groups", tree / "membership", tree / "warriors")

    linked = json.loads((tree / "i-groups" / "linked.json").read_text(encoding="utf-8"))
    assert linked["members"] == ["w-1", "w-2"]
    assert stats.igroups_processed == 3
    assert stats.igroups_updated == 1
    assert stats.igroups_without_membership == 1
    assert stats.igroups_skipped == 1
    assert stats.members_matched == 2
    assert stats.members_not_found == 1
    summary = stats.format_summary()
    assert "legacyless.json: Missing mkp_connect_id in mkpconnect_data" in summary
    assert "linked.json: 1 members not found: civicrm:3" in summary


def test_dry_run_leaves_files_untouched(tree):
    before = (tree / "i-groups" / "linked.json").read_text(encoding="utf-8")

    stats = run_membership_link(
        tree / "i-groups", tree / "membership", tree / "warriors", dry_run=True
    )

    assert stats.members_matched == 2
    assert (tree / "i-groups" / "linked.json").read_text(encoding="utf-8") == before
