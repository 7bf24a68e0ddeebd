import json
import uuid

import pytest

from emma.importer.errors import SourceDirectoryError
from emma.importer.stats import ExtractionStats
from emma.importer.warriors import (
    ParsedName,
    extract_warriors,
    parse_member_name,
    run_extraction,
    translate_member,
    warrior_filename,
    warrior_key,
)
from emma.schemas.imports import ImportedWarrior
from emma.schemas.legacy import LegacyMember, LegacyMembership

from factories import legacy_member


def member(**overrides) -> LegacyMember:
    return LegacyMember.model_validate(legacy_member(**overrides))


def roster(group_id: int, *members: dict) -> LegacyMembership:
    return LegacyMembership(group_id=group_id, members=list(members))


@pytest.mark.parametrize(
    ("display_name", "sort_name", "expected"),
    [
        ("Cher", None, ParsedName("Cher", None, "")),
        ("Sam Rivera", None, ParsedName("Sam", None, "Rivera")),
        ("Sam J. Q. Rivera", "ignored, Name", ParsedName("Sam", "J. Q.", "Rivera")),
        ("  ", "Rivera, Sam", ParsedName("Sam", None, "Rivera")),
        (None, "Rivera, Sam James", ParsedName("Sam", "James", "Rivera")),
        (None, "Sam Rivera", ParsedName("Sam", None, "Rivera")),
        (None, "Rivera, ", None),
        (None, "a, b, c", None),
        (None, None, None),
    ],
)
def test_parse_member_name(display_name, sort_name, expected):
    assert parse_member_name(display_name, sort_name) == expected


def test_warrior_key_prefers_civicrm_id_then_email():
    assert warrior_key(member(civicrm_user_id=7, member_email="X@Example.org")) == "civicrm:7"
    assert warrior_key(member(member_email=" X@Example.org ")) == "email:x@example.org"
    assert warrior_key(member(display_name="Sam Rivera")) == "drupal:5001"
    assert warrior_key(member(drupal_user_id=None, display_name="Sam Rivera")) == "name:sam rivera"
    assert warrior_key(member(drupal_user_id=None)) == ""


def test_translate_member_builds_warrior_record():
    raw = legacy_member(
        civicrm_user_id=7,
        member_email="sam@example.org",
        display_name="Sam Rivera",
        image_URL="https://example.org/sam.jpg",
        IEN="Laughing Bear",
        birth_date="1970-04-01",
    )

    warrior = translate_member(LegacyMember.model_validate(raw), raw)

    assert uuid.UUID(warrior["id"])
    assert warrior["first_name"] == "Sam"
    assert warrior["last_name"] == "Rivera"
    assert warrior["email"] == "sam@example.org"
    assert warrior["photo_url"] == "https://example.org/sam.jpg"
    assert warrior["inner_essence_name"] == "Laughing Bear"
    assert warrior["status"] == "active"
    assert warrior["is_active"] is True
    assert warrior["mkpconnect_data"] == raw
    imported = ImportedWarrior.model_validate(warrior)
    assert imported.birth_date.year == 1970


def test_deceased_member_is_inactive():
    raw = legacy_member(display_name="Sam Rivera", deceased_date="2020-01-01")

    warrior = translate_member(LegacyMember.model_validate(raw), raw)

    assert warrior["status"] == "deceased"
    assert warrior["is_active"] is False


def test_first_occurrence_wins_across_rosters():
    stats = ExtractionStats()
    memberships = [
        roster(1, legacy_member(civicrm_user_id=7, member_email="a@example.org", display_name="First Seen")),
        roster(
            2,
            legacy_member(civicrm_user_id=7, member_email="other@example.org", display_name="Later Name"),
            legacy_member(member_email="A@example.org", display_name="Email Only"),
            legacy_member(member_email="a@example.org", display_name="Email Again"),
        ),
    ]

    warriors = extract_warriors(memberships, stats)

    assert [warrior["first_name"] for _, warrior in warriors] == ["First", "Email"]
    assert stats.memberships_processed == 2
    assert stats.members_processed == 4
    assert stats.duplicates_merged == 2
    assert stats.missing_civicrm_id == 2


def test_unparseable_and_unkeyed_members_are_skipped():
    stats = ExtractionStats()
    memberships = [
        roster(
            1,
            legacy_member(drupal_user_id=None),
            legacy_member(civicrm_user_id=3),
            "not a member",
        )
    ]

    assert extract_warriors(memberships, stats) == []
    assert stats.skipped == 3
    assert stats.name_parse_failed == 1
    assert stats.missing_name == 1


def test_warrior_filename():
    named = member(display_name="Sam O'Rivera")
    assert warrior_filename(named, {"id": "12345678-aaaa"}) == "Sam_O_Rivera_12345678.json"
    assert warrior_filename(member(), {"id": "12345678-aaaa"}) == "unnamed_12345678.json"


def test_run_extraction_writes_one_file_per_warrior(tmp_path, write_json):
    source = tmp_path / "membership"
    write_json(source, "1.json", {"group_id": 1, "members": [legacy_member(civicrm_user_id=1, display_name="Al Bee")]})
    write_json(source, "2.json", {"group_id": 2, "members": [legacy_member(civicrm_user_id=1, display_name="Al Bee")]})
    (source / "3.json").write_text("{broken", encoding="utf-8")
    target = tmp_path / "warriors"

    stats = run_extraction(source, target, pretty=True)

    files = list(target.glob("Al_Bee_*.json"))
    assert len(files) == 1
    assert json.loads(files[0].read_text(encoding="utf-8"))["mkpconnect_data"]["civicrm_user_id"] == 1
    assert stats.warriors_created == 1
    assert stats.duplicates_merged == 1
    assert stats.failed_files == 1
    assert "Unique warriors created: 1" in stats.format_summary()


def test_run_extraction_requires_source_directory(tmp_path):
    with pytest.raises(SourceDirectoryError):
        run_extraction(tmp_path / "missing", tmp_path / "warriors")
