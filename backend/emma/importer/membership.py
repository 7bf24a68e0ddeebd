"""Fill translated i-group files with the ids of their extracted warriors.

Legacy rosters name members by CiviCRM id and email; warriors written by
the extraction step keep both inside ``mkpconnect_data``. Each roster entry
is matched by CiviCRM id first and by email second.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from emma.importer.batch import dump_json, list_source_files, read_json
from emma.importer.errors import ImportRecordError
from emma.importer.stats import MembershipStats
from emma.importer.warriors import parse_membership
from emma.schemas.legacy import LegacyMembership


logger = logging.getLogger(__name__)


def _legacy_key(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text or text == "0":
        return None
    return text


def _email_key(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().lower()


@dataclass
class WarriorLookup:
    by_civicrm_id: dict[str, str] = field(default_factory=dict)
    by_email: dict[str, str] = field(default_factory=dict)

    def add(self, warrior: dict[str, Any]) -> None:
        legacy = warrior.get("mkpconnect_data") or {}
        if not isinstance(legacy, dict) or not warrior.get("id"):
            return
        civicrm_id = _legacy_key(legacy.get("civicrm_user_id"))
        if civicrm_id:
            self.by_civicrm_id[civicrm_id] = warrior["id"]
        email = _email_key(legacy.get("member_email"))
        if email:
            self.by_email[email] = warrior["id"]

    def find(self, member: dict[str, Any]) -> str | None:
        civicrm_id = _legacy_key(member.get("civicrm_user_id"))
        if civicrm_id and civicrm_id in self.by_civicrm_id:
            return self.by_civicrm_id[civicrm_id]
        email = _email_key(member.get("member_email"))
        if email:
            return self.by_email.get(email)
        return None


def describe_member(member: dict[str, Any]) -> str:
    civicrm_id = _legacy_key(member.get("civicrm_user_id"))
    if civicrm_id:
        return f"civicrm:{civicrm_id}"
    if _email_key(member.get("member_email")):
        return f"email:{member['member_email']}"
    return f"drupal:{member.get('drupal_user_id')}"


def build_warrior_lookup(warriors_dir: Path) -> WarriorLookup:
    lookup = WarriorLookup()
    for path in list_source_files(warriors_dir):
        try:
            warrior = read_json(path)
        except ImportRecordError as exc:
            logger.warning("Failed to load warrior file %s: %s", path.name, exc)
            continue
        if isinstance(warrior, dict):
            lookup.add(warrior)
    logger.info(
        "Loaded %d warriors by CiviCRM ID, %d by email",
        len(lookup.by_civicrm_id),
        len(lookup.by_email),
    )
    return lookup


def load_memberships(membership_dir: Path) -> dict[str, LegacyMembership]:
    memberships: dict[str, LegacyMembership] = {}
    for path in list_source_files(membership_dir):
        try:
            membership = parse_membership(read_json(path))
        except ImportRecordError as exc:
            logger.warning("Failed to load membership file %s: %s", path.name, exc)
            continue
        memberships[str(membership.group_id)] = membership
    return memberships


def link_members(
    membership: LegacyMembership, lookup: WarriorLookup
) -> tuple[list[str], list[str]]:
    """Return the matched warrior ids and descriptions of unmatched members."""
    matched: list[str] = []
    missing: list[str] = []
    for member in membership.members:
        if not isinstance(member, dict):
            continue
        warrior_id = lookup.find(member)
        if warrior_id:
            matched.append(warrior_id)
        else:
            missing.append(describe_member(member))
    return matched, missing


def _link_file(
    path: Path,
    memberships: dict[str, LegacyMembership],
    lookup: WarriorLookup,
    stats: MembershipStats,
    *,
    dry_run: bool,
    pretty: bool,
) -> None:
    igroup = read_json(path)
    stats.igroups_processed += 1

    legacy = igroup.get("mkpconnect_data") if isinstance(igroup, dict) else None
    group_key = _legacy_key(legacy.get("mkp_connect_id")) if isinstance(legacy, dict) else None
    if not group_key:
        stats.warn(f"{path.name}: Missing mkp_connect_id in mkpconnect_data")
        stats.igroups_skipped += 1
        return

    membership = memberships.get(group_key)
    if membership is None:
        logger.info("%s: no membership data for group %s", path.name, group_key)
        stats.igroups_without_membership += 1
        return

    matched, missing = link_members(membership, lookup)
    stats.members_matched += len(matched)
    stats.members_not_found += len(missing)
    igroup["members"] = matched
    if not dry_run:
        path.write_text(dump_json(igroup, pretty), encoding="utf-8")

    logger.info(
        "%s: %d/%d members matched", path.name, len(matched), len(membership.members)
    )
    if missing:
        more = "..." if len(missing) > 3 else ""
        stats.warn(
            f"{path.name}: {len(missing)} members not found: {', '.join(missing[:3])}{more}"
        )
    stats.igroups_updated += 1


def run_membership_link(
    igroups_dir: Path,
    membership_dir: Path,
    warriors_dir: Path,
    *,
    dry_run: bool = False,
    pretty: bool = False,
) -> MembershipStats:
    """Rewrite each ``igroups_dir`` file with ``members`` set to warrior ids."""
    lookup = build_warrior_lookup(warriors_dir)
    memberships = load_memberships(membership_dir)
    stats = MembershipStats()
    for path in list_source_files(igroups_dir):
        try:
            _link_file(path, memberships, lookup, stats, dry_run=dry_run, pretty=pretty)
        except (ImportRecordError, OSError) as exc:
            logger.error("Error processing %s: %s", path.name, exc)
            stats.igroups_skipped += 1
    return stats
