"""Extract unique warriors from the MKP Connect i-group membership rosters.

A person usually belongs to several groups, so members are deduplicated by
a key built from the strongest identifier available: CiviCRM id, then
email, then Drupal id, then display name. The first occurrence wins.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from emma.core.clock import utc_now_iso
from emma.importer.batch import dump_json, list_source_files, parse_record, read_json
from emma.importer.errors import ImportRecordError, RecordParseError
from emma.importer.parsing import sanitize_for_filename
from emma.importer.stats import ExtractionStats
from emma.models.enums import WarriorStatus
from emma.schemas.legacy import LegacyMember, LegacyMembership


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedName:
    first_name: str
    middle_name: str | None
    last_name: str


def _name_from_words(text: str) -> ParsedName:
    parts = text.split()
    if len(parts) == 1:
        return ParsedName(parts[0], None, "")
    if len(parts) == 2:
        return ParsedName(parts[0], None, parts[1])
    return ParsedName(parts[0], " ".join(parts[1:-1]), parts[-1])


def parse_member_name(display_name: str | None, sort_name: str | None) -> ParsedName | None:
    """Split a legacy name into first/middle/last.

    ``display_name`` is read as "First Middle... Last". ``sort_name`` is the
    fallback and is read as "Last, First Middle..." when it holds exactly one
    comma, or like a display name when it holds none.
    """
    if display_name and display_name.strip():
        return _name_from_words(display_name)
    if sort_name and sort_name.strip():
        parts = sort_name.split(",")
        if len(parts) == 1:
            return _name_from_words(sort_name)
        if len(parts) == 2:
            given = parts[1].split()
            if given:
                middle = " ".join(given[1:]) or None
                return ParsedName(given[0], middle, parts[0].strip())
    return None


def warrior_key(member: LegacyMember) -> str:
    if member.civicrm_user_id:
        return f"civicrm:{member.civicrm_user_id}"
    if member.member_email:
        return f"email:{member.member_email.strip().lower()}"
    if member.drupal_user_id:
        return f"drupal:{member.drupal_user_id}"
    if member.display_name:
        return f"name:{member.display_name.strip().lower()}"
    return ""


def translate_member(member: LegacyMember, raw: dict[str, Any]) -> dict[str, Any] | None:
    """Build a warriors/*.json record, or None when no name can be parsed."""
    name = parse_member_name(member.display_name, member.sort_name)
    if name is None:
        return None

    status = WarriorStatus.DECEASED if member.deceased_date else WarriorStatus.ACTIVE
    now = utc_now_iso()
    return {
        "id": str(uuid.uuid4()),
        "first_name": name.first_name,
        "middle_name": name.middle_name,
        "last_name": name.last_name,
        "email": member.member_email,
        "phone": None,
        "billing_address_id": None,
        "mailing_address_id": None,
        "physical_address_id": None,
        "notes": None,
        "photo_url": member.image_URL,
        "birth_date": member.birth_date,
        "deceased_date": member.deceased_date,
        "is_active": status is not WarriorStatus.DECEASED,
        "created_at": now,
        "updated_at": now,
        "log_id": None,
        "initiation_id": None,
        "initiation_on": None,
        "status": status.value,
        "training_events": [],
        "staffed_events": [],
        "lead_events": [],
        "mos_events": [],
        "area_id": None,
        "community_id": None,
        "inner_essence_name": member.IEN,
        "mkpconnect_data": raw,
    }


def warrior_filename(member: LegacyMember, warrior: dict[str, Any]) -> str:
    name = sanitize_for_filename(member.display_name or member.sort_name or "") or "unnamed"
    return f"{name}_{warrior['id'][:8]}.json"


def parse_membership(payload: Any) -> LegacyMembership:
    if not isinstance(payload, dict):
        raise RecordParseError("membership file must contain a JSON object")
    return parse_record(LegacyMembership, payload)


def _parse_member(raw: Any) -> LegacyMember:
    if not isinstance(raw, dict):
        raise RecordParseError("member entry must be a JSON object")
    try:
        return LegacyMember.model_validate(raw)
    except ValidationError as exc:
        raise RecordParseError(str(exc)) from exc


def _count_warnings(member: LegacyMember, stats: ExtractionStats) -> None:
    if not member.civicrm_user_id:
        stats.missing_civicrm_id += 1
    if not member.member_email:
        stats.missing_email += 1
    if not member.display_name and not member.sort_name:
        stats.missing_name += 1


def extract_warriors(
    memberships: list[LegacyMembership], stats: ExtractionStats
) -> list[tuple[LegacyMember, dict[str, Any]]]:
    """Deduplicate the members of every roster into warrior records."""
    seen: set[str] = set()
    warriors: list[tuple[LegacyMember, dict[str, Any]]] = []
    for membership in memberships:
        stats.memberships_processed += 1
        for raw in membership.members:
            stats.members_processed += 1
            try:
                member = _parse_member(raw)
            except RecordParseError as exc:
                logger.warning(
                    "Skipping unreadable member in group %s: %s", membership.group_id, exc
                )
                stats.skipped += 1
                continue

            key = warrior_key(member)
            if not key:
                logger.warning("Skipping member with no identifiable key: %s", raw)
                stats.skipped += 1
                continue

            _count_warnings(member, stats)
            if key in seen:
                stats.duplicates_merged += 1
                continue

            warrior = translate_member(member, raw)
            if warrior is None:
                logger.warning(
                    "Failed to parse name for member: %s", member.display_name or member.sort_name
                )
                stats.name_parse_failed += 1
                stats.skipped += 1
                continue

            seen.add(key)
            warriors.append((member, warrior))
    return warriors


def run_extraction(
    source_dir: Path, target_dir: Path, *, pretty: bool = False
) -> ExtractionStats:
    """Read ``source_dir/*.json`` rosters and write ``target_dir/<name>_<id8>.json``."""
    stats = ExtractionStats()
    files = list_source_files(source_dir)
    logger.info("Found %d membership files in %s", len(files), source_dir)

    memberships = []
    for path in files:
        try:
            memberships.append(parse_membership(read_json(path)))
        except ImportRecordError as exc:
            logger.error("Error processing %s: %s", path.name, exc)
            stats.failed_files += 1

    warriors = extract_warriors(memberships, stats)
    target_dir.mkdir(parents=True, exist_ok=True)
    for member, warrior in warriors:
        output_path = target_dir / warrior_filename(member, warrior)
        try:
            output_path.write_text(dump_json(warrior, pretty), encoding="utf-8")
        except OSError as exc:
            logger.error("Error writing %s: %s", output_path, exc)
            stats.skipped += 1
            continue
        stats.warriors_created += 1
    return stats
