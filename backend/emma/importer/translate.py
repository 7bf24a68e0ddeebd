"""Translate MKP Connect i-group export rows into IGroup / FGroup records.

The output dictionaries are JSON-ready and match the shape the group
importer reads back from ``data/<host>/{i-groups,f-groups}``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from emma.core.clock import utc_now_iso
from emma.importer.batch import dump_json, list_source_files, read_json
from emma.importer.classify import classify, classify_fgroup_subtype
from emma.importer.errors import ImportRecordError, RecordParseError
from emma.importer.mappings import ReferenceMappings, resolve_area_id, resolve_community_id
from emma.importer.parsing import (
    build_schedule_description,
    parse_boolean,
    parse_contact_boolean,
    parse_float,
    parse_requires_contact,
    parse_schedule_events,
    sanitize_for_filename,
)
from emma.importer.stats import TranslationStats
from emma.models.enums import FGroupType, GroupGenders, GroupKind
from emma.schemas.legacy import LegacyIGroupRecord


logger = logging.getLogger(__name__)

UNNAMED_GROUP = "Unnamed Group"

OUTPUT_DIRS = {
    GroupKind.IGROUP: "i-groups",
    GroupKind.FGROUP: "f-groups",
}


@dataclass
class TranslatedRecord:
    kind: GroupKind
    data: dict[str, Any]
    group_type: FGroupType | None = None

    @property
    def id(self) -> str:
        return self.data["id"]


def _schedule_description(record: LegacyIGroupRecord) -> str | None:
    return build_schedule_description(
        record.meeting_frequency, record.meeting_night, record.meeting_time
    )


def _is_closed(record: LegacyIGroupRecord) -> bool:
    return (record.igroup_status or "").strip().lower() == "closed"


def build_base_group(record: LegacyIGroupRecord) -> dict[str, Any]:
    now = utc_now_iso()
    mixed = parse_boolean(record.igroup_is_mixed_gender)
    return {
        "id": str(uuid.uuid4()),
        "name": record.igroup_name or UNNAMED_GROUP,
        "description": record.about or _schedule_description(record) or "",
        "url": None,
        "members": [],
        "is_accepting_new_members": parse_boolean(record.is_accepting_new_members),
        "membership_criteria": None,
        "venue_id": None,
        "genders": GroupGenders.MIXED_GENDER.value if mixed else GroupGenders.MENS.value,
        "is_publicly_listed": parse_boolean(record.is_public_display),
        "public_contact_id": None,
        "primary_contact_id": None,
        "is_active": not _is_closed(record),
        "created_at": now,
        "updated_at": now,
        "deleted_at": None,
        "latitude": parse_float(record.latitude),
        "longitude": parse_float(record.longitude),
        "mkpconnect_data": record.raw,
    }


def _extension_fields(
    record: LegacyIGroupRecord, mappings: ReferenceMappings
) -> dict[str, Any]:
    initiated = record.is_accepting_initiated_visitors
    uninitiated = record.is_accepting_uninitiated_visitors
    return {
        "is_accepting_initiated_visitors": parse_contact_boolean(initiated),
        "is_accepting_uninitiated_visitors": parse_contact_boolean(uninitiated),
        "is_requiring_contact_before_visiting": parse_requires_contact(initiated, uninitiated),
        "schedule_events": parse_schedule_events(
            record.meeting_frequency, record.meeting_night, record.meeting_time
        ),
        "schedule_description": _schedule_description(record),
        "area_id": resolve_area_id(record.area_name, record.area_id, mappings.areas),
        "community_id": resolve_community_id(
            record.community_name, record.community_id, mappings.communities
        ),
        "contact_email": record.igroup_email,
        "status": record.igroup_status,
        "affiliation": record.igroup_class,
    }


def translate_to_igroup(
    record: LegacyIGroupRecord, mappings: ReferenceMappings
) -> dict[str, Any]:
    group = build_base_group(record)
    group.update(_extension_fields(record, mappings))
    return group


def translate_to_fgroup(
    record: LegacyIGroupRecord, mappings: ReferenceMappings
) -> dict[str, Any]:
    group = build_base_group(record)
    group["group_type"] = classify_fgroup_subtype(record).value
    group["is_accepting_new_facilitators"] = parse_boolean(record.is_accepting_new_members)
    group["facilitators"] = []
    group.update(_extension_fields(record, mappings))
    return group


def translate_record(
    record: LegacyIGroupRecord, mappings: ReferenceMappings
) -> TranslatedRecord:
    kind = classify(record)
    if kind is GroupKind.FGROUP:
        data = translate_to_fgroup(record, mappings)
        return TranslatedRecord(kind, data, FGroupType(data["group_type"]))
    return TranslatedRecord(kind, translate_to_igroup(record, mappings))


def output_filename(record: LegacyIGroupRecord, translated: TranslatedRecord) -> str:
    name = sanitize_for_filename(record.igroup_name or "unnamed")
    return f"{name}_{translated.id[:8]}.json"


def parse_legacy_record(payload: Any) -> LegacyIGroupRecord:
    if not isinstance(payload, dict):
        raise RecordParseError("Expected a JSON object")
    try:
        return LegacyIGroupRecord.from_raw(payload)
    except ValidationError as exc:
        raise RecordParseError(f"Invalid legacy record: {exc.error_count()} field error(s)") from exc


def _count_missing_references(
    record: LegacyIGroupRecord, translated: TranslatedRecord, stats: TranslationStats
) -> None:
    if record.area_name and not translated.data["area_id"]:
        stats.missing_area_mapping += 1
        logger.warning("No area mapping for %r (%s)", record.area_name, record.igroup_name)
    if record.community_name and not translated.data["community_id"]:
        stats.missing_community_mapping += 1
        logger.warning(
            "No community mapping for %r (%s)", record.community_name, record.igroup_name
        )


def run_translation(
    source_dir: Path,
    target_dir: Path,
    mappings: ReferenceMappings,
    *,
    dry_run: bool = False,
    pretty: bool = False,
) -> TranslationStats:
    """Translate every legacy file in ``source_dir`` into ``target_dir``.

    Output goes to ``target_dir/i-groups`` or ``target_dir/f-groups``. With
    ``dry_run`` nothing is written but every counter is still updated.
    """
    stats = TranslationStats()
    files = list_source_files(source_dir)
    logger.info("Found %d source files in %s", len(files), source_dir)

    if not dry_run:
        for dirname in OUTPUT_DIRS.values():
            (target_dir / dirname).mkdir(parents=True, exist_ok=True)

    for path in files:
        try:
            record = parse_legacy_record(read_json(path))
        except ImportRecordError as exc:
            logger.error("Error processing %s: %s", path.name, exc)
            stats.skipped += 1
            continue

        stats.total_processed += 1
        translated = translate_record(record, mappings)
        filename = output_filename(record, translated)
        if not dry_run:
            output_path = target_dir / OUTPUT_DIRS[translated.kind] / filename
            try:
                output_path.write_text(dump_json(translated.data, pretty), encoding="utf-8")
            except OSError as exc:
                logger.error("Error writing %s: %s", output_path, exc)
                stats.skipped += 1
                continue

        if translated.group_type is not None:
            stats.record_fgroup(translated.group_type)
        else:
            stats.igroups_created += 1
        _count_missing_references(record, translated, stats)
        logger.info("%s: %s -> %s", translated.kind.value, record.igroup_name, filename)
    return stats
