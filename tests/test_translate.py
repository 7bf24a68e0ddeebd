import json
import uuid

import pytest

from emma.importer.errors import RecordParseError, SourceDirectoryError
from emma.importer.mappings import MappingEntry, ReferenceMapping, ReferenceMappings
from emma.importer.translate import (
    build_base_group,
    output_filename,
    parse_legacy_record,
    run_translation,
    translate_record,
)
from emma.models.enums import FGroupType, GroupKind

from factories import legacy_group


AREA_ID = str(uuid.uuid4())
COMMUNITY_ID = str(uuid.uuid4())


@pytest.fixture
def mappings() -> ReferenceMappings:
    return ReferenceMappings(
        areas=ReferenceMapping.from_entries(
            [MappingEntry(uuid=AREA_ID, name="Colorado", legacy_id=12)]
        ),
        communities=ReferenceMapping.from_entries(
            [MappingEntry(uuid=COMMUNITY_ID, name="Boulder", legacy_id=7)]
        ),
    )


def test_open_mens_circle_becomes_open_fgroup(mappings):
    record = parse_legacy_record(
        legacy_group(
            igroup_name="Men's Circle - Open",
            is_accepting_initiated_visitors="contact",
            is_accepting_uninitiated_visitors="no",
        )
    )

    translated = translate_record(record, mappings)

    assert translated.kind is GroupKind.FGROUP
    assert translated.group_type is FGroupType.OPEN_MENS
    data = translated.data
    assert data["group_type"] == "Open Men's"
    assert data["is_requiring_contact_before_visiting"] is True
    assert data["is_accepting_initiated_visitors"] is True
    assert data["is_accepting_uninitiated_visitors"] is False
    assert data["area_id"] == AREA_ID
    assert data["community_id"] is None
    assert data["is_accepting_new_facilitators"] is True
    assert data["facilitators"] == []


def test_open_circle_record_as_exported():
    northwest_id = str(uuid.uuid4())
    mappings = ReferenceMappings(
        areas=ReferenceMapping.from_entries([MappingEntry(uuid=northwest_id, name="northwest")]),
        communities=ReferenceMapping(),
    )
    record = parse_legacy_record(
        {
            "igroup_name": "Men's Circle - Open",
            "igroup_is_mixed_gender": "0",
            "igroup_status": "Active",
            "is_accepting_initiated_visitors": "contact",
            "area_name": "Northwest",
        }
    )

    translated = translate_record(record, mappings)

    assert translated.kind is GroupKind.FGROUP
    assert translated.data["group_type"] == "Open Men's"
    assert translated.data["is_requiring_contact_before_visiting"] is True
    assert translated.data["area_id"] == northwest_id
    assert translated.data["is_active"] is True


def test_igroup_translation_fields(mappings):
    raw = legacy_group(community_name="boulder", igroup_class="Affiliate")
    translated = translate_record(parse_legacy_record(raw), mappings)

    assert translated.kind is GroupKind.IGROUP
    assert translated.group_type is None
    data = translated.data
    assert "group_type" not in data
    assert data["name"] == "Boulder Tuesday I-Group"
    assert data["description"] == "Weekly on Tuesday at 7:00 PM"
    assert data["schedule_description"] == "Weekly on Tuesday at 7:00 PM"
    assert data["schedule_events"] == []
    assert data["genders"] == "Men's"
    assert data["is_active"] is True
    assert data["is_publicly_listed"] is True
    assert data["latitude"] == pytest.approx(40.015)
    assert data["longitude"] == pytest.approx(-105.27)
    assert data["community_id"] == COMMUNITY_ID
    assert data["contact_email"] == "boulder@example.org"
    assert data["affiliation"] == "Affiliate"
    assert data["mkpconnect_data"] == raw
    assert uuid.UUID(data["id"])


def test_base_group_defaults():
    record = parse_legacy_record(
        {"igroup_status": "Closed", "igroup_is_mixed_gender": "yes", "about": "About us"}
    )

    group = build_base_group(record)

    assert group["name"] == "Unnamed Group"
    assert group["description"] == "About us"
    assert group["genders"] == "Mixed Gender"
    assert group["is_active"] is False
    assert group["is_accepting_new_members"] is False
    assert group["latitude"] is None


def test_every_translation_gets_a_fresh_id(mappings):
    record = parse_legacy_record(legacy_group())

    first = translate_record(record, mappings)
    second = translate_record(record, mappings)

    assert first.id != second.id


def test_output_filename_uses_sanitized_name_and_short_id(mappings):
    record = parse_legacy_record(legacy_group(igroup_name="Men's Circle - Open"))
    translated = translate_record(record, mappings)

    assert output_filename(record, translated) == f"Men_s_Circle_-_Open_{translated.id[:8]}.json"

    unnamed = parse_legacy_record({})
    translated = translate_record(unnamed, mappings)
    assert output_filename(unnamed, translated) == f"unnamed_{translated.id[:8]}.json"


def test_parse_legacy_record_rejects_non_objects():
    with pytest.raises(RecordParseError):
        parse_legacy_record(["not", "a", "record"])
    with pytest.raises(RecordParseError):
        parse_legacy_record({"mkp_connect_id": "not a number"})


@pytest.fixture
def source_dir(tmp_path, write_json):
    directory = tmp_path / "mkpconnect.org" / "igroups"
    write_json(directory, "1.json", legacy_group())
    write_json(directory, "2.json", legacy_group(igroup_name="Men's Circle - Open"))
    write_json(directory, "3.json", legacy_group(igroup_name="Lost Group", area_name="Atlantis"))
    (directory / "4.json").write_text("{broken", encoding="utf-8")
    return directory


def test_run_translation_writes_grouped_files(source_dir, tmp_path, mappings):
    target_dir = tmp_path / "emma.example.org"

    stats = run_translation(source_dir, target_dir, mappings, pretty=True)

    assert stats.total_processed == 3
    assert stats.igroups_created == 2
    assert stats.fgroups_created == 1
    assert stats.fgroups_by_type[FGroupType.OPEN_MENS] == 1
    assert stats.missing_area_mapping == 1
    assert stats.missing_community_mapping == 0
    assert stats.skipped == 1

    igroup_files = sorted((target_dir / "i-groups").glob("*.json"))
    fgroup_files = list((target_dir / "f-groups").glob("*.json"))
    assert len(igroup_files) == 2
    assert len(fgroup_files) == 1
    written = json.loads(fgroup_files[0].read_text(encoding="utf-8"))
    assert written["group_type"] == "Open Men's"
    assert fgroup_files[0].read_text(encoding="utf-8").startswith("{\n  ")


def test_dry_run_counts_without_writing(source_dir, tmp_path, mappings):
    target_dir = tmp_path / "emma.example.org"

    stats = run_translation(source_dir, target_dir, mappings, dry_run=True)

    assert stats.total_processed == 3
    assert stats.igroups_created + stats.fgroups_created == 3
    assert not target_dir.exists()


def test_missing_source_directory_is_fatal(tmp_path, mappings):
    with pytest.raises(SourceDirectoryError):
        run_translation(tmp_path / "nowhere", tmp_path / "out", mappings)


def test_summary_lists_warnings(source_dir, tmp_path, mappings):
    stats = run_translation(source_dir, tmp_path / "out", mappings, dry_run=True)

    summary = stats.format_summary()

    assert "Translation Complete!" in summary
    assert "- Open Men's: 1" in summary
    assert "Missing area mapping: 1 groups" in summary
    assert "Skipped/Failed: 1 files" in summary
