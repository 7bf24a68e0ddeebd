import uuid

import pytest

from emma.importer.batch import ImportRunner, list_source_files, parse_record
from emma.importer.errors import RecordParseError, SourceDirectoryError
from emma.importer.records import import_address, import_person
from emma.models import Address, Person
from emma.schemas.imports import ImportedAddress


def address_payload(**overrides) -> dict:
    payload = {
        "id": str(uuid.uuid4()),
        "address_1": "1 Main St",
        "city": "Boulder",
        "state": "CO",
        "postal_code": "80302",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def address_dir(tmp_path, write_json):
    directory = tmp_path / "addresses"
    write_json(directory, "a.json", address_payload())
    write_json(directory, "b.json", address_payload(city="Denver"))
    (directory / "c.json").write_text("{oops", encoding="utf-8")
    return directory


def test_malformed_file_is_counted_and_the_rest_imported(address_dir, session_factory, session):
    runner = ImportRunner(session_factory, label="Addresses")

    stats = runner.run(address_dir, import_address)

    assert stats.processed == 3
    assert stats.imported == 2
    assert stats.errors == 1
    assert session.query(Address).count() == 2


def test_rerun_skips_without_force_and_updates_with_it(address_dir, session_factory):
    runner = ImportRunner(session_factory, label="Addresses")
    runner.run(address_dir, import_address)

    skipped = runner.run(address_dir, import_address)
    assert (skipped.imported, skipped.skipped, skipped.errors) == (0, 2, 1)

    forced = runner.run(address_dir, lambda s, p: import_address(s, p, force=True))
    assert (forced.imported, forced.updated, forced.errors) == (0, 2, 1)


def test_non_object_json_is_a_record_error(tmp_path, write_json, session_factory):
    write_json(tmp_path / "addresses", "list.json", [address_payload()])

    stats = ImportRunner(session_factory, label="Addresses").run(
        tmp_path / "addresses", import_address
    )

    assert stats.errors == 1
    assert stats.imported == 0


def test_foreign_key_miss_rolls_back_the_record(tmp_path, write_json, session_factory, session):
    write_json(
        tmp_path / "people",
        "p.json",
        {
            "id": str(uuid.uuid4()),
            "first_name": "Ray",
            "last_name": "Lopez",
            "physical_address_id": str(uuid.uuid4()),
        },
    )

    stats = ImportRunner(session_factory, label="People").run(tmp_path / "people", import_person)

    assert stats.errors == 1
    assert session.query(Person).count() == 0


def test_errors_are_logged_per_file(address_dir, session_factory, caplog):
    ImportRunner(session_factory, label="Addresses").run(address_dir, import_address)

    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert "c.json" in errors[0].getMessage()


def test_list_source_files_only_returns_json(tmp_path, write_json):
    write_json(tmp_path, "b.json", {})
    write_json(tmp_path, "a.json", {})
    (tmp_path / "readme.md").write_text("", encoding="utf-8")

    assert [p.name for p in list_source_files(tmp_path)] == ["a.json", "b.json"]


def test_missing_directory_is_a_run_level_error(tmp_path):
    with pytest.raises(SourceDirectoryError):
        list_source_files(tmp_path / "missing")


def test_parse_record_reports_field_errors():
    with pytest.raises(RecordParseError) as excinfo:
        parse_record(ImportedAddress, {"id": "not-a-uuid", "city": "Boulder"})

    message = str(excinfo.value)
    assert message.startswith("Invalid ImportedAddress:")
    assert "id:" in message
    assert "address_1:" in message
