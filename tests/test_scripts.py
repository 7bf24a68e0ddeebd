import json
import uuid

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session

from emma.db.base import Base
from emma.models import Address, Area, FGroup, IGroup
from emma.core.config import DEFAULT_TARGET_HOST, load_settings
from emma.scripts import (
    extract_warriors,
    import_addresses,
    import_groups,
    link_group_members,
    translate_groups,
)

from factories import legacy_group, legacy_member


@pytest.fixture
def env_file(tmp_path):
    path = tmp_path / "test.env"
    path.write_text("# test settings\n", encoding="utf-8")
    return path


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'emma.db'}"
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    engine.dispose()
    monkeypatch.setenv("DATABASE_URL", url)
    return url


def count(url: str, model) -> int:
    engine = create_engine(url)
    try:
        with Session(engine) as session:
            return session.scalar(select(func.count()).select_from(model))
    finally:
        engine.dispose()


def test_translate_groups(env_file, data_dir, write_json, capsys):
    area_id = str(uuid.uuid4())
    write_json(data_dir / "emma.test" / "areas", "co.json", {"id": area_id, "name": "Colorado"})
    write_json(data_dir / "legacy.test" / "igroups", "1.json", legacy_group())
    write_json(
        data_dir / "legacy.test" / "igroups",
        "2.json",
        legacy_group(igroup_name="Men's Circle - Open"),
    )

    code = translate_groups.main(
        [
            str(env_file),
            "--host",
            "emma.test",
            "--source-host",
            "legacy.test",
            "--data-dir",
            str(data_dir),
        ]
    )

    assert code == 0
    assert len(list((data_dir / "emma.test" / "i-groups").glob("*.json"))) == 1
    assert len(list((data_dir / "emma.test" / "f-groups").glob("*.json"))) == 1
    out = capsys.readouterr().out
    assert "Loaded 1 area mappings, 0 community mappings" in out
    assert "Translation Complete!" in out


def test_translate_dry_run_writes_nothing(env_file, data_dir, write_json, capsys):
    write_json(data_dir / "legacy.test" / "igroups", "1.json", legacy_group())

    code = translate_groups.main(
        [
            str(env_file),
            "--host",
            "emma.test",
            "--source-host",
            "legacy.test",
            "--data-dir",
            str(data_dir),
            "--dry-run",
        ]
    )

    assert code == 0
    assert not (data_dir / "emma.test" / "i-groups").exists()
    assert "DRY RUN - No files were written" in capsys.readouterr().out


def test_translate_without_source_directory_fails(env_file, data_dir, capsys):
    code = translate_groups.main(
        [str(env_file), "--host", "emma.test", "--source-host", "nowhere", "--data-dir", str(data_dir)]
    )

    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_named_env_file_must_exist(tmp_path, data_dir, capsys):
    code = translate_groups.main([str(tmp_path / "missing.env"), "--data-dir", str(data_dir)])

    assert code == 1
    assert "Environment file not found" in capsys.readouterr().err


def test_import_addresses(env_file, data_dir, write_json, database_url, capsys):
    directory = data_dir / "emma.test" / "addresses"
    for city in ("Boulder", "Denver"):
        write_json(
            directory,
            f"{city}.json",
            {
                "id": str(uuid.uuid4()),
                "address_1": "1 Main St",
                "city": city,
                "state": "CO",
                "postal_code": "80302",
            },
        )
    (directory / "bad.json").write_text("[", encoding="utf-8")

    code = import_addresses.main(
        [str(env_file), "--host", "emma.test", "--data-dir", str(data_dir)]
    )

    assert code == 0
    assert count(database_url, Address) == 2
    out = capsys.readouterr().out
    assert "Imported: 2" in out
    assert "Errors: 1" in out


def test_import_requires_database_url(env_file, data_dir, monkeypatch, capsys):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    code = import_addresses.main(
        [str(env_file), "--host", "emma.test", "--data-dir", str(data_dir)]
    )

    assert code == 1
    assert "DATABASE_URL" in capsys.readouterr().err


def test_import_with_missing_entity_directory_fails(env_file, data_dir, database_url):
    code = import_addresses.main(
        [str(env_file), "--host", "emma.test", "--data-dir", str(data_dir)]
    )

    assert code == 1


def test_import_groups_tolerates_missing_directories(env_file, data_dir, database_url, capsys):
    code = import_groups.main([str(env_file), "--host", "emma.test", "--data-dir", str(data_dir)])

    assert code == 0
    assert "Import complete!" in capsys.readouterr().out


def test_translate_then_import_groups(env_file, data_dir, write_json, database_url):
    area_id = uuid.uuid4()
    engine = create_engine(database_url)
    with Session(engine) as session:
        session.add(Area(id=area_id, name="Colorado", code="CO"))
        session.commit()
    engine.dispose()
    write_json(data_dir / "emma.test" / "areas", "co.json", {"id": str(area_id), "name": "Colorado"})
    write_json(data_dir / "legacy.test" / "igroups", "1.json", legacy_group())
    write_json(
        data_dir / "legacy.test" / "igroups",
        "2.json",
        legacy_group(igroup_name="Men's Circle - Open"),
    )
    common = [str(env_file), "--host", "emma.test", "--data-dir", str(data_dir)]

    assert translate_groups.main([*common, "--source-host", "legacy.test"]) == 0
    assert import_groups.main(common) == 0
    assert import_groups.main(common) == 0

    assert count(database_url, IGroup) == 1
    assert count(database_url, FGroup) == 1


def test_shell_hostname_does_not_pick_output_directory(env_file, data_dir, write_json, monkeypatch):
    monkeypatch.setenv("HOSTNAME", "buildbox")
    monkeypatch.delenv("EMMA_HOSTNAME", raising=False)
    write_json(data_dir / "mkpconnect.org" / "igroups", "1.json", legacy_group())

    code = translate_groups.main([str(env_file), "--data-dir", str(data_dir)])

    assert code == 0
    assert len(list((data_dir / DEFAULT_TARGET_HOST / "i-groups").glob("*.json"))) == 1
    assert not (data_dir / "buildbox").exists()


def test_env_file_hostname_beats_shell_hostname(tmp_path, data_dir, write_json, monkeypatch):
    monkeypatch.setenv("HOSTNAME", "buildbox")
    monkeypatch.delenv("EMMA_HOSTNAME", raising=False)
    env_path = tmp_path / "emma.env"
    env_path.write_text("HOSTNAME=emma.example.org\n", encoding="utf-8")
    write_json(data_dir / "mkpconnect.org" / "igroups", "1.json", legacy_group())

    code = translate_groups.main([str(env_path), "--data-dir", str(data_dir)])

    assert code == 0
    assert len(list((data_dir / "emma.example.org" / "i-groups").glob("*.json"))) == 1
    assert not (data_dir / "buildbox").exists()


def test_load_settings_ignores_shell_hostname(env_file, monkeypatch):
    monkeypatch.setenv("HOSTNAME", "buildbox")
    monkeypatch.delenv("EMMA_HOSTNAME", raising=False)

    assert load_settings(env_file).hostname is None

    monkeypatch.setenv("EMMA_HOSTNAME", "emma.test")
    assert load_settings(env_file).hostname == "emma.test"


def test_extract_warriors_then_link_members(env_file, data_dir, write_json, capsys):
    roster_dir = data_dir / "mkpconnect.org" / "igroups" / "membership"
    write_json(
        roster_dir,
        "101.json",
        {
            "group_id": 101,
            "members": [
                legacy_member(civicrm_user_id=1, member_email="a@example.org", display_name="Al Bee"),
                legacy_member(civicrm_user_id=2, member_email="c@example.org", display_name="Cy Dee"),
            ],
        },
    )
    write_json(
        roster_dir,
        "202.json",
        {"group_id": 202, "members": [legacy_member(civicrm_user_id=1, display_name="Al Bee")]},
    )
    common = [str(env_file), "--host", "emma.test", "--data-dir", str(data_dir)]

    assert extract_warriors.main(common) == 0
    assert len(list((data_dir / "emma.test" / "warriors").glob("*.json"))) == 2
    assert "Duplicates merged: 1" in capsys.readouterr().out

    write_json(data_dir / "legacy.test" / "igroups", "1.json", legacy_group(mkp_connect_id=101))
    assert translate_groups.main([*common, "--source-host", "legacy.test"]) == 0
    igroup_path = next((data_dir / "emma.test" / "i-groups").glob("*.json"))

    assert link_group_members.main([*common, "--dry-run"]) == 0
    assert json.loads(igroup_path.read_text(encoding="utf-8"))["members"] == []

    assert link_group_members.main(common) == 0
    members = json.loads(igroup_path.read_text(encoding="utf-8"))["members"]
    assert len(members) == 2
    out = capsys.readouterr().out
    assert "Members matched: 2" in out
