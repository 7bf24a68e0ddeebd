import logging
import uuid

import pytest

from emma.importer.errors import ForeignKeyError, RecordParseError
from emma.importer.mappings import MappingEntry, ReferenceMapping, ReferenceMappings
from emma.importer.records import (
    import_area,
    import_community,
    import_fgroup,
    import_igroup,
    import_venue,
    import_warrior,
    is_fgroup_payload,
    is_igroup_payload,
)
from emma.importer.translate import parse_legacy_record, translate_record
from emma.importer.upsert import UpsertDecision
from emma.models import Area, AreaAdmin, FGroup, Group, IGroup, Person, Venue, Warrior

from factories import add_area, add_person, legacy_group


def area_payload(**overrides) -> dict:
    payload = {"id": str(uuid.uuid4()), "name": "Colorado", "code": "CO"}
    payload.update(overrides)
    return payload


def test_area_with_admins(session):
    person = add_person(session)
    payload = area_payload(area_admins=[{"person_id": str(person.id)}])

    assert import_area(session, payload) is UpsertDecision.INSERT
    session.commit()

    admins = session.query(AreaAdmin).all()
    assert [admin.person_id for admin in admins] == [person.id]


def test_area_admins_with_unknown_person_are_skipped(session, caplog):
    payload = area_payload(area_admins=[{"person_id": str(uuid.uuid4())}])

    with caplog.at_level(logging.WARNING):
        decision = import_area(session, payload)
    session.commit()

    assert decision is UpsertDecision.INSERT
    assert session.query(AreaAdmin).count() == 0
    assert "skipping admins" in caplog.text


def test_forced_area_update_replaces_admins(session):
    first, second = add_person(session), add_person(session, first_name="Lee")
    payload = area_payload(area_admins=[{"person_id": str(first.id)}])
    import_area(session, payload)
    session.commit()

    payload["area_admins"] = [{"person_id": str(second.id)}]
    assert import_area(session, payload, force=True) is UpsertDecision.UPDATE
    session.commit()

    assert [admin.person_id for admin in session.query(AreaAdmin)] == [second.id]


def test_geo_json_alias_fills_geo_polygon(session):
    polygon = {"type": "Polygon", "coordinates": []}
    payload = area_payload(geo_json=polygon)

    import_area(session, payload)
    session.commit()

    assert session.get(Area, uuid.UUID(payload["id"])).geo_polygon == polygon


def test_community_requires_existing_area(session):
    payload = {
        "id": str(uuid.uuid4()),
        "name": "Boulder",
        "code": "BLD",
        "area_id": str(uuid.uuid4()),
    }

    with pytest.raises(ForeignKeyError, match="Area with id .* not found in areas table"):
        import_community(session, payload)


def test_venue_import(session):
    area = add_area(session)
    payload = {"id": str(uuid.uuid4()), "name": "Grange Hall", "area_id": str(area.id)}

    assert import_venue(session, payload) is UpsertDecision.INSERT
    session.commit()

    assert session.get(Venue, uuid.UUID(payload["id"])).area_id == area.id


def warrior_payload(**overrides) -> dict:
    payload = {
        "id": str(uuid.uuid4()),
        "first_name": "Jordan",
        "last_name": "Hale",
        "status": "Active",
        "training_events": ["NWTA 2019"],
        "mkpconnect_data": {"uid": 55},
    }
    payload.update(overrides)
    return payload


def test_warrior_writes_person_and_extension(session):
    payload = warrior_payload()

    assert import_warrior(session, payload) is UpsertDecision.INSERT
    session.commit()

    warrior_id = uuid.UUID(payload["id"])
    person = session.get(Person, warrior_id)
    warrior = session.get(Warrior, warrior_id)
    assert person.first_name == "Jordan"
    assert person.mkpconnect_data["uid"] == 55
    assert "imported_at" in person.mkpconnect_data
    assert warrior.status == "Active"
    assert warrior.training_events == ["NWTA 2019"]


def test_existing_warrior_is_skipped_unless_forced(session):
    payload = warrior_payload()
    import_warrior(session, payload)
    session.commit()

    payload["status"] = "Inactive"
    assert import_warrior(session, payload) is UpsertDecision.SKIP
    assert import_warrior(session, payload, force=True) is UpsertDecision.UPDATE
    session.commit()

    assert session.get(Warrior, uuid.UUID(payload["id"])).status == "Inactive"


def test_warrior_with_unknown_area_is_rejected(session):
    with pytest.raises(ForeignKeyError):
        import_warrior(session, warrior_payload(area_id=str(uuid.uuid4())))


def test_group_structure_checks():
    assert is_igroup_payload({"is_accepting_initiated_visitors": True})
    assert not is_igroup_payload({"is_accepting_initiated_visitors": True, "group_type": "Men's"})
    assert is_fgroup_payload({"group_type": "Men's"})
    assert not is_fgroup_payload({"name": "x"})


def test_wrong_group_structure_is_a_parse_error(session):
    with pytest.raises(RecordParseError, match="Invalid IGroup structure"):
        import_igroup(session, {"group_type": "Men's"})
    with pytest.raises(RecordParseError, match="Invalid FGroup structure"):
        import_fgroup(session, {"is_accepting_initiated_visitors": True})


def test_translated_groups_import_end_to_end(session):
    area = add_area(session)
    mappings = ReferenceMappings(
        areas=ReferenceMapping.from_entries([MappingEntry(uuid=str(area.id), name="Colorado")]),
        communities=ReferenceMapping(),
    )
    igroup = translate_record(parse_legacy_record(legacy_group()), mappings)
    fgroup = translate_record(
        parse_legacy_record(
            legacy_group(igroup_name="Men's Circle - Open", is_accepting_initiated_visitors="contact")
        ),
        mappings,
    )

    assert import_igroup(session, igroup.data) is UpsertDecision.INSERT
    assert import_fgroup(session, fgroup.data) is UpsertDecision.INSERT
    session.commit()

    stored_igroup = session.get(IGroup, uuid.UUID(igroup.id))
    stored_fgroup = session.get(FGroup, uuid.UUID(fgroup.id))
    assert stored_igroup.area_id == area.id
    assert stored_igroup.group.name == "Boulder Tuesday I-Group"
    assert stored_igroup.schedule_description == "Weekly on Tuesday at 7:00 PM"
    assert stored_fgroup.group_type == "Open Men's"
    assert stored_fgroup.is_requiring_contact_before_visiting is True
    assert session.query(Group).count() == 2
    assert session.get(Group, uuid.UUID(igroup.id)).mkpconnect_data["mkp_connect_id"] == 101
