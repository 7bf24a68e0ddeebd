"""Validate-decide-write steps for each importable entity.

Each ``import_*`` function handles one parsed JSON payload inside the
caller's session and returns the decision it applied. Records that span two
tables decide on the base table; the extension row follows that decision.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from emma.core.clock import utc_now_iso
from emma.importer.batch import parse_record
from emma.importer.errors import ForeignKeyError, RecordParseError, RecordWriteError
from emma.importer.upsert import UpsertDecision, apply_upsert, decide, decide_for
from emma.importer.validation import (
    AREA_CHECKS,
    COMMUNITY_CHECKS,
    GROUP_CHECKS,
    PERSON_CHECKS,
    VENUE_CHECKS,
    WARRIOR_CHECKS,
    ForeignKeyCheck,
    validate_foreign_keys,
)
from emma.models import (
    Address,
    Area,
    AreaAdmin,
    Community,
    FGroup,
    Group,
    IGroup,
    Person,
    Venue,
    Warrior,
)
from emma.schemas.imports import (
    ADDRESS_FIELDS,
    AREA_FIELDS,
    COMMUNITY_FIELDS,
    GROUP_FIELDS,
    PERSON_FIELDS,
    VENUE_FIELDS,
    WARRIOR_FIELDS,
    ImportedAddress,
    ImportedArea,
    ImportedCommunity,
    ImportedFGroup,
    ImportedGroup,
    ImportedIGroup,
    ImportedPerson,
    ImportedVenue,
    ImportedWarrior,
)


logger = logging.getLogger(__name__)


def _require_references(
    session: Session, record: Any, checks: tuple[ForeignKeyCheck, ...]
) -> None:
    message = validate_foreign_keys(session, record, checks)
    if message:
        raise ForeignKeyError(message)


def _upsert_single(
    session: Session,
    model: type,
    record: Any,
    fields: tuple[str, ...],
    force: bool,
) -> UpsertDecision:
    decision = decide_for(session, model, record.id, force)
    apply_upsert(
        session,
        model,
        record.id,
        record.values_for(fields),
        decision,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
    return decision


def import_address(session: Session, payload: dict[str, Any], *, force: bool = False) -> UpsertDecision:
    address = parse_record(ImportedAddress, payload)
    return _upsert_single(session, Address, address, ADDRESS_FIELDS, force)


def import_person(session: Session, payload: dict[str, Any], *, force: bool = False) -> UpsertDecision:
    person = parse_record(ImportedPerson, payload)
    _require_references(session, person, PERSON_CHECKS)
    return _upsert_single(session, Person, person, PERSON_FIELDS, force)


def import_venue(session: Session, payload: dict[str, Any], *, force: bool = False) -> UpsertDecision:
    venue = parse_record(ImportedVenue, payload)
    _require_references(session, venue, VENUE_CHECKS)
    return _upsert_single(session, Venue, venue, VENUE_FIELDS, force)


def import_community(
    session: Session, payload: dict[str, Any], *, force: bool = False
) -> UpsertDecision:
    community = parse_record(ImportedCommunity, payload)
    _require_references(session, community, COMMUNITY_CHECKS)
    return _upsert_single(session, Community, community, COMMUNITY_FIELDS, force)


def _replace_area_admins(session: Session, area: ImportedArea, decision: UpsertDecision) -> None:
    try:
        if decision is UpsertDecision.UPDATE:
            session.execute(delete(AreaAdmin).where(AreaAdmin.area_id == area.id))
        if not area.area_admins:
            session.flush()
            return
        person_ids = {admin.person_id for admin in area.area_admins}
        found = set(session.scalars(select(Person.id).where(Person.id.in_(person_ids))))
        if found != person_ids:
            logger.warning(
                "Some person_ids in area_admins for %s not found, skipping admins", area.name
            )
            session.flush()
            return
        for admin in area.area_admins:
            session.add(
                AreaAdmin(id=admin.id or uuid.uuid4(), area_id=area.id, person_id=admin.person_id)
            )
        session.flush()
    except SQLAlchemyError as exc:
        raise RecordWriteError("area_admins", "writing", str(exc)) from exc


def import_area(session: Session, payload: dict[str, Any], *, force: bool = False) -> UpsertDecision:
    area = parse_record(ImportedArea, payload)
    _require_references(session, area, AREA_CHECKS)
    decision = _upsert_single(session, Area, area, AREA_FIELDS, force)
    if decision is not UpsertDecision.SKIP:
        _replace_area_admins(session, area, decision)
    return decision


def import_warrior(
    session: Session, payload: dict[str, Any], *, force: bool = False
) -> UpsertDecision:
    warrior = parse_record(ImportedWarrior, payload)
    _require_references(session, warrior, WARRIOR_CHECKS)
    decision = decide_for(session, Person, warrior.id, force)
    if decision is UpsertDecision.SKIP:
        return decision

    person_values = warrior.values_for(PERSON_FIELDS)
    person_values["mkpconnect_data"] = {
        **(warrior.mkpconnect_data or {}),
        "imported_at": utc_now_iso(),
    }
    apply_upsert(
        session,
        Person,
        warrior.id,
        person_values,
        decision,
        created_at=warrior.created_at,
        updated_at=warrior.updated_at,
    )
    extension = decide(session.get(Warrior, warrior.id) is not None, force=True)
    apply_upsert(
        session,
        Warrior,
        warrior.id,
        warrior.values_for(WARRIOR_FIELDS),
        extension,
        created_at=warrior.created_at,
        updated_at=warrior.updated_at,
    )
    return decision


def is_igroup_payload(payload: dict[str, Any]) -> bool:
    return "is_accepting_initiated_visitors" in payload and "group_type" not in payload


def is_fgroup_payload(payload: dict[str, Any]) -> bool:
    return "group_type" in payload


def _import_group(
    session: Session,
    group: ImportedGroup,
    extension_model: type,
    force: bool,
) -> UpsertDecision:
    _require_references(session, group, GROUP_CHECKS)
    decision = _upsert_single(session, Group, group, GROUP_FIELDS, force)
    if decision is UpsertDecision.SKIP:
        return decision
    extension = decide(session.get(extension_model, group.id) is not None, force=True)
    apply_upsert(
        session,
        extension_model,
        group.id,
        group.extension_values(),
        extension,
        created_at=group.created_at,
        updated_at=group.updated_at,
    )
    return decision


def import_igroup(session: Session, payload: dict[str, Any], *, force: bool = False) -> UpsertDecision:
    if not is_igroup_payload(payload):
        raise RecordParseError("Invalid IGroup structure")
    return _import_group(session, parse_record(ImportedIGroup, payload), IGroup, force)


def import_fgroup(session: Session, payload: dict[str, Any], *, force: bool = False) -> UpsertDecision:
    if not is_fgroup_payload(payload):
        raise RecordParseError("Invalid FGroup structure")
    return _import_group(session, parse_record(ImportedFGroup, payload), FGroup, force)
