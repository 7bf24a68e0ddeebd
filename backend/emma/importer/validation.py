from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from emma.models import Address, Area, Community, Event, EventType, Person, Venue


@dataclass(frozen=True)
class ForeignKeyCheck:
    field: str
    model: type
    label: str


def _value(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def _as_uuid(value: Any) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def validate_foreign_keys(
    session: Session, record: Any, checks: tuple[ForeignKeyCheck, ...]
) -> str | None:
    """Return a message for the first populated reference that does not exist.

    Checks run in declared order and stop at the first miss; blank references
    are not checked.
    """
    for check in checks:
        value = _value(record, check.field)
        if value in (None, ""):
            continue
        key = _as_uuid(value)
        if key is None or session.get(check.model, key) is None:
            table = check.model.__tablename__
            return f"{check.label} with id {value} not found in {table} table"
    return None


PERSON_CHECKS = (
    ForeignKeyCheck("billing_address_id", Address, "Billing address"),
    ForeignKeyCheck("mailing_address_id", Address, "Mailing address"),
    ForeignKeyCheck("physical_address_id", Address, "Physical address"),
)

VENUE_CHECKS = (
    ForeignKeyCheck("mailing_address_id", Address, "Mailing address"),
    ForeignKeyCheck("physical_address_id", Address, "Physical address"),
    ForeignKeyCheck("primary_contact_id", Person, "Primary contact"),
    ForeignKeyCheck("area_id", Area, "Area"),
    ForeignKeyCheck("community_id", Community, "Community"),
)

WARRIOR_CHECKS = (
    ForeignKeyCheck("area_id", Area, "Area"),
    ForeignKeyCheck("community_id", Community, "Community"),
    ForeignKeyCheck("initiation_id", Event, "Initiation event"),
)

GROUP_CHECKS = (
    ForeignKeyCheck("venue_id", Venue, "Venue"),
    ForeignKeyCheck("public_contact_id", Person, "Public contact"),
    ForeignKeyCheck("primary_contact_id", Person, "Primary contact"),
    ForeignKeyCheck("area_id", Area, "Area"),
    ForeignKeyCheck("community_id", Community, "Community"),
)

COMMUNITY_CHECKS = (
    ForeignKeyCheck("area_id", Area, "Area"),
    ForeignKeyCheck("coordinator_id", Person, "Coordinator"),
)

AREA_CHECKS = (
    ForeignKeyCheck("steward_id", Person, "Steward"),
    ForeignKeyCheck("finance_coordinator_id", Person, "Finance coordinator"),
)

EVENT_CHECKS = (
    ForeignKeyCheck("event_type_id", EventType, "Event type"),
    ForeignKeyCheck("area_id", Area, "Area"),
    ForeignKeyCheck("community_id", Community, "Community"),
    ForeignKeyCheck("venue_id", Venue, "Venue"),
    ForeignKeyCheck("primary_leader_id", Person, "Primary leader"),
)
