"""Flat read shapes for group, warrior and NWTA event records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from emma.models import Event, FGroup, Group, IGroup, NwtaEvent, Person, Warrior
from emma.schemas.common import AreaSummary, CommunitySummary
from emma.schemas.venues import VenueSummary
from emma.services.composite import Composite, flatten


IGROUPS = Composite(Group, IGroup, "group")
FGROUPS = Composite(Group, FGroup, "group")
WARRIORS = Composite(Person, Warrior, "person")
NWTA_EVENTS = Composite(Event, NwtaEvent, "event")


def summary(schema: type[BaseModel], row: Any) -> dict[str, Any] | None:
    if row is None:
        return None
    return schema.model_validate(row).model_dump(mode="json")


def group_payload(composite: Composite, row: IGroup | FGroup) -> dict[str, Any]:
    data = flatten(composite, row)
    data["area"] = summary(AreaSummary, row.area)
    data["community"] = summary(CommunitySummary, row.community)
    data["venue"] = summary(VenueSummary, row.group.venue)
    return data


def warrior_payload(row: Warrior) -> dict[str, Any]:
    data = flatten(WARRIORS, row)
    data["area"] = summary(AreaSummary, row.area)
    data["community"] = summary(CommunitySummary, row.community)
    return data


def nwta_event_payload(row: NwtaEvent) -> dict[str, Any]:
    data = flatten(NWTA_EVENTS, row)
    event = row.event
    data["area"] = summary(AreaSummary, event.area)
    data["community"] = summary(CommunitySummary, event.community)
    data["venue"] = summary(VenueSummary, event.venue)
    return data


def visitor_counts(groups: list[dict[str, Any]]) -> dict[str, int]:
    """Totals for the i-group stats endpoint; visitor counts cover active groups only."""
    active = [group for group in groups if group.get("is_active")]
    return {
        "total": len(groups),
        "active": len(active),
        "inactive": len(groups) - len(active),
        "accepting_initiated_visitors": sum(
            1 for group in active if group.get("is_accepting_initiated_visitors")
        ),
        "accepting_uninitiated_visitors": sum(
            1 for group in active if group.get("is_accepting_uninitiated_visitors")
        ),
    }
