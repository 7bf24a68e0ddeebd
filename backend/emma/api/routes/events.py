import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import (
    archive,
    check_references,
    commit_or_400,
    envelope,
    get_or_404,
    search_clause,
)
from emma.importer.validation import EVENT_CHECKS
from emma.models import Event, EventType
from emma.schemas.envelope import Envelope
from emma.schemas.events import EventCreate, EventRead, EventStats, EventUpdate

router = APIRouter()

NWTA_CODE = "NWTA"
WRITE_FAILED = "Failed to save event"
PUBLISHED_VALUES = {"true": True, "false": False}


def _without_nwta(stmt: Select, nwta: str | None) -> Select:
    """Hide events typed NWTA unless ``nwta=include``; untyped events stay."""
    if nwta == "include":
        return stmt
    return stmt.outerjoin(EventType, EventType.id == Event.event_type_id).where(
        or_(EventType.code.is_(None), EventType.code != NWTA_CODE)
    )


@router.get("/", response_model=Envelope[list[EventRead]])
def list_events(
    active: bool | None = None,
    published: str | None = None,
    search: str | None = None,
    nwta: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = _without_nwta(select(Event).order_by(Event.created_at.desc()), nwta)
    if published is not None:
        if published not in PUBLISHED_VALUES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid published parameter. Only 'true' or 'false' are accepted.",
            )
        stmt = stmt.where(Event.is_published == PUBLISHED_VALUES[published])
    if active is not None:
        stmt = stmt.where(Event.is_active == active)
    if search:
        stmt = stmt.where(search_clause(search, Event.name, Event.description))
    events = list(db.scalars(stmt))
    return envelope(events, count=len(events))


@router.get("/stats", response_model=Envelope[EventStats])
def event_stats(nwta: str | None = None, db: Session = Depends(get_db)) -> dict:
    counted = _without_nwta(select(func.count()).select_from(Event), nwta)
    total = db.scalar(counted) or 0
    active = db.scalar(counted.where(Event.is_active.is_(True))) or 0
    return envelope({"total": total, "active": active, "inactive": total - active})


@router.post("/", response_model=Envelope[EventRead], status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, EVENT_CHECKS)
    event = Event(**payload.model_dump())
    with commit_or_400(db, WRITE_FAILED):
        db.add(event)
    db.refresh(event)
    return envelope(event, message="Event created successfully")


@router.get("/{event_id}", response_model=Envelope[EventRead])
def get_event(event_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(get_or_404(db, Event, event_id, "Event"))


@router.put("/{event_id}", response_model=Envelope[EventRead])
def update_event(event_id: uuid.UUID, payload: EventUpdate, db: Session = Depends(get_db)) -> dict:
    event = get_or_404(db, Event, event_id, "Event")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, EVENT_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        for key, value in values.items():
            setattr(event, key, value)
    db.refresh(event)
    return envelope(event, message="Event updated successfully")


@router.delete("/{event_id}", response_model=Envelope[EventRead])
def delete_event(event_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    event = get_or_404(db, Event, event_id, "Event")
    archive(event)
    db.commit()
    db.refresh(event)
    return envelope(event, message="Event deleted successfully")
