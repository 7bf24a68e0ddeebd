import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import check_references, commit_or_400, envelope, get_or_404, search_clause
from emma.importer.validation import EVENT_CHECKS
from emma.models import Event, NwtaEvent
from emma.schemas.envelope import Envelope
from emma.schemas.events import NwtaEventCreate, NwtaEventRead, NwtaEventUpdate
from emma.services.composite import (
    create_composite,
    delete_composite,
    refresh_composite,
    update_composite,
)
from emma.services.groups import NWTA_EVENTS, nwta_event_payload

router = APIRouter()

WRITE_FAILED = "Failed to save NWTA event"
PUBLISHED_VALUES = {"true": True, "false": False}


@router.get("/", response_model=Envelope[list[NwtaEventRead]])
def list_nwta_events(
    active: bool | None = None,
    published: str | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = (
        select(NwtaEvent)
        .join(Event, Event.id == NwtaEvent.id)
        .order_by(NwtaEvent.created_at.desc())
    )
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
    events = [nwta_event_payload(row) for row in db.scalars(stmt)]
    return envelope(events, count=len(events))


@router.post("/", response_model=Envelope[NwtaEventRead], status_code=status.HTTP_201_CREATED)
def create_nwta_event(payload: NwtaEventCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, EVENT_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        event = create_composite(db, NWTA_EVENTS, payload.model_dump())
    refresh_composite(db, NWTA_EVENTS, event)
    return envelope(nwta_event_payload(event), message="NWTA event created successfully")


@router.get("/{event_id}", response_model=Envelope[NwtaEventRead])
def get_nwta_event(event_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(nwta_event_payload(get_or_404(db, NwtaEvent, event_id, "NWTA event")))


@router.put("/{event_id}", response_model=Envelope[NwtaEventRead])
def update_nwta_event(
    event_id: uuid.UUID, payload: NwtaEventUpdate, db: Session = Depends(get_db)
) -> dict:
    event = get_or_404(db, NwtaEvent, event_id, "NWTA event")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, EVENT_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        update_composite(db, NWTA_EVENTS, event, values)
    refresh_composite(db, NWTA_EVENTS, event)
    return envelope(nwta_event_payload(event), message="NWTA event updated successfully")


@router.delete("/{event_id}", response_model=Envelope[None])
def delete_nwta_event(event_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    event = get_or_404(db, NwtaEvent, event_id, "NWTA event")
    with commit_or_400(db, "Failed to delete NWTA event"):
        delete_composite(db, NWTA_EVENTS, event)
    return envelope(message="NWTA event deleted successfully")
