import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import commit_or_400, envelope, get_or_404, search_clause
from emma.models import EventType
from emma.schemas.envelope import Envelope
from emma.schemas.event_types import EventTypeCreate, EventTypeRead, EventTypeUpdate

router = APIRouter()

UNIQUE_CODE = "Event type code must be unique"


@router.get("/", response_model=Envelope[list[EventTypeRead]])
def list_event_types(
    active: bool | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(EventType).order_by(EventType.created_at.desc())
    if active is not None:
        stmt = stmt.where(EventType.is_active == active)
    if search:
        stmt = stmt.where(search_clause(search, EventType.name, EventType.code))
    event_types = list(db.scalars(stmt))
    return envelope(event_types, count=len(event_types))


@router.post("/", response_model=Envelope[EventTypeRead], status_code=status.HTTP_201_CREATED)
def create_event_type(payload: EventTypeCreate, db: Session = Depends(get_db)) -> dict:
    event_type = EventType(**payload.model_dump())
    with commit_or_400(db, UNIQUE_CODE):
        db.add(event_type)
    db.refresh(event_type)
    return envelope(event_type, message="Event type created successfully")


@router.get("/{event_type_id}", response_model=Envelope[EventTypeRead])
def get_event_type(event_type_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(get_or_404(db, EventType, event_type_id, "Event type"))


@router.put("/{event_type_id}", response_model=Envelope[EventTypeRead])
def update_event_type(
    event_type_id: uuid.UUID, payload: EventTypeUpdate, db: Session = Depends(get_db)
) -> dict:
    event_type = get_or_404(db, EventType, event_type_id, "Event type")
    with commit_or_400(db, UNIQUE_CODE):
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(event_type, key, value)
    db.refresh(event_type)
    return envelope(event_type, message="Event type updated successfully")


@router.delete("/{event_type_id}", response_model=Envelope[None])
def delete_event_type(event_type_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    event_type = get_or_404(db, EventType, event_type_id, "Event type")
    with commit_or_400(db, "Event type is still referenced by events"):
        db.delete(event_type)
    return envelope(message="Event type deleted successfully")
