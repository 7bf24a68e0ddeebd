import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import archive, check_references, envelope, get_or_404, search_clause
from emma.importer.validation import VENUE_CHECKS
from emma.models import Venue
from emma.schemas.envelope import Envelope
from emma.schemas.venues import VenueCreate, VenueRead, VenueUpdate

router = APIRouter()


@router.get("/", response_model=Envelope[list[VenueRead]])
def list_venues(
    active: bool | None = None,
    rejected: bool | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(Venue).order_by(Venue.created_at.desc())
    if active is not None:
        stmt = stmt.where(Venue.is_active == active)
    if rejected is not None:
        stmt = stmt.where(Venue.is_rejected == rejected)
    if search:
        stmt = stmt.where(search_clause(search, Venue.name, Venue.email))
    venues = list(db.scalars(stmt))
    return envelope(venues, count=len(venues))


@router.post("/", response_model=Envelope[VenueRead], status_code=status.HTTP_201_CREATED)
def create_venue(payload: VenueCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, VENUE_CHECKS)
    venue = Venue(**payload.model_dump())
    db.add(venue)
    db.commit()
    db.refresh(venue)
    return envelope(venue, message="Venue created successfully")


@router.get("/{venue_id}", response_model=Envelope[VenueRead])
def get_venue(venue_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(get_or_404(db, Venue, venue_id, "Venue"))


@router.put("/{venue_id}", response_model=Envelope[VenueRead])
def update_venue(venue_id: uuid.UUID, payload: VenueUpdate, db: Session = Depends(get_db)) -> dict:
    venue = get_or_404(db, Venue, venue_id, "Venue")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, VENUE_CHECKS)
    for key, value in values.items():
        setattr(venue, key, value)
    db.commit()
    db.refresh(venue)
    return envelope(venue, message="Venue updated successfully")


@router.delete("/{venue_id}", response_model=Envelope[VenueRead])
def archive_venue(venue_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    venue = get_or_404(db, Venue, venue_id, "Venue")
    archive(venue)
    db.commit()
    db.refresh(venue)
    return envelope(venue, message="Venue archived successfully")
