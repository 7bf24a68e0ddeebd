import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, select
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
from emma.importer.validation import AREA_CHECKS
from emma.models import Area, AreaAdmin, Person
from emma.schemas.areas import AreaAdminCreate, AreaAdminsReplace, AreaCreate, AreaRead, AreaUpdate
from emma.schemas.envelope import Envelope
from emma.schemas.people import PersonSummary

router = APIRouter()

UNIQUE_CODE = "Area code must be unique"


@router.get("/", response_model=Envelope[list[AreaRead]])
def list_areas(
    active: bool | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(Area).order_by(Area.created_at.desc())
    if active is not None:
        stmt = stmt.where(Area.is_active == active)
    if search:
        stmt = stmt.where(search_clause(search, Area.name, Area.code))
    areas = list(db.scalars(stmt))
    return envelope(areas, count=len(areas))


@router.post("/", response_model=Envelope[AreaRead], status_code=status.HTTP_201_CREATED)
def create_area(payload: AreaCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, AREA_CHECKS)
    area = Area(**payload.model_dump())
    with commit_or_400(db, UNIQUE_CODE):
        db.add(area)
    db.refresh(area)
    return envelope(area, message="Area created successfully")


@router.get("/{area_id}", response_model=Envelope[AreaRead])
def get_area(area_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(get_or_404(db, Area, area_id, "Area"))


@router.put("/{area_id}", response_model=Envelope[AreaRead])
def update_area(area_id: uuid.UUID, payload: AreaUpdate, db: Session = Depends(get_db)) -> dict:
    area = get_or_404(db, Area, area_id, "Area")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, AREA_CHECKS)
    with commit_or_400(db, UNIQUE_CODE):
        for key, value in values.items():
            setattr(area, key, value)
    db.refresh(area)
    return envelope(area, message="Area updated successfully")


@router.delete("/{area_id}", response_model=Envelope[AreaRead])
def archive_area(area_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    area = get_or_404(db, Area, area_id, "Area")
    archive(area)
    db.commit()
    db.refresh(area)
    return envelope(area, message="Area archived successfully")


@router.post(
    "/{area_id}/admins",
    response_model=Envelope[PersonSummary],
    status_code=status.HTTP_201_CREATED,
)
def add_area_admin(
    area_id: uuid.UUID, payload: AreaAdminCreate, db: Session = Depends(get_db)
) -> dict:
    get_or_404(db, Area, area_id, "Area")
    person = db.get(Person, payload.person_id)
    if person is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid area or person ID"
        )
    with commit_or_400(db, "Person is already an admin for this area"):
        db.add(AreaAdmin(area_id=area_id, person_id=person.id))
    return envelope(person, message="Admin added successfully")


@router.put("/{area_id}/admins", response_model=Envelope[list[PersonSummary]])
def replace_area_admins(
    area_id: uuid.UUID, payload: AreaAdminsReplace, db: Session = Depends(get_db)
) -> dict:
    area = get_or_404(db, Area, area_id, "Area")
    person_ids = list(dict.fromkeys(payload.admin_ids))
    if person_ids:
        found = set(db.scalars(select(Person.id).where(Person.id.in_(person_ids))))
        if len(found) != len(person_ids):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid area or person ID"
            )
    db.execute(delete(AreaAdmin).where(AreaAdmin.area_id == area_id))
    for person_id in person_ids:
        db.add(AreaAdmin(area_id=area_id, person_id=person_id))
    db.commit()
    db.expire(area, ["admins"])
    return envelope(area.admins, message="Admins updated successfully")


@router.delete("/{area_id}/admins", response_model=Envelope[None])
def remove_area_admin(
    area_id: uuid.UUID,
    person_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
) -> dict:
    if person_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Person ID is required")
    get_or_404(db, Area, area_id, "Area")
    db.execute(
        delete(AreaAdmin).where(AreaAdmin.area_id == area_id, AreaAdmin.person_id == person_id)
    )
    db.commit()
    return envelope(message="Admin removed successfully")
