import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import archive, check_references, envelope, get_or_404, search_clause
from emma.importer.validation import PERSON_CHECKS
from emma.models import Person
from emma.schemas.envelope import Envelope
from emma.schemas.people import PersonCreate, PersonRead, PersonUpdate

router = APIRouter()


@router.get("/", response_model=Envelope[list[PersonRead]])
def list_people(
    active: bool | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(Person).order_by(Person.created_at.desc())
    if active is not None:
        stmt = stmt.where(Person.is_active == active)
    if search:
        stmt = stmt.where(search_clause(search, Person.first_name, Person.last_name, Person.email))
    people = list(db.scalars(stmt))
    return envelope(people, count=len(people))


@router.post("/", response_model=Envelope[PersonRead], status_code=status.HTTP_201_CREATED)
def create_person(payload: PersonCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, PERSON_CHECKS)
    person = Person(**payload.model_dump())
    db.add(person)
    db.commit()
    db.refresh(person)
    return envelope(person, message="Person created successfully")


@router.get("/{person_id}", response_model=Envelope[PersonRead])
def get_person(person_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(get_or_404(db, Person, person_id, "Person"))


@router.put("/{person_id}", response_model=Envelope[PersonRead])
def update_person(
    person_id: uuid.UUID, payload: PersonUpdate, db: Session = Depends(get_db)
) -> dict:
    person = get_or_404(db, Person, person_id, "Person")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, PERSON_CHECKS)
    for key, value in values.items():
        setattr(person, key, value)
    db.commit()
    db.refresh(person)
    return envelope(person, message="Person updated successfully")


@router.delete("/{person_id}", response_model=Envelope[PersonRead])
def archive_person(person_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    person = get_or_404(db, Person, person_id, "Person")
    archive(person)
    db.commit()
    db.refresh(person)
    return envelope(person, message="Person archived successfully")
