import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import check_references, commit_or_400, envelope, get_or_404, search_clause
from emma.importer.validation import PERSON_CHECKS, WARRIOR_CHECKS
from emma.models import Person, Warrior
from emma.schemas.envelope import Envelope
from emma.schemas.warriors import WarriorCreate, WarriorRead, WarriorStats, WarriorUpdate
from emma.services.composite import (
    create_composite,
    delete_composite,
    refresh_composite,
    update_composite,
)
from emma.services.groups import WARRIORS, warrior_payload

router = APIRouter()

WRITE_FAILED = "Failed to save warrior"


@router.get("/", response_model=Envelope[list[WarriorRead]])
def list_warriors(
    active: bool | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = (
        select(Warrior)
        .join(Person, Person.id == Warrior.id)
        .order_by(Warrior.created_at.desc())
    )
    if active is not None:
        stmt = stmt.where(Warrior.is_active == active)
    if status_filter:
        stmt = stmt.where(Warrior.status == status_filter)
    if search:
        stmt = stmt.where(search_clause(search, Person.first_name, Person.last_name))
    warriors = [warrior_payload(row) for row in db.scalars(stmt)]
    return envelope(warriors, count=len(warriors))


@router.get("/stats", response_model=Envelope[WarriorStats])
def warrior_stats(db: Session = Depends(get_db)) -> dict:
    counted = select(func.count()).select_from(Warrior)
    total = db.scalar(counted) or 0
    active = db.scalar(counted.where(Warrior.is_active.is_(True))) or 0
    by_status = db.execute(
        select(Warrior.status, func.count())
        .where(Warrior.is_active.is_(True), Warrior.status.is_not(None))
        .group_by(Warrior.status)
    )
    return envelope(
        {
            "total": total,
            "active": active,
            "inactive": total - active,
            "by_status": dict(by_status.tuples()),
        }
    )


@router.post("/", response_model=Envelope[WarriorRead], status_code=status.HTTP_201_CREATED)
def create_warrior(payload: WarriorCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, PERSON_CHECKS + WARRIOR_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        warrior = create_composite(db, WARRIORS, payload.model_dump())
    refresh_composite(db, WARRIORS, warrior)
    return envelope(warrior_payload(warrior), message="Warrior created successfully")


@router.get("/{warrior_id}", response_model=Envelope[WarriorRead])
def get_warrior(warrior_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(warrior_payload(get_or_404(db, Warrior, warrior_id, "Warrior")))


@router.put("/{warrior_id}", response_model=Envelope[WarriorRead])
def update_warrior(
    warrior_id: uuid.UUID, payload: WarriorUpdate, db: Session = Depends(get_db)
) -> dict:
    warrior = get_or_404(db, Warrior, warrior_id, "Warrior")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, PERSON_CHECKS + WARRIOR_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        update_composite(db, WARRIORS, warrior, values)
    refresh_composite(db, WARRIORS, warrior)
    return envelope(warrior_payload(warrior), message="Warrior updated successfully")


@router.delete("/{warrior_id}", response_model=Envelope[None])
def delete_warrior(warrior_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    warrior = get_or_404(db, Warrior, warrior_id, "Warrior")
    with commit_or_400(db, "Failed to delete warrior"):
        delete_composite(db, WARRIORS, warrior)
    return envelope(message="Warrior deleted successfully")
