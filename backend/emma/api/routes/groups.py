import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import archive, check_references, envelope, search_clause
from emma.importer.validation import GROUP_CHECKS
from emma.models import Group
from emma.schemas.envelope import Envelope
from emma.schemas.groups import GroupCreate, GroupRead, GroupStats, GroupUpdate

router = APIRouter()


def _live_group(db: Session, group_id: uuid.UUID) -> Group:
    group = db.get(Group, group_id)
    if group is None or group.deleted_at is not None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return group


@router.get("/", response_model=Envelope[list[GroupRead]])
def list_groups(
    active: bool | None = None,
    publicly_listed: bool | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(Group).where(Group.deleted_at.is_(None)).order_by(Group.created_at.desc())
    if active is not None:
        stmt = stmt.where(Group.is_active == active)
    if publicly_listed is not None:
        stmt = stmt.where(Group.is_publicly_listed == publicly_listed)
    if search:
        stmt = stmt.where(search_clause(search, Group.name, Group.description))
    groups = list(db.scalars(stmt))
    return envelope(groups, count=len(groups))


@router.get("/stats", response_model=Envelope[GroupStats])
def group_stats(db: Session = Depends(get_db)) -> dict:
    live = select(func.count()).select_from(Group).where(Group.deleted_at.is_(None))
    total = db.scalar(live) or 0
    active = db.scalar(live.where(Group.is_active.is_(True))) or 0
    return envelope({"total": total, "active": active, "inactive": total - active})


@router.post("/", response_model=Envelope[GroupRead], status_code=status.HTTP_201_CREATED)
def create_group(payload: GroupCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, GROUP_CHECKS)
    group = Group(**payload.model_dump())
    db.add(group)
    db.commit()
    db.refresh(group)
    return envelope(group, message="Group created successfully")


@router.get("/{group_id}", response_model=Envelope[GroupRead])
def get_group(group_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(_live_group(db, group_id))


@router.put("/{group_id}", response_model=Envelope[GroupRead])
def update_group(group_id: uuid.UUID, payload: GroupUpdate, db: Session = Depends(get_db)) -> dict:
    group = _live_group(db, group_id)
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, GROUP_CHECKS)
    for key, value in values.items():
        setattr(group, key, value)
    db.commit()
    db.refresh(group)
    return envelope(group, message="Group updated successfully")


@router.delete("/{group_id}", response_model=Envelope[None])
def delete_group(group_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    group = _live_group(db, group_id)
    archive(group)
    db.commit()
    return envelope(message="Group deleted successfully")
