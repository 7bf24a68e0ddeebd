import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import check_references, commit_or_400, envelope, get_or_404, search_clause
from emma.importer.validation import GROUP_CHECKS
from emma.models import FGroup, Group
from emma.models.enums import FGroupType
from emma.schemas.envelope import Envelope
from emma.schemas.groups import FGroupCreate, FGroupRead, FGroupStats, FGroupUpdate
from emma.services.composite import (
    create_composite,
    delete_composite,
    refresh_composite,
    update_composite,
)
from emma.services.groups import FGROUPS, group_payload

router = APIRouter()

WRITE_FAILED = "Failed to save facilitation group"


@router.get("/", response_model=Envelope[list[FGroupRead]])
def list_fgroups(
    active: bool | None = None,
    group_type: FGroupType | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(FGroup).join(Group, Group.id == FGroup.id).order_by(FGroup.created_at.desc())
    if active is not None:
        stmt = stmt.where(FGroup.is_active == active)
    if group_type is not None:
        stmt = stmt.where(FGroup.group_type == group_type.value)
    if search:
        stmt = stmt.where(search_clause(search, Group.name, Group.description))
    groups = [group_payload(FGROUPS, row) for row in db.scalars(stmt)]
    return envelope(groups, count=len(groups))


@router.get("/stats", response_model=Envelope[FGroupStats])
def fgroup_stats(db: Session = Depends(get_db)) -> dict:
    counted = select(func.count()).select_from(FGroup)
    total = db.scalar(counted) or 0
    active = db.scalar(counted.where(FGroup.is_active.is_(True))) or 0
    by_type = db.execute(
        select(FGroup.group_type, func.count())
        .where(FGroup.is_active.is_(True), FGroup.group_type.is_not(None))
        .group_by(FGroup.group_type)
    )
    return envelope(
        {
            "total": total,
            "active": active,
            "inactive": total - active,
            "by_group_type": dict(by_type.tuples()),
        }
    )


@router.post("/", response_model=Envelope[FGroupRead], status_code=status.HTTP_201_CREATED)
def create_fgroup(payload: FGroupCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, GROUP_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        fgroup = create_composite(db, FGROUPS, payload.model_dump())
    refresh_composite(db, FGROUPS, fgroup)
    return envelope(
        group_payload(FGROUPS, fgroup), message="Facilitation group created successfully"
    )


@router.get("/{group_id}", response_model=Envelope[FGroupRead])
def get_fgroup(group_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    fgroup = get_or_404(db, FGroup, group_id, "Facilitation group")
    return envelope(group_payload(FGROUPS, fgroup))


@router.put("/{group_id}", response_model=Envelope[FGroupRead])
def update_fgroup(
    group_id: uuid.UUID, payload: FGroupUpdate, db: Session = Depends(get_db)
) -> dict:
    fgroup = get_or_404(db, FGroup, group_id, "Facilitation group")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, GROUP_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        update_composite(db, FGROUPS, fgroup, values)
    refresh_composite(db, FGROUPS, fgroup)
    return envelope(
        group_payload(FGROUPS, fgroup), message="Facilitation group updated successfully"
    )


@router.delete("/{group_id}", response_model=Envelope[None])
def delete_fgroup(group_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    fgroup = get_or_404(db, FGroup, group_id, "Facilitation group")
    with commit_or_400(db, "Failed to delete facilitation group"):
        delete_composite(db, FGROUPS, fgroup)
    return envelope(message="Facilitation group deleted successfully")
