import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
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
from emma.importer.validation import COMMUNITY_CHECKS
from emma.models import Community
from emma.schemas.communities import CommunityCreate, CommunityRead, CommunityUpdate
from emma.schemas.envelope import Envelope

router = APIRouter()

UNIQUE_CODE = "Community code must be unique"


@router.get("/", response_model=Envelope[list[CommunityRead]])
def list_communities(
    active: bool | None = None,
    search: str | None = None,
    area_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(Community).order_by(Community.created_at.desc())
    if active is not None:
        stmt = stmt.where(Community.is_active == active)
    if area_id is not None:
        stmt = stmt.where(Community.area_id == area_id)
    if search:
        stmt = stmt.where(search_clause(search, Community.name, Community.code))
    communities = list(db.scalars(stmt))
    return envelope(communities, count=len(communities))


@router.post("/", response_model=Envelope[CommunityRead], status_code=status.HTTP_201_CREATED)
def create_community(payload: CommunityCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, COMMUNITY_CHECKS)
    community = Community(**payload.model_dump())
    with commit_or_400(db, UNIQUE_CODE):
        db.add(community)
    db.refresh(community)
    return envelope(community, message="Community created successfully")


@router.get("/{community_id}", response_model=Envelope[CommunityRead])
def get_community(community_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    return envelope(get_or_404(db, Community, community_id, "Community"))


@router.put("/{community_id}", response_model=Envelope[CommunityRead])
def update_community(
    community_id: uuid.UUID, payload: CommunityUpdate, db: Session = Depends(get_db)
) -> dict:
    community = get_or_404(db, Community, community_id, "Community")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, COMMUNITY_CHECKS)
    with commit_or_400(db, UNIQUE_CODE):
        for key, value in values.items():
            setattr(community, key, value)
    db.refresh(community)
    return envelope(community, message="Community updated successfully")


@router.delete("/{community_id}", response_model=Envelope[CommunityRead])
def archive_community(community_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    community = get_or_404(db, Community, community_id, "Community")
    archive(community)
    db.commit()
    db.refresh(community)
    return envelope(community, message="Community archived successfully")
