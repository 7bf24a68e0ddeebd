import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from emma.api.deps import get_db
from emma.api.helpers import check_references, commit_or_400, envelope, get_or_404, search_clause
from emma.importer.validation import GROUP_CHECKS
from emma.models import Group, IGroup
from emma.schemas.envelope import Envelope
from emma.schemas.groups import IGroupCreate, IGroupRead, IGroupStats, IGroupUpdate
from emma.services import geo
from emma.services.composite import (
    create_composite,
    delete_composite,
    refresh_composite,
    update_composite,
)
from emma.services.groups import IGROUPS, group_payload, visitor_counts

router = APIRouter()

WRITE_FAILED = "Failed to save integration group"


def _apply_post_filters(
    groups: list[dict],
    *,
    city: str | None,
    state: str | None,
    zipcode: str | None,
    days: str | None,
    dates: str | None,
    time: str | None,
) -> list[dict]:
    if city or state or zipcode:
        groups = [g for g in groups if geo.matches_venue_address(g, city, state, zipcode)]
    if days:
        weekdays = geo.parse_days(days)
        if weekdays:
            groups = [g for g in groups if geo.meets_on_days(g, weekdays)]
    if dates:
        calendar_days = geo.parse_dates(dates)
        if calendar_days:
            groups = [g for g in groups if geo.meets_on_date(g, calendar_days)]
    if time:
        minutes = geo.parse_time_of_day(time)
        if minutes is not None:
            groups = [g for g in groups if geo.meets_near_time(g, minutes)]
    return groups


@router.get("/", response_model=Envelope[list[IGroupRead]])
def list_igroups(
    active: bool | None = None,
    name: str | None = None,
    search: str | None = None,
    initiated: bool | None = None,
    uninitiated: bool | None = None,
    city: str | None = None,
    state: str | None = None,
    zipcode: str | None = None,
    days: str | None = None,
    dates: str | None = None,
    time: str | None = None,
    lat: str | None = None,
    latitude: str | None = None,
    lon: str | None = None,
    longitude: str | None = None,
    rad: str | None = None,
    radius: str | None = None,
    by: str | None = None,
    order: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    stmt = select(IGroup).join(Group, Group.id == IGroup.id).order_by(IGroup.created_at.desc())
    if active is not None:
        stmt = stmt.where(IGroup.is_active == active)
    if name:
        stmt = stmt.where(func.lower(Group.name).like(f"%{name.lower()}%"))
    elif search:
        stmt = stmt.where(search_clause(search, Group.name, Group.description))
    if initiated is not None:
        stmt = stmt.where(IGroup.is_accepting_initiated_visitors == initiated)
    if uninitiated is not None:
        stmt = stmt.where(IGroup.is_accepting_uninitiated_visitors == uninitiated)

    groups = [group_payload(IGROUPS, row) for row in db.scalars(stmt)]

    query = geo.build_geo_query(lat or latitude, lon or longitude, rad or radius)
    if query is not None:
        groups = geo.within_radius(groups, query)
    groups = _apply_post_filters(
        groups, city=city, state=state, zipcode=zipcode, days=days, dates=dates, time=time
    )
    sort_by, sort_order = geo.default_sort(query is not None, by, order)
    groups = geo.sort_groups(groups, sort_by, sort_order)
    return envelope(groups, count=len(groups))


@router.get("/stats", response_model=Envelope[IGroupStats])
def igroup_stats(
    lat: str | None = None,
    latitude: str | None = None,
    lon: str | None = None,
    longitude: str | None = None,
    rad: str | None = None,
    radius: str | None = None,
    db: Session = Depends(get_db),
) -> dict:
    groups = [group_payload(IGROUPS, row) for row in db.scalars(select(IGroup))]
    stats = visitor_counts(groups)
    query = geo.build_geo_query(lat or latitude, lon or longitude, rad or radius)
    if query is not None:
        stats["nearby"] = {
            **visitor_counts(geo.within_radius(groups, query)),
            "radius_miles": query.radius_miles,
            "latitude": query.latitude,
            "longitude": query.longitude,
        }
    return envelope(stats)


@router.post("/", response_model=Envelope[IGroupRead], status_code=status.HTTP_201_CREATED)
def create_igroup(payload: IGroupCreate, db: Session = Depends(get_db)) -> dict:
    check_references(db, payload, GROUP_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        igroup = create_composite(db, IGROUPS, payload.model_dump())
    refresh_composite(db, IGROUPS, igroup)
    return envelope(
        group_payload(IGROUPS, igroup), message="Integration group created successfully"
    )


@router.get("/{group_id}", response_model=Envelope[IGroupRead])
def get_igroup(group_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    igroup = get_or_404(db, IGroup, group_id, "Integration group")
    return envelope(group_payload(IGROUPS, igroup))


@router.put("/{group_id}", response_model=Envelope[IGroupRead])
def update_igroup(
    group_id: uuid.UUID, payload: IGroupUpdate, db: Session = Depends(get_db)
) -> dict:
    igroup = get_or_404(db, IGroup, group_id, "Integration group")
    values = payload.model_dump(exclude_unset=True)
    check_references(db, values, GROUP_CHECKS)
    with commit_or_400(db, WRITE_FAILED):
        update_composite(db, IGROUPS, igroup, values)
    refresh_composite(db, IGROUPS, igroup)
    return envelope(
        group_payload(IGROUPS, igroup), message="Integration group updated successfully"
    )


@router.delete("/{group_id}", response_model=Envelope[None])
def delete_igroup(group_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    igroup = get_or_404(db, IGroup, group_id, "Integration group")
    with commit_or_400(db, "Failed to delete integration group"):
        delete_composite(db, IGROUPS, igroup)
    return envelope(message="Integration group deleted successfully")
