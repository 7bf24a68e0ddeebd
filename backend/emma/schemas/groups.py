import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from emma.models.enums import FGroupType
from emma.schemas.common import (
    AreaSummary,
    CommunitySummary,
    IdString,
    OptionalId,
    OptionalText,
    ScheduleEvent,
)
from emma.schemas.people import PersonSummary
from emma.schemas.venues import VenueSummary


class GroupFields(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    url: OptionalText = None
    members: list[IdString] = Field(default_factory=list)
    is_accepting_new_members: bool = True
    membership_criteria: str | None = None
    venue_id: OptionalId = None
    genders: str | None = None
    is_publicly_listed: bool = True
    public_contact_id: OptionalId = None
    primary_contact_id: OptionalId = None
    photo_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_active: bool = True

    is_accepting_initiated_visitors: bool = True
    is_accepting_uninitiated_visitors: bool = False
    is_requiring_contact_before_visiting: bool = True
    schedule_events: list[ScheduleEvent] = Field(default_factory=list)
    schedule_description: str | None = None
    area_id: OptionalId = None
    community_id: OptionalId = None
    contact_email: OptionalText = None
    status: str | None = None
    affiliation: str | None = None


class GroupFieldsUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    url: OptionalText = None
    members: list[IdString] | None = None
    is_accepting_new_members: bool | None = None
    membership_criteria: str | None = None
    venue_id: OptionalId = None
    genders: str | None = None
    is_publicly_listed: bool | None = None
    public_contact_id: OptionalId = None
    primary_contact_id: OptionalId = None
    photo_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_active: bool | None = None

    is_accepting_initiated_visitors: bool | None = None
    is_accepting_uninitiated_visitors: bool | None = None
    is_requiring_contact_before_visiting: bool | None = None
    schedule_events: list[ScheduleEvent] | None = None
    schedule_description: str | None = None
    area_id: OptionalId = None
    community_id: OptionalId = None
    contact_email: OptionalText = None
    status: str | None = None
    affiliation: str | None = None


class GroupReadFields(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    url: str | None = None
    members: list[str] = Field(default_factory=list)
    is_accepting_new_members: bool
    membership_criteria: str | None = None
    venue_id: uuid.UUID | None = None
    genders: str | None = None
    is_publicly_listed: bool
    public_contact_id: uuid.UUID | None = None
    primary_contact_id: uuid.UUID | None = None
    photo_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    is_accepting_initiated_visitors: bool
    is_accepting_uninitiated_visitors: bool
    is_requiring_contact_before_visiting: bool
    schedule_events: list[ScheduleEvent] = Field(default_factory=list)
    schedule_description: str | None = None
    area_id: uuid.UUID | None = None
    community_id: uuid.UUID | None = None
    contact_email: str | None = None
    status: str | None = None
    affiliation: str | None = None

    area: AreaSummary | None = None
    community: CommunitySummary | None = None
    venue: VenueSummary | None = None


class IGroupCreate(GroupFields):
    pass


class IGroupUpdate(GroupFieldsUpdate):
    pass


class IGroupRead(GroupReadFields):
    distance: float | None = None
    distance_units: str | None = None


class FGroupCreate(GroupFields):
    group_type: FGroupType = Field(default=FGroupType.MENS, validate_default=True)
    is_accepting_new_facilitators: bool = True
    facilitators: list[IdString] = Field(default_factory=list)

    model_config = ConfigDict(use_enum_values=True)


class FGroupUpdate(GroupFieldsUpdate):
    group_type: FGroupType | None = None
    is_accepting_new_facilitators: bool | None = None
    facilitators: list[IdString] | None = None

    model_config = ConfigDict(use_enum_values=True)


class FGroupRead(GroupReadFields):
    group_type: str | None = None
    is_accepting_new_facilitators: bool
    facilitators: list[str] = Field(default_factory=list)


class VisitorCounts(BaseModel):
    total: int
    active: int
    inactive: int
    accepting_initiated_visitors: int
    accepting_uninitiated_visitors: int


class NearbyCounts(VisitorCounts):
    radius_miles: float
    latitude: float
    longitude: float


class IGroupStats(VisitorCounts):
    nearby: NearbyCounts | None = None

    model_config = ConfigDict(from_attributes=True)


class GroupCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    url: OptionalText = None
    members: list[IdString] = Field(default_factory=list)
    is_accepting_new_members: bool = False
    membership_criteria: str | None = None
    venue_id: OptionalId = None
    genders: str | None = None
    is_publicly_listed: bool = False
    public_contact_id: OptionalId = None
    primary_contact_id: OptionalId = None
    photo_url: OptionalText = None
    latitude: float | None = None
    longitude: float | None = None
    is_active: bool = True


class GroupUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    url: OptionalText = None
    members: list[IdString] | None = None
    is_accepting_new_members: bool | None = None
    membership_criteria: str | None = None
    venue_id: OptionalId = None
    genders: str | None = None
    is_publicly_listed: bool | None = None
    public_contact_id: OptionalId = None
    primary_contact_id: OptionalId = None
    photo_url: OptionalText = None
    latitude: float | None = None
    longitude: float | None = None
    is_active: bool | None = None


class GroupRead(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    url: str | None = None
    members: list[str] = Field(default_factory=list)
    is_accepting_new_members: bool
    membership_criteria: str | None = None
    venue_id: uuid.UUID | None = None
    genders: str | None = None
    is_publicly_listed: bool
    public_contact_id: uuid.UUID | None = None
    primary_contact_id: uuid.UUID | None = None
    photo_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_active: bool
    venue: VenueSummary | None = None
    public_contact: PersonSummary | None = None
    primary_contact: PersonSummary | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class GroupStats(BaseModel):
    total: int
    active: int
    inactive: int


class FGroupStats(GroupStats):
    by_group_type: dict[str, int]
