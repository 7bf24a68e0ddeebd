import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from emma.schemas.common import (
    AreaSummary,
    CommunitySummary,
    IdString,
    IsoDateTime,
    OptionalId,
)
from emma.schemas.venues import VenueSummary


class EventTime(BaseModel):
    start: IsoDateTime
    end: IsoDateTime


class EventBase(BaseModel):
    event_type_id: OptionalId = None
    name: str = Field(min_length=1)
    description: str | None = None
    area_id: OptionalId = None
    community_id: OptionalId = None
    venue_id: OptionalId = None
    staff_cost: int = Field(default=0, ge=0)
    staff_capacity: int = Field(default=0, ge=0)
    potential_staff: list[IdString] = Field(default_factory=list)
    committed_staff: list[IdString] = Field(default_factory=list)
    alternate_staff: list[IdString] = Field(default_factory=list)
    participant_cost: int = Field(default=0, ge=0)
    participant_capacity: int = Field(default=0, ge=0)
    potential_participants: list[IdString] = Field(default_factory=list)
    committed_participants: list[IdString] = Field(default_factory=list)
    waitlist_participants: list[IdString] = Field(default_factory=list)
    primary_leader_id: OptionalId = None
    leaders: list[IdString] = Field(default_factory=list)
    participant_schedule: list[EventTime] = Field(default_factory=list)
    staff_schedule: list[EventTime] = Field(default_factory=list)
    is_published: bool = False
    start_at: datetime | None = None
    end_at: datetime | None = None
    is_active: bool = True


class EventCreate(EventBase):
    pass


class NwtaEventBase(EventBase):
    rookies: list[IdString] = Field(default_factory=list)
    elders: list[IdString] = Field(default_factory=list)
    mos: list[IdString] = Field(default_factory=list)


class NwtaEventCreate(NwtaEventBase):
    pass


class EventUpdate(BaseModel):
    event_type_id: OptionalId = None
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    area_id: OptionalId = None
    community_id: OptionalId = None
    venue_id: OptionalId = None
    staff_cost: int | None = Field(default=None, ge=0)
    staff_capacity: int | None = Field(default=None, ge=0)
    potential_staff: list[IdString] | None = None
    committed_staff: list[IdString] | None = None
    alternate_staff: list[IdString] | None = None
    participant_cost: int | None = Field(default=None, ge=0)
    participant_capacity: int | None = Field(default=None, ge=0)
    potential_participants: list[IdString] | None = None
    committed_participants: list[IdString] | None = None
    waitlist_participants: list[IdString] | None = None
    primary_leader_id: OptionalId = None
    leaders: list[IdString] | None = None
    participant_schedule: list[EventTime] | None = None
    staff_schedule: list[EventTime] | None = None
    is_published: bool | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None
    is_active: bool | None = None


class NwtaEventUpdate(EventUpdate):
    rookies: list[IdString] | None = None
    elders: list[IdString] | None = None
    mos: list[IdString] | None = None


class EventRead(BaseModel):
    id: uuid.UUID
    event_type_id: uuid.UUID | None = None
    name: str
    description: str | None = None
    area_id: uuid.UUID | None = None
    community_id: uuid.UUID | None = None
    venue_id: uuid.UUID | None = None
    staff_cost: int
    staff_capacity: int
    potential_staff: list[str] = Field(default_factory=list)
    committed_staff: list[str] = Field(default_factory=list)
    alternate_staff: list[str] = Field(default_factory=list)
    participant_cost: int
    participant_capacity: int
    potential_participants: list[str] = Field(default_factory=list)
    committed_participants: list[str] = Field(default_factory=list)
    waitlist_participants: list[str] = Field(default_factory=list)
    primary_leader_id: uuid.UUID | None = None
    leaders: list[str] = Field(default_factory=list)
    participant_schedule: list[dict] = Field(default_factory=list)
    staff_schedule: list[dict] = Field(default_factory=list)
    is_published: bool
    start_at: datetime | None = None
    end_at: datetime | None = None
    is_active: bool
    area: AreaSummary | None = None
    community: CommunitySummary | None = None
    venue: VenueSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NwtaEventRead(EventRead):
    rookies: list[str] = Field(default_factory=list)
    elders: list[str] = Field(default_factory=list)
    mos: list[str] = Field(default_factory=list)


class EventStats(BaseModel):
    total: int
    active: int
    inactive: int
