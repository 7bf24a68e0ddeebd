import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from emma.schemas.common import AreaSummary, CommunitySummary, OptionalId, OptionalText
from emma.schemas.people import PersonBase


class WarriorFields(BaseModel):
    log_id: OptionalId = None
    initiation_id: OptionalId = None
    initiation_on: date | None = None
    status: str | None = None
    inner_essence_name: str | None = None
    training_events: list[str] = Field(default_factory=list)
    staffed_events: list[str] = Field(default_factory=list)
    lead_events: list[str] = Field(default_factory=list)
    mos_events: list[str] = Field(default_factory=list)
    area_id: OptionalId = None
    community_id: OptionalId = None


class WarriorCreate(PersonBase, WarriorFields):
    pass


class WarriorUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1)
    middle_name: str | None = None
    last_name: str | None = Field(default=None, min_length=1)
    email: OptionalText = None
    phone: str | None = None
    notes: str | None = None
    photo_url: OptionalText = None
    birth_date: date | None = None
    deceased_date: date | None = None
    is_active: bool | None = None

    log_id: OptionalId = None
    initiation_id: OptionalId = None
    initiation_on: date | None = None
    status: str | None = None
    inner_essence_name: str | None = None
    training_events: list[str] | None = None
    staffed_events: list[str] | None = None
    lead_events: list[str] | None = None
    mos_events: list[str] | None = None
    area_id: OptionalId = None
    community_id: OptionalId = None


class WarriorRead(PersonBase, WarriorFields):
    id: uuid.UUID
    area: AreaSummary | None = None
    community: CommunitySummary | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class WarriorStats(BaseModel):
    total: int
    active: int
    inactive: int
    by_status: dict[str, int]
