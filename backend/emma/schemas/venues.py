import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from emma.schemas.common import OptionalId, OptionalText
from emma.schemas.addresses import AddressSummary


class VenueBase(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    email: OptionalText = None
    phone: str | None = None
    website: OptionalText = None
    timezone: str | None = "America/New_York"
    mailing_address_id: OptionalId = None
    physical_address_id: OptionalId = None
    primary_contact_id: OptionalId = None
    area_id: OptionalId = None
    community_id: OptionalId = None
    event_types: list[str] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    is_nudity: bool = False
    nudity_note: str | None = None
    is_rejected: bool = False
    rejected_note: str | None = None
    is_private_residence: bool = False
    is_active: bool = True


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    email: OptionalText = None
    phone: str | None = None
    website: OptionalText = None
    timezone: str | None = None
    mailing_address_id: OptionalId = None
    physical_address_id: OptionalId = None
    primary_contact_id: OptionalId = None
    area_id: OptionalId = None
    community_id: OptionalId = None
    event_types: list[str] | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_nudity: bool | None = None
    nudity_note: str | None = None
    is_rejected: bool | None = None
    rejected_note: str | None = None
    is_private_residence: bool | None = None
    is_active: bool | None = None


class VenueRead(VenueBase):
    id: uuid.UUID
    physical_address: AddressSummary | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class VenueSummary(BaseModel):
    id: uuid.UUID
    name: str
    phone: str | None = None
    email: str | None = None
    timezone: str | None = None
    website: str | None = None
    physical_address: AddressSummary | None = None

    model_config = ConfigDict(from_attributes=True)
