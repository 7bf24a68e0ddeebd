import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from emma.schemas.common import OptionalId, OptionalText


class PersonSummary(BaseModel):
    id: uuid.UUID
    first_name: str
    middle_name: str | None = None
    last_name: str
    email: OptionalText = None
    photo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PersonBase(BaseModel):
    first_name: str = Field(min_length=1)
    middle_name: str | None = None
    last_name: str = Field(min_length=1)
    email: OptionalText = None
    phone: str | None = None
    billing_address_id: OptionalId = None
    mailing_address_id: OptionalId = None
    physical_address_id: OptionalId = None
    notes: str | None = None
    photo_url: OptionalText = None
    birth_date: date | None = None
    deceased_date: date | None = None
    is_active: bool = True


class PersonCreate(PersonBase):
    pass


class PersonUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1)
    middle_name: str | None = None
    last_name: str | None = Field(default=None, min_length=1)
    email: OptionalText = None
    phone: str | None = None
    billing_address_id: OptionalId = None
    mailing_address_id: OptionalId = None
    physical_address_id: OptionalId = None
    notes: str | None = None
    photo_url: OptionalText = None
    birth_date: date | None = None
    deceased_date: date | None = None
    is_active: bool | None = None


class PersonRead(PersonBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
