import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AddressSummary(BaseModel):
    id: uuid.UUID
    address_1: str
    address_2: str | None = None
    city: str
    state: str
    postal_code: str
    country: str

    model_config = ConfigDict(from_attributes=True)


class AddressBase(BaseModel):
    address_1: str = Field(min_length=1)
    address_2: str | None = None
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(default="United States", min_length=1)


class AddressCreate(AddressBase):
    pass


class AddressUpdate(BaseModel):
    address_1: str | None = Field(default=None, min_length=1)
    address_2: str | None = None
    city: str | None = Field(default=None, min_length=1)
    state: str | None = Field(default=None, min_length=1)
    postal_code: str | None = Field(default=None, min_length=1)
    country: str | None = Field(default=None, min_length=1)


class AddressRead(AddressSummary):
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AddressStats(BaseModel):
    total: int
