import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from emma.schemas.common import OptionalId
from emma.schemas.people import PersonSummary


class AreaBase(BaseModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=6)
    description: str | None = None
    steward_id: OptionalId = None
    finance_coordinator_id: OptionalId = None
    geo_polygon: Any | None = None
    image_url: str | None = None
    color: str | None = "#3B82F6"
    is_active: bool = True


class AreaCreate(AreaBase):
    pass


class AreaUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    code: str | None = Field(default=None, min_length=1, max_length=6)
    description: str | None = None
    steward_id: OptionalId = None
    finance_coordinator_id: OptionalId = None
    geo_polygon: Any | None = None
    image_url: str | None = None
    color: str | None = None
    is_active: bool | None = None


class AreaRead(AreaBase):
    id: uuid.UUID
    admins: list[PersonSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AreaAdminCreate(BaseModel):
    person_id: uuid.UUID


class AreaAdminsReplace(BaseModel):
    admin_ids: list[uuid.UUID]
