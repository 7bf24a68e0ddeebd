import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from emma.schemas.common import AreaSummary, OptionalId


class CommunityBase(BaseModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=12)
    description: str | None = None
    area_id: OptionalId = None
    coordinator_id: OptionalId = None
    image_url: str | None = None
    geo_json: Any | None = None
    geo_definition: Any | None = None
    color: str | None = "#10B981"
    is_active: bool = True


class CommunityCreate(CommunityBase):
    pass


class CommunityUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    code: str | None = Field(default=None, min_length=1, max_length=12)
    description: str | None = None
    area_id: OptionalId = None
    coordinator_id: OptionalId = None
    image_url: str | None = None
    geo_json: Any | None = None
    geo_definition: Any | None = None
    color: str | None = None
    is_active: bool | None = None


class CommunityRead(CommunityBase):
    id: uuid.UUID
    area: AreaSummary | None = None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
