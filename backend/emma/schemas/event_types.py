import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from emma.schemas.common import OptionalText


class EventTypeBase(BaseModel):
    name: str = Field(min_length=1)
    code: OptionalText = Field(default=None, max_length=6)
    description: OptionalText = None
    color: str | None = "#6B7280"
    icon: OptionalText = None
    is_active: bool = True


class EventTypeCreate(EventTypeBase):
    pass


class EventTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    code: OptionalText = Field(default=None, max_length=6)
    description: OptionalText = None
    color: str | None = None
    icon: OptionalText = None
    is_active: bool | None = None


class EventTypeRead(EventTypeBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
