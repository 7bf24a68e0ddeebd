import uuid
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalId = Annotated[uuid.UUID | None, BeforeValidator(blank_to_none)]
OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]
IdString = Annotated[uuid.UUID, PlainSerializer(str, return_type=str)]


class ScheduleEvent(BaseModel):
    start: str
    end: str


class AreaSummary(BaseModel):
    id: uuid.UUID
    name: str
    code: str
    color: str | None = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class CommunitySummary(AreaSummary):
    pass


def _isoformat(value: datetime) -> str:
    return value.isoformat()


IsoDateTime = Annotated[datetime, PlainSerializer(_isoformat, return_type=str)]
