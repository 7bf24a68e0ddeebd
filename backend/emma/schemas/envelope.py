from typing import Any, Generic, TypeVar

from pydantic import BaseModel


DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Response wrapper shared by every endpoint."""

    success: bool = True
    data: DataT | None = None
    count: int | None = None
    message: str | None = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    details: list[Any] | None = None
