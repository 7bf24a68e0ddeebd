"""Shared pieces of the resource routers: envelopes, lookups, commits."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from emma.core.clock import utc_now
from emma.importer.validation import ForeignKeyCheck, validate_foreign_keys


def envelope(
    data: Any = None, *, count: int | None = None, message: str | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "data": data}
    if count is not None:
        body["count"] = count
    if message is not None:
        body["message"] = message
    return body


def get_or_404(db: Session, model: type, record_id: uuid.UUID, label: str) -> Any:
    row = db.get(model, record_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return row


def check_references(db: Session, record: Any, checks: tuple[ForeignKeyCheck, ...]) -> None:
    message = validate_foreign_keys(db, record, checks)
    if message:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@contextmanager
def commit_or_400(db: Session, conflict_message: str) -> Iterator[None]:
    """Commit the writes made in the block; constraint violations answer 400."""
    try:
        yield
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=conflict_message) from exc


def archive(row: Any) -> None:
    row.is_active = False
    row.deleted_at = utc_now()


def search_clause(term: str, *columns: Any) -> Any:
    pattern = f"%{term.lower()}%"
    return or_(*(func.lower(column).like(pattern) for column in columns))
