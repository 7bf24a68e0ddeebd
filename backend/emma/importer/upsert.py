from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from emma.core.clock import utc_now
from emma.importer.errors import RecordWriteError


class UpsertDecision(str, enum.Enum):
    INSERT = "insert"
    UPDATE = "update"
    SKIP = "skip"


def decide(exists: bool, force: bool) -> UpsertDecision:
    if not exists:
        return UpsertDecision.INSERT
    if force:
        return UpsertDecision.UPDATE
    return UpsertDecision.SKIP


def decide_for(session: Session, model: type, record_id: uuid.UUID, force: bool) -> UpsertDecision:
    return decide(session.get(model, record_id) is not None, force)


def apply_upsert(
    session: Session,
    model: type,
    record_id: uuid.UUID,
    values: dict[str, Any],
    decision: UpsertDecision,
    *,
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
) -> Any:
    """Insert or overwrite one row and flush it.

    Inserts keep the record's own timestamps when it carries them; updates
    overwrite every given column and stamp ``updated_at`` with now. A flush
    failure is raised as ``RecordWriteError`` naming the table so the caller
    can roll back the whole record.
    """
    if decision is UpsertDecision.SKIP:
        return None

    table = model.__tablename__
    action = "inserting" if decision is UpsertDecision.INSERT else "updating"
    try:
        if decision is UpsertDecision.INSERT:
            row = model(id=record_id, **values)
            if created_at is not None:
                row.created_at = created_at
            if updated_at is not None:
                row.updated_at = updated_at
            session.add(row)
        else:
            row = session.get(model, record_id)
            if row is None:
                raise RecordWriteError(table, action, f"row {record_id} disappeared")
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = utc_now()
        session.flush()
    except SQLAlchemyError as exc:
        raise RecordWriteError(table, action, str(getattr(exc, "orig", None) or exc)) from exc
    return row
