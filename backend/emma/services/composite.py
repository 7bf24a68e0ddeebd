"""Records stored as a base row plus an extension row sharing its id.

Groups (``groups`` + ``i_groups``/``f_groups``), warriors (``people`` +
``warriors``) and NWTA events (``events`` + ``nwta_events``) are read and
written through these helpers so both rows change in one transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from emma.core.clock import utc_now


@dataclass(frozen=True)
class Composite:
    base: type
    extension: type
    # relationship on the extension row that loads the base row
    link: str

    def base_row(self, extension_row: Any) -> Any:
        return getattr(extension_row, self.link)


def column_names(model: type) -> set[str]:
    return {prop.key for prop in sa_inspect(model).column_attrs}


def row_values(row: Any) -> dict[str, Any]:
    return {name: getattr(row, name) for name in column_names(type(row))}


def split_values(
    composite: Composite, values: dict[str, Any]
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Route each value to every table that has a column of that name."""
    base_columns = column_names(composite.base)
    extension_columns = column_names(composite.extension)
    base = {key: value for key, value in values.items() if key in base_columns and key != "id"}
    extension = {
        key: value for key, value in values.items() if key in extension_columns and key != "id"
    }
    return base, extension


def flatten(composite: Composite, extension_row: Any) -> dict[str, Any]:
    return {**row_values(composite.base_row(extension_row)), **row_values(extension_row)}


def create_composite(db: Session, composite: Composite, values: dict[str, Any]) -> Any:
    """Insert base then extension; the caller commits or rolls back."""
    base_values, extension_values = split_values(composite, values)
    base_row = composite.base(**base_values)
    db.add(base_row)
    db.flush()
    extension_row = composite.extension(id=base_row.id, **extension_values)
    db.add(extension_row)
    db.flush()
    return extension_row


def update_composite(
    db: Session, composite: Composite, extension_row: Any, values: dict[str, Any]
) -> Any:
    base_values, extension_values = split_values(composite, values)
    base_row = composite.base_row(extension_row)
    now = utc_now()
    for key, value in base_values.items():
        setattr(base_row, key, value)
    for key, value in extension_values.items():
        setattr(extension_row, key, value)
    base_row.updated_at = now
    extension_row.updated_at = now
    db.flush()
    return extension_row


def delete_composite(db: Session, composite: Composite, extension_row: Any) -> None:
    base_row = composite.base_row(extension_row)
    db.delete(extension_row)
    db.flush()
    db.delete(base_row)
    db.flush()


def refresh_composite(db: Session, composite: Composite, extension_row: Any) -> None:
    db.refresh(composite.base_row(extension_row))
    db.refresh(extension_row)
