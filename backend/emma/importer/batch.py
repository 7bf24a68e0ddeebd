"""Per-file import loop shared by the import scripts.

Every file is handled in its own session: a record that fails to parse,
validate, or write is rolled back, logged, and counted, and the loop moves
on to the next file.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from emma.importer.errors import ImportRecordError, RecordParseError, SourceDirectoryError
from emma.importer.stats import ImportStats
from emma.importer.upsert import UpsertDecision


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
RecordHandler = Callable[[Session, dict[str, Any]], UpsertDecision]

_OUTCOME_VERBS = {
    UpsertDecision.INSERT: "Imported",
    UpsertDecision.UPDATE: "Updated",
    UpsertDecision.SKIP: "Skipped (already exists)",
}


def list_source_files(directory: Path, suffix: str = ".json") -> list[Path]:
    try:
        return sorted(
            path for path in directory.iterdir() if path.is_file() and path.name.endswith(suffix)
        )
    except OSError as exc:
        raise SourceDirectoryError(f"Error reading directory {directory}: {exc}") from exc


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RecordParseError(f"Could not read {path.name}: {exc}") from exc


def dump_json(data: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def parse_record(model: type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}"
            for error in exc.errors()
        )
        raise RecordParseError(f"Invalid {model.__name__}: {problems}") from exc


class ImportRunner:
    """Walk a directory of JSON records and apply ``handler`` to each one.

    ``handler`` validates and writes one record inside the given session and
    returns the upsert decision it took; the runner commits after it returns
    and rolls back if it raises.
    """

    def __init__(self, session_factory: sessionmaker, *, label: str) -> None:
        self.session_factory = session_factory
        self.label = label

    def run(
        self,
        directory: Path,
        handler: RecordHandler,
        stats: ImportStats | None = None,
    ) -> ImportStats:
        stats = stats or ImportStats(self.label)
        files = list_source_files(directory)
        logger.info("Found %d %s files in %s", len(files), self.label.lower(), directory)
        for path in files:
            stats.processed += 1
            try:
                payload = read_json(path)
                decision = self._apply(handler, payload)
            except ImportRecordError as exc:
                stats.errors += 1
                logger.error("Error importing %s: %s", path.name, exc)
                continue
            if decision is UpsertDecision.INSERT:
                stats.imported += 1
            elif decision is UpsertDecision.UPDATE:
                stats.updated += 1
            else:
                stats.skipped += 1
            logger.info("%s %s", _OUTCOME_VERBS[decision], path.name)
        return stats

    def _apply(self, handler: RecordHandler, payload: Any) -> UpsertDecision:
        if not isinstance(payload, dict):
            raise RecordParseError("Expected a JSON object")
        with self.session_factory() as session:
            try:
                decision = handler(session, payload)
                session.commit()
            except ImportRecordError:
                session.rollback()
                raise
            except SQLAlchemyError as exc:
                session.rollback()
                raise ImportRecordError(str(exc)) from exc
        return decision
