"""Name/legacy-id lookups for areas and communities.

The lookup tables are snapshots built once per run from area and community
files written by earlier export/translation steps; they never consult the
live database.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingEntry:
    uuid: str
    name: str
    code: str | None = None
    legacy_id: int | None = None


def mapping_key(name: str) -> str:
    return name.strip().lower()


class ReferenceMapping(Mapping[str, MappingEntry]):
    """Read-only mapping keyed by lower-cased, trimmed name."""

    def __init__(self, entries: Mapping[str, MappingEntry] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_entries(cls, entries: list[MappingEntry]) -> "ReferenceMapping":
        return cls({mapping_key(entry.name): entry for entry in entries})

    def __getitem__(self, key: str) -> MappingEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class ReferenceMappings:
    areas: ReferenceMapping
    communities: ReferenceMapping


def _legacy_id(raw: dict[str, Any], legacy_id_field: str) -> int | None:
    legacy = raw.get("mkpconnect_data")
    if not isinstance(legacy, dict):
        return None
    value = legacy.get(legacy_id_field)
    if value in (None, "", 0):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _entry_from_file(path: Path, legacy_id_field: str) -> MappingEntry:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return MappingEntry(
        uuid=str(raw["id"]),
        name=str(raw["name"]),
        code=raw.get("code"),
        legacy_id=_legacy_id(raw, legacy_id_field),
    )


def load_mapping(directory: Path, legacy_id_field: str) -> ReferenceMapping:
    """Build a mapping from every ``*.json`` file in ``directory``.

    A missing directory produces an empty mapping and a warning, so a
    translation run can still proceed with every reference unresolved.
    """
    try:
        paths = sorted(p for p in directory.iterdir() if p.suffix == ".json")
    except OSError as exc:
        logger.warning("Could not load mappings from %s: %s", directory, exc)
        return ReferenceMapping()

    entries: list[MappingEntry] = []
    for path in paths:
        try:
            entries.append(_entry_from_file(path, legacy_id_field))
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Skipping mapping file %s: %s", path.name, exc)
    mapping = ReferenceMapping.from_entries(entries)
    logger.info("Loaded %d mappings from %s", len(mapping), directory)
    return mapping


def load_mappings(host_dir: Path) -> ReferenceMappings:
    return ReferenceMappings(
        areas=load_mapping(host_dir / "areas", "area_id"),
        communities=load_mapping(host_dir / "communities", "community_id"),
    )


def resolve_reference_id(
    name: str | None, legacy_id: int | None, mapping: Mapping[str, MappingEntry]
) -> str | None:
    if name:
        entry = mapping.get(mapping_key(name))
        if entry is not None:
            return entry.uuid
    if legacy_id:
        for entry in mapping.values():
            if entry.legacy_id == legacy_id:
                return entry.uuid
    return None


def resolve_area_id(
    name: str | None, legacy_id: int | None, mapping: Mapping[str, MappingEntry]
) -> str | None:
    return resolve_reference_id(name, legacy_id, mapping)


def resolve_community_id(
    name: str | None, legacy_id: int | None, mapping: Mapping[str, MappingEntry]
) -> str | None:
    return resolve_reference_id(name, legacy_id, mapping)
