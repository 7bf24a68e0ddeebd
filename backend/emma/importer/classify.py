from __future__ import annotations

import re

from emma.importer.parsing import parse_boolean
from emma.models.enums import FGroupType, GroupKind
from emma.schemas.legacy import LegacyIGroupRecord


_FGROUP_NAME_PATTERNS = (
    re.compile(r"men'?s\s+circle", re.IGNORECASE),
    re.compile(r"\bopen\s+circle\b", re.IGNORECASE),
    re.compile(r"\bclosed\s+circle\b", re.IGNORECASE),
    re.compile(r"\bcircle\b", re.IGNORECASE),
)
_IGROUP_NAME_PATTERNS = (
    re.compile(r"i[\s-]?group", re.IGNORECASE),
    re.compile(r"\bgroup\b", re.IGNORECASE),
)


def _kind_from_type_field(group_type: str | None) -> GroupKind | None:
    if not group_type:
        return None
    lowered = group_type.lower()
    if "i-group" in lowered or "i group" in lowered:
        return GroupKind.IGROUP
    if "f-group" in lowered or "f group" in lowered or "circle" in lowered:
        return GroupKind.FGROUP
    return None


def classify(record: LegacyIGroupRecord) -> GroupKind:
    """Decide whether a legacy group row becomes an IGroup or an FGroup.

    The explicit ``igroup_type`` field wins; otherwise circle-style names are
    FGroups and everything else, including names that match nothing, is an
    IGroup.
    """
    kind = _kind_from_type_field(record.igroup_type)
    if kind is not None:
        return kind

    name = record.igroup_name or ""
    if any(pattern.search(name) for pattern in _FGROUP_NAME_PATTERNS):
        return GroupKind.FGROUP
    if any(pattern.search(name) for pattern in _IGROUP_NAME_PATTERNS):
        return GroupKind.IGROUP
    return GroupKind.IGROUP


def classify_fgroup_subtype(record: LegacyIGroupRecord) -> FGroupType:
    if parse_boolean(record.igroup_is_mixed_gender):
        return FGroupType.MIXED_GENDER
    name = (record.igroup_name or "").lower()
    status = (record.igroup_status or "").strip().lower()
    if "open" in name:
        return FGroupType.OPEN_MENS
    if "closed" in name or status == "closed":
        return FGroupType.CLOSED_MENS
    return FGroupType.MENS
