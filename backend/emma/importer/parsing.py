from __future__ import annotations

import re
from typing import Any


_TRUTHY = {"yes", "1", "true"}
_CONTACT_TRUTHY = _TRUTHY | {"contact"}
_FILENAME_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")
_UNDERSCORE_RUN = re.compile(r"_{2,}")
FILENAME_MAX_LENGTH = 50


def _normalize(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip().lower()


def _parse_flag(value: Any, truthy: set[str]) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in truthy
    return False


def parse_boolean(value: Any) -> bool:
    """Legacy yes/no/1/0/true/false flag; anything unrecognised is False."""
    return _parse_flag(value, _TRUTHY)


def parse_contact_boolean(value: Any) -> bool:
    """Visitor-acceptance flag where "contact" also means the group accepts visitors."""
    return _parse_flag(value, _CONTACT_TRUTHY)


def parse_requires_contact(initiated: Any, uninitiated: Any) -> bool:
    return _normalize(initiated) == "contact" or _normalize(uninitiated) == "contact"


def build_schedule_description(
    frequency: str | None, night: str | None, time: str | None
) -> str | None:
    parts: list[str] = []
    if frequency:
        parts.append(frequency)
    if night:
        parts.append(f"on {night}")
    if time:
        parts.append(f"at {time}")
    return " ".join(parts) if parts else None


def parse_schedule_events(
    frequency: str | None, night: str | None, time: str | None
) -> list[dict[str, str]]:
    # Recurrence expansion into concrete {start, end} ranges is not defined yet.
    return []


def parse_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def sanitize_for_filename(name: str) -> str:
    cleaned = _FILENAME_UNSAFE.sub("_", name)
    cleaned = _UNDERSCORE_RUN.sub("_", cleaned)
    cleaned = cleaned.strip("_")
    return cleaned[:FILENAME_MAX_LENGTH]
