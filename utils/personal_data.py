"""Helpers for anonymising athlete personal data in logs and telemetry."""

from __future__ import annotations

import hashlib
from typing import Any

__all__ = [
    "mask_name",
    "scrub_sensitive_mapping",
]

_DIGEST_SIZE = 10
_NAME_KEYS = {"athlete_name", "name"}
_DATE_KEYS = {"date_of_birth", "dateofbirth"}
_SENSITIVE_KEYS = _NAME_KEYS | _DATE_KEYS


def _stable_digest(value: str) -> str:
    normalised = value.strip().encode("utf-8", "ignore")
    return hashlib.blake2b(normalised, digest_size=_DIGEST_SIZE).hexdigest()


def mask_name(name: str) -> str:
    """Mask an athlete name while keeping it traceable across events."""

    cleaned = name.strip().casefold()
    if not cleaned:
        return "athlete-anon"
    digest = _stable_digest(f"name:{cleaned}")
    return f"athlete-{digest[:8]}"


def _scrub_value(value: Any, *, key: str | None = None) -> Any:
    if value is None:
        return None
    lowered = key.lower() if isinstance(key, str) else None

    if lowered in _NAME_KEYS and isinstance(value, str):
        return mask_name(value)
    if lowered in _DATE_KEYS:
        return "redacted"

    if isinstance(value, dict):
        return scrub_sensitive_mapping(value)
    if isinstance(value, list):
        return [_scrub_value(item, key=key) for item in value]
    if isinstance(value, tuple):
        return tuple(_scrub_value(item, key=key) for item in value)
    return value


def scrub_sensitive_mapping(mapping: dict[str, Any]) -> dict[str, Any]:
    """Recursively mask athlete names and birth dates inside ``mapping`` in-place."""

    for key, value in list(mapping.items()):
        if isinstance(key, str) and key.lower() in _SENSITIVE_KEYS:
            mapping[key] = _scrub_value(value, key=key)
        elif isinstance(value, (dict, list, tuple)):
            mapping[key] = _scrub_value(
                value, key=key if isinstance(key, str) else None
            )
    return mapping
