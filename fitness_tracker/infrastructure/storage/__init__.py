"""Roster storage configuration and file format."""

from __future__ import annotations

from .config import DEFAULT_DATA_FILE, StorageSettings
from .json_codec import StorageFormatError, dumps_roster, loads_roster

__all__ = [
    "DEFAULT_DATA_FILE",
    "StorageFormatError",
    "StorageSettings",
    "dumps_roster",
    "loads_roster",
]
