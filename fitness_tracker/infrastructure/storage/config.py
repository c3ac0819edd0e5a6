"""Configuration helpers for the roster storage."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_DATA_FILE = Path("data/athletes.json")


@dataclass(slots=True)
class StorageSettings:
    """Strongly-typed settings for storage wiring."""

    data_file: Path = DEFAULT_DATA_FILE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StorageSettings":
        """Build settings instance from environment variables."""

        data = os.environ if environ is None else environ
        raw_path = (data.get("FITNESS_DATA_FILE") or "").strip()
        data_file = Path(raw_path).expanduser() if raw_path else DEFAULT_DATA_FILE
        if data_file.exists() and data_file.is_dir():
            raise ValueError(
                f"FITNESS_DATA_FILE '{data_file}' points to a directory; expected a file path."
            )
        return cls(data_file=data_file)
