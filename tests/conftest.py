from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from services.athlete_service import AthleteService


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Return a roster path inside a not yet existing directory."""

    return tmp_path / "data" / "athletes.json"


@pytest.fixture
def service(data_file: Path) -> AthleteService:
    """Return an empty service bound to a temporary roster file."""

    return AthleteService(data_file)


@pytest.fixture
def assessment_date() -> date:
    return date(2024, 1, 15)
