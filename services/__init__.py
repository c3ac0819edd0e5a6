"""Application services built on top of the fitness domain."""

from __future__ import annotations

from .athlete_service import AthleteService
from .sample_data import create_sample_athlete

__all__ = ["AthleteService", "create_sample_athlete"]
