"""Repository contracts consumed by presentation and scripting layers."""

from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from fitness_tracker.domain.models import (
    Athlete,
    FitnessGroup,
    FitnessMetricType,
    MetricRecord,
)


class AthleteRepository(Protocol):
    """Owns the athlete roster and its durable representation."""

    def get_all_athletes(self) -> Sequence[Athlete]:
        """Return athletes in insertion order."""

    def get_athlete_by_id(self, athlete_id: str) -> Optional[Athlete]:
        """Fetch an athlete by identifier."""

    def add_athlete(
        self,
        name: str,
        date_of_birth: Optional[date] = None,
        bodyweight_lbs: Optional[float] = None,
        height_inches: Optional[float] = None,
        is_male: Optional[bool] = None,
    ) -> Athlete:
        """Create an athlete and append it to the roster."""

    def remove_athlete(self, athlete_id: str) -> bool:
        """Drop an athlete from the roster."""

    def update_athlete(
        self,
        athlete_id: str,
        name: str,
        date_of_birth: Optional[date] = None,
        bodyweight_lbs: Optional[float] = None,
        height_inches: Optional[float] = None,
        is_male: Optional[bool] = None,
    ) -> bool:
        """Overwrite every profile field of an athlete."""

    def record_metric(
        self,
        athlete_id: str,
        group: FitnessGroup,
        metric_type: FitnessMetricType,
        value: float,
        recorded_date: date,
        notes: Optional[str] = None,
    ) -> MetricRecord:
        """Append a measurement to an athlete's history."""

    def record_group_metrics(
        self,
        athlete_id: str,
        group: FitnessGroup,
        metrics: Mapping[FitnessMetricType, float],
        recorded_date: date,
        notes: Optional[str] = None,
    ) -> Sequence[MetricRecord]:
        """Append one measurement per entry of ``metrics``."""

    def update_metric_record(
        self,
        athlete_id: str,
        record_id: str,
        new_value: float,
        new_date: date,
        notes: Optional[str] = None,
    ) -> Optional[MetricRecord]:
        """Replace value and date of a measurement keeping its identifier."""

    def remove_metric_record(self, athlete_id: str, record_id: str) -> bool:
        """Delete a measurement."""

    def get_metric_history(
        self, athlete_id: str, metric_type: FitnessMetricType
    ) -> Sequence[MetricRecord]:
        """Return chronological records of one metric."""

    def get_group_history(
        self, athlete_id: str, group: FitnessGroup
    ) -> Sequence[MetricRecord]:
        """Return chronological records of one group."""

    async def save(self) -> None:
        """Persist the whole roster."""

    async def load(self) -> None:
        """Replace the roster with the persisted content."""
