"""Domain entities shared between the rules engine and the athlete service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Iterable, Optional
from uuid import uuid4


def new_id() -> str:
    """Return a fresh opaque identifier."""

    return str(uuid4())


class FitnessGroup(IntEnum):
    """Physiological domains of the assessment protocol."""

    METABOLIC_MORPHOLOGICAL = 1
    NEUROMUSCULAR_STRUCTURAL = 2
    FUNCTIONAL_DYNAMIC = 3


class PerformanceTier(IntEnum):
    """Ordered classification of a single measurement."""

    BELOW_AVERAGE = 0
    AVERAGE = 1
    GOOD = 2
    PEAK = 3


class FitnessMetricType(IntEnum):
    """Benchmarks tracked every quarter."""

    # Metabolic & Morphological
    RESTING_HEART_RATE = 0
    WAIST_TO_HEIGHT_RATIO = 1
    TWELVE_MINUTE_RUN = 2
    HEART_RATE_RECOVERY = 3

    # Neuromuscular & Structural
    DEADLIFT_FIVE_REP_MAX = 4
    NEUTRAL_PRESS_REP_MAX = 5
    MAX_PUSH_UPS = 6
    DEAD_HANG_TIME = 7

    # Functional & Dynamic
    SHOE_AND_SOCK_BALANCE = 8
    DEEP_SQUAT_HOLD = 9
    FARMER_CARRY_DISTANCE = 10
    SITTING_RISING_TEST = 11


@dataclass(slots=True, frozen=True)
class MetricRecord:
    """A single measurement taken during a quarterly assessment.

    ``quarter`` and ``year`` are captured when the record is built and are not
    recomputed from ``recorded_date`` later on.
    """

    group: FitnessGroup
    metric_type: FitnessMetricType
    value: float
    recorded_date: date
    quarter: int
    year: int
    notes: Optional[str] = None
    id: str = field(default_factory=new_id)

    @property
    def quarter_label(self) -> str:
        """Return display label such as ``Q1 2024``."""

        return f"Q{self.quarter} {self.year}"


def _chronological(records: Iterable[MetricRecord]) -> tuple[MetricRecord, ...]:
    return tuple(sorted(records, key=lambda record: (record.year, record.quarter)))


@dataclass(slots=True)
class Athlete:
    """An athlete whose fitness metrics are tracked.

    The record history is owned by the athlete: callers read it through
    :attr:`metric_records` and change it only through the methods below.
    """

    name: str
    date_of_birth: Optional[date] = None
    bodyweight_lbs: Optional[float] = None
    height_inches: Optional[float] = None
    is_male: Optional[bool] = None
    id: str = field(default_factory=new_id)
    _metric_records: list[MetricRecord] = field(
        default_factory=list, init=False, repr=False
    )

    @property
    def metric_records(self) -> tuple[MetricRecord, ...]:
        """Return records in the order they were added."""

        return tuple(self._metric_records)

    def add_metric_record(self, record: MetricRecord) -> None:
        if record is None:
            raise TypeError("record must not be None")
        self._metric_records.append(record)

    def remove_metric_record(self, record_id: str) -> bool:
        for index, record in enumerate(self._metric_records):
            if record.id == record_id:
                del self._metric_records[index]
                return True
        return False

    def load_metric_records(self, records: Iterable[MetricRecord]) -> None:
        """Replace the whole history, used when rehydrating from storage."""

        self._metric_records = list(records)

    def records_for_metric(
        self, metric_type: FitnessMetricType
    ) -> tuple[MetricRecord, ...]:
        """Return records of ``metric_type`` ordered by year then quarter."""

        return _chronological(
            record for record in self._metric_records if record.metric_type == metric_type
        )

    def records_for_group(self, group: FitnessGroup) -> tuple[MetricRecord, ...]:
        """Return records of ``group`` ordered by year then quarter."""

        return _chronological(
            record for record in self._metric_records if record.group == group
        )

    def records_for_quarter(self, quarter: int, year: int) -> tuple[MetricRecord, ...]:
        return tuple(
            record
            for record in self._metric_records
            if record.quarter == quarter and record.year == year
        )

    def tracked_metric_types(self) -> tuple[FitnessMetricType, ...]:
        """Return distinct recorded metric types in first-seen order."""

        return tuple(dict.fromkeys(record.metric_type for record in self._metric_records))
