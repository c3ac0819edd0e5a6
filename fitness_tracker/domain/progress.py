"""Progress views built on top of athlete histories.

These helpers feed the roster filter bar and the progress charts. They only
shape data; drawing is left to the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from fitness_tracker.domain.metrics import evaluate_tier, get_metric_display_name
from fitness_tracker.domain.models import (
    Athlete,
    FitnessGroup,
    FitnessMetricType,
    MetricRecord,
    PerformanceTier,
)

__all__ = [
    "ChartScale",
    "MetricSeries",
    "RecordFilter",
    "calculate_scales",
    "collect_series",
    "filter_records",
    "latest_tiers",
]


@dataclass(frozen=True, slots=True)
class RecordFilter:
    """Optional criteria combined with AND when filtering a history."""

    group: Optional[FitnessGroup] = None
    metric_type: Optional[FitnessMetricType] = None
    tier: Optional[PerformanceTier] = None
    quarter_label: Optional[str] = None
    current_tier: Optional[PerformanceTier] = None


@dataclass(frozen=True, slots=True)
class MetricSeries:
    """Chronological values of one metric for one athlete."""

    athlete_id: str
    athlete_name: str
    metric_type: FitnessMetricType
    metric_name: str
    records: tuple[MetricRecord, ...]


@dataclass(frozen=True, slots=True)
class ChartScale:
    """Value axis bounds and quarter labels shared by all plotted series."""

    minimum: float
    maximum: float
    quarters: tuple[str, ...]


def _tier_of(athlete: Athlete, record: MetricRecord) -> PerformanceTier:
    return evaluate_tier(
        record.metric_type, record.value, athlete.bodyweight_lbs, athlete.is_male
    )


def latest_tiers(athlete: Athlete) -> dict[FitnessMetricType, PerformanceTier]:
    """Return the tier of the most recent record for every tracked metric."""

    latest: dict[FitnessMetricType, MetricRecord] = {}
    for record in athlete.metric_records:
        current = latest.get(record.metric_type)
        if current is None or (record.year, record.quarter) >= (
            current.year,
            current.quarter,
        ):
            latest[record.metric_type] = record
    return {
        metric_type: _tier_of(athlete, record) for metric_type, record in latest.items()
    }


def filter_records(
    athlete: Athlete, record_filter: RecordFilter | None = None
) -> tuple[MetricRecord, ...]:
    """Return records matching ``record_filter``, newest quarter first.

    ``current_tier`` keeps every record of the metrics whose latest result is
    in that tier; ``tier`` matches the tier of each individual record.
    """

    criteria = record_filter or RecordFilter()
    records: Iterable[MetricRecord] = athlete.metric_records

    if criteria.current_tier is not None:
        matching = {
            metric_type
            for metric_type, tier in latest_tiers(athlete).items()
            if tier == criteria.current_tier
        }
        records = [record for record in records if record.metric_type in matching]
    if criteria.group is not None:
        records = [record for record in records if record.group == criteria.group]
    if criteria.metric_type is not None:
        records = [
            record for record in records if record.metric_type == criteria.metric_type
        ]
    if criteria.tier is not None:
        records = [
            record for record in records if _tier_of(athlete, record) == criteria.tier
        ]
    if criteria.quarter_label is not None:
        records = [
            record for record in records if record.quarter_label == criteria.quarter_label
        ]

    return tuple(
        sorted(
            records,
            key=lambda record: (
                -record.year,
                -record.quarter,
                record.group,
                record.metric_type,
            ),
        )
    )


def collect_series(
    athletes: Sequence[Athlete],
    metric_types: Iterable[FitnessMetricType],
    *,
    selected_athlete_id: str | None = None,
    overlay: bool = False,
) -> tuple[MetricSeries, ...]:
    """Build chart series for the requested metrics.

    A selected athlete wins over ``overlay``; without either only the first
    athlete is charted. Metrics with no records are skipped.
    """

    if selected_athlete_id is not None:
        chosen = [athlete for athlete in athletes if athlete.id == selected_athlete_id]
    elif overlay:
        chosen = list(athletes)
    else:
        chosen = list(athletes[:1])

    wanted = tuple(metric_types)
    series: list[MetricSeries] = []
    for athlete in chosen:
        for metric_type in wanted:
            records = athlete.records_for_metric(metric_type)
            if not records:
                continue
            series.append(
                MetricSeries(
                    athlete_id=athlete.id,
                    athlete_name=athlete.name,
                    metric_type=metric_type,
                    metric_name=get_metric_display_name(metric_type),
                    records=records,
                )
            )
    return tuple(series)


def calculate_scales(series: Sequence[MetricSeries]) -> ChartScale:
    """Return padded value bounds and chronological quarter labels."""

    records = [record for item in series for record in item.records]
    if not records:
        raise ValueError("at least one record is required to build a scale")

    values = [record.value for record in records]
    minimum = min(values)
    maximum = max(values)
    spread = maximum - minimum
    if spread == 0:
        spread = maximum * 0.2
    minimum -= spread * 0.1
    maximum += spread * 0.1
    if minimum < 0:
        minimum = 0.0

    ordered = sorted(
        {(record.year, record.quarter): record.quarter_label for record in records}.items()
    )
    return ChartScale(
        minimum=minimum,
        maximum=maximum,
        quarters=tuple(label for _, label in ordered),
    )
