from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from fitness_tracker.domain.models import (
    Athlete,
    FitnessGroup,
    FitnessMetricType,
    MetricRecord,
)
from tests.factories import AthleteFactory, MetricRecordFactory


def _record(
    metric_type: FitnessMetricType,
    recorded: date,
    value: float = 1.0,
) -> MetricRecord:
    return MetricRecordFactory.build(
        metric_type=metric_type, recorded_date=recorded, value=value
    )


def test_records_with_same_content_have_distinct_ids() -> None:
    first = MetricRecord(
        group=FitnessGroup.METABOLIC_MORPHOLOGICAL,
        metric_type=FitnessMetricType.RESTING_HEART_RATE,
        value=60,
        recorded_date=date(2024, 2, 1),
        quarter=1,
        year=2024,
    )
    second = MetricRecord(
        group=FitnessGroup.METABOLIC_MORPHOLOGICAL,
        metric_type=FitnessMetricType.RESTING_HEART_RATE,
        value=60,
        recorded_date=date(2024, 2, 1),
        quarter=1,
        year=2024,
    )
    assert first.id != second.id
    assert first != second


def test_metric_record_is_immutable_and_labels_quarter() -> None:
    record = _record(FitnessMetricType.MAX_PUSH_UPS, date(2024, 5, 3))
    assert record.quarter == 2
    assert record.year == 2024
    assert record.quarter_label == "Q2 2024"
    with pytest.raises(FrozenInstanceError):
        record.value = 10  # type: ignore[misc]


def test_athlete_ids_are_unique() -> None:
    assert Athlete(name="A").id != Athlete(name="A").id


def test_metric_records_view_is_read_only_and_ordered_by_insertion() -> None:
    athlete = AthleteFactory.build(records=[])
    late = _record(FitnessMetricType.MAX_PUSH_UPS, date(2024, 12, 1))
    early = _record(FitnessMetricType.MAX_PUSH_UPS, date(2023, 1, 1))
    athlete.add_metric_record(late)
    athlete.add_metric_record(early)

    view = athlete.metric_records
    assert view == (late, early)
    assert isinstance(view, tuple)
    with pytest.raises(AttributeError):
        view.append(early)  # type: ignore[attr-defined]


def test_add_metric_record_rejects_none() -> None:
    athlete = AthleteFactory.build(records=[])
    with pytest.raises(TypeError):
        athlete.add_metric_record(None)  # type: ignore[arg-type]


def test_remove_metric_record_by_id() -> None:
    athlete = AthleteFactory.build()
    target = athlete.metric_records[1]

    assert athlete.remove_metric_record(target.id) is True
    assert target not in athlete.metric_records
    assert len(athlete.metric_records) == 2
    assert athlete.remove_metric_record(target.id) is False


def test_load_metric_records_replaces_history() -> None:
    athlete = AthleteFactory.build()
    replacement = MetricRecordFactory.build_batch(2)
    athlete.load_metric_records(replacement)
    assert athlete.metric_records == tuple(replacement)


def test_records_for_metric_sorted_by_year_then_quarter() -> None:
    athlete = AthleteFactory.build(records=[])
    q3_2024 = _record(FitnessMetricType.DEAD_HANG_TIME, date(2024, 8, 1))
    q1_2025 = _record(FitnessMetricType.DEAD_HANG_TIME, date(2025, 2, 1))
    q1_2024 = _record(FitnessMetricType.DEAD_HANG_TIME, date(2024, 1, 1))
    other = _record(FitnessMetricType.MAX_PUSH_UPS, date(2020, 1, 1))
    for record in (q3_2024, q1_2025, other, q1_2024):
        athlete.add_metric_record(record)

    assert athlete.records_for_metric(FitnessMetricType.DEAD_HANG_TIME) == (
        q1_2024,
        q3_2024,
        q1_2025,
    )
    assert athlete.records_for_group(FitnessGroup.NEUROMUSCULAR_STRUCTURAL) == (
        other,
        q1_2024,
        q3_2024,
        q1_2025,
    )
    assert athlete.records_for_group(FitnessGroup.FUNCTIONAL_DYNAMIC) == ()


def test_records_for_quarter_and_tracked_metrics() -> None:
    athlete = AthleteFactory.build(records=[])
    run = _record(FitnessMetricType.TWELVE_MINUTE_RUN, date(2024, 4, 2))
    hang = _record(FitnessMetricType.DEAD_HANG_TIME, date(2024, 5, 2))
    run_again = _record(FitnessMetricType.TWELVE_MINUTE_RUN, date(2024, 10, 2))
    for record in (run, hang, run_again):
        athlete.add_metric_record(record)

    assert athlete.records_for_quarter(2, 2024) == (run, hang)
    assert athlete.records_for_quarter(2, 2023) == ()
    assert athlete.tracked_metric_types() == (
        FitnessMetricType.TWELVE_MINUTE_RUN,
        FitnessMetricType.DEAD_HANG_TIME,
    )
