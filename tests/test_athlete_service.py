from __future__ import annotations

from datetime import date

import pytest

from fitness_tracker.domain.models import FitnessGroup, FitnessMetricType
from services.athlete_service import AthleteService

G = FitnessGroup
M = FitnessMetricType


def test_add_athlete_trims_name_and_returns_live_reference(
    service: AthleteService,
) -> None:
    athlete = service.add_athlete("  Jane Doe  ", date(1990, 5, 1), 140.0, 65.0, False)

    assert athlete.name == "Jane Doe"
    assert athlete.date_of_birth == date(1990, 5, 1)
    assert athlete.bodyweight_lbs == 140.0
    assert athlete.height_inches == 65.0
    assert athlete.is_male is False
    assert service.get_all_athletes() == (athlete,)

    athlete.bodyweight_lbs = 150.0
    stored = service.get_athlete_by_id(athlete.id)
    assert stored is athlete
    assert stored.bodyweight_lbs == 150.0


def test_add_athlete_rejects_missing_name(service: AthleteService) -> None:
    with pytest.raises(TypeError):
        service.add_athlete(None)  # type: ignore[arg-type]
    assert service.get_all_athletes() == ()


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_add_athlete_rejects_blank_name(service: AthleteService, name: str) -> None:
    with pytest.raises(ValueError):
        service.add_athlete(name)
    assert service.get_all_athletes() == ()


def test_roster_keeps_insertion_order(service: AthleteService) -> None:
    names = ["Zed", "Amy", "Mo"]
    for name in names:
        service.add_athlete(name)
    assert [athlete.name for athlete in service.get_all_athletes()] == names


def test_get_athlete_by_id_unknown_returns_none(service: AthleteService) -> None:
    service.add_athlete("Someone")
    assert service.get_athlete_by_id("missing") is None


def test_remove_athlete(service: AthleteService) -> None:
    athlete = service.add_athlete("Gone Soon")
    assert service.remove_athlete(athlete.id) is True
    assert service.get_athlete_by_id(athlete.id) is None
    assert service.remove_athlete(athlete.id) is False


def test_update_athlete_replaces_all_fields(service: AthleteService) -> None:
    athlete = service.add_athlete("Old", date(1980, 1, 1), 200.0, 72.0, True)

    assert service.update_athlete(athlete.id, "  New  ") is True
    assert athlete.name == "New"
    assert athlete.date_of_birth is None
    assert athlete.bodyweight_lbs is None
    assert athlete.height_inches is None
    assert athlete.is_male is None

    assert service.update_athlete(athlete.id, "New", date(1981, 2, 2), 190.0, 71.0, False)
    assert athlete.date_of_birth == date(1981, 2, 2)
    assert athlete.bodyweight_lbs == 190.0
    assert athlete.is_male is False


def test_update_athlete_unknown_id_returns_false(service: AthleteService) -> None:
    assert service.update_athlete("missing", "Name") is False


def test_update_athlete_rejects_blank_name_without_changes(
    service: AthleteService,
) -> None:
    athlete = service.add_athlete("Keep", bodyweight_lbs=170.0)
    with pytest.raises(ValueError):
        service.update_athlete(athlete.id, " ")
    assert athlete.name == "Keep"
    assert athlete.bodyweight_lbs == 170.0


def test_record_metric_derives_quarter_and_year(service: AthleteService) -> None:
    athlete = service.add_athlete("Runner")
    record = service.record_metric(
        athlete.id, G.METABOLIC_MORPHOLOGICAL, M.TWELVE_MINUTE_RUN, 1.6, date(2024, 8, 20), "windy"
    )

    assert record.quarter == 3
    assert record.year == 2024
    assert record.value == 1.6
    assert record.notes == "windy"
    assert record.group == G.METABOLIC_MORPHOLOGICAL
    assert athlete.metric_records == (record,)


def test_record_metric_unknown_athlete_raises(service: AthleteService) -> None:
    with pytest.raises(KeyError):
        service.record_metric("missing", G.FUNCTIONAL_DYNAMIC, M.DEEP_SQUAT_HOLD, 1, date(2024, 1, 1))


def test_record_group_metrics_appends_in_mapping_order(
    service: AthleteService, assessment_date: date
) -> None:
    athlete = service.add_athlete("John Smith", None, 180, 70, True)
    values = {
        M.RESTING_HEART_RATE: 68,
        M.WAIST_TO_HEIGHT_RATIO: 0.52,
        M.TWELVE_MINUTE_RUN: 1.4,
        M.HEART_RATE_RECOVERY: 25,
    }
    records = service.record_group_metrics(
        athlete.id, G.METABOLIC_MORPHOLOGICAL, values, assessment_date, "baseline"
    )

    assert [record.metric_type for record in records] == list(values)
    assert all(record.notes == "baseline" for record in records)
    assert athlete.metric_records == records
    assert len({record.id for record in records}) == 4


def test_record_group_metrics_unknown_athlete_raises(
    service: AthleteService, assessment_date: date
) -> None:
    with pytest.raises(KeyError):
        service.record_group_metrics(
            "missing", G.FUNCTIONAL_DYNAMIC, {M.DEEP_SQUAT_HOLD: 1}, assessment_date
        )


def test_record_group_metrics_keeps_records_before_failure(
    service: AthleteService, assessment_date: date
) -> None:
    athlete = service.add_athlete("Partial")

    class ExplodingValues(dict):
        def items(self):  # type: ignore[override]
            yield M.MAX_PUSH_UPS, 30
            yield M.DEAD_HANG_TIME, 60
            raise RuntimeError("input stream broke")

    with pytest.raises(RuntimeError):
        service.record_group_metrics(
            athlete.id, G.NEUROMUSCULAR_STRUCTURAL, ExplodingValues(), assessment_date
        )

    assert [record.metric_type for record in athlete.metric_records] == [
        M.MAX_PUSH_UPS,
        M.DEAD_HANG_TIME,
    ]


def test_update_metric_record_preserves_identity_and_moves_to_end(
    service: AthleteService,
) -> None:
    athlete = service.add_athlete("Lifter")
    first = service.record_metric(
        athlete.id, G.NEUROMUSCULAR_STRUCTURAL, M.DEADLIFT_FIVE_REP_MAX, 300, date(2024, 1, 10), "felt ok"
    )
    second = service.record_metric(
        athlete.id, G.NEUROMUSCULAR_STRUCTURAL, M.MAX_PUSH_UPS, 40, date(2024, 1, 10)
    )

    updated = service.update_metric_record(athlete.id, first.id, 320, date(2024, 11, 2))

    assert updated is not None
    assert updated.id == first.id
    assert updated.group == first.group
    assert updated.metric_type == first.metric_type
    assert updated.value == 320
    assert updated.recorded_date == date(2024, 11, 2)
    assert (updated.quarter, updated.year) == (4, 2024)
    assert updated.notes == "felt ok"
    assert athlete.metric_records == (second, updated)


def test_update_metric_record_overrides_notes_when_given(
    service: AthleteService, assessment_date: date
) -> None:
    athlete = service.add_athlete("Notes")
    record = service.record_metric(
        athlete.id, G.FUNCTIONAL_DYNAMIC, M.SITTING_RISING_TEST, 7, assessment_date, "old"
    )
    updated = service.update_metric_record(athlete.id, record.id, 8, assessment_date, "new")
    assert updated is not None
    assert updated.notes == "new"


def test_update_metric_record_unknown_record_leaves_history_untouched(
    service: AthleteService, assessment_date: date
) -> None:
    athlete = service.add_athlete("Stable")
    record = service.record_metric(
        athlete.id, G.FUNCTIONAL_DYNAMIC, M.FARMER_CARRY_DISTANCE, 40, assessment_date
    )
    before = athlete.metric_records

    assert service.update_metric_record(athlete.id, "missing", 99, assessment_date) is None
    assert service.update_metric_record("missing", record.id, 99, assessment_date) is None
    assert athlete.metric_records == before


def test_remove_metric_record(service: AthleteService, assessment_date: date) -> None:
    athlete = service.add_athlete("Remover")
    record = service.record_metric(
        athlete.id, G.FUNCTIONAL_DYNAMIC, M.DEEP_SQUAT_HOLD, 2, assessment_date
    )

    assert service.remove_metric_record("missing", record.id) is False
    assert service.remove_metric_record(athlete.id, record.id) is True
    assert service.remove_metric_record(athlete.id, record.id) is False
    assert athlete.metric_records == ()


def test_histories_are_sorted_and_tolerate_unknown_athlete(
    service: AthleteService,
) -> None:
    athlete = service.add_athlete("History")
    late = service.record_metric(
        athlete.id, G.METABOLIC_MORPHOLOGICAL, M.RESTING_HEART_RATE, 58, date(2024, 4, 15)
    )
    early = service.record_metric(
        athlete.id, G.METABOLIC_MORPHOLOGICAL, M.RESTING_HEART_RATE, 68, date(2024, 1, 15)
    )
    ratio = service.record_metric(
        athlete.id, G.METABOLIC_MORPHOLOGICAL, M.WAIST_TO_HEIGHT_RATIO, 0.5, date(2023, 12, 1)
    )

    assert service.get_metric_history(athlete.id, M.RESTING_HEART_RATE) == (early, late)
    assert service.get_group_history(athlete.id, G.METABOLIC_MORPHOLOGICAL) == (
        ratio,
        early,
        late,
    )
    assert service.get_metric_history("missing", M.RESTING_HEART_RATE) == ()
    assert service.get_group_history("missing", G.METABOLIC_MORPHOLOGICAL) == ()
