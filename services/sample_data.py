"""Reproducible demo data for new installations and screenshots."""

from __future__ import annotations

import random
from datetime import date
from typing import Optional

from fitness_tracker.application.ports import AthleteRepository
from fitness_tracker.domain.models import Athlete, FitnessGroup, FitnessMetricType

M = FitnessMetricType

SAMPLE_ATHLETE_NAME = "Test Athlete"
SAMPLE_QUARTERS = 4


def _shift_months(value: date, months: int) -> date:
    """Return ``value`` moved back by ``months``, clamping the day."""

    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    for day in (value.day, 30, 29, 28):
        try:
            return date(year, month, day)
        except ValueError:
            continue
    raise ValueError(f"cannot shift {value} by {months} months")  # pragma: no cover


def _sample_values(rng: random.Random, offset: int) -> dict[FitnessGroup, dict[FitnessMetricType, float]]:
    # Older quarters (higher offset) are slightly worse so the trend improves.
    return {
        FitnessGroup.METABOLIC_MORPHOLOGICAL: {
            M.RESTING_HEART_RATE: 60 + rng.randint(-5, 9) - offset,
            M.WAIST_TO_HEIGHT_RATIO: round(0.45 + rng.random() * 0.05 + offset * 0.01, 3),
            M.TWELVE_MINUTE_RUN: round(1.6 + rng.random() * 0.2 - offset * 0.05, 2),
            M.HEART_RATE_RECOVERY: 45 + rng.randint(-5, 9) - offset * 2,
        },
        FitnessGroup.NEUROMUSCULAR_STRUCTURAL: {
            M.DEADLIFT_FIVE_REP_MAX: 315 + rng.randint(-20, 29) - offset * 10,
            M.NEUTRAL_PRESS_REP_MAX: 120 + rng.randint(-10, 14) - offset * 5,
            M.MAX_PUSH_UPS: 35 + rng.randint(-5, 7) - offset * 2,
            M.DEAD_HANG_TIME: 75 + rng.randint(-10, 14) - offset * 5,
        },
        FitnessGroup.FUNCTIONAL_DYNAMIC: {
            M.SHOE_AND_SOCK_BALANCE: 1 if rng.random() > 0.3 else 0,
            M.DEEP_SQUAT_HOLD: 2 if rng.random() > 0.5 else 1,
            M.FARMER_CARRY_DISTANCE: 80 + rng.randint(-10, 19) - offset * 5,
            M.SITTING_RISING_TEST: 8 + rng.randint(-1, 1),
        },
    }


def create_sample_athlete(
    repository: AthleteRepository,
    *,
    today: Optional[date] = None,
    seed: int = 42,
) -> Athlete:
    """Add a demo athlete with a full assessment for each of the last four quarters.

    The same ``seed`` and ``today`` always produce the same values.
    """

    reference = today or date.today()
    athlete = repository.add_athlete(
        SAMPLE_ATHLETE_NAME,
        _shift_months(reference, 28 * 12),
        bodyweight_lbs=185,
        height_inches=70,
        is_male=True,
    )

    rng = random.Random(seed)
    for offset in range(SAMPLE_QUARTERS):
        recorded = _shift_months(reference, 3 * offset)
        for group, metrics in _sample_values(rng, offset).items():
            repository.record_group_metrics(athlete.id, group, metrics, recorded)
    return athlete
