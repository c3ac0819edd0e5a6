"""Benchmark rules for the quarterly fitness protocol.

The module holds the fixed metadata table for the twelve benchmark metrics and
the tier classification rules. Everything here is pure: no I/O and no mutable
state, so the functions can be called from services, reports and tests alike.

Tier evaluation follows four strategies:

* absolute thresholds on the raw value (direction depends on whether a lower
  value is better);
* relative strength, where a 5-rep max is converted to an estimated 1-rep max
  with a fixed ``x1.15`` multiplier and divided by bodyweight;
* sex-specific absolute thresholds;
* qualitative ordinal scores ``0``/``1``/``2``, where ``0`` is the floor and
  maps to Average rather than BelowAverage.

Callers are expected to validate numeric input before evaluation;
:func:`is_value_in_range` exposes the accepted ranges for that purpose.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from datetime import date
from typing import Callable, Final, Mapping, Optional

from fitness_tracker.domain.models import (
    FitnessGroup,
    FitnessMetricType,
    PerformanceTier,
)

__all__ = [
    "DEFAULT_BODYWEIGHT_LBS",
    "FIVE_REP_MAX_TO_ONE_REP_MAX",
    "METRIC_VALUE_RANGES",
    "MetricInfo",
    "TierThresholds",
    "calculate_improvement",
    "estimate_one_rep_max",
    "evaluate_tier",
    "get_all_groups",
    "get_all_metric_types",
    "get_group_display_name",
    "get_group_for_metric",
    "get_metric_display_name",
    "get_metric_unit",
    "get_metrics_for_group",
    "get_quarter",
    "get_tier_thresholds",
    "is_lower_better",
    "is_value_in_range",
]

DEFAULT_BODYWEIGHT_LBS: Final[float] = 180.0
FIVE_REP_MAX_TO_ONE_REP_MAX: Final[float] = 1.15

M = FitnessMetricType
G = FitnessGroup
T = PerformanceTier


@dataclass(frozen=True, slots=True)
class MetricInfo:
    """Static display metadata of a metric."""

    display_name: str
    unit: str
    lower_is_better: bool
    group: FitnessGroup


@dataclass(frozen=True, slots=True)
class TierThresholds:
    """Human readable tier descriptions for display surfaces."""

    average: str
    good: str
    peak: str


_METRIC_INFO: Final[Mapping[FitnessMetricType, MetricInfo]] = {
    M.RESTING_HEART_RATE: MetricInfo("Resting Heart Rate", "bpm", True, G.METABOLIC_MORPHOLOGICAL),
    M.WAIST_TO_HEIGHT_RATIO: MetricInfo("Waist:Height Ratio", "ratio", True, G.METABOLIC_MORPHOLOGICAL),
    M.TWELVE_MINUTE_RUN: MetricInfo("12-Minute Run", "miles", False, G.METABOLIC_MORPHOLOGICAL),
    M.HEART_RATE_RECOVERY: MetricInfo("HR Recovery (1 min)", "bpm drop", False, G.METABOLIC_MORPHOLOGICAL),
    M.DEADLIFT_FIVE_REP_MAX: MetricInfo("Deadlift 5RM", "lbs", False, G.NEUROMUSCULAR_STRUCTURAL),
    M.NEUTRAL_PRESS_REP_MAX: MetricInfo("Neutral Press 5RM", "lbs", False, G.NEUROMUSCULAR_STRUCTURAL),
    M.MAX_PUSH_UPS: MetricInfo("Max Push-Ups", "reps", False, G.NEUROMUSCULAR_STRUCTURAL),
    M.DEAD_HANG_TIME: MetricInfo("Dead Hang", "sec", False, G.NEUROMUSCULAR_STRUCTURAL),
    M.SHOE_AND_SOCK_BALANCE: MetricInfo("Shoe & Sock Balance", "pass/fail", False, G.FUNCTIONAL_DYNAMIC),
    M.DEEP_SQUAT_HOLD: MetricInfo("Deep Squat Hold", "quality", False, G.FUNCTIONAL_DYNAMIC),
    M.FARMER_CARRY_DISTANCE: MetricInfo("Farmer's Carry", "meters", False, G.FUNCTIONAL_DYNAMIC),
    M.SITTING_RISING_TEST: MetricInfo("Sitting-Rising Test", "points", False, G.FUNCTIONAL_DYNAMIC),
}

_GROUP_NAMES: Final[Mapping[FitnessGroup, str]] = {
    G.METABOLIC_MORPHOLOGICAL: "Group 1: Metabolic & Morphological",
    G.NEUROMUSCULAR_STRUCTURAL: "Group 2: Neuromuscular & Structural",
    G.FUNCTIONAL_DYNAMIC: "Group 3: Functional & Dynamic",
}

# Inclusive input ranges accepted by data entry surfaces.
METRIC_VALUE_RANGES: Final[Mapping[FitnessMetricType, tuple[float, float]]] = {
    M.RESTING_HEART_RATE: (30.0, 120.0),
    M.WAIST_TO_HEIGHT_RATIO: (0.3, 0.8),
    M.TWELVE_MINUTE_RUN: (0.5, 3.0),
    M.HEART_RATE_RECOVERY: (0.0, 100.0),
    M.DEADLIFT_FIVE_REP_MAX: (0.0, 1000.0),
    M.NEUTRAL_PRESS_REP_MAX: (0.0, 500.0),
    M.MAX_PUSH_UPS: (0.0, 200.0),
    M.DEAD_HANG_TIME: (0.0, 600.0),
    M.SHOE_AND_SOCK_BALANCE: (0.0, 2.0),
    M.DEEP_SQUAT_HOLD: (0.0, 2.0),
    M.FARMER_CARRY_DISTANCE: (0.0, 200.0),
    M.SITTING_RISING_TEST: (0.0, 10.0),
}

_ORDINAL_METRICS: Final[frozenset[FitnessMetricType]] = frozenset(
    {M.SHOE_AND_SOCK_BALANCE, M.DEEP_SQUAT_HOLD}
)

Comparator = Callable[[float, float], bool]

# (comparison, peak, good, average); anything failing the average check is
# BelowAverage.
_ABSOLUTE_RULES: Final[Mapping[FitnessMetricType, tuple[tuple[Comparator, float], ...]]] = {
    M.RESTING_HEART_RATE: ((operator.lt, 50), (operator.le, 60), (operator.le, 75)),
    M.WAIST_TO_HEIGHT_RATIO: ((operator.le, 0.45), (operator.le, 0.50), (operator.le, 0.55)),
    M.TWELVE_MINUTE_RUN: ((operator.ge, 1.85), (operator.ge, 1.5), (operator.ge, 1.3)),
    M.HEART_RATE_RECOVERY: ((operator.ge, 50), (operator.ge, 30), (operator.ge, 20)),
    M.FARMER_CARRY_DISTANCE: ((operator.ge, 60), (operator.ge, 20), (operator.gt, 0)),
    M.SITTING_RISING_TEST: ((operator.ge, 10), (operator.ge, 8), (operator.ge, 6)),
}

# Bodyweight multiples of the estimated 1RM: (average, good, peak).
_RELATIVE_STRENGTH_MULTIPLES: Final[Mapping[FitnessMetricType, tuple[float, float, float]]] = {
    M.DEADLIFT_FIVE_REP_MAX: (1.5, 2.0, 2.5),
    M.NEUTRAL_PRESS_REP_MAX: (0.5, 0.75, 1.0),
}

# Minimum values per sex: (average, good, peak).
_SEX_SPECIFIC_MINIMUMS: Final[
    Mapping[FitnessMetricType, Mapping[bool, tuple[float, float, float]]]
] = {
    M.MAX_PUSH_UPS: {True: (20, 40, 75), False: (10, 25, 50)},
    M.DEAD_HANG_TIME: {True: (30, 90, 180), False: (15, 45, 120)},
}

_THRESHOLD_LABELS: Final[Mapping[FitnessMetricType, TierThresholds]] = {
    M.RESTING_HEART_RATE: TierThresholds("70-75 bpm", "50-60 bpm", "< 50 bpm"),
    M.WAIST_TO_HEIGHT_RATIO: TierThresholds("> 0.55", "0.45-0.50", "0.40-0.45"),
    M.TWELVE_MINUTE_RUN: TierThresholds("< 1.3 miles", "1.5-1.75 miles", "> 1.85 miles"),
    M.HEART_RATE_RECOVERY: TierThresholds("< 20 bpm", "30-40 bpm", "> 50 bpm"),
    M.DEADLIFT_FIVE_REP_MAX: TierThresholds("1.5x BW", "2.0x BW", "> 2.5x BW"),
    M.NEUTRAL_PRESS_REP_MAX: TierThresholds("0.5x BW", "0.75x BW", "> 1.0x BW"),
    M.SHOE_AND_SOCK_BALANCE: TierThresholds(
        "Cannot complete (0)", "Complete w/ struggle (1)", "Smooth/Fluid (2)"
    ),
    M.DEEP_SQUAT_HOLD: TierThresholds("Heels up", "Heels down 2 min", "Resting position"),
    M.FARMER_CARRY_DISTANCE: TierThresholds("Cannot lift", "20-40 meters", "> 60 meters"),
    M.SITTING_RISING_TEST: TierThresholds("< 6 points", "8 points", "10 points"),
}

_SEX_SPECIFIC_LABELS: Final[Mapping[FitnessMetricType, Mapping[bool, TierThresholds]]] = {
    M.MAX_PUSH_UPS: {
        True: TierThresholds("20 reps", "40 reps", "75+ reps"),
        False: TierThresholds("10 reps", "25 reps", "50+ reps"),
    },
    M.DEAD_HANG_TIME: {
        True: TierThresholds("30-60 sec", "90-120 sec", "> 180 sec"),
        False: TierThresholds("15-30 sec", "45-90 sec", "> 120 sec"),
    },
}

_UNKNOWN_THRESHOLDS: Final[TierThresholds] = TierThresholds("n/a", "n/a", "n/a")


def get_metric_display_name(metric_type: FitnessMetricType) -> str:
    """Return the display name of ``metric_type``.

    >>> get_metric_display_name(FitnessMetricType.DEAD_HANG_TIME)
    'Dead Hang'
    """

    info = _METRIC_INFO.get(metric_type)
    return info.display_name if info is not None else metric_type.name


def get_metric_unit(metric_type: FitnessMetricType) -> str:
    info = _METRIC_INFO.get(metric_type)
    return info.unit if info is not None else ""


def get_group_display_name(group: FitnessGroup) -> str:
    return _GROUP_NAMES.get(group, group.name)


def is_lower_better(metric_type: FitnessMetricType) -> bool:
    """Return ``True`` when a lower raw value means better fitness."""

    info = _METRIC_INFO.get(metric_type)
    return info is not None and info.lower_is_better


def get_quarter(value: date) -> int:
    """Return the calendar quarter (1-4) of ``value``.

    >>> get_quarter(date(2024, 3, 31))
    1
    >>> get_quarter(date(2024, 10, 1))
    4
    """

    return (value.month - 1) // 3 + 1


def get_all_metric_types() -> tuple[FitnessMetricType, ...]:
    return tuple(FitnessMetricType)


def get_all_groups() -> tuple[FitnessGroup, ...]:
    return tuple(FitnessGroup)


def get_metrics_for_group(group: FitnessGroup) -> tuple[FitnessMetricType, ...]:
    """Return metric types of ``group`` in table order."""

    return tuple(
        metric_type for metric_type, info in _METRIC_INFO.items() if info.group == group
    )


def get_group_for_metric(metric_type: FitnessMetricType) -> FitnessGroup:
    info = _METRIC_INFO.get(metric_type)
    return info.group if info is not None else FitnessGroup.METABOLIC_MORPHOLOGICAL


def calculate_improvement(
    metric_type: FitnessMetricType, old_value: float, new_value: float
) -> float:
    """Return the percentage improvement from ``old_value`` to ``new_value``.

    The sign is flipped for lower-is-better metrics so that a positive number
    always means progress. A zero baseline yields ``0.0``.

    >>> calculate_improvement(FitnessMetricType.MAX_PUSH_UPS, 20, 30)
    50.0
    >>> calculate_improvement(FitnessMetricType.RESTING_HEART_RATE, 80, 60)
    25.0
    >>> calculate_improvement(FitnessMetricType.MAX_PUSH_UPS, 0, 30)
    0.0
    """

    if old_value == 0:
        return 0.0
    percent_change = (new_value - old_value) / old_value * 100
    return -percent_change if is_lower_better(metric_type) else percent_change


def estimate_one_rep_max(five_rep_max: float) -> float:
    """Convert a 5-rep max to an estimated 1-rep max."""

    return five_rep_max * FIVE_REP_MAX_TO_ONE_REP_MAX


def _evaluate_absolute(
    rules: tuple[tuple[Comparator, float], ...], value: float
) -> PerformanceTier:
    for tier, (compare, threshold) in zip((T.PEAK, T.GOOD, T.AVERAGE), rules):
        if compare(value, threshold):
            return tier
    return T.BELOW_AVERAGE


def _evaluate_minimums(
    minimums: tuple[float, float, float], value: float
) -> PerformanceTier:
    average, good, peak = minimums
    if value >= peak:
        return T.PEAK
    if value >= good:
        return T.GOOD
    if value >= average:
        return T.AVERAGE
    return T.BELOW_AVERAGE


def _evaluate_ordinal(value: float) -> PerformanceTier:
    if value >= 2:
        return T.PEAK
    if value >= 1:
        return T.GOOD
    return T.AVERAGE


def evaluate_tier(
    metric_type: FitnessMetricType,
    value: float,
    bodyweight_lbs: Optional[float] = None,
    is_male: Optional[bool] = None,
) -> PerformanceTier:
    """Classify ``value`` of ``metric_type`` into a performance tier.

    Missing sex is evaluated against the male table and a missing or zero
    bodyweight as :data:`DEFAULT_BODYWEIGHT_LBS`.

    >>> evaluate_tier(FitnessMetricType.RESTING_HEART_RATE, 55).name
    'GOOD'
    >>> evaluate_tier(FitnessMetricType.DEADLIFT_FIVE_REP_MAX, 350, 150).name
    'PEAK'
    >>> evaluate_tier(FitnessMetricType.DEEP_SQUAT_HOLD, 0).name
    'AVERAGE'
    """

    male = True if is_male is None else is_male
    # A recorded bodyweight of zero cannot normalise a lift.
    bodyweight = bodyweight_lbs if bodyweight_lbs else DEFAULT_BODYWEIGHT_LBS

    if metric_type in _ABSOLUTE_RULES:
        return _evaluate_absolute(_ABSOLUTE_RULES[metric_type], value)
    if metric_type in _RELATIVE_STRENGTH_MULTIPLES:
        ratio = estimate_one_rep_max(value) / bodyweight
        return _evaluate_minimums(_RELATIVE_STRENGTH_MULTIPLES[metric_type], ratio)
    if metric_type in _SEX_SPECIFIC_MINIMUMS:
        return _evaluate_minimums(_SEX_SPECIFIC_MINIMUMS[metric_type][male], value)
    if metric_type in _ORDINAL_METRICS:
        return _evaluate_ordinal(value)
    return T.AVERAGE


def get_tier_thresholds(
    metric_type: FitnessMetricType, is_male: bool = True
) -> TierThresholds:
    """Return descriptive labels for the Average, Good and Peak tiers."""

    by_sex = _SEX_SPECIFIC_LABELS.get(metric_type)
    if by_sex is not None:
        return by_sex[is_male]
    return _THRESHOLD_LABELS.get(metric_type, _UNKNOWN_THRESHOLDS)


def is_value_in_range(metric_type: FitnessMetricType, value: float) -> bool:
    """Return ``True`` when ``value`` lies inside the accepted input range."""

    bounds = METRIC_VALUE_RANGES.get(metric_type)
    if bounds is None:
        return False
    low, high = bounds
    if not low <= value <= high:
        return False
    if metric_type in _ORDINAL_METRICS:
        return float(value).is_integer()
    return True
