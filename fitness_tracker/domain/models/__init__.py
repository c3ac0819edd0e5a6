"""Domain data objects used across the tracker."""

from .entities import (
    Athlete,
    FitnessGroup,
    FitnessMetricType,
    MetricRecord,
    PerformanceTier,
    new_id,
)

__all__ = [
    "Athlete",
    "FitnessGroup",
    "FitnessMetricType",
    "MetricRecord",
    "PerformanceTier",
    "new_id",
]
