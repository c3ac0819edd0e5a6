"""Factories for domain models used in tests."""

from .domain import AthleteFactory, MetricRecordFactory

__all__ = [
    "AthleteFactory",
    "MetricRecordFactory",
]
