"""Ports define the contracts between the application layer and adapters."""

from .repositories import AthleteRepository

__all__ = ["AthleteRepository"]
