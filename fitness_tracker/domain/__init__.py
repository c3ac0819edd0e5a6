"""Domain layer with business entities and invariants."""

from . import metrics, models, progress

__all__ = ["metrics", "models", "progress"]
