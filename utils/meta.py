"""Metadata constants for the fitness tracker."""

from __future__ import annotations

from typing import Final

APP_VERSION: Final[str] = "0.1.0"
"""Current application version used for telemetry and observability tags."""
