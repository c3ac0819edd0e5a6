"""Shared utilities for the fitness tracker."""

from __future__ import annotations

from .logger import get_logger

__all__ = ["get_logger"]
