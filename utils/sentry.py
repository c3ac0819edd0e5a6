"""Sentry integration helpers."""

from __future__ import annotations

import os
from typing import Any, Final

import sentry_sdk

from utils.meta import APP_VERSION
from utils.personal_data import scrub_sensitive_mapping

ENVIRONMENT: Final[str] = os.getenv("ENV", "development")
"""Deployment environment name used for Sentry tagging."""

_RELEASE: Final[str] = f"fitness-tracker@{APP_VERSION}"
_SENTRY_INITIALIZED = False


def _scrub_event(event: dict[str, Any]) -> dict[str, Any]:
    try:
        for section in ("user", "extra", "contexts", "request"):
            value = event.get(section)
            if isinstance(value, dict):
                scrub_sensitive_mapping(value)

        breadcrumbs = event.get("breadcrumbs")
        if isinstance(breadcrumbs, dict):
            values = breadcrumbs.get("values")
            if isinstance(values, list):
                for breadcrumb in values:
                    if isinstance(breadcrumb, dict):
                        data = breadcrumb.get("data")
                        if isinstance(data, dict):
                            scrub_sensitive_mapping(data)
        return event
    except Exception:  # pragma: no cover - sanitiser must never raise
        return event


def _before_send(event: dict[str, Any], hint: Any) -> dict[str, Any] | None:
    if isinstance(event, dict):
        return _scrub_event(event)
    return event


def init_sentry(dsn: str | None = None) -> bool:
    """Initialise Sentry SDK if ``SENTRY_DSN`` is configured."""

    global _SENTRY_INITIALIZED
    if _SENTRY_INITIALIZED:
        return True

    dsn = dsn or os.getenv("SENTRY_DSN")
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=ENVIRONMENT,
        release=_RELEASE,
        send_default_pii=False,
        before_send=_before_send,
    )
    sentry_sdk.set_tag("app_version", APP_VERSION)
    sentry_sdk.set_tag("environment", ENVIRONMENT)
    _SENTRY_INITIALIZED = True
    return True


def is_initialized() -> bool:
    return _SENTRY_INITIALIZED


def capture_exception(exc: BaseException, *, data_file: str | None = None) -> None:
    """Report ``exc`` to Sentry if the SDK was initialised."""

    if not _SENTRY_INITIALIZED:
        return

    with sentry_sdk.new_scope() as scope:
        scope.set_tag("app_version", APP_VERSION)
        scope.set_tag("environment", ENVIRONMENT)
        if data_file is not None:
            scope.set_context("storage", {"data_file": data_file})
        sentry_sdk.capture_exception(exc)
