"""JSON representation of the athlete roster.

The file holds a single array of athletes. Field names use lower camel case,
dates are ISO ``YYYY-MM-DD`` strings and enums are stored by integer value.
Unknown fields are ignored on read so that new fields can be added without a
migration.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Iterable, Optional

from fitness_tracker.domain.models import (
    Athlete,
    FitnessGroup,
    FitnessMetricType,
    MetricRecord,
)

__all__ = [
    "StorageFormatError",
    "athlete_from_dict",
    "athlete_to_dict",
    "decode_roster",
    "dumps_roster",
    "encode_roster",
    "loads_roster",
    "record_from_dict",
    "record_to_dict",
]


class StorageFormatError(ValueError):
    """Raised when persisted content does not describe a roster."""


def record_to_dict(record: MetricRecord) -> dict[str, Any]:
    """Serialize record to JSON-friendly dict."""

    return {
        "id": record.id,
        "group": int(record.group),
        "metricType": int(record.metric_type),
        "value": record.value,
        "recordedDate": record.recorded_date.isoformat(),
        "quarter": record.quarter,
        "year": record.year,
        "notes": record.notes,
    }


def athlete_to_dict(athlete: Athlete) -> dict[str, Any]:
    """Serialize athlete with its full record history."""

    return {
        "id": athlete.id,
        "name": athlete.name,
        "dateOfBirth": (
            athlete.date_of_birth.isoformat() if athlete.date_of_birth else None
        ),
        "bodyweightLbs": athlete.bodyweight_lbs,
        "heightInches": athlete.height_inches,
        "isMale": athlete.is_male,
        "metricRecords": [record_to_dict(record) for record in athlete.metric_records],
    }


def encode_roster(athletes: Iterable[Athlete]) -> list[dict[str, Any]]:
    return [athlete_to_dict(athlete) for athlete in athletes]


def dumps_roster(athletes: Iterable[Athlete]) -> str:
    return json.dumps(encode_roster(athletes), ensure_ascii=False, indent=2)


def _require(raw: dict[str, Any], key: str) -> Any:
    try:
        return raw[key]
    except KeyError as exc:
        raise StorageFormatError(f"missing field '{key}'") from exc


def _parse_date(value: Any) -> date:
    if not isinstance(value, str):
        raise StorageFormatError(f"expected ISO date string, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise StorageFormatError(f"invalid date {value!r}") from exc


def _parse_optional_date(value: Any) -> Optional[date]:
    return None if value is None else _parse_date(value)


def _parse_optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StorageFormatError(f"expected number, got {value!r}")
    try:
        return float(value)
    except OverflowError as exc:
        raise StorageFormatError("number out of range") from exc


def _parse_metric_type(value: Any) -> FitnessMetricType:
    try:
        if isinstance(value, str):
            return FitnessMetricType[value]
        return FitnessMetricType(value)
    except (KeyError, ValueError) as exc:
        raise StorageFormatError(f"unknown metric type {value!r}") from exc


def _parse_group(value: Any) -> FitnessGroup:
    try:
        if isinstance(value, str):
            return FitnessGroup[value]
        return FitnessGroup(value)
    except (KeyError, ValueError) as exc:
        raise StorageFormatError(f"unknown group {value!r}") from exc


def record_from_dict(raw: Any) -> MetricRecord:
    if not isinstance(raw, dict):
        raise StorageFormatError("metric record must be an object")
    value = _parse_optional_float(_require(raw, "value"))
    if value is None:
        raise StorageFormatError("metric record value must not be null")
    notes = raw.get("notes")
    return MetricRecord(
        id=str(_require(raw, "id")),
        group=_parse_group(_require(raw, "group")),
        metric_type=_parse_metric_type(_require(raw, "metricType")),
        value=value,
        recorded_date=_parse_date(_require(raw, "recordedDate")),
        quarter=int(_require(raw, "quarter")),
        year=int(_require(raw, "year")),
        notes=None if notes is None else str(notes),
    )


def athlete_from_dict(raw: Any) -> Athlete:
    if not isinstance(raw, dict):
        raise StorageFormatError("athlete must be an object")
    name = _require(raw, "name")
    if not isinstance(name, str):
        raise StorageFormatError("athlete name must be a string")
    is_male = raw.get("isMale")
    if is_male is not None and not isinstance(is_male, bool):
        raise StorageFormatError(f"isMale must be boolean or null, got {is_male!r}")
    records_raw = raw.get("metricRecords")
    if records_raw is None:
        records_raw = []
    if not isinstance(records_raw, list):
        raise StorageFormatError("metricRecords must be an array")

    athlete = Athlete(
        id=str(_require(raw, "id")),
        name=name,
        date_of_birth=_parse_optional_date(raw.get("dateOfBirth")),
        bodyweight_lbs=_parse_optional_float(raw.get("bodyweightLbs")),
        height_inches=_parse_optional_float(raw.get("heightInches")),
        is_male=is_male,
    )
    athlete.load_metric_records(record_from_dict(item) for item in records_raw)
    return athlete


def decode_roster(payload: Any) -> list[Athlete]:
    """Rehydrate athletes from decoded JSON.

    ``None`` (a literal ``null`` document) is treated as an empty roster.
    """

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise StorageFormatError("roster must be a JSON array")
    try:
        return [athlete_from_dict(item) for item in payload]
    except StorageFormatError:
        raise
    except (TypeError, ValueError, OverflowError) as exc:
        raise StorageFormatError(str(exc)) from exc


def loads_roster(content: str) -> list[Athlete]:
    """Parse file content; blank content is an empty roster."""

    if not content.strip():
        return []
    try:
        payload = json.loads(content)
    except (ValueError, RecursionError) as exc:
        raise StorageFormatError(f"invalid JSON: {exc}") from exc
    return decode_roster(payload)
