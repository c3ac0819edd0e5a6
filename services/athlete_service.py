"""Athlete roster management with JSON file persistence."""

from __future__ import annotations

import asyncio
import os
from datetime import date
from pathlib import Path
from typing import Mapping, Optional

from fitness_tracker.domain.metrics import get_quarter
from fitness_tracker.domain.models import (
    Athlete,
    FitnessGroup,
    FitnessMetricType,
    MetricRecord,
)
from fitness_tracker.infrastructure.storage import (
    DEFAULT_DATA_FILE,
    StorageFormatError,
    StorageSettings,
    dumps_roster,
    loads_roster,
)
from utils.logger import get_logger
from utils.sentry import capture_exception

logger = get_logger(__name__)

__all__ = ["AthleteService"]


def _clean_name(name: str | None) -> str:
    if name is None:
        raise TypeError("Athlete name is required")
    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Athlete name must not be blank")
    return cleaned


class AthleteService:
    """Own the athlete roster and its durable JSON representation.

    Only :meth:`save` and :meth:`load` are serialised through the instance
    lock; the roster methods assume a single caller at a time. Two services
    pointed at the same file are not coordinated and the last writer wins.
    """

    def __init__(self, data_file: str | Path = DEFAULT_DATA_FILE) -> None:
        self._path = Path(data_file)
        self._athletes: list[Athlete] = []
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "AthleteService":
        return cls(data_file=settings.data_file)

    @property
    def data_file(self) -> Path:
        return self._path

    # --- roster ----------------------------------------------------------

    def get_all_athletes(self) -> tuple[Athlete, ...]:
        return tuple(self._athletes)

    def get_athlete_by_id(self, athlete_id: str) -> Optional[Athlete]:
        for athlete in self._athletes:
            if athlete.id == athlete_id:
                return athlete
        return None

    def add_athlete(
        self,
        name: str,
        date_of_birth: Optional[date] = None,
        bodyweight_lbs: Optional[float] = None,
        height_inches: Optional[float] = None,
        is_male: Optional[bool] = None,
    ) -> Athlete:
        """Create athlete, append it to the roster and return it.

        Raises:
            TypeError: If ``name`` is ``None``.
            ValueError: If ``name`` is empty or whitespace only.
        """

        athlete = Athlete(
            name=_clean_name(name),
            date_of_birth=date_of_birth,
            bodyweight_lbs=bodyweight_lbs,
            height_inches=height_inches,
            is_male=is_male,
        )
        self._athletes.append(athlete)
        logger.info(
            "Added athlete",
            extra={"athlete_id": athlete.id, "athlete_name": athlete.name},
        )
        return athlete

    def remove_athlete(self, athlete_id: str) -> bool:
        athlete = self.get_athlete_by_id(athlete_id)
        if athlete is None:
            return False
        self._athletes.remove(athlete)
        logger.info("Removed athlete", extra={"athlete_id": athlete_id})
        return True

    def update_athlete(
        self,
        athlete_id: str,
        name: str,
        date_of_birth: Optional[date] = None,
        bodyweight_lbs: Optional[float] = None,
        height_inches: Optional[float] = None,
        is_male: Optional[bool] = None,
    ) -> bool:
        """Overwrite every profile field; omitted optionals become ``None``."""

        athlete = self.get_athlete_by_id(athlete_id)
        if athlete is None:
            return False
        athlete.name = _clean_name(name)
        athlete.date_of_birth = date_of_birth
        athlete.bodyweight_lbs = bodyweight_lbs
        athlete.height_inches = height_inches
        athlete.is_male = is_male
        logger.info("Updated athlete", extra={"athlete_id": athlete_id})
        return True

    # --- metric records --------------------------------------------------

    def _require_athlete(self, athlete_id: str) -> Athlete:
        athlete = self.get_athlete_by_id(athlete_id)
        if athlete is None:
            raise KeyError(f"Athlete {athlete_id} not found")
        return athlete

    def record_metric(
        self,
        athlete_id: str,
        group: FitnessGroup,
        metric_type: FitnessMetricType,
        value: float,
        recorded_date: date,
        notes: Optional[str] = None,
    ) -> MetricRecord:
        """Append a measurement to the athlete's history.

        Raises:
            KeyError: If the athlete does not exist.
        """

        athlete = self._require_athlete(athlete_id)
        record = MetricRecord(
            group=group,
            metric_type=metric_type,
            value=float(value),
            recorded_date=recorded_date,
            quarter=get_quarter(recorded_date),
            year=recorded_date.year,
            notes=notes,
        )
        athlete.add_metric_record(record)
        return record

    def record_group_metrics(
        self,
        athlete_id: str,
        group: FitnessGroup,
        metrics: Mapping[FitnessMetricType, float],
        recorded_date: date,
        notes: Optional[str] = None,
    ) -> tuple[MetricRecord, ...]:
        """Record every entry of ``metrics`` in mapping order.

        There is no rollback: records appended before a failure stay in the
        athlete's history.
        """

        records = [
            self.record_metric(athlete_id, group, metric_type, value, recorded_date, notes)
            for metric_type, value in metrics.items()
        ]
        logger.info(
            "Recorded %s metrics for %s",
            len(records),
            group.name,
            extra={"athlete_id": athlete_id},
        )
        return tuple(records)

    def update_metric_record(
        self,
        athlete_id: str,
        record_id: str,
        new_value: float,
        new_date: date,
        notes: Optional[str] = None,
    ) -> Optional[MetricRecord]:
        """Replace value and date of a record, keeping its identifier.

        Group and metric type are carried over, quarter and year are derived
        from ``new_date`` and notes fall back to the previous ones. The
        replacement is appended, so it moves to the end of the history.
        """

        athlete = self.get_athlete_by_id(athlete_id)
        if athlete is None:
            return None
        existing = next(
            (record for record in athlete.metric_records if record.id == record_id),
            None,
        )
        if existing is None:
            return None

        updated = MetricRecord(
            id=existing.id,
            group=existing.group,
            metric_type=existing.metric_type,
            value=float(new_value),
            recorded_date=new_date,
            quarter=get_quarter(new_date),
            year=new_date.year,
            notes=notes if notes is not None else existing.notes,
        )
        athlete.remove_metric_record(record_id)
        athlete.add_metric_record(updated)
        logger.info(
            "Updated metric record",
            extra={"athlete_id": athlete_id, "record_id": record_id},
        )
        return updated

    def remove_metric_record(self, athlete_id: str, record_id: str) -> bool:
        athlete = self.get_athlete_by_id(athlete_id)
        if athlete is None:
            return False
        return athlete.remove_metric_record(record_id)

    def get_metric_history(
        self, athlete_id: str, metric_type: FitnessMetricType
    ) -> tuple[MetricRecord, ...]:
        athlete = self.get_athlete_by_id(athlete_id)
        if athlete is None:
            return ()
        return athlete.records_for_metric(metric_type)

    def get_group_history(
        self, athlete_id: str, group: FitnessGroup
    ) -> tuple[MetricRecord, ...]:
        athlete = self.get_athlete_by_id(athlete_id)
        if athlete is None:
            return ()
        return athlete.records_for_group(group)

    # --- persistence -----------------------------------------------------

    async def save(self) -> None:
        """Write the whole roster to disk atomically.

        Content goes to a ``.tmp`` sibling first and then replaces the data
        file, so readers never observe a partial file.
        """

        async with self._lock:
            content = dumps_roster(self._athletes)
            await asyncio.to_thread(self._write_file, content)
        logger.info(
            "Saved %s athletes", len(self._athletes), extra={"path": str(self._path)}
        )

    async def load(self) -> None:
        """Replace the roster with the content of the data file.

        A missing file yields an empty roster. Content that cannot be decoded
        is discarded: the roster is cleared, a warning is logged and the error
        is reported to Sentry, but nothing is raised.
        """

        async with self._lock:
            raw = await asyncio.to_thread(self._read_file)
            if raw is None:
                self._athletes = []
                logger.info(
                    "No roster file found, starting empty",
                    extra={"path": str(self._path)},
                )
                return
            try:
                athletes = loads_roster(raw.decode("utf-8"))
            except (StorageFormatError, UnicodeDecodeError) as exc:
                self._athletes = []
                logger.warning(
                    "Roster file is corrupt, starting with empty roster: %s",
                    exc,
                    extra={"path": str(self._path)},
                )
                capture_exception(exc, data_file=str(self._path))
                return
            self._athletes = athletes
        logger.info(
            "Loaded %s athletes", len(athletes), extra={"path": str(self._path)}
        )

    # --- internal helpers -------------------------------------------------

    def _read_file(self) -> bytes | None:
        if not self._path.exists():
            return None
        return self._path.read_bytes()

    def _write_file(self, content: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as file:
                file.write(content)
                file.flush()
                os.fsync(file.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
