"""Seed the configured roster file with a demo athlete."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fitness_tracker.infrastructure.storage import StorageSettings  # noqa: E402
from services import AthleteService, create_sample_athlete  # noqa: E402
from utils.logger import get_logger  # noqa: E402
from utils.sentry import init_sentry  # noqa: E402


async def seed() -> None:
    """Load the existing roster, append the demo athlete and save it back."""

    load_dotenv()
    init_sentry()
    logger = get_logger("seed")

    settings = StorageSettings.from_env()
    service = AthleteService.from_settings(settings)
    await service.load()

    athlete = create_sample_athlete(service)
    await service.save()
    logger.info(
        "Seeded demo athlete with %s records",
        len(athlete.metric_records),
        extra={"athlete_id": athlete.id, "path": str(settings.data_file)},
    )


if __name__ == "__main__":
    asyncio.run(seed())
