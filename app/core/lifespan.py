"""Engine lifespan: startup and shutdown for a process embedding the engine.

Wiring only: logging, the lazily created SQL engine, optional tracing
export. Hosts enter engine_lifespan() once around their own serving loop.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def engine_lifespan() -> AsyncIterator[None]:
    """Start logging, the SQL engine and tracing (if enabled); undo them in reverse on exit."""
    settings = get_settings()
    setup_logging()
    database._ensure_engine()

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.start(database.engine)
        set_telemetry(telemetry)

    logger.info(
        "%s %s started (placeholder timezone %s)",
        settings.app_name,
        settings.app_version,
        settings.placeholder_timezone,
    )
    try:
        yield
    finally:
        telemetry_instance = get_telemetry()
        if telemetry_instance is not None:
            telemetry_instance.shutdown()
            set_telemetry(None)
        await database.dispose_engine()
        logger.info("Database engine disposed")
