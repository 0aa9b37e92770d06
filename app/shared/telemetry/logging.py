"""Logging configuration for the document engine.

Every line carries the acting user (or actor type for system work) so a
generation or status change can be traced back to who requested it.
"""

import logging
import sys

from app.core.config import get_settings
from app.shared.context import get_actor_context

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(actor)s] %(message)s"


class ActorContextFilter(logging.Filter):
    """Adds record.actor from the request context (user id, else actor type)."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_actor_context()
        record.actor = context.user_id or context.actor_type.value
        return True


def setup_logging() -> None:
    """Configure process-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. SQLAlchemy
    engine logging follows settings.database_echo. Output goes to stdout.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ActorContextFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler],
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
