"""Logging configuration for the application."""

import logging
import sys

from changetrack.core.config import get_settings

# Audit pipeline loggers stay at INFO or below whatever the root level is.
AUDIT_LOGGERS = (
    "changetrack.infrastructure.messaging.dispatcher",
    "changetrack.application.services.audit_writer",
)


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. SQLAlchemy
    engine logging follows settings.database_echo. Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in AUDIT_LOGGERS:
        logging.getLogger(name).setLevel(min(log_level, logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )

