"""Logging configuration for the application."""

import logging
import sys

from app.core.config import get_settings

# Chatty third-party loggers held at WARNING unless explicitly enabled.
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio", "httpx")


def setup_logging() -> None:
    """Configure application-wide logging on stdout.

    Level comes from settings.log_level (DEBUG when settings.debug is True).
    SQL statement logging follows settings.database_echo.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.getLevelName(
        settings.log_level.upper()
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        if name == "sqlalchemy.engine" and settings.database_echo:
            continue
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name (usually __name__)."""
    return logging.getLogger(name)
