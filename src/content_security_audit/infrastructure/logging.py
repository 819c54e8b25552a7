"""Process logging configuration for hosts embedding the audit log."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def configure_logging(*, level: str) -> int:
    """Configure root logging and return the resolved numeric level.

    Database driver loggers are capped at WARNING so DEBUG audit output is not
    buried under statement echo.
    """

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved_level = getattr(logging, normalized_level, logging.INFO)

    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))
    return resolved_level
