from __future__ import annotations

import logging

import pytest

from content_security_audit.infrastructure.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_driver_loggers():
    names = ("sqlalchemy.engine", "aiosqlite")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


def test_unknown_or_blank_level_falls_back_to_info() -> None:
    assert configure_logging(level="") == logging.INFO
    assert configure_logging(level="verbose") == logging.INFO


def test_debug_level_keeps_database_loggers_at_warning() -> None:
    assert configure_logging(level=" debug ") == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("aiosqlite").level == logging.WARNING
