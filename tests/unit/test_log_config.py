"""Unit tests for per-category logging setup."""

import logging

import pytest

from datalayer.config import Settings
from datalayer.infrastructure.logging.log_config import _parse_level, setup_logging


@pytest.fixture
def restore_levels():
    names = ["", "httpx", "httpcore", "datalayer.infrastructure.http"]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_setup_logging_applies_category_levels(restore_levels):
    settings = Settings(log_level="WARNING", log_level_http="ERROR", log_level_client="debug")

    setup_logging(settings)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.ERROR
    assert logging.getLogger("httpcore").level == logging.ERROR
    assert logging.getLogger("datalayer.infrastructure.http").level == logging.DEBUG


@pytest.mark.parametrize(
    "raw, expected",
    [("DEBUG", logging.DEBUG), ("error", logging.ERROR), ("nonsense", logging.INFO)],
)
def test_parse_level(raw, expected):
    assert _parse_level(raw) == expected
