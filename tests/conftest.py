from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Dict

import pytest

from tests._fixtures import tokens

FIXED_NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _reset_tokensmith_logger():
    """CLI tests attach handlers bound to captured streams; drop them after each test."""
    yield
    logger = logging.getLogger("tokensmith")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


@pytest.fixture
def light() -> Dict[str, Any]:
    """Light-mode semantic colors aliasing a grey and blue palette."""
    return tokens.light_export()


@pytest.fixture
def dark() -> Dict[str, Any]:
    return tokens.dark_export()


@pytest.fixture
def values() -> Dict[str, Any]:
    return tokens.values_export()


@pytest.fixture
def typography() -> Dict[str, Any]:
    return tokens.typography_export()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
