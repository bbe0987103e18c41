from __future__ import annotations

import logging
from typing import Iterator

import pytest

from simian.utils import DEBUG_PY_TRACE_ENV, LOG_LEVEL_ENV


@pytest.fixture(autouse=True)
def _isolate_simian_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Shell settings for tracebacks and log level must not leak into runs."""
    monkeypatch.delenv(DEBUG_PY_TRACE_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


@pytest.fixture
def simian_logger() -> Iterator[logging.Logger]:
    """The package logger, with handlers and level restored afterwards."""
    logger = logging.getLogger("simian")
    handlers, level = list(logger.handlers), logger.level

    yield logger

    logger.handlers[:] = handlers
    logger.setLevel(level)
