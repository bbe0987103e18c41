from __future__ import annotations

import logging
import os
from typing import Optional

from .types import Value

DEBUG_PY_TRACE_ENV = "SIMIAN_DEBUG_PY_TRACE"
LOG_LEVEL_ENV = "SIMIAN_LOG_LEVEL"

_TRUTHY_FLAGS = {"1", "true", "yes", "on"}

def debug_py_trace_enabled() -> bool:
    return os.environ.get(DEBUG_PY_TRACE_ENV, "").strip().lower() in _TRUTHY_FLAGS

def set_debug_py_trace(enabled: bool) -> None:
    if enabled:
        os.environ[DEBUG_PY_TRACE_ENV] = "1"
    else:
        os.environ.pop(DEBUG_PY_TRACE_ENV, None)

def resolve_log_level(explicit: Optional[str]=None) -> Optional[int]:
    """CLI flag wins over the environment; None means leave logging alone."""
    raw = explicit if explicit is not None else os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return None

    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {raw}")

    return level

def configure_logging(level: Optional[int]) -> None:
    if level is None:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger("simian")
    root.addHandler(handler)
    root.setLevel(level)

def render_result(value: Optional[Value]) -> Optional[str]:
    """Text a front end shows for a result, or None when nothing was produced."""
    if value is None:
        return None

    return value.inspect()
