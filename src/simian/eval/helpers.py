from __future__ import annotations

from typing import Optional

from ..runtime import FALSE, NULL, Value

def is_truthy(val: Optional[Value]) -> bool:
    # only the false and null singletons are falsy; 0 and "" are truthy
    return val is not FALSE and val is not NULL
