from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .types import Value

class Environment:
    """Name -> value bindings, chained outward for lexical scope.

    `set` always writes the local table, so an inner scope shadows an outer
    binding instead of reassigning it. Closures keep a reference to the
    environment they were defined in, never a copy.
    """

    def __init__(self, outer: Optional['Environment']=None):
        self.store: Dict[str, Value] = {}
        self.outer = outer

    def get(self, name: str) -> Tuple[Optional[Value], bool]:
        if name in self.store:
            return self.store[name], True

        if self.outer is not None:
            return self.outer.get(name)

        return None, False

    def set(self, name: str, val: Value) -> Value:
        self.store[name] = val
        return val

    def names(self) -> List[str]:
        return sorted(self.store)

    def __repr__(self) -> str:
        depth = 0
        cur = self.outer

        while cur is not None:
            depth += 1
            cur = cur.outer

        return f"<Environment names={len(self.store)} depth={depth}>"

def new_enclosed_environment(outer: Environment) -> Environment:
    return Environment(outer=outer)
