from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Dict, List, Optional
from typing_extensions import Protocol, TypeAlias, TypeGuard, runtime_checkable

from lark import Tree

if TYPE_CHECKING:
    from .environment import Environment

# ---------- Type tags ----------

INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
NULL_OBJ = "NULL"
ARRAY_OBJ = "ARRAY"
HASH_OBJ = "HASH"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"

_INT64_MIN = -(1 << 63)
_INT64_SPAN = 1 << 64

def wrap_int64(value: int) -> int:
    """Fold an arbitrary Python int into signed 64-bit two's complement."""
    return (value - _INT64_MIN) % _INT64_SPAN + _INT64_MIN

# ---------- Hash keys ----------

@dataclass(frozen=True)
class HashKey:
    type_name: str
    value: int

@runtime_checkable
class Hashable(Protocol):
    def hash_key(self) -> HashKey: ...

# ---------- Value model ----------

@dataclass(frozen=True)
class Integer:
    type_name: ClassVar[str] = INTEGER_OBJ
    value: int

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, self.value)

@dataclass(frozen=True)
class Boolean:
    type_name: ClassVar[str] = BOOLEAN_OBJ
    value: bool

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, 1 if self.value else 0)

@dataclass(frozen=True)
class String:
    type_name: ClassVar[str] = STRING_OBJ
    value: str

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        digest = hashlib.blake2b(self.value.encode("utf-8"), digest_size=8).digest()
        return HashKey(self.type_name, int.from_bytes(digest, "big"))

class Null:
    type_name: ClassVar[str] = NULL_OBJ

    def inspect(self) -> str:
        return "null"

    def __repr__(self) -> str:
        return "NULL"

@dataclass(eq=False)
class Array:
    type_name: ClassVar[str] = ARRAY_OBJ
    elements: List['Value'] = field(default_factory=list)

    def inspect(self) -> str:
        return "[" + ", ".join(el.inspect() for el in self.elements) + "]"

@dataclass(frozen=True)
class HashPair:
    key: 'Value'
    value: 'Value'

@dataclass(eq=False)
class Hash:
    type_name: ClassVar[str] = HASH_OBJ
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)

    def inspect(self) -> str:
        pairs = []

        for pair in self.pairs.values():
            pairs.append(f"{pair.key.inspect()}: {pair.value.inspect()}")

        return "{" + ", ".join(pairs) + "}"

@dataclass(eq=False)
class Function:
    type_name: ClassVar[str] = FUNCTION_OBJ
    parameters: List[str]
    body: Tree                 # block_statement node
    env: 'Environment'         # closure, shared with the defining scope

    def inspect(self) -> str:
        from .tree import node_string  # local import to avoid cycle

        return f"fn({', '.join(self.parameters)}) {{\n{node_string(self.body)}\n}}"

    def __repr__(self) -> str:
        return f"<fn params={', '.join(self.parameters) or 'nullary'}>"

BuiltinFn = Callable[[List['Value']], 'Value']

@dataclass(eq=False)
class Builtin:
    type_name: ClassVar[str] = BUILTIN_OBJ
    fn: BuiltinFn
    name: str = ""

    def inspect(self) -> str:
        return "builtin function"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"

# ---------- Signals ----------

@dataclass(eq=False)
class ReturnValue:
    """Wraps the operand of `return` while it unwinds to the function boundary."""
    type_name: ClassVar[str] = RETURN_VALUE_OBJ
    value: 'Value'

    def inspect(self) -> str:
        return self.value.inspect()

@dataclass(eq=False)
class Error:
    """Runtime fault. Propagates as a value until the outermost caller."""
    type_name: ClassVar[str] = ERROR_OBJ
    message: str

    def inspect(self) -> str:
        return f"ERROR: {self.message}"

Value: TypeAlias = (
    Integer
    | Boolean
    | String
    | Null
    | Array
    | Hash
    | Function
    | Builtin
    | ReturnValue
    | Error
)

# Process-wide singletons; identity comparison on these is the language's `==`.
NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)

def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE

def is_hashable(value: Optional[Value]) -> TypeGuard[Hashable]:
    return isinstance(value, Hashable)

def is_error(value: Optional[Value]) -> TypeGuard[Error]:
    return isinstance(value, Error)

def is_signal(value: Optional[Value]) -> bool:
    return isinstance(value, (ReturnValue, Error))

class Builtins:
    functions: Dict[str, Builtin] = {}
