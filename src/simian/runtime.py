from __future__ import annotations

import importlib
from typing import List, Optional

from .environment import Environment, new_enclosed_environment
from .types import (
    INTEGER_OBJ, BOOLEAN_OBJ, STRING_OBJ, NULL_OBJ, ARRAY_OBJ, HASH_OBJ,
    FUNCTION_OBJ, BUILTIN_OBJ, RETURN_VALUE_OBJ, ERROR_OBJ,
    Integer, Boolean, String, Null, Array, Hash, HashKey, HashPair,
    Function, Builtin, BuiltinFn, ReturnValue, Error, Value, Builtins,
    NULL, TRUE, FALSE,
    native_bool_to_boolean, is_error, is_hashable, is_signal, wrap_int64,
)

_BUILTINS_INITIALIZED = False

def init_builtins() -> None:
    """Load the built-in modules (idempotent) so register_builtin hooks run."""
    global _BUILTINS_INITIALIZED

    if _BUILTINS_INITIALIZED:
        return

    importlib.import_module("simian.stdlib")
    _BUILTINS_INITIALIZED = True

def register_builtin(name: str):
    def dec(fn: BuiltinFn):
        Builtins.functions[name] = Builtin(fn=fn, name=name)
        return fn

    return dec

def lookup_builtin(name: str) -> Optional[Builtin]:
    init_builtins()
    return Builtins.functions.get(name)

def new_error(fmt: str, *args: object) -> Error:
    return Error(fmt % args)

def apply_function(fn: Value, args: List[Value]) -> Value:
    match fn:
        case Function():
            from .evaluator import eval_node  # local import to avoid cycle

            extended = extend_function_env(fn, args)
            evaluated = eval_node(fn.body, extended)
            return unwrap_return_value(evaluated)
        case Builtin():
            return fn.fn(args)
        case _:
            return new_error("not a function: %s", fn.type_name)

def extend_function_env(fn: Function, args: List[Value]) -> Environment:
    """
    Bind parameters positionally in a scope enclosed by the closure.
    Arity is not checked: surplus arguments are dropped and parameters
    without an argument stay unbound.
    """
    env = new_enclosed_environment(fn.env)

    for name, val in zip(fn.parameters, args):
        env.set(name, val)

    return env

def unwrap_return_value(obj: Optional[Value]) -> Value:
    if isinstance(obj, ReturnValue):
        return obj.value

    if obj is None:
        return NULL

    return obj

