from __future__ import annotations

from typing import List, Optional

from ..environment import Environment
from ..runtime import Error, ReturnValue, Value
from ..tree import Node
from .common import EvalFunc

def eval_program(statements: List[Node], env: Environment, eval_func: EvalFunc) -> Optional[Value]:
    """Run top-level statements; `return` here ends the program with its operand."""
    result: Optional[Value] = None

    for stmt in statements:
        result = eval_func(stmt, env)

        match result:
            case ReturnValue(value=value):
                return value
            case Error():
                return result

    return result

def eval_block_statement(statements: List[Node], env: Environment, eval_func: EvalFunc) -> Optional[Value]:
    """
    Run a block in the enclosing environment. Return signals are passed up
    untouched so they keep unwinding to the function boundary.
    """
    result: Optional[Value] = None

    for stmt in statements:
        result = eval_func(stmt, env)

        if isinstance(result, (ReturnValue, Error)):
            return result

    return result
