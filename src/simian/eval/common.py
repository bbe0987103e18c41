from __future__ import annotations

from typing import Callable, List, Optional

from ..environment import Environment
from ..runtime import Integer, String, Value, is_signal
from ..tree import Node, token_value

EvalFunc = Callable[[Node, Environment], Optional[Value]]

def token_integer(node: Node) -> Integer:
    return Integer(int(token_value(node)))

def token_string(node: Node) -> String:
    return String(token_value(node))

def eval_expressions(exps: List[Node], env: Environment, eval_func: EvalFunc) -> List[Value]:
    """
    Evaluate left to right. On the first error or return signal the result is
    that signal alone, so callers only need to check a one-element list.
    """
    result: List[Value] = []

    for e in exps:
        evaluated = eval_func(e, env)
        if is_signal(evaluated):
            return [evaluated]
        result.append(evaluated)

    return result
