from __future__ import annotations

from typing import List, cast

from ..environment import Environment
from ..runtime import Function, Value, apply_function, is_signal
from ..tree import Node, Tree, is_token, tree_children
from .common import EvalFunc, eval_expressions

def extract_param_names(params_node: Node) -> List[str]:
    return [str(p.value) for p in tree_children(params_node) if is_token(p)]

def eval_function_literal(children: List[Node], env: Environment) -> Function:
    params_node, body = children

    # capture env itself: later bindings in the defining scope stay visible
    return Function(parameters=extract_param_names(params_node), body=cast(Tree, body), env=env)

def eval_call_expression(children: List[Node], env: Environment, eval_func: EvalFunc) -> Value:
    callee_node, args_node = children

    function = eval_func(callee_node, env)
    if is_signal(function):
        return function

    args = eval_expressions(tree_children(args_node), env, eval_func)
    if len(args) == 1 and is_signal(args[0]):
        return args[0]

    return apply_function(function, args)
