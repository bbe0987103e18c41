from __future__ import annotations

from typing import Dict, List

from ..environment import Environment
from ..runtime import (
    NULL,
    Array,
    Hash,
    HashKey,
    HashPair,
    Integer,
    Value,
    is_signal,
    is_hashable,
    new_error,
)
from ..tree import Node, tree_children
from .common import EvalFunc, eval_expressions

def eval_array_literal(children: List[Node], env: Environment, eval_func: EvalFunc) -> Value:
    elements = eval_expressions(children, env, eval_func)
    if len(elements) == 1 and is_signal(elements[0]):
        return elements[0]

    return Array(elements)

def eval_index_expression(left: Value, index: Value) -> Value:
    match left, index:
        case Array(elements=elements), Integer(value=idx):
            if idx < 0 or idx >= len(elements):
                return NULL
            return elements[idx]
        case _:
            return new_error("index operator not supported: %s", left.type_name)

def eval_hash_literal(children: List[Node], env: Environment, eval_func: EvalFunc) -> Value:
    """Build a hash; a key seen twice keeps the later value."""
    pairs: Dict[HashKey, HashPair] = {}

    for pair_node in children:
        key_node, value_node = tree_children(pair_node)

        key = eval_func(key_node, env)
        if is_signal(key):
            return key

        if not is_hashable(key):
            return new_error("unusable as hash key: %s", key.type_name)

        value = eval_func(value_node, env)
        if is_signal(value):
            return value

        pairs[key.hash_key()] = HashPair(key=key, value=value)

    return Hash(pairs)
