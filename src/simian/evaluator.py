from __future__ import annotations

import sys
from typing import Callable, Dict, Optional

from .environment import Environment
from .runtime import (
    NULL,
    ReturnValue,
    Value,
    init_builtins,
    is_signal,
    lookup_builtin,
    native_bool_to_boolean,
    new_error,
)
from .tree import Node, Tree, is_tree, token_value, tree_children, tree_label

from .eval.blocks import eval_program, eval_block_statement
from .eval.common import token_integer, token_string
from .eval.expr import eval_infix_expression, eval_prefix_expression
from .eval.fn import eval_call_expression, eval_function_literal
from .eval.helpers import is_truthy
from .eval.objects import eval_array_literal, eval_hash_literal, eval_index_expression

# ---------------- Public API ----------------

# each language call costs a dozen or so host frames
_MIN_RECURSION_LIMIT = 5000

def eval_expr(ast: Node, env: Optional[Environment]=None) -> Optional[Value]:
    """Evaluate a whole tree, in a fresh root environment unless one is given."""
    init_builtins()

    if sys.getrecursionlimit() < _MIN_RECURSION_LIMIT:
        sys.setrecursionlimit(_MIN_RECURSION_LIMIT)

    if env is None:
        env = Environment()

    return eval_node(ast, env)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> Optional[Value]:
    if not is_tree(n):
        return None

    handler = _NODE_DISPATCH.get(str(n.data))
    if handler is not None:
        return handler(n, env)

    match tree_label(n):
        case 'return_statement':
            val = eval_node(n.children[0], env)
            if is_signal(val):
                return val
            return ReturnValue(val)
        case 'prefix_expression':
            op, right_node = n.children
            right = eval_node(right_node, env)
            if is_signal(right):
                return right
            return eval_prefix_expression(token_value(op), right)
        case 'infix_expression':
            left_node, op, right_node = n.children
            left = eval_node(left_node, env)
            if is_signal(left):
                return left
            right = eval_node(right_node, env)
            if is_signal(right):
                return right
            return eval_infix_expression(token_value(op), left, right)
        case 'index_expression':
            left_node, index_node = n.children
            left = eval_node(left_node, env)
            if is_signal(left):
                return left
            index = eval_node(index_node, env)
            if is_signal(index):
                return index
            return eval_index_expression(left, index)
        case _:
            # statement forms without a result
            return None

# ---------------- Statements ----------------

def _eval_let_statement(n: Tree, env: Environment) -> Optional[Value]:
    name_tok, value_node = n.children

    val = eval_node(value_node, env)
    if is_signal(val):
        return val

    env.set(token_value(name_tok), val)
    return None

# ---------------- Expressions ----------------

def _eval_identifier(n: Tree, env: Environment) -> Value:
    name = token_value(n)

    val, found = env.get(name)
    if found:
        return val

    builtin = lookup_builtin(name)
    if builtin is not None:
        return builtin

    return new_error("identifier not found: %s", name)

def _eval_if_expression(n: Tree, env: Environment) -> Value:
    condition_node, consequence, *rest = n.children
    alternative = rest[0] if rest else None

    condition = eval_node(condition_node, env)
    if is_signal(condition):
        return condition

    if is_truthy(condition):
        result = eval_node(consequence, env)
    elif alternative is not None:
        result = eval_node(alternative, env)
    else:
        return NULL

    # a branch holding only `let`s produces no value
    return NULL if result is None else result

# ---------------- Dispatch ----------------

_NODE_DISPATCH: Dict[str, Callable[[Tree, Environment], Optional[Value]]] = {
    'program': lambda n, env: eval_program(tree_children(n), env, eval_node),
    'block_statement': lambda n, env: eval_block_statement(tree_children(n), env, eval_node),
    'expression_statement': lambda n, env: eval_node(n.children[0], env),
    'let_statement': _eval_let_statement,
    'identifier': _eval_identifier,
    'integer_literal': lambda n, _: token_integer(n),
    'string_literal': lambda n, _: token_string(n),
    'boolean': lambda n, _: native_bool_to_boolean(token_value(n) == 'true'),
    'if_expression': _eval_if_expression,
    'function_literal': lambda n, env: eval_function_literal(n.children, env),
    'call_expression': lambda n, env: eval_call_expression(n.children, env, eval_node),
    'array_literal': lambda n, env: eval_array_literal(tree_children(n), env, eval_node),
    'hash_literal': lambda n, env: eval_hash_literal(tree_children(n), env, eval_node),
}
