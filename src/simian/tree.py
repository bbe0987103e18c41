"""Shared helpers for the lark Tree/Token nodes the evaluator consumes.

The parser in `simian.parser` produces these shapes, but any producer will do.
The constructors below build the same trees by hand, which is how the
evaluator tests drive the core without going through the grammar.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from lark import Token, Tree
from typing_extensions import TypeAlias, TypeGuard

Node: TypeAlias = Union[Tree, Token]

def is_tree(node: object) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_token(node: object) -> TypeGuard[Token]:
    return isinstance(node, Token)

def tree_label(node: object) -> Optional[str]:
    return str(node.data) if is_tree(node) else None

def tree_children(node: object) -> List[Node]:
    if not is_tree(node):
        return []

    return list(node.children)

def token_value(node: Node) -> str:
    if is_token(node):
        return str(node.value)

    children = tree_children(node)
    if len(children) == 1 and is_token(children[0]):
        return str(children[0].value)

    raise ValueError(f"Expected a token-bearing node, got {node!r}")

# ---------------- Constructors ----------------

_OPERATOR_TYPES = {
    '+': 'PLUS',
    '-': 'MINUS',
    '*': 'STAR',
    '/': 'SLASH',
    '<': 'LT',
    '>': 'GT',
    '==': 'EQ',
    '!=': 'NOT_EQ',
    '!': 'BANG',
}

def op_token(op: str) -> Token:
    return Token(_OPERATOR_TYPES.get(op, 'OP'), op)

def program(*statements: Tree) -> Tree:
    return Tree('program', list(statements))

def block(*statements: Tree) -> Tree:
    return Tree('block_statement', list(statements))

def let(name: str, value: Tree) -> Tree:
    return Tree('let_statement', [Token('IDENT', name), value])

def return_(value: Tree) -> Tree:
    return Tree('return_statement', [value])

def expr_stmt(expr: Tree) -> Tree:
    return Tree('expression_statement', [expr])

def integer(value: int) -> Tree:
    return Tree('integer_literal', [Token('INT', str(value))])

def string(value: str) -> Tree:
    return Tree('string_literal', [Token('STRING', value)])

def boolean(value: bool) -> Tree:
    return Tree('boolean', [Token('TRUE', 'true') if value else Token('FALSE', 'false')])

def ident(name: str) -> Tree:
    return Tree('identifier', [Token('IDENT', name)])

def prefix(op: str, right: Tree) -> Tree:
    return Tree('prefix_expression', [op_token(op), right])

def infix(left: Tree, op: str, right: Tree) -> Tree:
    return Tree('infix_expression', [left, op_token(op), right])

def if_(condition: Tree, consequence: Tree, alternative: Optional[Tree]=None) -> Tree:
    children: List[Node] = [condition, consequence]

    if alternative is not None:
        children.append(alternative)

    return Tree('if_expression', children)

def fn(params: Sequence[str], body: Tree) -> Tree:
    parameters = Tree('parameters', [Token('IDENT', p) for p in params])
    return Tree('function_literal', [parameters, body])

def call(callee: Tree, *args: Tree) -> Tree:
    return Tree('call_expression', [callee, Tree('arguments', list(args))])

def array(*elements: Tree) -> Tree:
    return Tree('array_literal', list(elements))

def index(container: Tree, idx: Tree) -> Tree:
    return Tree('index_expression', [container, idx])

def hash_(*pairs: Tuple[Tree, Tree]) -> Tree:
    return Tree('hash_literal', [Tree('pair', [k, v]) for k, v in pairs])

# ---------------- Rendering ----------------

def node_string(node: Node) -> str:
    """Render a node back to canonical source, fully parenthesising operators."""
    if is_token(node):
        return str(node.value)

    label = tree_label(node)
    kids = tree_children(node)

    match label:
        case 'program' | 'block_statement':
            return "".join(node_string(ch) for ch in kids)
        case 'let_statement':
            name, value = kids
            return f"let {node_string(name)} = {node_string(value)};"
        case 'return_statement':
            return f"return {node_string(kids[0])};"
        case 'expression_statement':
            return node_string(kids[0])
        case 'integer_literal' | 'boolean' | 'identifier':
            return token_value(node)
        case 'string_literal':
            return f'"{token_value(node)}"'
        case 'prefix_expression':
            op, right = kids
            return f"({node_string(op)}{node_string(right)})"
        case 'infix_expression':
            left, op, right = kids
            return f"({node_string(left)} {node_string(op)} {node_string(right)})"
        case 'if_expression':
            out = f"if{node_string(kids[0])} {node_string(kids[1])}"
            if len(kids) > 2 and kids[2] is not None:
                out += f"else {node_string(kids[2])}"
            return out
        case 'function_literal':
            params, body = kids
            names = ", ".join(node_string(p) for p in tree_children(params))
            return f"fn({names}) {node_string(body)}"
        case 'call_expression':
            callee, args = kids
            rendered = ", ".join(node_string(a) for a in tree_children(args))
            return f"{node_string(callee)}({rendered})"
        case 'array_literal':
            return "[" + ", ".join(node_string(el) for el in kids) + "]"
        case 'index_expression':
            container, idx = kids
            return f"({node_string(container)}[{node_string(idx)}])"
        case 'hash_literal':
            pairs = []

            for pair in kids:
                key, value = tree_children(pair)
                pairs.append(f"{node_string(key)}:{node_string(value)}")

            return "{" + ", ".join(pairs) + "}"
        case _:
            return " ".join(node_string(ch) for ch in kids)
