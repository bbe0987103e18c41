from __future__ import annotations

from ..runtime import (
    INTEGER_OBJ,
    STRING_OBJ,
    FALSE,
    NULL,
    TRUE,
    Integer,
    String,
    Value,
    native_bool_to_boolean,
    new_error,
    wrap_int64,
)

def eval_prefix_expression(op: str, right: Value) -> Value:
    match op:
        case '!':
            return eval_bang_operator(right)
        case '-':
            return eval_minus_operator(right)
        case _:
            return new_error("unknown operator: %s%s", op, right.type_name)

def eval_bang_operator(right: Value) -> Value:
    if right is TRUE:
        return FALSE

    if right is FALSE or right is NULL:
        return TRUE

    return FALSE

def eval_minus_operator(right: Value) -> Value:
    if not isinstance(right, Integer):
        return new_error("unknown operator: -%s", right.type_name)

    return Integer(wrap_int64(-right.value))

def eval_infix_expression(op: str, left: Value, right: Value) -> Value:
    ltype, rtype = left.type_name, right.type_name

    if ltype == INTEGER_OBJ and rtype == INTEGER_OBJ:
        return eval_integer_infix_expression(op, left, right)

    # identity, not structure: only the singletons ever compare equal here
    if op == '==':
        return native_bool_to_boolean(left is right)
    if op == '!=':
        return native_bool_to_boolean(left is not right)

    # mixed-type == and != were answered above: `1 == true` is false, not a mismatch
    if ltype != rtype:
        return new_error("type mismatch: %s %s %s", ltype, op, rtype)

    if ltype == STRING_OBJ:
        return eval_string_infix_expression(op, left, right)

    return new_error("unknown operator: %s %s %s", ltype, op, rtype)

def eval_integer_infix_expression(op: str, left: Integer, right: Integer) -> Value:
    a, b = left.value, right.value

    match op:
        case '+':
            return Integer(wrap_int64(a + b))
        case '-':
            return Integer(wrap_int64(a - b))
        case '*':
            return Integer(wrap_int64(a * b))
        case '/':
            return Integer(wrap_int64(truncating_div(a, b)))
        case '<':
            return native_bool_to_boolean(a < b)
        case '>':
            return native_bool_to_boolean(a > b)
        case '==':
            return native_bool_to_boolean(a == b)
        case '!=':
            return native_bool_to_boolean(a != b)

    return new_error("unknown operator: %s %s %s", left.type_name, op, right.type_name)

def eval_string_infix_expression(op: str, left: String, right: String) -> Value:
    if op == '+':
        return String(left.value + right.value)

    return new_error("unknown operator: %s %s %s", left.type_name, op, right.type_name)

def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero. Raises ZeroDivisionError on b == 0."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q
