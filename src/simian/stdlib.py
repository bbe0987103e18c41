"""Host-provided functions (len, puts, etc.) registered via simian.runtime."""

from __future__ import annotations

from typing import List

from .runtime import register_builtin, new_error, Array, Integer, String, Value, NULL

def _wrong_arity(args: List[Value], want: int) -> Value:
    return new_error("wrong number of arguments. got=%d, want=%d", len(args), want)

@register_builtin("len")
def builtin_len(args: List[Value]) -> Value:
    if len(args) != 1:
        return _wrong_arity(args, 1)

    match args[0]:
        case String(value=text):
            return Integer(len(text))
        case Array(elements=elements):
            return Integer(len(elements))
        case other:
            return new_error("argument to `len` not supported, got %s", other.type_name)

@register_builtin("first")
def builtin_first(args: List[Value]) -> Value:
    if len(args) != 1:
        return _wrong_arity(args, 1)

    arr = args[0]
    if not isinstance(arr, Array):
        return new_error("argument to `first` must be ARRAY, got %s", arr.type_name)

    return arr.elements[0] if arr.elements else NULL

@register_builtin("last")
def builtin_last(args: List[Value]) -> Value:
    if len(args) != 1:
        return _wrong_arity(args, 1)

    arr = args[0]
    if not isinstance(arr, Array):
        return new_error("argument to `last` must be ARRAY, got %s", arr.type_name)

    return arr.elements[-1] if arr.elements else NULL

@register_builtin("rest")
def builtin_rest(args: List[Value]) -> Value:
    if len(args) != 1:
        return _wrong_arity(args, 1)

    arr = args[0]
    if not isinstance(arr, Array):
        return new_error("argument to `rest` must be ARRAY, got %s", arr.type_name)

    if not arr.elements:
        return NULL

    return Array(list(arr.elements[1:]))

@register_builtin("push")
def builtin_push(args: List[Value]) -> Value:
    if len(args) != 2:
        return _wrong_arity(args, 2)

    arr, item = args
    if not isinstance(arr, Array):
        return new_error("argument to `push` must be ARRAY, got %s", arr.type_name)

    # arrays are immutable from the language's side; push returns a copy
    return Array([*arr.elements, item])

@register_builtin("puts")
def builtin_puts(args: List[Value]) -> Value:
    for arg in args:
        print(arg.inspect())

    return NULL
