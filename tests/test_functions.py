from __future__ import annotations

import pytest

from tests.support.harness import run_program, run_runtime_case

SCENARIOS = [
    pytest.param("fn(x) { x + 2; };", ("function", ["x"]), None, id="fn-literal-value"),
    pytest.param("fn() { 1 }", ("function", []), None, id="fn-nullary-value"),
    pytest.param("fn(a, b, c) { a }", ("function", ["a", "b", "c"]), None, id="fn-multi-params"),
    pytest.param(
        "let identity = fn(x) { x; }; identity(5);",
        ("integer", 5),
        None,
        id="call-identity",
    ),
    pytest.param(
        "let identity = fn(x) { return x; }; identity(5);",
        ("integer", 5),
        None,
        id="call-identity-return",
    ),
    pytest.param(
        "let double = fn(x) { x * 2; }; double(5);",
        ("integer", 10),
        None,
        id="call-double",
    ),
    pytest.param(
        "let add = fn(x, y) { x + y; }; add(5, 5);",
        ("integer", 10),
        None,
        id="call-add",
    ),
    pytest.param(
        "let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));",
        ("integer", 20),
        None,
        id="call-nested-args",
    ),
    pytest.param("fn(x) { x; }(5)", ("integer", 5), None, id="call-literal-directly"),
    pytest.param("fn() { }()", ("null", None), None, id="call-empty-body"),
    pytest.param("fn() { let a = 1; }()", ("null", None), None, id="call-let-only-body"),
    pytest.param(
        "let newAdder = fn(x) { fn(y) { x + y } }; let addTwo = newAdder(2); addTwo(3);",
        ("integer", 5),
        None,
        id="closure-adder",
    ),
    pytest.param(
        "let newAdder = fn(x) { fn(y) { x + y } }; newAdder(2)(3)",
        ("integer", 5),
        None,
        id="closure-chained-call",
    ),
    pytest.param(
        "let add = fn(a, b) { a + b }; "
        "let applyFunc = fn(a, b, func) { func(a, b) }; "
        "applyFunc(2, 2, add);",
        ("integer", 4),
        None,
        id="higher-order",
    ),
    pytest.param(
        "let f = fn() { later }; let later = 42; f()",
        ("integer", 42),
        None,
        id="closure-sees-later-binding",
    ),
    pytest.param(
        "let x = 1; let f = fn() { x }; let x = 2; f()",
        ("integer", 2),
        None,
        id="closure-captures-env-not-value",
    ),
    pytest.param(
        "let fact = fn(n) { if (n < 2) { 1 } else { n * fact(n - 1) } }; fact(10)",
        ("integer", 3628800),
        None,
        id="recursion-factorial",
    ),
    pytest.param(
        "let fib = fn(n) { if (n < 2) { return n; } fib(n - 1) + fib(n - 2) }; fib(15)",
        ("integer", 610),
        None,
        id="recursion-fibonacci",
    ),
    pytest.param(
        "let counter = fn(x) { if (x > 100) { return true; } else { counter(x + 1); } }; counter(0);",
        ("bool", True),
        None,
        id="recursion-counter",
    ),
    pytest.param(
        "let f = fn(a, b) { a }; f(1)",
        ("integer", 1),
        None,
        id="missing-arg-unused",
    ),
    pytest.param(
        "let f = fn(a, b) { b }; f(1)",
        ("error", "identifier not found: b"),
        None,
        id="missing-arg-is-unbound",
    ),
    pytest.param(
        "let b = 9; let f = fn(a, b) { b }; f(1)",
        ("integer", 9),
        None,
        id="missing-arg-falls-back-to-closure",
    ),
    pytest.param(
        "let f = fn(a) { a }; f(1, 2, 3)",
        ("integer", 1),
        None,
        id="surplus-args-ignored",
    ),
    pytest.param(
        "let f = fn(a) { a }; f(1, undefined)",
        ("error", "identifier not found: undefined"),
        None,
        id="surplus-args-still-evaluated",
    ),
    pytest.param(
        "let x = 10; let f = fn(x) { x }; f(1) + x",
        ("integer", 11),
        None,
        id="param-shadows-outer",
    ),
    pytest.param(
        "let f = fn() { let inner = 1; inner }; f(); inner",
        ("error", "identifier not found: inner"),
        None,
        id="function-locals-do-not-leak",
    ),
    pytest.param("5()", ("error", "not a function: INTEGER"), None, id="call-integer"),
    pytest.param('"f"()', ("error", "not a function: STRING"), None, id="call-string"),
    pytest.param("let x = true; x(1)", ("error", "not a function: BOOLEAN"), None, id="call-boolean"),
    pytest.param("[1](0)", ("error", "not a function: ARRAY"), None, id="call-array"),
    pytest.param(
        "missing(1)",
        ("error", "identifier not found: missing"),
        None,
        id="call-unknown-identifier",
    ),
    pytest.param(
        "let loop = fn() { loop() }; loop()",
        None,
        RecursionError,
        id="unbounded-recursion-host-fault",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_functions(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_function_inspect_renders_body() -> None:
    result = run_program("fn(x) { x + 2; }")
    assert result.inspect() == "fn(x) {\n(x + 2)\n}"


def test_function_inspect_multiple_params() -> None:
    result = run_program("fn(a, b) { a * b }")
    assert result.inspect() == "fn(a, b) {\n(a * b)\n}"


def test_closure_env_is_defining_scope() -> None:
    result = run_program("let outer = fn() { fn() { 1 } }; outer()")
    assert result.env.outer is not None
    assert result.env.outer.outer is None


def test_each_call_gets_fresh_scope() -> None:
    source = """
    let make = fn(v) { fn() { v } };
    let a = make(1);
    let b = make(2);
    a() + b() * 10
    """
    result = run_program(source)
    assert result.value == 21
