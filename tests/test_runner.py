from __future__ import annotations

import io
import logging

import pytest

from simian.runner import _load_source, main, repl_eval
from simian.types import Integer, is_error
from simian.utils import (
    DEBUG_PY_TRACE_ENV,
    LOG_LEVEL_ENV,
    configure_logging,
    debug_py_trace_enabled,
    render_result,
    resolve_log_level,
    set_debug_py_trace,
)
from tests.support.harness import Environment, run_program


def test_main_prints_result(capsys) -> None:
    main(["1 + 2 * 3"])
    assert capsys.readouterr().out == "7\n"


def test_main_prints_nothing_without_value(capsys) -> None:
    main(["let x = 1;"])
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_main_runs_file(tmp_path, capsys) -> None:
    script = tmp_path / "prog.sm"
    script.write_text('let greet = fn(n) { "hi " + n }; greet("there")', encoding="utf-8")

    main([str(script)])
    assert capsys.readouterr().out == "hi there\n"


def test_main_reads_stdin(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('puts("side"); [1, 2]'))

    main(["-"])
    assert capsys.readouterr().out == "side\n[1, 2]\n"


def test_main_reads_stdin_without_argument(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("10 / 3"))

    main([])
    assert capsys.readouterr().out == "3\n"


def test_main_error_result_exits_1(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["1 + true"])

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.err == "ERROR: type mismatch: INTEGER + BOOLEAN\n"
    assert captured.out == ""


def test_main_parse_error_exits_2(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["let = 1"])

    assert exc_info.value.code == 2
    assert capsys.readouterr().err.startswith("parser error: unexpected token '='")


def test_main_rejects_extra_arguments() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["1", "2"])

    assert exc_info.value.code == "Unexpected argument: 2"


def test_main_grammar_flag_requires_value() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["1", "--grammar"])

    assert exc_info.value.code == "--grammar flag requires a path"


def test_main_log_level_flag_requires_value() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["1", "--log-level"])

    assert exc_info.value.code == "--log-level flag requires a level"


def test_main_rejects_unknown_log_level() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level=chatty", "1"])

    assert exc_info.value.code == "Unknown log level: chatty"


def test_main_log_level_configures_logger(simian_logger, capsys) -> None:
    main(["--log-level", "debug", "1"])

    assert simian_logger.level == logging.DEBUG
    assert capsys.readouterr().out == "1\n"


def test_main_uses_explicit_grammar(tmp_path, capsys) -> None:
    from simian.parser import GRAMMAR_PATH

    custom = tmp_path / "g.lark"
    custom.write_text(GRAMMAR_PATH.read_text(encoding="utf-8"), encoding="utf-8")

    main([f"--grammar={custom}", "2 * 21"])
    assert capsys.readouterr().out == "42\n"


def test_main_division_by_zero_propagates() -> None:
    with pytest.raises(ZeroDivisionError):
        main(["1 / 0"])


def test_load_source_prefers_existing_file(tmp_path) -> None:
    script = tmp_path / "x.sm"
    script.write_text("99", encoding="utf-8")
    assert _load_source(str(script)) == "99"


def test_load_source_literal_fallback() -> None:
    assert _load_source("let a = 1; a") == "let a = 1; a"


def test_load_source_empty_stdin(monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    with pytest.raises(SystemExit) as exc_info:
        _load_source(None)

    assert exc_info.value.code == "No input provided on stdin"


def test_repl_eval_keeps_bindings() -> None:
    env = Environment()
    assert repl_eval("let add = fn(a, b) { a + b };", env) is None
    assert repl_eval("add(1, 2)", env) == Integer(3)


def test_run_accepts_fresh_environment_each_time() -> None:
    run_program("let only_here = 1;")
    result = run_program("only_here")
    assert is_error(result)


def test_resolve_log_level() -> None:
    assert resolve_log_level(None) is None
    assert resolve_log_level("") is None
    assert resolve_log_level("info") == logging.INFO
    assert resolve_log_level(" Warning ") == logging.WARNING


def test_resolve_log_level_from_env(monkeypatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, "error")
    assert resolve_log_level() == logging.ERROR
    assert resolve_log_level("debug") == logging.DEBUG


def test_resolve_log_level_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown log level: loud"):
        resolve_log_level("loud")


def test_configure_logging_none_is_noop(simian_logger) -> None:
    before = list(simian_logger.handlers)
    configure_logging(None)
    assert simian_logger.handlers == before


def test_configure_logging_attaches_handler(simian_logger) -> None:
    before = len(simian_logger.handlers)
    configure_logging(logging.INFO)

    assert len(simian_logger.handlers) == before + 1
    assert simian_logger.level == logging.INFO


def test_debug_py_trace_toggle() -> None:
    assert not debug_py_trace_enabled()
    set_debug_py_trace(True)
    assert debug_py_trace_enabled()
    set_debug_py_trace(False)
    assert not debug_py_trace_enabled()


def test_debug_py_trace_env_values(monkeypatch) -> None:
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "yes")
    assert debug_py_trace_enabled()
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "0")
    assert not debug_py_trace_enabled()


def test_render_result() -> None:
    assert render_result(None) is None
    assert render_result(run_program("[1, true]")) == "[1, true]"
    assert render_result(run_program("if (false) { 1 }")) == "null"
