from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .environment import Environment
from .evaluator import eval_expr
from .parser import ParseError, parse_source
from .runtime import Value, is_error
from .utils import configure_logging, render_result, resolve_log_level

logger = logging.getLogger(__name__)

def run(src: str, env: Optional[Environment]=None, grammar_path: Optional[str]=None) -> Optional[Value]:
    """Parse and evaluate a whole program. Returns None if it produced no value."""
    tree = parse_source(src, grammar_path=grammar_path)
    logger.debug("parsed %d top-level statement(s)", len(tree.children))

    result = eval_expr(tree, env if env is not None else Environment())
    logger.debug("program result: %r", result)

    return result

def repl_eval(text: str, env: Environment) -> Optional[Value]:
    """Evaluate one REPL submission; bindings persist in `env` across calls."""
    return run(text, env=env)

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg

def main(argv: Optional[list[str]]=None) -> None:
    grammar_path = None
    log_level = None
    force_repl = False
    arg = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token == "--repl":
            force_repl = True
            continue

        if token.startswith("--grammar="):
            grammar_path = token.split("=", 1)[1]
            continue

        if token == "--grammar":
            try:
                grammar_path = next(it)
            except StopIteration:
                raise SystemExit("--grammar flag requires a path") from None
            continue

        if token.startswith("--log-level="):
            log_level = token.split("=", 1)[1]
            continue

        if token == "--log-level":
            try:
                log_level = next(it)
            except StopIteration:
                raise SystemExit("--log-level flag requires a level") from None
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    try:
        configure_logging(resolve_log_level(log_level))
    except ValueError as exc:
        raise SystemExit(str(exc)) from None

    if force_repl or (arg is None and sys.stdin.isatty()):
        from .repl import repl  # prompt_toolkit only needed interactively

        repl()
        return

    source = _load_source(arg)

    try:
        result = run(source, grammar_path=grammar_path)
    except ParseError as exc:
        print(f"parser error: {exc}", file=sys.stderr)
        raise SystemExit(2) from None

    rendered = render_result(result)

    if is_error(result):
        print(rendered, file=sys.stderr)
        raise SystemExit(1)

    if rendered is not None:
        print(rendered)

if __name__ == "__main__":
    main()
