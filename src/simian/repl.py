"""Interactive REPL for Simian, powered by prompt_toolkit."""

from __future__ import annotations

import getpass
import re
import sys
import traceback
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.shortcuts import clear

from .environment import Environment
from .parser import ParseError
from .repl_highlight import SimianLexer
from .runner import repl_eval
from .runtime import init_builtins, is_error
from .utils import debug_py_trace_enabled, render_result, set_debug_py_trace

PROMPT = ">> "

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/env": ("List bindings in the session environment", ""),
    "/py-traceback": ("Toggle Python traceback on host faults", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=f"{desc} {hint}".rstrip(),
                )


def _handle_slash(line: str, env_box: list[Environment]) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/env":
        env = env_box[0]
        for name in env.names():
            val, _ = env.get(name)
            print(f"{name} = {render_result(val)}")
        return True

    if cmd == "/py-traceback":
        if arg.lower() in ("on", "1", "true", "yes"):
            set_debug_py_trace(True)
        elif arg.lower() in ("off", "0", "false", "no"):
            set_debug_py_trace(False)
        elif arg == "":
            set_debug_py_trace(not debug_py_trace_enabled())
        else:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        state = "on" if debug_py_trace_enabled() else "off"
        print(f"Python traceback: {state}")
        return True

    if cmd == "/reset":
        env_box[0] = Environment()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def eval_line(text: str, env_box: list[Environment]) -> None:
    """Evaluate one submission and print its outcome."""
    try:
        result = repl_eval(text, env_box[0])
    except ParseError as exc:
        print(f"parser error: {exc}", file=sys.stderr)
        return
    except (ArithmeticError, RecursionError) as exc:
        # host faults end the evaluation, not the session
        print(f"fatal: {type(exc).__name__}: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            print("\nPython traceback:", file=sys.stderr)
            print("".join(traceback.format_tb(exc.__traceback__)), file=sys.stderr, end="")
        return

    rendered = render_result(result)
    if rendered is None:
        return

    if is_error(result):
        print(rendered, file=sys.stderr)
    else:
        print(rendered)


def _greeting() -> str:
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "there"

    return f"Hello {user}! This is the Simian programming language!\nFeel free to type in commands (Ctrl-D to exit, / for commands)"


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    init_builtins()
    # Use a mutable box so /reset can swap the environment.
    env_box: list[Environment] = [Environment()]

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=SimianLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
    )

    print(_greeting())

    while True:
        try:
            text = session.prompt(PROMPT)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if _handle_slash(text, env_box):
            continue

        eval_line(text, env_box)
