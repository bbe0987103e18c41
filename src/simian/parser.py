"""
Reference front end: source text -> the lark trees `simian.evaluator` consumes.

The evaluator does not depend on this module; any producer of the shapes
documented in `simian.tree` will do.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from lark import Lark, Token, Tree, UnexpectedCharacters, UnexpectedInput, UnexpectedToken

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"

_INT64_MAX = (1 << 63) - 1

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, line: Optional[int]=None, column: Optional[int]=None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(
            f"{message} at line {line}, col {column}" if line is not None else message
        )

def _strip_quotes(tok: Token) -> Token:
    return tok.update(value=tok.value[1:-1])

def _check_int(tok: Token) -> Token:
    if int(tok.value) > _INT64_MAX:
        raise ParseError(f"could not parse {tok.value} as integer", tok.line, tok.column)
    return tok

def _read_grammar(grammar_path: Optional[str]) -> str:
    path = Path(grammar_path) if grammar_path else GRAMMAR_PATH
    return path.read_text(encoding="utf-8")

@lru_cache(maxsize=4)
def make_parser(grammar_path: Optional[str]=None) -> Lark:
    logger.debug("building LALR parser from %s", grammar_path or GRAMMAR_PATH)

    return Lark(
        _read_grammar(grammar_path),
        parser="lalr",
        start="program",
        propagate_positions=True,
        maybe_placeholders=False,
        lexer_callbacks={"STRING": _strip_quotes, "INT": _check_int},
    )

def parse_source(src: str, grammar_path: Optional[str]=None) -> Tree:
    parser = make_parser(grammar_path)

    try:
        return parser.parse(src)
    except UnexpectedToken as exc:
        shown = exc.token.value or exc.token.type
        expected = ", ".join(sorted(exc.expected))
        raise ParseError(f"unexpected token {shown!r}, expected one of: {expected}", exc.line, exc.column) from None
    except UnexpectedCharacters as exc:
        raise ParseError(f"unexpected character {src[exc.pos_in_stream]!r}", exc.line, exc.column) from None
    except UnexpectedInput as exc:
        raise ParseError(str(exc), getattr(exc, "line", None), getattr(exc, "column", None)) from None
