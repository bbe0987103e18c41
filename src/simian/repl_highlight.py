"""prompt_toolkit lexer for live Simian syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from lark import UnexpectedInput
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .parser import ParseError, make_parser
from .runtime import Builtins, init_builtins

# Map highlight groups -> prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "builtin": "bold ansiyellow",
    "identifier": "",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansigray",
    "error": "bold ansired",
}

# Lark names anonymous keyword terminals after their text.
_TYPE_GROUP = {
    "LET": "keyword",
    "FN": "keyword",
    "IF": "keyword",
    "ELSE": "keyword",
    "RETURN": "keyword",
    "TRUE": "boolean",
    "FALSE": "boolean",
    "INT": "number",
    "STRING": "string",
    "COMMENT": "comment",
    "EQ": "operator",
    "NOT_EQ": "operator",
    "LT": "operator",
    "GT": "operator",
    "PLUS": "operator",
    "MINUS": "operator",
    "STAR": "operator",
    "SLASH": "operator",
    "BANG": "operator",
    "EQUAL": "operator",
}

class SimianLexer(Lexer):
    """Colours one line at a time; an unlexable tail is shown as an error."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines
        init_builtins()

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno >= len(lines):
                return []
            return highlight_line(lines[lineno])

        return get_line

def _group_for(tok_type: str, text: str) -> str:
    if tok_type == "IDENT":
        return "builtin" if text in Builtins.functions else "identifier"

    return _TYPE_GROUP.get(tok_type, "punctuation")

def highlight_line(line: str) -> StyleAndTextTuples:
    out: StyleAndTextTuples = []
    pos = 0

    try:
        for tok in make_parser().lex(line, dont_ignore=True):
            start, end = tok.start_pos, tok.end_pos
            if start > pos:
                out.append(("", line[pos:start]))

            # slice the source: lexer callbacks may have rewritten tok.value
            text = line[start:end]
            out.append((GROUP_STYLE[_group_for(tok.type, text)], text))
            pos = end
    except (UnexpectedInput, ParseError):
        pass

    if pos < len(line):
        out.append((GROUP_STYLE["error"], line[pos:]))

    return out
