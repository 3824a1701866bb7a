"""Reader for the s-expression records printed by ``mu find --format=sexp``.

Only the subset mu emits is understood: lists, double-quoted strings,
integers, floats and bare symbols (keywords such as ``:subject``, ``t`` and
``nil``). Reading stops with ``IncompleteRecord`` when the text ends inside a
form, so callers can retry once more output has arrived.
"""

import re
from typing import Any

from .errors import IncompleteRecord, MalformedRecord

_WHITESPACE = re.compile(r"\s*")
_ATOM = re.compile(r"[^\s()\"]+")
_STRING_RUN = re.compile(r"[^\"\\]*")
_INT = re.compile(r"[-+]?\d+")
_FLOAT = re.compile(r"[-+]?\d*\.\d+(?:e[-+]?\d+)?|[-+]?\d+e[-+]?\d+", re.IGNORECASE)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "e": "\x1b", "s": " "}


class Symbol(str):
    """A bare atom such as ``:subject`` or ``mu``."""

    __slots__ = ()

    @property
    def is_keyword(self) -> bool:
        """Whether the symbol is a keyword (starts with a colon)."""
        return self.startswith(":")


def skip_whitespace(text: str, pos: int) -> int:
    """Return the first non-whitespace position at or after ``pos``."""
    match = _WHITESPACE.match(text, pos)
    return match.end() if match else pos


def read(text: str, pos: int = 0) -> tuple[Any, int]:
    """Read one form starting at ``pos``.

    Returns:
        The decoded value and the position just past it.

    Raises:
        IncompleteRecord: The text ends before the form does.
        MalformedRecord: The text at ``pos`` is not a valid form.
    """
    pos = skip_whitespace(text, pos)
    if pos >= len(text):
        raise IncompleteRecord("end of input", pos)
    char = text[pos]
    if char == "(":
        return _read_list(text, pos)
    if char == ")":
        raise MalformedRecord("unexpected ')'", pos)
    if char == '"':
        return _read_string(text, pos)
    return _read_atom(text, pos)


def _read_list(text: str, start: int) -> tuple[list[Any], int]:
    items: list[Any] = []
    pos = start + 1
    while True:
        pos = skip_whitespace(text, pos)
        if pos >= len(text):
            raise IncompleteRecord("unterminated list", start)
        if text[pos] == ")":
            return items, pos + 1
        item, pos = read(text, pos)
        items.append(item)


def _read_string(text: str, start: int) -> tuple[str, int]:
    parts: list[str] = []
    pos = start + 1
    while True:
        run = _STRING_RUN.match(text, pos)
        if run:
            parts.append(run.group())
            pos = run.end()
        if pos >= len(text):
            raise IncompleteRecord("unterminated string", start)
        if text[pos] == '"':
            return "".join(parts), pos + 1
        # backslash escape
        if pos + 1 >= len(text):
            raise IncompleteRecord("unterminated escape", start)
        escaped = text[pos + 1]
        if escaped != "\n":
            parts.append(_ESCAPES.get(escaped, escaped))
        pos += 2


def _read_atom(text: str, pos: int) -> tuple[Any, int]:
    match = _ATOM.match(text, pos)
    if not match:
        raise MalformedRecord("unreadable atom", pos)
    token = match.group()
    end = match.end()
    if end >= len(text):
        # A bare atom is only complete once something delimits it.
        raise IncompleteRecord("unterminated atom", pos)
    if _INT.fullmatch(token):
        return int(token), end
    if _FLOAT.fullmatch(token):
        return float(token), end
    if token == "nil":
        return None, end
    if token == "t":
        return True, end
    return Symbol(token), end
