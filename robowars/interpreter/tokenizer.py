"""Script text -> tokens, and token <-> stack value conversion.

Syntax:
  - tokens are separated by whitespace
  - ``( ... )`` is a comment; comments nest and end at the end of the line
  - ``."text"`` is a string literal and may contain spaces and parentheses
  - integers are signed decimals; ``true`` / ``false`` are booleans
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_INT_RE = re.compile(r"^[+-]?\d+$")
STRING_PREFIX = '."'


@dataclass(frozen=True)
class VariableRef:
    """Address of a user variable, as pushed by naming the variable."""

    name: str

    def __str__(self) -> str:
        return f"#{self.name}"


Value = Union[bool, int, str, VariableRef]


# ── Comments ──

def strip_comments(line: str) -> str:
    """Remove ``( ... )`` comments from a single line.

    Matched pairs are removed with everything between them. An unmatched
    ``(`` or ``)`` is dropped on its own. Parentheses inside a ``."..."``
    string literal are part of the string, not comments.
    """
    out: list[str] = []
    i, n = 0, len(line)
    while i < n:
        if line.startswith(STRING_PREFIX, i):
            end = _string_end(line, i)
            out.append(line[i:end])
            i = end
            continue
        ch = line[i]
        if ch == "(":
            end = _matching_paren(line, i)
            i = end + 1 if end >= 0 else i + 1
            continue
        if ch != ")":
            out.append(ch)
        i += 1
    return "".join(out)


def _string_end(line: str, start: int) -> int:
    """Index just past the closing quote of the literal at *start*."""
    close = line.find('"', start + len(STRING_PREFIX))
    return len(line) if close < 0 else close + 1


def _matching_paren(line: str, start: int) -> int:
    depth = 0
    j, n = start, len(line)
    while j < n:
        if line.startswith(STRING_PREFIX, j):
            j = _string_end(line, j)
            continue
        if line[j] == "(":
            depth += 1
        elif line[j] == ")":
            depth -= 1
            if depth == 0:
                return j
        j += 1
    return -1


# ── Tokenizer ──

def tokenize(source: str) -> list[str]:
    tokens: list[str] = []
    for line in source.splitlines():
        tokens.extend(_tokenize_line(strip_comments(line)))
    return tokens


def _tokenize_line(line: str) -> list[str]:
    tokens = []
    i, n = 0, len(line)
    while i < n:
        while i < n and line[i].isspace():
            i += 1
        if i >= n:
            break
        if line.startswith(STRING_PREFIX, i):
            j = line.find('"', i + 2)
            if j < 0:
                j = n
            tokens.append(f'{STRING_PREFIX}{line[i + 2:j]}"')
            i = j + 1
            continue
        j = i
        while j < n and not line[j].isspace():
            j += 1
        tokens.append(line[i:j])
        i = j
    return tokens


# ── Values ──

def parse_literal(token: str) -> Value | None:
    """Return the value a literal token denotes, or None if it is not one."""
    if _INT_RE.match(token):
        return int(token)
    lowered = token.casefold()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if token.startswith(STRING_PREFIX) and token.endswith('"') and len(token) >= 3:
        return token[2:-1]
    return None


def format_value(value: Value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_payload(payload: str) -> Value:
    """Restore a received message payload to a typed stack value."""
    if _INT_RE.match(payload):
        return int(payload)
    if payload in ("true", "false"):
        return payload == "true"
    return payload
