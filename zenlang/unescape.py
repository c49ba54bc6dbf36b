"""Expansion of backslash escape sequences written out literally in text."""

from __future__ import annotations

from collections import deque
import string

__all__ = ["unescape"]

_SIMPLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "'": "'",
    '"': '"',
    "\\": "\\",
}

_DIGITS = {8: frozenset(string.octdigits), 16: frozenset(string.hexdigits)}


def _parse(text: str, base: int) -> int | None:
    """Parse an unsigned number, allowing one leading '+'; None if invalid."""
    if text.startswith("+"):
        text = text[1:]
    if not text or any(ch not in _DIGITS[base] for ch in text):
        return None
    return int(text, base)


def _to_char(code: int | None, sequence: str) -> str:
    if code is None:
        raise ValueError(f"invalid escape sequence \\{sequence}")
    if 0xD800 <= code <= 0xDFFF or code > 0x10FFFF:
        raise ValueError(f"escape \\{sequence} is not a valid character")
    return chr(code)


def _take(queue: deque[str], count: int, kind: str) -> str:
    if len(queue) < count:
        raise ValueError(f"truncated \\{kind} escape")
    return "".join(queue.popleft() for _ in range(count))


def _octal(first: str, queue: deque[str]) -> str:
    if first in "0123" and len(queue) >= 2:
        code = _parse(first + queue[0] + queue[1], 8)
        if code is not None:
            queue.popleft()
            queue.popleft()
            return chr(code)
    if not queue:
        raise ValueError(f"truncated octal escape \\{first}")
    digits = first + queue.popleft()
    return _to_char(_parse(digits, 8), digits)


def unescape(s: str) -> str:
    """Replace backslash escapes in ``s`` with the characters they stand for.

    Raises ValueError when an escape is unknown, truncated or malformed.
    """
    queue = deque(s)
    out: list[str] = []
    while queue:
        c = queue.popleft()
        if c != "\\":
            out.append(c)
            continue
        if not queue:
            raise ValueError("dangling backslash at end of string")
        kind = queue.popleft()
        if kind in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[kind])
        elif kind == "u":
            digits = _take(queue, 4, kind)
            out.append(_to_char(_parse(digits, 16), kind + digits))
        elif kind == "x":
            digits = _take(queue, 2, kind)
            out.append(_to_char(_parse(digits, 16), kind + digits))
        elif kind in string.octdigits:
            out.append(_octal(kind, queue))
        else:
            raise ValueError(f"unknown escape sequence \\{kind}")
    return "".join(out)