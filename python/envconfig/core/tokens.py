"""Naive delimiter tokenizer for list and map values.

Values are split on exact occurrences of a single character. There is no
escaping, trimming or quoting, so element values cannot contain the
separator themselves:

    list(tokenize("a,b,c", ","))    → ["a", "b", "c"]
    list(tokenize("a,b,", ","))     → ["a", "b", ""]
    list(tokenize("", ","))         → [""]
"""

from __future__ import annotations

from collections.abc import Iterator

LIST_SEPARATOR = ","
ENTRY_SEPARATOR = ":"


class Tokens:
    """Lazy, restartable sequence of tokens; every iteration starts over."""

    __slots__ = ("_text", "_separator")

    def __init__(self, text: str, separator: str):
        if len(separator) != 1:
            raise ValueError(f"separator must be a single character, got {separator!r}")
        self._text = text
        self._separator = separator

    def __iter__(self) -> Iterator[str]:
        text, separator = self._text, self._separator
        start = 0
        while True:
            end = text.find(separator, start)
            if end < 0:
                yield text[start:]
                return
            yield text[start:end]
            start = end + 1

    def __repr__(self) -> str:
        return f"Tokens({self._text!r}, {self._separator!r})"


def tokenize(text: str, separator: str) -> Tokens:
    """Split ``text`` on every occurrence of ``separator``."""
    return Tokens(text, separator)


__all__ = ["LIST_SEPARATOR", "ENTRY_SEPARATOR", "Tokens", "tokenize"]
