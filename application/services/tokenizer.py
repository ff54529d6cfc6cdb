"""Splits text into lowercase word tokens."""
from __future__ import annotations

import re

_NON_WORD = re.compile(r"\W+", re.ASCII)


def tokenize(text: str | None) -> list[str]:
    """Return lowercase tokens of ``text`` in order of appearance.

    A word character is ``[A-Za-z0-9_]``; any run of other characters is a
    separator. No stemming and no stop words.
    """
    if not text:
        return []
    return [token for token in _NON_WORD.split(text.lower()) if token]


def unique_tokens(text: str | None) -> list[str]:
    """Tokenize and drop repeats, keeping the first occurrence order."""
    return list(dict.fromkeys(tokenize(text)))


__all__ = ["tokenize", "unique_tokens"]
