"""Extracts context snippets around query terms."""
from __future__ import annotations

import re
from typing import Sequence

from domain.entities import WordContextSnippet

CONTEXT_SIZE = 30
MAX_SNIPPETS_PER_TERM = 2
SENTENCE_TERMINATORS = frozenset(".!?\n")


def build_word_snippets(
    content: str | None,
    tokens: Sequence[str],
    *,
    context_size: int = CONTEXT_SIZE,
    max_snippets: int = MAX_SNIPPETS_PER_TERM,
) -> list[WordContextSnippet]:
    """Return up to ``max_snippets`` fragments of ``content`` per token.

    Each fragment spans ``context_size`` characters on both sides of a
    case-insensitive match, narrowed to the closest sentence terminators
    inside that window. Fragments not touching the start or end of the
    content get ``"... "`` / ``" ..."`` markers. Tokens without a match are
    left out.
    """
    if not content or not content.strip():
        return []

    result: list[WordContextSnippet] = []
    for token in dict.fromkeys(token.lower() for token in tokens if token and token.strip()):
        snippets: list[str] = []
        for match in re.finditer(re.escape(token), content, re.IGNORECASE | re.ASCII):
            if len(snippets) >= max_snippets:
                break
            snippets.append(_snippet_for_match(content, match.start(), match.end(), context_size))
        if snippets:
            result.append(WordContextSnippet(term=token, snippets=snippets))
    return result


def _snippet_for_match(content: str, match_start: int, match_end: int, context_size: int) -> str:
    rough_start = max(0, match_start - context_size)
    rough_end = min(len(content), match_end + context_size)

    start = _adjust_start(content, rough_start, match_start)
    end = max(start, _adjust_end(content, rough_end, match_end))

    snippet = content[start:end]
    if start > 0:
        snippet = "... " + snippet
    if end < len(content):
        snippet = snippet + " ..."
    return snippet.strip()


def _adjust_start(content: str, rough_start: int, match_start: int) -> int:
    # the snippet starts right after the closest terminator before the match
    for position in range(match_start - 1, rough_start - 1, -1):
        if content[position] in SENTENCE_TERMINATORS:
            return position + 1
    return rough_start


def _adjust_end(content: str, rough_end: int, match_end: int) -> int:
    # the closest terminator after the match is kept in the snippet
    for position in range(match_end, rough_end):
        if content[position] in SENTENCE_TERMINATORS:
            return position + 1
    return rough_end


__all__ = ["CONTEXT_SIZE", "MAX_SNIPPETS_PER_TERM", "build_word_snippets"]
