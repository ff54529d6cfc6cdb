"""TF-IDF scoring with a title boost and smoothed IDF."""
from __future__ import annotations

import math

TITLE_BOOST = 3.0
# documents scoring below this are dropped from results
MIN_SCORE = 0.1


def term_frequency(title_freq: int, content_freq: int, title_boost: float = TITLE_BOOST) -> float:
    """Title occurrences weigh ``title_boost`` times as much as body ones."""
    return content_freq + title_boost * title_freq


def smoothed_idf(total_documents: int, document_frequency: int) -> float:
    """Smoothed inverse document frequency: ``ln((N + 1) / (df + 1))``.

    With one document or none there is nothing to compare against, so plain
    TF stays the ranking signal (1.0). A term found nowhere contributes 0.0.
    """
    if total_documents <= 1:
        return 1.0
    if document_frequency == 0:
        return 0.0
    return math.log((total_documents + 1) / (document_frequency + 1))


__all__ = ["MIN_SCORE", "TITLE_BOOST", "smoothed_idf", "term_frequency"]
