"""Exact and fuzzy excerpt search over book pages."""

from arabic_ocr_corrector.search.matcher import (
    ExcerptMatcher,
    find_all_matches,
    find_best_match,
    find_matches,
    find_matches_all,
)
from arabic_ocr_corrector.search.qgram import QGramIndex

__all__ = [
    "ExcerptMatcher",
    "QGramIndex",
    "find_all_matches",
    "find_best_match",
    "find_matches",
    "find_matches_all",
]
