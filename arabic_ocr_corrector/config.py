"""
Configuration management for the Arabic OCR correction engine.
"""

import math
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NormalizePreset(Enum):
    DISPLAY = "display"
    SEARCH = "search"
    AGGRESSIVE = "aggressive"


class ScoringWeight(Enum):
    """Rewards and penalties used by the token aligner."""
    PERFECT_MATCH = 2.0     # Tokens identical after normalization
    SOFT_MATCH = 1.0        # Lowest reward for a similar token or a typo symbol
    MISMATCH = -2.0         # Dissimilar tokens
    GAP = -1.0              # One side contributes no token


DEFAULT_SIMILARITY_THRESHOLD = 0.6
DEFAULT_HIGH_SIMILARITY_THRESHOLD = 0.8


def _threshold_from_env(var: str, default: float) -> float:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{var} must be a number, got {raw!r}")


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass
class CorrectionConfig:
    """Options for merging an OCR line with its reference transcript."""
    # Symbols (honorifics and similar ligatures) kept as atomic tokens
    typo_symbols: list[str] = field(default_factory=list)

    # Thresholds, loaded from env vars if not set
    similarity_threshold: Optional[float] = None
    high_similarity_threshold: Optional[float] = None

    def __post_init__(self):
        """Fill unset thresholds from the environment, then validate them."""
        if self.similarity_threshold is None:
            self.similarity_threshold = _threshold_from_env(
                "ARABIC_OCR_SIMILARITY_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD
            )
        if self.high_similarity_threshold is None:
            self.high_similarity_threshold = _threshold_from_env(
                "ARABIC_OCR_HIGH_SIMILARITY_THRESHOLD", DEFAULT_HIGH_SIMILARITY_THRESHOLD
            )
        _check_unit_interval("similarity_threshold", self.similarity_threshold)
        _check_unit_interval("high_similarity_threshold", self.high_similarity_threshold)
        self.typo_symbols = [s for s in self.typo_symbols if s]


@dataclass
class MatchPolicy:
    """Excerpt search configuration."""
    enable_fuzzy: bool = True
    # Edit budget: max(max_edit_abs, ceil(max_edit_rel * len(excerpt)))
    max_edit_abs: int = 3
    max_edit_rel: float = 0.1
    # Candidate generation
    q: int = 4
    grams_per_excerpt: int = 5
    max_candidates_per_excerpt: int = 40
    # Characters taken from each side of a page break
    seam_len: int = 512
    # Hits scoring below this are dropped from ranked results
    min_relevance: float = 0.0

    def __post_init__(self):
        if self.max_edit_abs < 0:
            raise ValueError("max_edit_abs must be non-negative")
        if self.max_edit_rel < 0:
            raise ValueError("max_edit_rel must be non-negative")
        if self.q < 1:
            raise ValueError("q must be at least 1")
        if self.grams_per_excerpt < 1 or self.max_candidates_per_excerpt < 1:
            raise ValueError("grams_per_excerpt and max_candidates_per_excerpt must be positive")
        _check_unit_interval("min_relevance", self.min_relevance)

    def max_distance(self, excerpt_length: int) -> int:
        """Return the edit budget for an excerpt of the given length."""
        return max(self.max_edit_abs, math.ceil(self.max_edit_rel * excerpt_length))
