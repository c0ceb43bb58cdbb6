"""
Similarity measures and the token scorer used by the sequence aligner.
"""

import math
from typing import Collection

from arabic_ocr_corrector.alignment.distance import bounded_distance, distance
from arabic_ocr_corrector.config import (
    DEFAULT_SIMILARITY_THRESHOLD,
    NormalizePreset,
    ScoringWeight,
)
from arabic_ocr_corrector.text.normalizer import normalize

PERFECT_MATCH = ScoringWeight.PERFECT_MATCH.value
SOFT_MATCH = ScoringWeight.SOFT_MATCH.value
MISMATCH_PENALTY = ScoringWeight.MISMATCH.value

_EPSILON = 1e-9


def similarity_ratio(a: str, b: str) -> float:
    """
    Edit-distance similarity in [0, 1], normalized by the longer string.

    similarity_ratio('hello', 'help') → 0.6
    """
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    return (max_length - distance(a, b)) / max_length


def _max_allowed_distance(length: int, threshold: float, inclusive: bool) -> int:
    """Largest edit distance that still satisfies the threshold, -1 if none does."""
    if threshold >= 1:
        return 0 if inclusive and threshold == 1 else -1

    allowed = (1 - threshold) * length
    if inclusive:
        return math.floor(allowed + _EPSILON)
    if allowed <= 0:
        return -1
    if allowed <= _EPSILON:
        return 0
    return math.ceil(allowed - _EPSILON) - 1


def is_similarity_above_threshold(
    a: str,
    b: str,
    threshold: float,
    inclusive: bool = False,
) -> bool:
    """
    Threshold test on `similarity_ratio` without computing the full distance.

    The distance is only evaluated up to the largest value that can still
    pass, so clearly different strings are rejected early.
    """
    max_length = max(len(a), len(b))
    if max_length == 0:
        return threshold <= 1 if inclusive else threshold < 1

    max_distance = _max_allowed_distance(max_length, threshold, inclusive)
    if max_distance < 0:
        return False

    return bounded_distance(a, b, max_distance) <= max_distance


def normalized_similar(a: str, b: str, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> bool:
    """
    True when both texts are at least `threshold` similar after search normalization.

    normalized_similar('السَّلام', 'السلام', 0.9) → True
    """
    return is_similarity_above_threshold(
        normalize(a, NormalizePreset.SEARCH),
        normalize(b, NormalizePreset.SEARCH),
        threshold,
        inclusive=True,
    )


def score_normalized_pair(
    token_a: str,
    token_b: str,
    normalized_a: str,
    normalized_b: str,
    preserved_symbols: Collection[str],
    threshold: float,
) -> float:
    """`alignment_score` for tokens whose normalized forms are already known."""
    if normalized_a == normalized_b:
        return PERFECT_MATCH

    # An honorific symbol stands in for the phrase it abbreviates
    if (token_a in preserved_symbols) != (token_b in preserved_symbols):
        return SOFT_MATCH

    similarity = similarity_ratio(normalized_a, normalized_b)
    if similarity >= threshold:
        # Rises from SOFT_MATCH at the threshold towards PERFECT_MATCH
        return SOFT_MATCH + (PERFECT_MATCH - SOFT_MATCH) * (similarity - threshold) / (1 - threshold)
    return MISMATCH_PENALTY


def alignment_score(
    token_a: str,
    token_b: str,
    preserved_symbols: Collection[str] = (),
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> float:
    """
    Reward for aligning two tokens with each other.

    Args:
        token_a: Token from the first sequence.
        token_b: Token from the second sequence.
        preserved_symbols: Atomic symbols such as ﷺ.
        threshold: Similarity at which two different tokens still count as a match.

    Returns:
        PERFECT_MATCH for tokens equal after normalization, SOFT_MATCH for a
        symbol against a word, a value in [SOFT_MATCH, PERFECT_MATCH) for
        similar tokens and MISMATCH_PENALTY otherwise.
    """
    return score_normalized_pair(
        token_a,
        token_b,
        normalize(token_a, NormalizePreset.SEARCH),
        normalize(token_b, NormalizePreset.SEARCH),
        preserved_symbols,
        threshold,
    )
