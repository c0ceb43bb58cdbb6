"""
Global token alignment (Needleman-Wunsch).

The full (|A|+1) x (|B|+1) matrix is kept because backtracking needs the
direction of every cell. Time and memory are O(|A|·|B|), which is fine for
lines and paragraphs but not for whole books; use `bounded_distance` for bulk
matching instead.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Collection, NamedTuple, Optional, Sequence

import numpy as np

from arabic_ocr_corrector.alignment.similarity import score_normalized_pair
from arabic_ocr_corrector.config import DEFAULT_SIMILARITY_THRESHOLD, NormalizePreset, ScoringWeight
from arabic_ocr_corrector.text.normalizer import normalize

logger = logging.getLogger(__name__)

GAP_PENALTY = ScoringWeight.GAP.value


class Direction(IntEnum):
    NONE = 0        # origin only
    DIAGONAL = 1
    UP = 2
    LEFT = 3


@dataclass(frozen=True)
class AlignmentCell:
    direction: Direction
    score: float


class AlignedPair(NamedTuple):
    """Two aligned tokens; None marks a gap on that side."""
    left: Optional[str]
    right: Optional[str]


class AlignmentMatrix:
    """Scores and back-pointers of a global alignment."""

    def __init__(self, rows: int, cols: int):
        self.scores = np.zeros((rows, cols), dtype=np.float64)
        self.directions = np.full((rows, cols), Direction.NONE, dtype=np.int8)

        # Pure insertions / deletions from the origin
        self.scores[:, 0] = np.arange(rows) * GAP_PENALTY
        self.scores[0, :] = np.arange(cols) * GAP_PENALTY
        self.directions[1:, 0] = Direction.UP
        self.directions[0, 1:] = Direction.LEFT

    @property
    def shape(self) -> tuple[int, int]:
        return self.scores.shape

    def cell(self, i: int, j: int) -> AlignmentCell:
        return AlignmentCell(Direction(int(self.directions[i, j])), float(self.scores[i, j]))


def build_alignment_matrix(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    preserved_symbols: Collection[str] = (),
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> AlignmentMatrix:
    """
    Fill the scoring matrix of two token sequences.

    Ties between predecessors go to the diagonal, then up, then left.
    """
    rows, cols = len(tokens_a) + 1, len(tokens_b) + 1
    matrix = AlignmentMatrix(rows, cols)

    symbols = frozenset(preserved_symbols)
    normalized_a = [normalize(t, NormalizePreset.SEARCH) for t in tokens_a]
    normalized_b = [normalize(t, NormalizePreset.SEARCH) for t in tokens_b]

    scores = matrix.scores
    directions = matrix.directions

    for i in range(1, rows):
        token_a, norm_a = tokens_a[i - 1], normalized_a[i - 1]
        for j in range(1, cols):
            match = score_normalized_pair(
                token_a, tokens_b[j - 1], norm_a, normalized_b[j - 1], symbols, threshold
            )
            diagonal = scores[i - 1, j - 1] + match
            up = scores[i - 1, j] + GAP_PENALTY
            left = scores[i, j - 1] + GAP_PENALTY
            best = max(diagonal, up, left)

            scores[i, j] = best
            if best == diagonal:
                directions[i, j] = Direction.DIAGONAL
            elif best == up:
                directions[i, j] = Direction.UP
            else:
                directions[i, j] = Direction.LEFT

    return matrix


def backtrack(
    matrix: AlignmentMatrix,
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
) -> list[AlignedPair]:
    """Walk the back-pointers from the far corner to the origin."""
    pairs = []
    i, j = len(tokens_a), len(tokens_b)

    while i > 0 or j > 0:
        direction = matrix.directions[i, j]
        if direction == Direction.DIAGONAL:
            i -= 1
            j -= 1
            pairs.append(AlignedPair(tokens_a[i], tokens_b[j]))
        elif direction == Direction.UP:
            i -= 1
            pairs.append(AlignedPair(tokens_a[i], None))
        elif direction == Direction.LEFT:
            j -= 1
            pairs.append(AlignedPair(None, tokens_b[j]))
        else:
            raise ValueError(f"Invalid alignment direction at ({i}, {j})")

    pairs.reverse()
    return pairs


def align_tokens(
    tokens_a: Sequence[str],
    tokens_b: Sequence[str],
    preserved_symbols: Collection[str] = (),
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[AlignedPair]:
    """
    Globally align two token sequences.

    align_tokens(['a', 'b'], ['a', 'c']) → [('a', 'a'), ('b', 'c')]

    Returns:
        Aligned pairs in reading order; a side is None where that sequence
        contributes no token.
    """
    matrix = build_alignment_matrix(tokens_a, tokens_b, preserved_symbols, threshold)
    pairs = backtrack(matrix, tokens_a, tokens_b)
    logger.debug(
        "Aligned %d x %d tokens into %d pairs (score %.1f)",
        len(tokens_a), len(tokens_b), len(pairs), matrix.scores[-1, -1],
    )
    return pairs
