"""Edit distance, similarity scoring, token alignment and footnote reconciliation."""

from arabic_ocr_corrector.alignment.aligner import (
    AlignedPair,
    AlignmentCell,
    AlignmentMatrix,
    Direction,
    align_tokens,
    backtrack,
    build_alignment_matrix,
)
from arabic_ocr_corrector.alignment.distance import bounded_distance, distance
from arabic_ocr_corrector.alignment.footnotes import (
    FootnoteMarker,
    MarkerKind,
    classify_marker,
    fuse,
    pair_standalone,
    select_embedded,
)
from arabic_ocr_corrector.alignment.segments import align_segments
from arabic_ocr_corrector.alignment.similarity import (
    alignment_score,
    is_similarity_above_threshold,
    normalized_similar,
    similarity_ratio,
)

__all__ = [
    "AlignedPair",
    "AlignmentCell",
    "AlignmentMatrix",
    "Direction",
    "FootnoteMarker",
    "MarkerKind",
    "align_segments",
    "align_tokens",
    "alignment_score",
    "backtrack",
    "bounded_distance",
    "build_alignment_matrix",
    "classify_marker",
    "distance",
    "fuse",
    "is_similarity_above_threshold",
    "normalized_similar",
    "pair_standalone",
    "select_embedded",
    "similarity_ratio",
]
