"""
Line-level reconstruction of OCR output that split or swapped lines.

A poetry verse printed as two hemistichs, or a line the OCR engine read in the
wrong column order, comes back as two segments. Given the reference line
boundaries, the segments are consumed one or two at a time so the result
follows the reference's lines.
"""

import logging
from typing import Sequence

from arabic_ocr_corrector.alignment.similarity import normalized_similar, similarity_ratio
from arabic_ocr_corrector.config import DEFAULT_SIMILARITY_THRESHOLD, NormalizePreset
from arabic_ocr_corrector.text.normalizer import normalize

logger = logging.getLogger(__name__)


def _best_merge(target_line: str, part_a: str, part_b: str) -> str:
    """Join two segments in the order closer to the target line; ties keep reading order."""
    forward = f"{part_a} {part_b}"
    reversed_ = f"{part_b} {part_a}"

    target = normalize(target_line, NormalizePreset.SEARCH)
    forward_score = similarity_ratio(target, normalize(forward, NormalizePreset.SEARCH))
    reversed_score = similarity_ratio(target, normalize(reversed_, NormalizePreset.SEARCH))

    return forward if forward_score >= reversed_score else reversed_


def _align_target(
    target_line: str,
    segments: Sequence[str],
    index: int,
    threshold: float,
) -> tuple[str, int]:
    """Return the reconstructed line and how many segments it consumed."""
    current = segments[index]

    if normalized_similar(target_line, current, threshold):
        return current, 1

    following = segments[index + 1] if index + 1 < len(segments) else ""
    if not current or not following:
        # Nothing to merge with; an empty segment is skipped
        return current, 1

    return _best_merge(target_line, current, following), 2


def align_segments(
    target_lines: Sequence[str],
    segments: Sequence[str],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[str]:
    """
    Rebuild OCR segments along the reference's line boundaries.

    Args:
        target_lines: Reference lines; an empty entry copies the next segment as is.
        segments: OCR lines, possibly split or out of order.
        threshold: Similarity at which a single segment already matches a line.

    Returns:
        Reconstructed lines followed by any segments left over.
    """
    aligned = []
    index = 0

    for target_line in target_lines:
        if index >= len(segments):
            break

        if not target_line:
            aligned.append(segments[index])
            index += 1
            continue

        line, consumed = _align_target(target_line, segments, index, threshold)
        if line:
            aligned.append(line)
        index += consumed

    if index < len(segments):
        logger.debug("Appending %d unconsumed segments", len(segments) - index)
        aligned.extend(segments[index:])

    return aligned
