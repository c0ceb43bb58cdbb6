"""
Arabic OCR Corrector
====================

Corrects OCR transcripts of Arabic books by aligning them against a second
transcript of the same text, and locates OCR excerpts in the pages of a book.

Architecture:
    Text → Normalization → Tokenization → Needleman-Wunsch token alignment
        → Per-pair token selection → Footnote fusion / echo removal → Corrected line

Building blocks:
    1. Edit distance: full and banded (bounded) Levenshtein
    2. Token scorer: normalized equality, honorific symbols, similarity curve
    3. Footnote reconciliation: standalone (٥) and embedded (٥)word markers
    4. Segment alignment: rejoining split or swapped lines
    5. Excerpt search: exact containment, then q-gram seeded fuzzy windows
    6. Footnote reference repair: OCR look-alike digits and empty markers
"""

__version__ = "1.0.0"
__author__ = "Arabic OCR Corrector"

from arabic_ocr_corrector.config import CorrectionConfig, MatchPolicy, NormalizePreset


def __getattr__(name: str):
    """Lazy import for modules that pull in numpy."""
    if name == "TextCorrector":
        from arabic_ocr_corrector.correction.corrector import TextCorrector
        return TextCorrector
    if name == "correct":
        from arabic_ocr_corrector.correction.corrector import correct
        return correct
    if name == "align_tokens":
        from arabic_ocr_corrector.alignment.aligner import align_tokens
        return align_tokens
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "CorrectionConfig",
    "MatchPolicy",
    "NormalizePreset",
    "TextCorrector",
    "align_tokens",
    "correct",
]
