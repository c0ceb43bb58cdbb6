"""Line correction against a reference transcript and footnote reference repair."""

from arabic_ocr_corrector.correction.corrector import TextCorrector, correct
from arabic_ocr_corrector.correction.references import (
    FootnoteLine,
    correct_references,
    has_invalid_footnotes,
)

__all__ = [
    "FootnoteLine",
    "TextCorrector",
    "correct",
    "correct_references",
    "has_invalid_footnotes",
]
