"""Text-level helpers: tokenization, normalization, noise and balance checks."""

from arabic_ocr_corrector.text.balance import (
    are_brackets_balanced,
    are_quotes_balanced,
    check_balance,
    get_unbalanced_errors,
    is_balanced,
)
from arabic_ocr_corrector.text.noise import analyze_character_stats, is_arabic_text_noise
from arabic_ocr_corrector.text.normalizer import ArabicNormalizer, normalize
from arabic_ocr_corrector.text.tokenizer import tokenize

__all__ = [
    "ArabicNormalizer",
    "analyze_character_stats",
    "are_brackets_balanced",
    "are_quotes_balanced",
    "check_balance",
    "get_unbalanced_errors",
    "is_arabic_text_noise",
    "is_balanced",
    "normalize",
    "tokenize",
]
