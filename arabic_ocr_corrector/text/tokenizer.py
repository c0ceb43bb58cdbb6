"""
Whitespace tokenizer that keeps preserved symbols (honorific ligatures such as
ﷺ or ﷻ) as atomic tokens even when OCR glued them to a neighbouring word.
"""

import re
from typing import Iterable

from arabic_ocr_corrector.utils import PATTERNS


def _symbol_pattern(preserved_symbols: Iterable[str]):
    symbols = sorted({s for s in preserved_symbols if s}, key=len, reverse=True)
    if not symbols:
        return None
    # Longest first so an overlapping shorter symbol never splits a longer one
    return re.compile("|".join(re.escape(s) for s in symbols))


def tokenize(text: str, preserved_symbols: Iterable[str] = ()) -> list[str]:
    """
    Split text into tokens.

    tokenize('محمدﷺ رسول', ['ﷺ']) → ['محمد', 'ﷺ', 'رسول']

    Args:
        text: Input text; it is not normalized.
        preserved_symbols: Strings carved out into their own tokens.

    Returns:
        Tokens in reading order, empty for blank input.
    """
    if not text or not text.strip():
        return []

    pattern = _symbol_pattern(preserved_symbols)
    if pattern is not None:
        text = pattern.sub(lambda m: f" {m.group(0)} ", text)

    return [token for token in PATTERNS.whitespace.split(text.strip()) if token]
