"""
Arabic text normalization for display, search and indexing.

Presets:
- display:    NFC, zero-width removal, whitespace cleanup
- search:     display + diacritics, tatweel, Hijri marker and footnote
               reference removal, alif / alif maqsura folding
- aggressive: search + ta marbuta folding, Arabic letters and spaces only

Every preset is idempotent: normalize(normalize(x)) == normalize(x).
"""

import re
import unicodedata
from dataclasses import dataclass, replace
from typing import Union

from arabic_ocr_corrector.config import NormalizePreset
from arabic_ocr_corrector.utils import PATTERNS


@dataclass(frozen=True)
class NormalizeOptions:
    """Individual normalization steps; presets are fixed combinations."""
    nfc: bool = False
    strip_zero_width: bool = False
    zero_width_to_space: bool = False
    strip_diacritics: bool = False
    strip_tatweel: bool = False
    remove_hijri_marker: bool = False
    normalize_alif: bool = False
    replace_alif_maqsurah: bool = False
    replace_ta_marbutah: bool = False
    strip_footnotes: bool = False
    strip_latin_and_symbols: bool = False
    letters_and_spaces_only: bool = False
    letters_only: bool = False
    collapse_whitespace: bool = False
    trim: bool = False


PRESETS = {
    NormalizePreset.DISPLAY: NormalizeOptions(
        nfc=True,
        strip_zero_width=True,
        collapse_whitespace=True,
        trim=True,
    ),
    NormalizePreset.SEARCH: NormalizeOptions(
        nfc=True,
        strip_zero_width=True,
        strip_diacritics=True,
        strip_tatweel=True,
        remove_hijri_marker=True,
        normalize_alif=True,
        replace_alif_maqsurah=True,
        strip_footnotes=True,
        collapse_whitespace=True,
        trim=True,
    ),
    NormalizePreset.AGGRESSIVE: NormalizeOptions(
        nfc=True,
        strip_zero_width=True,
        strip_diacritics=True,
        strip_tatweel=True,
        remove_hijri_marker=True,
        normalize_alif=True,
        replace_alif_maqsurah=True,
        replace_ta_marbutah=True,
        strip_footnotes=True,
        strip_latin_and_symbols=True,
        letters_and_spaces_only=True,
        collapse_whitespace=True,
        trim=True,
    ),
}


class ArabicNormalizer:
    """
    Applies a normalization preset to Arabic text.

    Pipeline:
    1. Unicode NFC and zero-width control removal
    2. Diacritics and tatweel removal
    3. Hijri date marker removal (١٤٣٥ هـ → ١٤٣٥)
    4. Character folding (أ/إ/آ/ٱ → ا, ى → ي, ة → ه)
    5. Footnote reference removal
    6. Latin / symbol noise and letter filters
    7. Whitespace normalization
    """

    ALIF_VARIANTS = re.compile('[أإآٱ]')

    # Arabic letters kept by the letter filters
    _letters = r'\u0621-\u063A\u0641-\u064A\u0671\u067E\u0686\u06A4-\u06AF\u06CC\u06D2\u06D3'

    def __init__(self, options: NormalizeOptions):
        self.options = options
        self._zero_width = re.compile(r'[\u200B-\u200F\u202A-\u202E\u2060-\u2064\uFEFF]')
        self._hijri_marker = re.compile(
            r'([0-9\u0660-\u0669][0-9\u0660-\u0669/\-\s]*?)\s*\u0647(?=\s|$|[^\w])'
        )
        # (¬٣) style references and single-digit references such as (٣) or (٣ م)
        self._not_sign_reference = re.compile(r'\s*\(\u00AC[\u0660-\u0669]+\)\s*')
        self._single_digit_reference = re.compile(r'\s*\([\u0660-\u0669](?:\s?\u0645)?\)\s*')
        self._latin_and_symbols = re.compile(r'[A-Za-z]+[0-9]*|[0-9]+|[\u00AC\u00A7`=]|/{2,}|&|\uFDFA')
        self._not_letters_or_space = re.compile(f'[^{self._letters}\\s]')
        self._not_letters = re.compile(f'[^{self._letters}]')

    def process(self, text: str) -> str:
        """
        Normalize text according to the configured options.

        Args:
            text: Raw text, possibly straight from OCR.

        Returns:
            Normalized text (empty string for empty input).
        """
        if not text:
            return ""

        # Removing a footnote or a Hijri marker can bring a digit and another
        # marker together, so the pipeline runs until the text stops changing
        while True:
            result = self._apply(text)
            if result == text:
                return result
            text = result

    def _apply(self, text: str) -> str:
        opts = self.options

        if opts.nfc:
            text = unicodedata.normalize("NFC", text)

        if opts.strip_zero_width:
            text = self._zero_width.sub(' ' if opts.zero_width_to_space else '', text)

        if opts.strip_diacritics:
            text = PATTERNS.diacritics.sub('', text)

        if opts.strip_tatweel:
            text = PATTERNS.tatweel.sub('', text)

        if opts.remove_hijri_marker:
            text = self._hijri_marker.sub(r'\1', text)

        text = self._fold_characters(text)

        if opts.strip_footnotes:
            text = self._remove_footnote_references(text)

        if opts.strip_latin_and_symbols and not opts.letters_and_spaces_only:
            text = self._latin_and_symbols.sub(' ', text)

        if opts.letters_and_spaces_only:
            text = self._not_letters_or_space.sub(' ', text)
        elif opts.letters_only:
            text = self._not_letters.sub('', text)

        if opts.collapse_whitespace:
            text = PATTERNS.whitespace.sub(' ', text)
        if opts.trim:
            text = text.strip()

        return text

    def _fold_characters(self, text: str) -> str:
        """Fold letter variants that OCR and editors use interchangeably."""
        if self.options.normalize_alif:
            text = self.ALIF_VARIANTS.sub('ا', text)
        if self.options.replace_alif_maqsurah:
            text = text.replace('ى', 'ي')
        if self.options.replace_ta_marbutah:
            text = text.replace('ة', 'ه')
        return text

    def _remove_footnote_references(self, text: str) -> str:
        text = self._not_sign_reference.sub(' ', text)
        text = self._single_digit_reference.sub(' ', text)
        return text


_NORMALIZERS = {preset: ArabicNormalizer(options) for preset, options in PRESETS.items()}


def normalize(
    text: str,
    preset: Union[NormalizePreset, str] = NormalizePreset.SEARCH,
    **overrides: bool,
) -> str:
    """
    Normalize Arabic text with a preset, optionally overriding single steps.

    normalize('اَلسَّلَامُ عَلَيْكُمْ') → 'السلام عليكم'
    normalize('١٤٣٥/٣/٢٩ هـ', 'aggressive') → ''
    """
    preset = NormalizePreset(preset)
    if not overrides:
        return _NORMALIZERS[preset].process(text)
    return ArabicNormalizer(replace(PRESETS[preset], **overrides)).process(text)
