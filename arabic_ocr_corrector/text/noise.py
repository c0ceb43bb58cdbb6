"""
Scanner-noise detection for OCR lines.

Decides whether a short fragment is genuine (mostly Arabic) content or an
artefact of the scan: rules, dot leaders, stray Latin capitals, page numbers,
misrecognised Devanagari marks and similar debris.
"""

import re
from collections import Counter
from dataclasses import dataclass, field

from arabic_ocr_corrector.utils import PATTERNS


@dataclass
class CharacterStats:
    """Character composition of a text fragment."""
    arabic_count: int = 0
    latin_count: int = 0
    digit_count: int = 0
    punctuation_count: int = 0
    space_count: int = 0
    symbol_count: int = 0
    char_freq: Counter = field(default_factory=Counter)


_LATIN = re.compile(r'[a-zA-Z]')
_DIGIT = re.compile(r'[0-9]')
_SPACE = re.compile(r'\s')
_PUNCTUATION = re.compile(r'[.,;:()\[\]{}"\u201C\u201D\x27\u2018\u2019`]')

# Characters whose long runs are typical for rules and dot leaders
REPETITIVE_CHARS = frozenset('!.-=_')

NOISE_PATTERNS = [
    re.compile(r'[-=_\u2501\u227A\u227B\s]*'),  # rules made of dashes, equals, box drawing
    re.compile(r'[.\s]*'),                         # dot leaders
    re.compile(r'[!\s]*'),
    re.compile(r'[A-Z\s]*'),                       # "Ap Ap Ap" style capitals
    re.compile(r'[-0-9\s]*'),                      # "- 77", "- 4"
    re.compile(r'[0-9]+\s*'),                      # bare page numbers
    re.compile(r'[A-Z]\s*'),
    re.compile(r'[\u2014\s]*'),                 # em-dash rules
    re.compile(r'[\u094D\u0930\s-]*'),         # Devanagari virama and ra from OCR
]


def analyze_character_stats(text: str) -> CharacterStats:
    """Count Arabic, Latin, digit, punctuation, space and symbol characters."""
    stats = CharacterStats()
    for char in text:
        stats.char_freq[char] += 1

        if PATTERNS.arabic_characters.match(char):
            stats.arabic_count += 1
        elif _DIGIT.match(char):
            stats.digit_count += 1
        elif _LATIN.match(char):
            stats.latin_count += 1
        elif _SPACE.match(char):
            stats.space_count += 1
        elif _PUNCTUATION.match(char):
            stats.punctuation_count += 1
        else:
            stats.symbol_count += 1

    return stats


def is_basic_noise_pattern(text: str) -> bool:
    return any(pattern.fullmatch(text) for pattern in NOISE_PATTERNS)


def has_excessive_repetition(stats: CharacterStats, text_length: int) -> bool:
    """True when runs of rule/leader characters make up over 40% of the text."""
    repeat_count = sum(
        count for char, count in stats.char_freq.items()
        if count >= 5 and char in REPETITIVE_CHARS
    )
    return repeat_count / text_length > 0.4


def is_spacing_noise(stats: CharacterStats, content_chars: int, text_length: int) -> bool:
    """Detect letters spaced out like 'a  b  c' or lone characters padded with spaces."""
    if stats.space_count > 0 and content_chars == stats.space_count + 1 and content_chars <= 5:
        return True

    if text_length <= 10 and stats.space_count >= 2 and stats.arabic_count == 0:
        return True

    return stats.space_count / text_length > 0.6


def is_valid_arabic_content(stats: CharacterStats, text_length: int) -> bool:
    if stats.arabic_count >= 3:
        return True

    # Short Arabic with numbers: dates, page and verse references
    return stats.arabic_count >= 1 and stats.digit_count > 0 and text_length <= 20


def is_non_arabic_noise(stats: CharacterStats, text_length: int, text: str) -> bool:
    """Classify a fragment without Arabic letters."""
    content_chars = stats.arabic_count + stats.latin_count + stats.digit_count
    non_content_chars = (
        stats.symbol_count + stats.punctuation_count - min(stats.punctuation_count, 3)
    )

    if content_chars == 0:
        return True

    if is_spacing_noise(stats, content_chars, text_length):
        return True

    if non_content_chars / max(content_chars, 1) > 2:
        return True

    is_number = re.fullmatch(r'[0-9]+', text) is not None
    if text_length <= 5 and stats.arabic_count == 0 and not (is_number and stats.digit_count >= 3):
        return True

    # Years and other substantial numbers
    if re.fullmatch(r'[0-9]{3,4}', text):
        return False

    return text_length <= 10


def is_arabic_text_noise(text: str) -> bool:
    """
    Decide whether an OCR fragment is noise rather than content.

    Args:
        text: A single OCR line or fragment.

    Returns:
        True for noise, False for text worth keeping.
    """
    if not text or not text.strip():
        return True

    trimmed = text.strip()
    length = len(trimmed)

    if length < 2:
        return True

    if is_basic_noise_pattern(trimmed):
        return True

    stats = analyze_character_stats(trimmed)

    if has_excessive_repetition(stats, length):
        return True

    has_arabic = PATTERNS.arabic_characters.search(trimmed) is not None

    if not has_arabic and _LATIN.search(trimmed):
        return True

    if has_arabic:
        return not is_valid_arabic_content(stats, length)

    return is_non_arabic_noise(stats, length, trimmed)
