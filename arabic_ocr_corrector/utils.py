"""
Utility functions shared across the Arabic OCR correction engine.
"""

import logging
import re

ARABIC_RANGE = r'\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF'
DIGITS = r'0-9\u0660-\u0669'

# Arabic-Indic digits → Western digits
_TO_WESTERN_DIGITS = str.maketrans('٠١٢٣٤٥٦٧٨٩', '0123456789')
_TO_ARABIC_DIGITS = str.maketrans('0123456789', '٠١٢٣٤٥٦٧٨٩')


class PATTERNS:
    """Regex patterns used throughout the library."""
    arabic_characters = re.compile(f'[{ARABIC_RANGE}]')
    digits = re.compile(f'[{DIGITS}]+')
    diacritics = re.compile(r'[\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06ED]')
    tatweel = re.compile(r'\u0640')
    whitespace = re.compile(r'\s+')

    # Footnote references
    arabic_reference = re.compile(r'\([\u0660-\u0669]+\)')
    arabic_footnote_reference = re.compile(r'^\([\u0660-\u0669]+\)')
    ocr_confused_reference = re.compile(r'\([.1OV9]+\)')
    ocr_confused_footnote_reference = re.compile(r'^\([.1OV9]+\)')
    invalid_reference = re.compile(r'\(\)|\([.1OV9]+\)')


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the engine."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def extract_digits(text: str) -> str:
    """
    Return the first run of Western or Arabic-Indic digits in text.

    extract_digits('(٥)أخرجه البخاري') → '٥'
    """
    match = PATTERNS.digits.search(text)
    return match.group(0) if match else ''


def to_western_digits(text: str) -> str:
    return text.translate(_TO_WESTERN_DIGITS)


def to_arabic_digits(text: str) -> str:
    return text.translate(_TO_ARABIC_DIGITS)
