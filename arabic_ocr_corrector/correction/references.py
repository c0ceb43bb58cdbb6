"""
Footnote reference repair across the body and footnote lines of a page.

OCR often misreads Arabic-Indic reference digits as look-alike Latin
characters ((1) for (١), (O) for (٥), (V) for (٧), (9) for (٩), (.) for (٠))
or loses them entirely, leaving an empty "()". References are fixed by
pairing body markers with footnote markers:

1. Map look-alike characters inside markers to Arabic-Indic digits
2. Collect the references of the body and of the footnote lines
3. Fill each "()" with an unmatched reference from the other side
4. Number any remaining "()" after the highest reference on the page
"""

import logging
import re
from dataclasses import dataclass, replace

from arabic_ocr_corrector.utils import PATTERNS, extract_digits, to_arabic_digits, to_western_digits

logger = logging.getLogger(__name__)

EMPTY_REFERENCE = "()"
_EMPTY_REFERENCE_PATTERN = re.compile(r'\(\)')

# Latin look-alikes of Arabic-Indic digits
OCR_DIGIT_MAP = str.maketrans({
    "1": "١",
    "9": "٩",
    ".": "٠",
    "O": "٥",
    "V": "٧",
})


@dataclass
class FootnoteLine:
    """A line of a page and whether it belongs to the footnote block."""
    text: str
    is_footnote: bool = False


@dataclass
class _References:
    body: list[str]
    footnotes: list[str]


def has_invalid_footnotes(text: str) -> bool:
    """True for an empty "()" or a marker made of OCR look-alike characters."""
    return PATTERNS.invalid_reference.search(text) is not None


def _fix_ocr_digits(reference: str) -> str:
    return reference.translate(OCR_DIGIT_MAP)


def _extract_references(lines: list[FootnoteLine]) -> _References:
    body = []
    footnotes = []
    confused_body = []
    confused_footnotes = []

    for line in lines:
        if line.is_footnote:
            # Footnotes only carry their own marker at the start of the line
            head = PATTERNS.arabic_footnote_reference.match(line.text)
            if head:
                footnotes.append(head.group(0))
            confused_head = PATTERNS.ocr_confused_footnote_reference.match(line.text)
            if confused_head:
                confused_footnotes.append(confused_head.group(0))
        else:
            body.extend(PATTERNS.arabic_reference.findall(line.text))
            confused_body.extend(PATTERNS.ocr_confused_reference.findall(line.text))

    return _References(
        body=body + [_fix_ocr_digits(r) for r in confused_body],
        footnotes=footnotes + [_fix_ocr_digits(r) for r in confused_footnotes],
    )


def _needs_correction(lines: list[FootnoteLine], references: _References) -> bool:
    if any(has_invalid_footnotes(line.text) for line in lines):
        return True
    return set(references.body) != set(references.footnotes)


def _reference_number(reference: str) -> int:
    digits = to_western_digits(extract_digits(reference))
    return int(digits) if digits.isdigit() else 0


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def correct_references(lines: list[FootnoteLine]) -> list[FootnoteLine]:
    """
    Repair footnote reference markers of a page.

    Args:
        lines: Body and footnote lines in page order.

    Returns:
        The same lines when nothing needs fixing, otherwise new FootnoteLine
        objects with repaired markers.
    """
    if not _needs_correction(lines, _extract_references(lines)):
        return lines

    # Step 1: Fix look-alike characters inside markers
    sanitized = [
        replace(line, text=PATTERNS.ocr_confused_reference.sub(
            lambda m: _fix_ocr_digits(m.group(0)), line.text
        ))
        for line in lines
    ]

    # Step 2: Collect references from the cleaned lines
    references = _extract_references(sanitized)
    body_set = set(references.body)
    footnote_set = set(references.footnotes)

    # Step 3: Unmatched references available to the other side
    body_refs_for_footnotes = [r for r in _unique(references.body) if r not in footnote_set]
    footnote_refs_for_body = [r for r in _unique(references.footnotes) if r not in body_set]

    # Step 4: New references continue after the highest one on the page
    next_number = max((_reference_number(r) for r in body_set | footnote_set), default=0) + 1

    def next_reference(queue: list[str]) -> str:
        nonlocal next_number
        if queue:
            return queue.pop(0)
        reference = f"({to_arabic_digits(str(next_number))})"
        next_number += 1
        return reference

    # Step 5: Fill empty markers, footnotes from body references and vice versa
    corrected = []
    for line in sanitized:
        if EMPTY_REFERENCE in line.text:
            queue = body_refs_for_footnotes if line.is_footnote else footnote_refs_for_body
            text = _EMPTY_REFERENCE_PATTERN.sub(lambda _: next_reference(queue), line.text)
            line = replace(line, text=text)
        corrected.append(line)

    logger.debug("Repaired footnote references of %d lines", len(lines))
    return corrected
