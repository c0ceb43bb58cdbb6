"""
Footnote marker reconciliation.

OCR engines disagree on footnote markers: one transcript may read a bare
``(٥)`` while the other fused the marker onto the following word
(``(٥)أخرجه``), or repeated it. These rules decide which variant survives
when two aligned transcripts are merged.

All three rules consume the same parse, `classify_marker`.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from arabic_ocr_corrector.utils import DIGITS, to_western_digits


class MarkerKind(Enum):
    NOT_A_MARKER = "not_a_marker"
    STANDALONE = "standalone"     # (٥) (5) ٥ (٥)، (٥).
    EMBEDDED = "embedded"         # (٥)أخرجه


@dataclass(frozen=True)
class FootnoteMarker:
    """Parsed footnote marker of a single token."""
    kind: MarkerKind
    digits: str = ""          # canonical Western digits, so (5) and (٥) compare equal
    trailing_text: str = ""   # text fused onto an embedded marker

    @property
    def is_standalone(self) -> bool:
        return self.kind is MarkerKind.STANDALONE

    @property
    def is_embedded(self) -> bool:
        return self.kind is MarkerKind.EMBEDDED


_STANDALONE = re.compile(f'\\(?([{DIGITS}]+)\\)?[\\u060C.]?')
_EMBEDDED = re.compile(f'\\(([{DIGITS}]+)\\)')

NOT_A_MARKER = FootnoteMarker(MarkerKind.NOT_A_MARKER)


def classify_marker(token: str) -> FootnoteMarker:
    """
    Parse a token as a footnote marker.

    classify_marker('(٥)')      → STANDALONE, digits '5'
    classify_marker('(٥)أخرجه') → EMBEDDED, digits '5', trailing_text 'أخرجه'
    classify_marker('أخرجه')    → NOT_A_MARKER
    """
    standalone = _STANDALONE.fullmatch(token)
    if standalone:
        return FootnoteMarker(MarkerKind.STANDALONE, to_western_digits(standalone.group(1)))

    embedded = _EMBEDDED.search(token)
    if embedded:
        rest = (token[:embedded.start()] + token[embedded.end():]).strip()
        if rest:
            return FootnoteMarker(
                MarkerKind.EMBEDDED, to_western_digits(embedded.group(1)), rest
            )

    return NOT_A_MARKER


def fuse(result: list[str], previous_token: str, current_token: str) -> bool:
    """
    Merge a marker with its neighbour in the token stream.

    A bare marker followed by the same marker fused onto a word is replaced by
    the fused form; a bare marker repeating the previous fused marker is
    swallowed. `result` is changed in place (last element replaced) only on
    the first rule and never grows.

    Args:
        result: Tokens emitted so far; its last element is previous_token.
        previous_token: The token emitted last.
        current_token: The token being emitted.

    Returns:
        True if current_token was consumed, False if it still has to be emitted.
    """
    previous = classify_marker(previous_token)
    if previous.kind is MarkerKind.NOT_A_MARKER:
        return False
    current = classify_marker(current_token)
    if current.kind is MarkerKind.NOT_A_MARKER or previous.digits != current.digits:
        return False

    if previous.is_standalone and current.is_embedded:
        result[-1] = current_token
        return True

    if previous.is_embedded and current.is_standalone:
        return True

    return False


def select_embedded(token_a: str, token_b: str) -> Optional[list[str]]:
    """
    Prefer the token that carries an embedded marker.

    select_embedded('text', '(١)text')         → ['(١)text']
    select_embedded('(١)longtext', '(١)text')  → ['(١)text']
    select_embedded('hello', 'world')          → None
    """
    a_embedded = classify_marker(token_a).is_embedded
    b_embedded = classify_marker(token_b).is_embedded

    if a_embedded and b_embedded:
        return [token_a if len(token_a) <= len(token_b) else token_b]
    if a_embedded:
        return [token_a]
    if b_embedded:
        return [token_b]
    return None


def pair_standalone(token_a: str, token_b: str) -> Optional[list[str]]:
    """
    Keep a bare marker next to the word it was aligned with.

    The marker always comes first. Two bare markers collapse to the shorter one.

    pair_standalone('(١)', 'text')  → ['(١)', 'text']
    pair_standalone('text', '(١)')  → ['(١)', 'text']
    pair_standalone('(١)', '(٢).')  → ['(١)']
    """
    a_standalone = classify_marker(token_a).is_standalone
    b_standalone = classify_marker(token_b).is_standalone

    if a_standalone and b_standalone:
        return [token_a if len(token_a) <= len(token_b) else token_b]
    if a_standalone:
        return [token_a, token_b]
    if b_standalone:
        return [token_b, token_a]
    return None
