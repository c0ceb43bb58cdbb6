"""
Quote and bracket balance checks used to flag malformed lines before alignment.

Supported pairs: (), [], {}, «»; double quotes are balanced when their count is even.
"""

from dataclasses import dataclass, field
from enum import Enum


class ErrorReason(Enum):
    MISMATCHED = "mismatched"
    UNCLOSED = "unclosed"
    UNMATCHED = "unmatched"


class ErrorType(Enum):
    BRACKET = "bracket"
    QUOTE = "quote"


BRACKETS = {"«": "»", "(": ")", "[": "]", "{": "}"}
OPEN_BRACKETS = frozenset(BRACKETS)
CLOSE_BRACKETS = frozenset(BRACKETS.values())

# Lines this short are too small to judge
MIN_CHECKED_LINE_LENGTH = 11


@dataclass(frozen=True)
class BalanceError:
    char: str
    index: int
    reason: ErrorReason
    type: ErrorType


@dataclass
class BalanceResult:
    errors: list[BalanceError] = field(default_factory=list)
    is_balanced: bool = True


@dataclass(frozen=True)
class CharacterError:
    """A balance error positioned from the start of a multi-line text."""
    absolute_index: int
    char: str
    reason: ErrorReason
    type: ErrorType


def _check_quote_balance(text: str) -> BalanceResult:
    quote_positions = [i for i, char in enumerate(text) if char == '"']
    if len(quote_positions) % 2 == 0:
        return BalanceResult()

    # An odd count blames the last quote
    error = BalanceError('"', quote_positions[-1], ErrorReason.UNMATCHED, ErrorType.QUOTE)
    return BalanceResult(errors=[error], is_balanced=False)


def _check_bracket_balance(text: str) -> BalanceResult:
    errors = []
    stack: list[tuple[str, int]] = []

    for i, char in enumerate(text):
        if char in OPEN_BRACKETS:
            stack.append((char, i))
        elif char in CLOSE_BRACKETS:
            if not stack:
                errors.append(BalanceError(char, i, ErrorReason.UNMATCHED, ErrorType.BRACKET))
                continue
            open_char, open_index = stack.pop()
            if BRACKETS[open_char] != char:
                errors.append(
                    BalanceError(open_char, open_index, ErrorReason.MISMATCHED, ErrorType.BRACKET)
                )
                errors.append(BalanceError(char, i, ErrorReason.MISMATCHED, ErrorType.BRACKET))

    for open_char, open_index in stack:
        errors.append(BalanceError(open_char, open_index, ErrorReason.UNCLOSED, ErrorType.BRACKET))

    return BalanceResult(errors=errors, is_balanced=not errors)


def check_balance(text: str) -> BalanceResult:
    """
    Check quotes and brackets together.

    Returns:
        BalanceResult with all errors sorted by position.
    """
    quotes = _check_quote_balance(text)
    brackets = _check_bracket_balance(text)
    return BalanceResult(
        errors=sorted(quotes.errors + brackets.errors, key=lambda e: e.index),
        is_balanced=quotes.is_balanced and brackets.is_balanced,
    )


def get_unbalanced_errors(text: str) -> list[CharacterError]:
    """
    Collect balance errors of a multi-line text with absolute positions.

    Each line is checked on its own; lines of ten characters or fewer are
    skipped. Positions count the newline separators.
    """
    errors = []
    offset = 0

    for line in text.split("\n"):
        if len(line) >= MIN_CHECKED_LINE_LENGTH:
            result = check_balance(line)
            errors.extend(
                CharacterError(offset + e.index, e.char, e.reason, e.type)
                for e in result.errors
            )
        offset += len(line) + 1

    return errors


def are_quotes_balanced(text: str) -> bool:
    return _check_quote_balance(text).is_balanced


def are_brackets_balanced(text: str) -> bool:
    return _check_bracket_balance(text).is_balanced


def is_balanced(text: str) -> bool:
    return check_balance(text).is_balanced
