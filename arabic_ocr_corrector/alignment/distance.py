"""
Levenshtein edit distance.

`distance` keeps two rows of min(|a|, |b|) + 1 cells. `bounded_distance`
only evaluates a diagonal band of width 2k+1 and gives up as soon as every
live cell exceeds the cutoff, which keeps bulk page/excerpt matching cheap.
"""

import math
import numbers


def distance(a: str, b: str) -> int:
    """
    Unit-cost Levenshtein distance.

    distance('kitten', 'sitting') → 3
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    # The shorter string sizes the row buffers
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)

    previous = list(range(len(shorter) + 1))
    current = [0] * (len(shorter) + 1)

    for i, long_char in enumerate(longer, start=1):
        current[0] = i
        for j, short_char in enumerate(shorter, start=1):
            cost = 0 if long_char == short_char else 1
            current[j] = min(
                previous[j] + 1,          # deletion
                current[j - 1] + 1,       # insertion
                previous[j - 1] + cost,   # substitution
            )
        previous, current = current, previous

    return previous[len(shorter)]


def _validate_cutoff(max_distance) -> int:
    if isinstance(max_distance, bool) or not isinstance(max_distance, numbers.Real):
        raise ValueError(f"max_distance must be a number, got {max_distance!r}")
    if not math.isfinite(max_distance):
        raise ValueError(f"max_distance must be finite, got {max_distance!r}")
    if max_distance < 0:
        raise ValueError(f"max_distance must be non-negative, got {max_distance!r}")
    return math.floor(max_distance)


def bounded_distance(a: str, b: str, max_distance) -> int:
    """
    Levenshtein distance with a cutoff.

    Args:
        a: First string.
        b: Second string.
        max_distance: Largest distance worth reporting (k).

    Returns:
        The exact distance when it is at most k, otherwise k + 1.

    Raises:
        ValueError: If max_distance is negative, non-finite or not a number.
    """
    k = _validate_cutoff(max_distance)
    sentinel = k + 1

    if abs(len(a) - len(b)) > k:
        return sentinel
    if not a:
        return len(b) if len(b) <= k else sentinel
    if not b:
        return len(a) if len(a) <= k else sentinel

    if len(a) > len(b):
        a, b = b, a

    m = len(b)
    previous = list(range(m + 1))
    current = [sentinel] * (m + 1)

    for i in range(1, len(a) + 1):
        low = max(1, i - k)
        high = min(m, i + k)

        current[0] = i
        row_min = i
        for j in range(1, low):
            current[j] = sentinel
        for j in range(high + 1, m + 1):
            current[j] = sentinel

        a_char = a[i - 1]
        for j in range(low, high + 1):
            cost = 0 if a_char == b[j - 1] else 1
            value = min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost)
            current[j] = value
            if value < row_min:
                row_min = value

        if row_min > k:
            return sentinel

        previous, current = current, previous

    result = previous[m]
    return result if result <= k else sentinel
