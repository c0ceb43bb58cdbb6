"""Tests for the Levenshtein distance functions, checked against rapidfuzz."""

import math
import random

import pytest
from rapidfuzz.distance import Levenshtein

from arabic_ocr_corrector.alignment.distance import bounded_distance, distance

ALPHABET = "ابتث ي"


def _random_pairs(count: int, seed: int = 7):
    rng = random.Random(seed)
    for _ in range(count):
        a = "".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, 12)))
        b = "".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, 12)))
        yield a, b


class TestDistance:
    def test_classic_example(self):
        assert distance("kitten", "sitting") == 3

    def test_empty(self):
        assert distance("", "") == 0
        assert distance("", "abc") == 3
        assert distance("abc", "") == 3

    def test_identical(self):
        assert distance("السلام", "السلام") == 0

    def test_symmetric(self):
        assert distance("الكتاب", "كتب") == distance("كتب", "الكتاب")

    def test_matches_rapidfuzz(self):
        for a, b in _random_pairs(300):
            assert distance(a, b) == Levenshtein.distance(a, b), (a, b)


class TestBoundedDistance:
    def test_within_cutoff(self):
        assert bounded_distance("kitten", "sitting", 3) == 3

    def test_over_cutoff_returns_sentinel(self):
        assert bounded_distance("kitten", "sitting", 2) == 3
        assert bounded_distance("abc", "xyz", 0) == 1

    def test_length_gap_short_circuit(self):
        assert bounded_distance("a", "abcdef", 2) == 3

    def test_empty_strings(self):
        assert bounded_distance("", "", 0) == 0
        assert bounded_distance("", "ab", 2) == 2
        assert bounded_distance("ab", "", 1) == 2

    def test_float_cutoff_is_floored(self):
        assert bounded_distance("abc", "abd", 1.7) == 1
        assert bounded_distance("abc", "xyz", 2.5) == 3

    @pytest.mark.parametrize("cutoff", [-1, math.inf, math.nan, True, "3", None])
    def test_invalid_cutoff(self, cutoff):
        with pytest.raises(ValueError):
            bounded_distance("abc", "abd", cutoff)

    @pytest.mark.parametrize("k", [0, 1, 2, 3, 5, 8])
    def test_matches_rapidfuzz_cutoff(self, k):
        for a, b in _random_pairs(200, seed=k):
            expected = min(Levenshtein.distance(a, b), k + 1)
            assert bounded_distance(a, b, k) == expected, (a, b, k)

    def test_agrees_with_full_distance(self):
        for a, b in _random_pairs(200, seed=99):
            d = distance(a, b)
            assert bounded_distance(a, b, d) == d
            if d > 0:
                assert bounded_distance(a, b, d - 1) == d
