"""Tests for exact and fuzzy excerpt search."""

import pytest
from arabic_ocr_corrector.config import MatchPolicy
from arabic_ocr_corrector.search.matcher import (
    ExcerptMatcher,
    PageHit,
    _collapse_seams,
    find_all_matches,
    find_best_match,
    find_matches,
    find_matches_all,
)
from arabic_ocr_corrector.search.qgram import GramSeed, Posting, QGramIndex

HADITH_PAGES = [
    "مقدمة الكتاب في بيان المنهج",
    "حدثنا محمد بن بشار قال حدثنا يحيى عن سفيان",
    "باب ما جاء في الطهارة",
]
# One letter misread (بشار → بشاد)
HADITH_TYPO = "حدثنا محمد بن بشاد قال حدثنا يحيى عن سفيان"

# Narrow seams keep the excerpt from fitting inside a page-break window
NARROW_SEAMS = MatchPolicy(seam_len=8)


class TestQGramIndex:
    def test_invalid_q(self):
        with pytest.raises(ValueError):
            QGramIndex(0)

    def test_postings(self):
        index = QGramIndex(2)
        index.add_text(0, "abcab")
        assert index.postings("ab") == [Posting(0, 0, False), Posting(0, 3, False)]
        assert index.postings("zz") == []
        assert len(index) == 3

    def test_seam_postings(self):
        index = QGramIndex(2)
        index.add_text(4, "xy", seam=True)
        assert index.postings("xy") == [Posting(4, 0, True)]

    def test_pick_rare_orders_by_frequency(self):
        index = QGramIndex(2)
        index.add_text(0, "abcab")
        index.add_text(1, "abxy")
        assert index.pick_rare("abxy", 2) == [GramSeed("bx", 1), GramSeed("xy", 2)]

    def test_pick_rare_skips_unknown_grams(self):
        index = QGramIndex(2)
        index.add_text(0, "ab")
        assert index.pick_rare("zzab", 5) == [GramSeed("ab", 2)]


class TestExactMatch:
    def test_single_page(self):
        pages = ["صفحة أولى", "هذه الصفحة تحتوي على النص المطلوب"]
        assert find_best_match(pages, "النص المطلوب") == 1

    def test_match_across_page_break(self):
        pages = ["الباب الأول في الطهارة وأحكامها", "وما يتعلق بالوضوء والغسل"]
        assert find_best_match(pages, "وأحكامها وما يتعلق") == 0

    def test_footnotes_and_digits_ignored(self):
        pages = ["مقدمة", "قال (١) الشيخ: رحمه الله 123"]
        assert find_best_match(pages, "قال الشيخ رحمه الله") == 1

    def test_duplicates(self):
        pages = ["النص المكرر هنا", "صفحة أخرى", "وهنا النص المكرر أيضا"]
        assert find_best_match(pages, "النص المكرر") == 0
        assert find_all_matches(pages, "النص المكرر") == [0, 2]

    def test_excerpt_longer_than_page(self):
        excerpt = f"{HADITH_PAGES[1]} {HADITH_PAGES[2]}"
        assert find_best_match(HADITH_PAGES, excerpt) == 1

    def test_exact_hit_scores_one(self):
        hits = ExcerptMatcher(HADITH_PAGES).page_hits("باب ما جاء")
        assert hits == {2: PageHit(score=1.0, exact=True)}


class TestNoMatch:
    def test_empty_inputs(self):
        assert find_best_match([], "نص") is None
        assert find_best_match(HADITH_PAGES, "") is None
        assert find_all_matches(HADITH_PAGES, "") == []

    def test_excerpt_without_arabic_letters(self):
        assert find_best_match(HADITH_PAGES, "hello 123") is None

    def test_short_excerpt_skips_fuzzy(self):
        assert find_best_match(HADITH_PAGES, "حدس") is None


class TestFuzzyMatch:
    def test_typo_found(self):
        assert find_best_match(HADITH_PAGES, HADITH_TYPO, NARROW_SEAMS) == 1
        assert find_all_matches(HADITH_PAGES, HADITH_TYPO, NARROW_SEAMS) == [1]

    def test_fuzzy_disabled(self):
        policy = MatchPolicy(enable_fuzzy=False, seam_len=8)
        assert find_best_match(HADITH_PAGES, HADITH_TYPO, policy) is None

    def test_fuzzy_score_below_exact(self):
        hits = ExcerptMatcher(HADITH_PAGES, NARROW_SEAMS).page_hits(HADITH_TYPO)
        assert set(hits) == {1}
        assert 0 < hits[1].score < 1
        assert hits[1].exact is False

    def test_min_relevance_filters_ranking(self):
        policy = MatchPolicy(seam_len=8, min_relevance=0.9)
        assert find_all_matches(HADITH_PAGES, HADITH_TYPO, policy) == []


class TestBatchSearch:
    def test_find_matches(self):
        excerpts = ["النص المكرر", "غير موجود", "النص المكرر"]
        pages = ["النص المكرر هنا", "صفحة أخرى", "وهنا النص المكرر أيضا"]
        assert find_matches(pages, excerpts, MatchPolicy(enable_fuzzy=False)) == [0, None, 0]

    def test_find_matches_all(self):
        pages = ["النص المكرر هنا", "صفحة أخرى", "وهنا النص المكرر أيضا"]
        policy = MatchPolicy(enable_fuzzy=False)
        assert find_matches_all(pages, ["النص المكرر", "غير موجود"], policy) == [[0, 2], []]

    def test_matcher_reuse(self):
        matcher = ExcerptMatcher(HADITH_PAGES, NARROW_SEAMS)
        assert matcher.best_page(HADITH_TYPO) == 1
        assert matcher.best_page("باب ما جاء") == 2


class TestCollapseSeams:
    def test_adjacent_seams_keep_stronger(self):
        hits = {0: PageHit(0.5, seam=True), 1: PageHit(0.7, seam=True)}
        _collapse_seams(hits)
        assert set(hits) == {1}

    def test_adjacent_seams_tie_keeps_earlier(self):
        hits = {0: PageHit(0.5, seam=True), 1: PageHit(0.5, seam=True)}
        _collapse_seams(hits)
        assert set(hits) == {0}

    def test_seam_before_stronger_page(self):
        hits = {0: PageHit(0.5, seam=True), 1: PageHit(0.6)}
        _collapse_seams(hits)
        assert set(hits) == {1}

    def test_strong_seam_kept(self):
        hits = {0: PageHit(0.9, seam=True), 1: PageHit(0.6)}
        _collapse_seams(hits)
        assert set(hits) == {0, 1}

    def test_seam_before_exact_page(self):
        hits = {2: PageHit(0.95, seam=True), 3: PageHit(1.0, exact=True)}
        _collapse_seams(hits)
        assert set(hits) == {3}
