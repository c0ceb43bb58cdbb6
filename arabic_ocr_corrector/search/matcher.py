"""
Excerpt search over the pages of a book.

Locates which page a (possibly OCR-damaged) excerpt comes from:

1. Pages and excerpts are normalized with the aggressive preset
2. Exact containment in the concatenated book, page breaks included, scores 1.0
3. Otherwise rare q-grams of the excerpt seed candidate windows on pages and
   on cross-page seams
4. Each window is scored with the bounded edit distance as 1 - dist/acceptance

The full token aligner is never used here; `bounded_distance` keeps the cost
per candidate proportional to the excerpt length times the edit budget.
"""

import bisect
import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

from arabic_ocr_corrector.alignment.distance import bounded_distance
from arabic_ocr_corrector.config import MatchPolicy, NormalizePreset
from arabic_ocr_corrector.search.qgram import QGramIndex
from arabic_ocr_corrector.text.normalizer import normalize

logger = logging.getLogger(__name__)

SEAM_GAP_CEILING = 200      # max characters skipped at a page boundary
SEAM_BONUS_CAP = 80         # extra edit distance allowed across page boundaries


class Candidate(NamedTuple):
    page: int
    start: int
    seam: bool


@dataclass
class PageHit:
    score: float
    exact: bool = False
    seam: bool = False


class ExcerptMatcher:
    """
    Searches excerpts in a fixed list of pages.

    The book, the seams and the q-gram index are built once per matcher, so
    reuse one instance for many excerpts of the same book.
    """

    def __init__(self, pages: Sequence[str], policy: Optional[MatchPolicy] = None):
        self.policy = policy or MatchPolicy()
        self.pages = [normalize(p, NormalizePreset.AGGRESSIVE) for p in pages]

        # Pages joined by single spaces so exact matches may cross a page break
        self._book = " ".join(self.pages)
        self._page_starts = []
        offset = 0
        for page in self.pages:
            self._page_starts.append(offset)
            offset += len(page) + 1

        self._seams: Optional[list[str]] = None
        self._index: Optional[QGramIndex] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def best_page(self, excerpt: str) -> Optional[int]:
        """Return the best matching page, the earliest one on ties, or None."""
        hits = self.page_hits(excerpt)
        if not hits:
            return None
        return min(hits, key=lambda page: (-hits[page].score, page))

    def ranked_pages(self, excerpt: str) -> list[int]:
        """Return matching pages by descending score, then ascending page."""
        hits = self.page_hits(excerpt)
        _collapse_seams(hits)
        ranked = sorted(
            (page for page, hit in hits.items() if hit.score >= self.policy.min_relevance),
            key=lambda page: (-hits[page].score, page),
        )
        return ranked

    def page_hits(self, excerpt: str) -> dict[int, PageHit]:
        """Score every page the excerpt was found on."""
        normalized = normalize(excerpt, NormalizePreset.AGGRESSIVE)
        if not normalized or not self.pages:
            return {}

        hits = self._exact_hits(normalized)
        if hits:
            return hits

        if not self.policy.enable_fuzzy or len(normalized) < self.policy.q:
            return {}

        return self._fuzzy_hits(normalized)

    # ------------------------------------------------------------------
    # Exact matching
    # ------------------------------------------------------------------

    def _page_at(self, position: int) -> int:
        return bisect.bisect_right(self._page_starts, position) - 1

    def _exact_hits(self, excerpt: str) -> dict[int, PageHit]:
        hits = {}
        position = self._book.find(excerpt)
        while position != -1:
            hits.setdefault(self._page_at(position), PageHit(score=1.0, exact=True))
            position = self._book.find(excerpt, position + 1)
        return hits

    # ------------------------------------------------------------------
    # Fuzzy matching
    # ------------------------------------------------------------------

    def _ensure_index(self) -> QGramIndex:
        if self._index is None:
            seam_len = self.policy.seam_len
            self._seams = [
                f"{self.pages[p][-seam_len:]} {self.pages[p + 1][:seam_len]}"
                for p in range(len(self.pages) - 1)
            ]
            self._index = QGramIndex(self.policy.q)
            for page, text in enumerate(self.pages):
                self._index.add_text(page, text)
            for page, text in enumerate(self._seams):
                self._index.add_text(page, text, seam=True)
            logger.debug(
                "Built q-gram index: %d grams over %d pages", len(self._index), len(self.pages)
            )
        return self._index

    def _candidates(self, excerpt: str) -> list[Candidate]:
        index = self._ensure_index()
        seeds = index.pick_rare(excerpt, self.policy.grams_per_excerpt)
        lead_allowance = math.floor(len(excerpt) * 0.25)

        candidates = []
        seen = set()
        for gram, offset in seeds:
            for posting in index.postings(gram):
                start = posting.pos - offset
                if start < -lead_allowance:
                    continue
                candidate = Candidate(posting.page, max(0, start), posting.seam)
                if candidate in seen:
                    continue
                seen.add(candidate)
                candidates.append(candidate)
                if len(candidates) >= self.policy.max_candidates_per_excerpt:
                    return candidates
        return candidates

    def _fuzzy_hits(self, excerpt: str) -> dict[int, PageHit]:
        candidates = self._candidates(excerpt)
        max_dist = self.policy.max_distance(len(excerpt))
        logger.debug("%d candidates, edit budget %d", len(candidates), max_dist)

        hits: dict[int, PageHit] = {}
        for candidate in candidates:
            scored = self._score_candidate(excerpt, candidate, max_dist)
            if scored is None:
                continue
            dist, acceptance = scored
            score = 1 - dist / acceptance

            current = hits.get(candidate.page)
            if current is None or score > current.score:
                hits[candidate.page] = PageHit(score=score, seam=candidate.seam)
        return hits

    def _score_candidate(
        self,
        excerpt: str,
        candidate: Candidate,
        max_dist: int,
    ) -> Optional[tuple[int, int]]:
        """Return (distance, acceptance) of the best window around a candidate."""
        length = len(excerpt)
        extra = min(max_dist, max(6, math.ceil(length * 0.12)))
        start = candidate.start - extra // 2
        desired = length + extra

        base = self._seams[candidate.page] if candidate.seam else self.pages[candidate.page]
        if not base:
            return None

        crosses_end = not candidate.seam and start + desired > len(base)
        crosses_start = not candidate.seam and start < 0

        windows = [self._window(candidate, start, desired)]
        if crosses_end:
            cut = min(SEAM_GAP_CEILING, max(0, len(base) - max(0, start)))
            if cut > 0:
                windows.append(self._window(candidate, start, desired, trim_tail=cut))
        if crosses_start:
            windows.append(
                self._window(candidate, start, desired, trim_head=min(SEAM_GAP_CEILING, -start))
            )

        if crosses_end or crosses_start or candidate.seam:
            acceptance = max_dist + min(SEAM_BONUS_CAP, math.ceil(length * 0.08))
        else:
            # Slack for normalization artefacts at the window edges
            acceptance = max_dist + min(2, max(1, math.ceil(length * 0.005)))

        best = None
        for window in windows:
            if not window:
                continue
            dist = bounded_distance(excerpt, window, acceptance)
            if dist <= acceptance and (best is None or dist < best):
                best = dist

        return None if best is None else (best, acceptance)

    def _window(
        self,
        candidate: Candidate,
        start: int,
        desired: int,
        trim_tail: int = 0,
        trim_head: int = 0,
    ) -> str:
        """Text of `desired` characters around a candidate, spilling onto neighbouring pages."""
        if candidate.seam:
            seam = self._seams[candidate.page]
            begin = max(0, start)
            return seam[begin:min(len(seam), begin + desired)]

        base = self.pages[candidate.page]
        window = ""

        if start < 0:
            needed = max(0, -start - trim_head)
            if needed:
                window += self._previous_pages_text(candidate.page, needed)
            start = 0

        end = min(len(base) - trim_tail, start + desired - len(window))
        if end > start:
            window += base[start:end]

        window += self._following_pages_text(candidate.page, desired - len(window))
        return window

    def _previous_pages_text(self, page: int, needed: int) -> str:
        chunks = []
        previous = page - 1
        while needed > 0 and previous >= 0 and self.pages[previous]:
            source = self.pages[previous]
            chunk = source[len(source) - min(needed, len(source)):]
            chunks.insert(0, chunk)
            needed -= len(chunk)
            previous -= 1
        return " ".join(chunks) + " " if chunks else ""

    def _following_pages_text(self, page: int, remaining: int) -> str:
        text = ""
        following = page + 1
        while remaining > 0 and following < len(self.pages) and self.pages[following]:
            addition = self.pages[following][:remaining]
            text += f" {addition}"
            remaining -= len(addition)
            following += 1
        return text


def _collapse_seams(hits: dict[int, PageHit]) -> None:
    """Drop seam hits that duplicate a neighbouring page hit."""
    # Adjacent seams: keep the stronger, the earlier one on ties
    for page in sorted(hits):
        current = hits.get(page)
        following = hits.get(page + 1)
        if current and following and current.seam and following.seam:
            if following.score > current.score:
                del hits[page]
            else:
                del hits[page + 1]

    # A seam next to an exact or at least as strong page hit is redundant
    for page in [p for p, hit in hits.items() if hit.seam]:
        neighbour = hits.get(page + 1)
        if neighbour and (neighbour.exact or (not neighbour.seam and neighbour.score >= hits[page].score)):
            del hits[page]


def find_best_match(
    pages: Sequence[str],
    excerpt: str,
    policy: Optional[MatchPolicy] = None,
) -> Optional[int]:
    """
    Find the page an excerpt most likely comes from.

    find_best_match(['صفحة أولى', 'هذه الصفحة تحتوي على النص المطلوب'], 'النص المطلوب') → 1

    Returns:
        Page index, or None when no page matches.
    """
    return ExcerptMatcher(pages, policy).best_page(excerpt)


def find_all_matches(
    pages: Sequence[str],
    excerpt: str,
    policy: Optional[MatchPolicy] = None,
) -> list[int]:
    """Return every matching page ranked by score, then page index."""
    return ExcerptMatcher(pages, policy).ranked_pages(excerpt)


def find_matches(
    pages: Sequence[str],
    excerpts: Sequence[str],
    policy: Optional[MatchPolicy] = None,
) -> list[Optional[int]]:
    """Best page for each excerpt; the book is indexed once."""
    logger.info("Searching %d excerpts in %d pages", len(excerpts), len(pages))
    matcher = ExcerptMatcher(pages, policy)

    cache: dict[str, Optional[int]] = {}
    results = []
    for excerpt in excerpts:
        if excerpt not in cache:
            cache[excerpt] = matcher.best_page(excerpt)
        results.append(cache[excerpt])

    found = sum(1 for r in results if r is not None)
    logger.info("Matched %d/%d excerpts", found, len(excerpts))
    return results


def find_matches_all(
    pages: Sequence[str],
    excerpts: Sequence[str],
    policy: Optional[MatchPolicy] = None,
) -> list[list[int]]:
    """Ranked pages for each excerpt; the book is indexed once."""
    logger.info("Searching all matches of %d excerpts in %d pages", len(excerpts), len(pages))
    matcher = ExcerptMatcher(pages, policy)
    return [matcher.ranked_pages(excerpt) for excerpt in excerpts]
