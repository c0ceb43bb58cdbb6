"""
Inverted q-gram index used to seed fuzzy excerpt matching.

Every q-character substring of a page (or of a cross-page seam) is recorded
with its position. An excerpt is located by looking up its rarest grams, which
narrows the bounded edit-distance checks to a handful of windows.
"""

from collections import Counter, defaultdict
from typing import NamedTuple


class Posting(NamedTuple):
    page: int
    pos: int
    seam: bool      # posting comes from the seam starting at `page`


class GramSeed(NamedTuple):
    gram: str
    offset: int     # position of the gram inside the excerpt


class QGramIndex:
    """Positions and corpus frequencies of all q-grams of the indexed texts."""

    def __init__(self, q: int):
        if q < 1:
            raise ValueError("q must be at least 1")
        self.q = q
        self._postings: dict[str, list[Posting]] = defaultdict(list)
        self._frequency: Counter = Counter()

    def _grams(self, text: str):
        for i in range(len(text) - self.q + 1):
            yield i, text[i:i + self.q]

    def add_text(self, page: int, text: str, seam: bool = False) -> None:
        for pos, gram in self._grams(text):
            self._postings[gram].append(Posting(page, pos, seam))
            self._frequency[gram] += 1

    def postings(self, gram: str) -> list[Posting]:
        return self._postings.get(gram, [])

    def pick_rare(self, excerpt: str, grams_per_excerpt: int) -> list[GramSeed]:
        """
        Pick the rarest grams of an excerpt that occur in the index.

        Args:
            excerpt: Normalized excerpt text.
            grams_per_excerpt: Maximum number of seeds.

        Returns:
            Seeds ordered from rarest to most common; grams absent from the
            index are never returned.
        """
        seen = set()
        seeds = []
        for offset, gram in self._grams(excerpt):
            if gram in seen or gram not in self._postings:
                continue
            seen.add(gram)
            seeds.append(GramSeed(gram, offset))

        seeds.sort(key=lambda seed: self._frequency[seed.gram])
        return seeds[:grams_per_excerpt]

    def __len__(self) -> int:
        return len(self._postings)
