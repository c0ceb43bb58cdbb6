"""
Typo correction by merging an OCR line with a reference transcript.

Both lines are tokenized, globally aligned and then merged pair by pair:
footnote markers are reconciled, honorific symbols from the reference replace
the phrase they abbreviate, and the reference wins where the two readings
differ too much. A final pass fuses split footnote markers and drops tokens
the OCR engine read twice.
"""

import logging
from typing import Optional, Sequence

from arabic_ocr_corrector.alignment.aligner import AlignedPair, align_tokens
from arabic_ocr_corrector.alignment.footnotes import fuse, pair_standalone, select_embedded
from arabic_ocr_corrector.alignment.similarity import normalized_similar, similarity_ratio
from arabic_ocr_corrector.config import CorrectionConfig, NormalizePreset
from arabic_ocr_corrector.text.normalizer import normalize
from arabic_ocr_corrector.text.tokenizer import tokenize

logger = logging.getLogger(__name__)


class TextCorrector:
    """
    Merges an original OCR transcript with a reference transcript.

    Pipeline per line:
    1. Tokenize both sides, keeping typo symbols atomic
    2. Globally align the token sequences
    3. Select the surviving token(s) of every aligned pair
    4. Fuse footnote markers and drop OCR echoes
    5. Join with single spaces
    """

    def __init__(self, config: Optional[CorrectionConfig] = None):
        self.config = config or CorrectionConfig()

    def correct(self, original: str, reference: str) -> str:
        """
        Correct one line.

        Args:
            original: OCR output that may contain typos.
            reference: Second transcript of the same line.

        Returns:
            The corrected line.
        """
        cfg = self.config

        # Step 1: Tokenize
        original_tokens = tokenize(original, cfg.typo_symbols)
        reference_tokens = tokenize(reference, cfg.typo_symbols)

        # Step 2: Align
        pairs = align_tokens(
            original_tokens, reference_tokens, cfg.typo_symbols, cfg.similarity_threshold
        )

        # Step 3: Select tokens per aligned pair
        selected = []
        for pair in pairs:
            selected.extend(self._select_tokens(pair))

        # Step 4: Merge pass
        merged = self._merge_tokens(selected)

        logger.debug(
            "Corrected %d/%d tokens into %d tokens",
            len(original_tokens), len(reference_tokens), len(merged),
        )

        # Step 5: Join
        return " ".join(merged)

    def correct_lines(self, originals: Sequence[str], references: Sequence[str]) -> list[str]:
        """Correct line pairs; lines without a counterpart are kept as they are."""
        logger.info("Correcting %d lines against %d reference lines", len(originals), len(references))

        corrected = []
        for index, original in enumerate(originals):
            if index < len(references):
                corrected.append(self.correct(original, references[index]))
            else:
                corrected.append(original)

        logger.info("Correction complete")
        return corrected

    def _select_tokens(self, pair: AlignedPair) -> list[str]:
        """Decide which token(s) of an aligned pair survive."""
        original, reference = pair
        if original is None:
            return [reference]
        if reference is None:
            return [original]

        normalized_original = normalize(original, NormalizePreset.SEARCH)
        normalized_reference = normalize(reference, NormalizePreset.SEARCH)

        # Same word: the original keeps its diacritics
        if normalized_original == normalized_reference:
            return [original]

        embedded = select_embedded(original, reference)
        if embedded is not None:
            return embedded

        standalone = pair_standalone(original, reference)
        if standalone is not None:
            return standalone

        for token in (original, reference):
            if token in self.config.typo_symbols:
                return [token]

        similarity = similarity_ratio(normalized_original, normalized_reference)
        if similarity >= self.config.high_similarity_threshold:
            return [reference]
        if similarity >= self.config.similarity_threshold:
            return [original]
        return [reference]

    def _merge_tokens(self, tokens: list[str]) -> list[str]:
        """Fuse split footnote markers and drop repeated readings of the same word."""
        result: list[str] = []

        for token in tokens:
            if not result:
                result.append(token)
                continue

            previous = result[-1]

            if fuse(result, previous, token):
                continue

            # OCR echo: keep the shorter reading
            if self._is_echo(previous, token):
                if len(token) < len(previous):
                    result[-1] = token
                continue

            result.append(token)

        return result

    def _is_echo(self, previous: str, token: str) -> bool:
        # Tokens that normalize to nothing (bare footnote markers) are never echoes
        if not normalize(previous, NormalizePreset.SEARCH) or not normalize(token, NormalizePreset.SEARCH):
            return False
        return normalized_similar(previous, token, self.config.high_similarity_threshold)


def correct(original: str, reference: str, config: Optional[CorrectionConfig] = None) -> str:
    """
    Correct an OCR line against a reference transcript.

    correct('محمد صلى الله عليه وسلم رسول الله', 'محمد ﷺ رسول الله',
            CorrectionConfig(['ﷺ'], 0.7, 0.9))
    → 'محمد صلى الله عليه ﷺ رسول الله'
    """
    return TextCorrector(config).correct(original, reference)
