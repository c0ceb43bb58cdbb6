"""Tests for line correction against a reference transcript."""

import pytest
from arabic_ocr_corrector.config import CorrectionConfig
from arabic_ocr_corrector.correction.corrector import TextCorrector, correct


def _config(*symbols):
    return CorrectionConfig(
        typo_symbols=list(symbols),
        similarity_threshold=0.7,
        high_similarity_threshold=0.9,
    )


class TestCorrect:
    def test_honorific_replaces_phrase_end(self):
        result = correct("محمد صلى الله عليه وسلم رسول الله", "محمد ﷺ رسول الله", _config("ﷺ"))
        assert result == "محمد صلى الله عليه ﷺ رسول الله"

    def test_multiple_symbols(self):
        result = correct(
            "بسم الله الرحمن الرحيم الله جل جلاله",
            "بسم ﷽ الله ﷻ",
            _config("﷽", "ﷻ"),
        )
        assert result == "بسم الله الرحمن ﷽ الله جل ﷻ"

    def test_original_keeps_its_spelling(self):
        result = correct("النص صلى الله عليه وسلم العربي", "النَّص ﷺ العَرَبي", _config("ﷺ"))
        assert result == "النص صلى الله عليه ﷺ العربي"

    def test_unknown_symbol_taken_from_reference(self, monkeypatch):
        monkeypatch.delenv("ARABIC_OCR_SIMILARITY_THRESHOLD", raising=False)
        monkeypatch.delenv("ARABIC_OCR_HIGH_SIMILARITY_THRESHOLD", raising=False)
        result = correct("محمد صلي الله عليه وسلم", "محمد ﷺ رسول الله")
        assert result == "محمد ﷺ رسول الله عليه وسلم"

    def test_identical_lines(self):
        assert correct("normal text", "normal text") == "normal text"

    def test_whitespace_normalized(self):
        assert correct("  بسم   الله ", "بسم الله") == "بسم الله"

    def test_empty_sides(self):
        assert correct("", "") == ""
        assert correct("نص", "") == "نص"
        assert correct("", "نص") == "نص"


class TestFootnoteHandling:
    def test_standalone_marker_precedes_word(self):
        assert correct("روى (٣)", "روى مسلم") == "روى (٣) مسلم"

    def test_distinct_bare_markers_kept(self):
        assert correct("(١) (٢)", "(١) (٢)") == "(١) (٢)"


class TestMergePass:
    def setup_method(self):
        self.corrector = TextCorrector(_config())

    def test_echo_removed(self):
        assert self.corrector.correct("الكتاب الكتاب", "الكتاب") == "الكتاب"

    def test_echo_keeps_shorter_token(self):
        assert self.corrector._merge_tokens(["الكتابُ", "الكتاب"]) == ["الكتاب"]

    def test_fuse_embedded_marker(self):
        assert self.corrector._merge_tokens(["قال", "(١)", "(١)أخرجه"]) == ["قال", "(١)أخرجه"]

    def test_swallow_repeated_marker(self):
        assert self.corrector._merge_tokens(["(١)أخرجه", "(١)", "البخاري"]) == ["(١)أخرجه", "البخاري"]

    def test_different_words_kept(self):
        assert self.corrector._merge_tokens(["قال", "الشيخ"]) == ["قال", "الشيخ"]


class TestCorrectLines:
    def setup_method(self):
        self.corrector = TextCorrector(_config("ﷺ"))

    def test_pairwise(self):
        result = self.corrector.correct_lines(
            ["محمد صلى الله عليه وسلم رسول الله", "normal text"],
            ["محمد ﷺ رسول الله", "normal text"],
        )
        assert result == ["محمد صلى الله عليه ﷺ رسول الله", "normal text"]

    def test_lines_without_reference_kept(self):
        assert self.corrector.correct_lines(["a", "b"], ["a"]) == ["a", "b"]

    def test_default_config(self):
        assert TextCorrector().config.typo_symbols == []


@pytest.mark.parametrize("original,reference", [
    ("قال رسول الله", "قال رسول الله"),
    ("كِتَابٌ جديد", "كتاب جديد"),
])
def test_normalized_equal_lines_keep_original(original, reference):
    assert correct(original, reference, _config()) == original
