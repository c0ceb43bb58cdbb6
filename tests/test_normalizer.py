"""Tests for Arabic text normalization."""

import random

import pytest
from arabic_ocr_corrector.config import NormalizePreset
from arabic_ocr_corrector.text.normalizer import PRESETS, ArabicNormalizer, normalize

SAMPLES = [
    "اَلسَّلَامُ عَلَيْكُمْ",
    "أحمد إلى المدرسة",
    "قال (٣) الشيخ",
    "توفي سنة ١٤٣٥ هـ",
    "الكـــتاب  abc 123",
    "نص\u200bمتصل",
    "",
    "5ه/ه a",
    "5٥ه ه(اأa",
    "هb،5ه- ه",
    "(٣(٣) م)",
    "٥ (٣) ه",
]

MARKER_ALPHABET = ["ه", "٥", "5", "/", "-", " ", "(", ")", "٣", "م", "أ", "ة", "a", "،", "\u064e"]


class TestSearchPreset:
    def test_remove_diacritics(self):
        assert normalize("اَلسَّلَامُ عَلَيْكُمْ") == "السلام عليكم"

    def test_fold_alif_variants(self):
        assert normalize("أحمد إبراهيم آل ٱلله") == "احمد ابراهيم ال الله"

    def test_alif_maqsura(self):
        assert normalize("إلى") == "الي"

    def test_keeps_ta_marbuta(self):
        assert normalize("مدرسة") == "مدرسة"

    def test_strip_tatweel(self):
        assert normalize("الكـــتاب") == "الكتاب"

    def test_strip_footnote_reference(self):
        assert normalize("قال (٣) الشيخ") == "قال الشيخ"

    def test_hijri_marker(self):
        assert normalize("توفي سنة ١٤٣٥ هـ") == "توفي سنة ١٤٣٥"

    def test_digits_never_lengthen(self):
        assert normalize("١٢٣") == "١٢٣"

    def test_empty(self):
        assert normalize("") == ""


class TestAggressivePreset:
    def test_ta_marbuta(self):
        assert normalize("مدرسة", NormalizePreset.AGGRESSIVE) == "مدرسه"

    def test_hijri_date_removed(self):
        assert normalize("١٤٣٥/٣/٢٩ هـ", "aggressive") == ""

    def test_latin_and_digits_removed(self):
        assert normalize("abc محمد 123", "aggressive") == "محمد"

    def test_punctuation_becomes_space(self):
        assert normalize("قال: نعم، صحيح.", "aggressive") == "قال نعم صحيح"


class TestDisplayPreset:
    def test_zero_width_removed(self):
        assert normalize("نص\u200bمتصل", "display") == "نصمتصل"

    def test_keeps_diacritics(self):
        assert normalize("كِتَاب", "display") == "كِتَاب"

    def test_whitespace(self):
        assert normalize("  نص   آخر ", NormalizePreset.DISPLAY) == "نص آخر"


class TestOverrides:
    def test_override_single_step(self):
        assert normalize("مدرسة", "search", replace_ta_marbutah=True) == "مدرسه"

    def test_strip_latin_and_symbols(self):
        assert normalize("الكتاب abc 123", "search", strip_latin_and_symbols=True) == "الكتاب"

    def test_zero_width_to_space(self):
        assert normalize("نص\u200bمتصل", "display", zero_width_to_space=True) == "نص متصل"

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            normalize("نص", "unknown")

    def test_normalizer_class(self):
        normalizer = ArabicNormalizer(PRESETS[NormalizePreset.SEARCH])
        assert normalizer.process("السَّلام") == "السلام"


class TestIdempotency:
    @pytest.mark.parametrize("preset", list(NormalizePreset))
    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, preset, text):
        once = normalize(text, preset)
        assert normalize(once, preset) == once

    @pytest.mark.parametrize("preset", list(NormalizePreset))
    def test_idempotent_on_random_markers(self, preset):
        rng = random.Random(17)
        for _ in range(500):
            text = "".join(rng.choice(MARKER_ALPHABET) for _ in range(rng.randint(1, 10)))
            once = normalize(text, preset)
            assert normalize(once, preset) == once, text

    def test_consecutive_hijri_markers(self):
        assert normalize("5ه/ه a") == "5/ a"
        assert normalize("هb،5ه- ه") == "هb،5-"
