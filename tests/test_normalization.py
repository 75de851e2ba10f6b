"""Unit tests for text normalization and tokenization."""

import pytest

from dupfinder.config import MatchConfiguration
from dupfinder.normalization import NormalizedText, TextNormalizer


@pytest.fixture
def normalizer():
    return TextNormalizer(MatchConfiguration())


class TestNormalize:
    """Tests for TextNormalizer.normalize."""

    def test_lowercases(self, normalizer):
        assert normalizer.normalize("Oil CHANGE") == "oil change"

    def test_punctuation_becomes_space(self, normalizer):
        assert normalizer.normalize("Oil-Change!") == "oil change"

    def test_collapses_and_trims_whitespace(self, normalizer):
        assert normalizer.normalize("  brake \t pad\n replacement  ") == "brake pad replacement"

    def test_underscore_is_punctuation(self, normalizer):
        assert normalizer.normalize("brake_pad") == "brake pad"

    def test_keeps_digits_and_accented_letters(self, normalizer):
        assert normalizer.normalize("Café 5W-30") == "café 5w 30"

    def test_none_and_empty(self, normalizer):
        assert normalizer.normalize(None) == ""
        assert normalizer.normalize("") == ""

    def test_case_kept_when_disabled(self):
        normalizer = TextNormalizer(MatchConfiguration(ignore_case=False))
        assert normalizer.normalize("Oil Change") == "Oil Change"

    def test_punctuation_kept_when_disabled(self):
        normalizer = TextNormalizer(MatchConfiguration(ignore_punctuation=False))
        assert normalizer.normalize("Oil-Change!  Now") == "oil-change! now"


class TestTokenize:
    """Tests for TextNormalizer.tokenize."""

    def test_splits_on_spaces(self, normalizer):
        assert normalizer.tokenize("brake pad replacement") == ("brake", "pad", "replacement")

    def test_drops_short_tokens(self):
        normalizer = TextNormalizer(MatchConfiguration(min_word_length=3))
        assert normalizer.tokenize("replace a tie rod on it") == ("replace", "tie", "rod")

    def test_min_word_length_one_keeps_everything(self):
        normalizer = TextNormalizer(MatchConfiguration(min_word_length=1))
        assert normalizer.tokenize("a b c") == ("a", "b", "c")

    def test_empty(self, normalizer):
        assert normalizer.tokenize("") == ()


class TestPrepare:
    """Tests for TextNormalizer.prepare."""

    def test_prepare(self, normalizer):
        prepared = normalizer.prepare("Replace Brake Pads, Brake Pads!")

        assert isinstance(prepared, NormalizedText)
        assert prepared.original == "Replace Brake Pads, Brake Pads!"
        assert prepared.normalized == "replace brake pads brake pads"
        assert prepared.tokens == ("replace", "brake", "pads", "brake", "pads")
        assert prepared.token_set == frozenset({"replace", "brake", "pads"})
        assert len(prepared) == len("replace brake pads brake pads")
        assert not prepared.is_empty

    def test_prepare_empty(self, normalizer):
        prepared = normalizer.prepare("?!")
        assert prepared.is_empty
        assert prepared.tokens == ()
        assert prepared.token_set == frozenset()

    def test_short_words_still_part_of_normalized_text(self):
        normalizer = TextNormalizer(MatchConfiguration(min_word_length=4))
        prepared = normalizer.prepare("Oil Change")

        assert prepared.normalized == "oil change"
        assert prepared.tokens == ("change",)
