"""Tests for the tokenizer and stop-word filter."""

import types

import pytest

from kb_skill.knowledge.tokenizer import (
    STOP_WORDS,
    index_terms,
    is_stop_word,
    query_terms,
    tokenize,
)


# ---------------------------------------------------------------------------
# tokenize
# ---------------------------------------------------------------------------

class TestTokenize:
    def test_lowercase(self):
        assert list(tokenize("HELLO World")) == ["hello", "world"]

    def test_strips_punctuation(self):
        assert list(tokenize("What's WAPE? (really!)")) == ["what", "wape", "really"]

    def test_keeps_internal_hyphens(self):
        assert list(tokenize("server-side rendering")) == ["server-side", "rendering"]

    def test_drops_dangling_and_double_hyphens(self):
        assert list(tokenize("-leading trailing- mid--dle")) == ["leading", "trailing", "mid", "dle"]

    def test_digits_allowed(self):
        assert list(tokenize("python3 and 2024")) == ["python3", "and", "2024"]

    def test_drops_single_characters(self):
        assert list(tokenize("a b c de")) == ["de"]

    def test_apostrophe_splits(self):
        # "don't" -> "don" + "t"; the single letter is dropped
        assert list(tokenize("don't")) == ["don"]

    def test_keeps_stop_words(self):
        assert "the" in list(tokenize("the cat"))

    def test_is_lazy_and_restartable(self):
        text = "alpha beta gamma"
        first = tokenize(text)
        assert isinstance(first, types.GeneratorType)
        assert list(first) == list(tokenize(text))

    @pytest.mark.parametrize("value", ["", None, 42, "   ", "!!! ???"])
    def test_empty_or_invalid_input(self, value):
        assert list(tokenize(value)) == []


# ---------------------------------------------------------------------------
# Stop words
# ---------------------------------------------------------------------------

class TestStopWords:
    @pytest.mark.parametrize("word", ["the", "is", "a", "an", "and", "or", "but",
                                      "not", "with", "this", "that", "from"])
    def test_common_words_are_stop_words(self, word):
        assert is_stop_word(word)

    def test_content_word_is_not_stop_word(self):
        assert not is_stop_word("kubernetes")

    def test_stop_words_are_lowercase(self):
        assert all(w == w.lower() for w in STOP_WORDS)


# ---------------------------------------------------------------------------
# index_terms / query_terms
# ---------------------------------------------------------------------------

class TestIndexTerms:
    def test_removes_stop_words(self):
        assert index_terms("The cat is on the mat") == ["cat", "mat"]

    def test_keeps_duplicates(self):
        assert index_terms("oil oil gas") == ["oil", "oil", "gas"]

    def test_only_stop_words(self):
        assert index_terms("the is a an") == []


class TestQueryTerms:
    def test_deduplicates_in_order(self):
        assert query_terms("rust Rust RUST go") == ["rust", "go"]

    def test_stop_word_query_is_empty(self):
        assert query_terms("what is the") == []
