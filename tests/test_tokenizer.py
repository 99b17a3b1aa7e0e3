"""
Tests for sentence tokenization.
"""
import pytest
from atendo.tokenizer import preprocess_text, tokenize


class TestPreprocess:

    def test_dashes_become_spaces(self):
        assert preprocess_text("Jack went—home") == "Jack went home"

    def test_smart_quotes_normalized(self):
        assert preprocess_text("Jack’s “kite”") == "Jack's \"kite\""

    def test_whitespace_collapsed(self):
        assert preprocess_text("  Jack \t went\n home ") == "Jack went home"


class TestTokenize:

    def test_simple_sentence(self):
        assert tokenize("Jack went to the store.") == ["jack", "went", "to", "the", "store"]

    def test_parenthesised_sentence(self):
        assert tokenize("(jack went to the store)") == ["jack", "went", "to", "the", "store"]

    @pytest.mark.parametrize("text, expected", [
        ("Jack's kite", ["jack's", "kite"]),
        ("a well-known store", ["a", "well-known", "store"]),
        ("'quoted' words", ["quoted", "words"]),
        ("Jack, Mary; and -- more!", ["jack", "mary", "and", "more"]),
    ])
    def test_punctuation(self, text, expected):
        assert tokenize(text) == expected

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize(" ... ") == []
