"""
Tests for S-expression reading and result printing.
"""
import pytest
from atendo.cd_form import Compound, Frame, Var
from atendo.errors import MalformedRequest
from atendo.sexpr import format_raw, format_tree, read, tree_to_data


class TestRead:
    """Reading lexicon notation into plain Python data."""

    def test_symbols_and_lists(self):
        assert read("(assign subject cdForm)") == ["assign", "subject", "cdForm"]

    def test_quote_shorthand(self):
        assert read("'noun-phrase") == ["quote", "noun-phrase"]

    def test_quoted_list(self):
        assert read("'(store)") == ["quote", ["store"]]

    def test_numbers(self):
        assert read("(+ x 1)") == ["+", "x", 1]

    def test_variable_symbol(self):
        assert read("(actor ?go-var1)") == ["actor", "?go-var1"]

    def test_string_literal_is_quoted(self):
        assert read('"jack"') == ["quote", "jack"]

    def test_quote_inside_a_clause(self):
        assert read("(assign cdForm '(store) partOfSpeech 'noun)") == [
            "assign", "cdForm", ["quote", ["store"]], "partOfSpeech", ["quote", "noun"],
        ]

    def test_nested_quotes(self):
        assert read("''jack") == ["quote", ["quote", "jack"]]

    def test_unbalanced_input_is_malformed(self):
        with pytest.raises(MalformedRequest):
            read("((assign x 1)")


class TestFormatTree:
    """Printing trees in the (header (role filler) ...) format."""

    def test_nested_frame(self):
        tree = Frame("ptrans", (
            ("actor", Frame("person", (("name", Frame("jack")),))),
            ("to", Frame("store")),
        ))
        assert format_tree(tree) == "(ptrans (actor (person (name (jack)))) (to (store)))"

    def test_compound(self):
        tree = Compound((Frame("atrans"), Frame("atrans", (("object", Frame("money")),))))
        assert format_tree(tree) == "((atrans) (atrans (object (money))))"

    def test_atoms(self):
        assert format_tree(None) == "nil"
        assert format_tree(True) == "t"
        assert format_tree("jack") == "jack"
        assert format_tree(2) == "2"

    def test_template_variables(self):
        assert format_tree(Frame("ingest", (("actor", Var("eat-var1")),))) == "(ingest (actor ?eat-var1))"

    def test_word_sequence(self):
        assert format_tree(("to", "the", "store")) == "(to the store)"


def test_format_raw_restores_quotes():
    text = "((test (equal partOfSpeech 'noun)) (assign cdForm '(store)))"
    assert format_raw(read(text)) == text


def test_tree_to_data():
    tree = Compound((Frame("atrans", (("object", Frame("kite")),)),))
    assert tree_to_data(tree) == [
        {"header": "atrans", "roles": [["object", {"header": "kite", "roles": []}]]}
    ]
