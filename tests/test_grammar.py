"""
Tests for Sentence Assembly
===========================
Tests for word order and sentence generation in conlangkit/grammar.py.
"""

import pytest
import random
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from conlangkit.grammar import (
    PLACEHOLDERS,
    Grammar,
    WordOrder,
    arrange,
    assemble_sentence,
    generate_sentence,
    generate_sentences,
)
from conlangkit.lexicon import Lexicon, roots_from_forms


class TestWordOrder:
    """Tests for WordOrder parsing and arrangement."""

    @pytest.mark.parametrize("order,expected", [
        ("SVO", ["S", "V", "O"]),
        ("SOV", ["S", "O", "V"]),
        ("VSO", ["V", "S", "O"]),
        ("VOS", ["V", "O", "S"]),
        ("OSV", ["O", "S", "V"]),
        ("OVS", ["O", "V", "S"]),
    ])
    def test_all_orders(self, order, expected):
        assert arrange("S", "V", "O", WordOrder(order)) == expected

    def test_parse_lowercase(self):
        assert WordOrder.parse("ovs") is WordOrder.OVS

    def test_parse_missing_defaults_to_svo(self):
        assert WordOrder.parse(None) is WordOrder.SVO

    def test_parse_unknown_defaults_to_svo(self):
        assert WordOrder.parse("XYZ") is WordOrder.SVO

    def test_default_grammar(self):
        assert Grammar().word_order is WordOrder.SVO


class TestGenerateSentence:
    """Tests for generate_sentence()."""

    def test_ovs_scenario(self):
        """Single noun/verb candidates make subject and object the same word."""
        lexicon = roots_from_forms([("lum", "noun", "sun"), ("kast", "verb", "to see")])
        sentence = generate_sentence(lexicon, Grammar(WordOrder.OVS), random.Random(0))
        assert sentence == "Lum kast lum."

    def test_ovs_ordering(self):
        assert assemble_sentence("lum", "kast", "dran", WordOrder.OVS) == "Dran kast lum."

    def test_ovs_distinct_subject_and_object(self):
        lexicon = roots_from_forms([
            ("lum", "noun", "sun"),
            ("dran", "noun", "stone"),
            ("kast", "verb", "to see"),
        ])
        grammar = Grammar(WordOrder.OVS)
        sentences = {generate_sentence(lexicon, grammar, random.Random(s)) for s in range(100)}
        assert "Dran kast lum." in sentences
        assert sentences <= {"Dran kast lum.", "Lum kast dran.", "Lum kast lum.", "Dran kast dran."}

    def test_capitalizes_only_first_character(self):
        lexicon = roots_from_forms([("lUM", "noun", "sun"), ("KAST", "verb", "to see")])
        assert generate_sentence(lexicon, Grammar(), random.Random(0)) == "LUM KAST lUM."

    def test_placeholders_for_missing_parts_of_speech(self):
        lexicon = roots_from_forms([("big", "adjective", "big")])
        sentence = generate_sentence(lexicon, Grammar(WordOrder.SVO), random.Random(0))
        expected = f"{PLACEHOLDERS['noun']} {PLACEHOLDERS['verb']} {PLACEHOLDERS['noun']}."
        assert sentence == expected[:1].upper() + expected[1:]

    def test_missing_verb_only(self):
        lexicon = roots_from_forms([("lum", "noun", "sun")])
        sentence = generate_sentence(lexicon, Grammar(WordOrder.SOV), random.Random(0))
        assert sentence == f"Lum lum {PLACEHOLDERS['verb']}."

    def test_uses_derived_lexemes(self):
        from conlangkit.lexicon import Lexeme
        lexicon = roots_from_forms([("kal", "verb", "to see")])
        lexicon.add(Lexeme(lexicon.new_id(), "kal-or", "noun", "seer", lexicon.roots[0], "Agent"))
        sentence = generate_sentence(lexicon, Grammar(), random.Random(0))
        assert sentence == "Kal-or kal kal-or."


class TestGenerateSentences:
    """Tests for generate_sentences()."""

    def test_empty_lexicon_short_circuits(self):
        assert generate_sentences(Lexicon(), Grammar(), count=3) == []

    def test_count(self):
        lexicon = roots_from_forms([("lum", "noun", "sun"), ("kast", "verb", "to see")])
        sentences = generate_sentences(lexicon, Grammar(), count=4, rng=random.Random(1))
        assert len(sentences) == 4
        assert all(s.endswith(".") for s in sentences)
