"""
Tests for Graph Export
======================
Tests for DOT and JSON export in conlangkit/export.py.
"""

import json
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from conlangkit.export import lexicon_to_dict, to_dot, to_json
from conlangkit.lexicon import Lexeme, Lexicon, roots_from_forms


@pytest.fixture
def lexicon():
    lex = roots_from_forms([("kal", "verb", "to see"), ("dran", "noun", "stone")])
    lex.add(Lexeme(lex.new_id(), "un-kal", "verb", "not to see", lex.roots[0], "Negation"))
    lex.add(Lexeme(lex.new_id(), "kal-or", "noun", 'one who "sees"', lex.roots[0], "Agent"))
    return lex


class TestLexiconToDict:
    """Tests for lexicon_to_dict()."""

    def test_shape(self, lexicon):
        data = lexicon_to_dict(lexicon)
        assert data['roots'] == [1, 2]
        assert len(data['lexemes']) == 4
        child = data['lexemes'][2]
        assert child == {
            'id': 3,
            'form': 'un-kal',
            'part_of_speech': 'verb',
            'meaning': 'not to see',
            'parent_id': 1,
            'rule_applied': 'Negation',
            'is_root': False,
        }

    def test_json_roundtrip(self, lexicon):
        data = json.loads(to_json(lexicon))
        assert data == lexicon_to_dict(lexicon)

    def test_empty(self):
        assert lexicon_to_dict(Lexicon()) == {'roots': [], 'lexemes': []}


class TestToDot:
    """Tests for to_dot()."""

    def test_nodes_and_edges(self, lexicon):
        dot = to_dot(lexicon, name="test")
        assert dot.startswith('digraph "test" {')
        assert dot.rstrip().endswith('}')
        assert 'n1 [label="kal\\nverb\\n\\"to see\\"", shape=box];' in dot
        assert 'n3 [label="un-kal\\nverb\\n\\"not to see\\"", shape=ellipse];' in dot
        assert 'n1 -> n3 [label="Negation"];' in dot
        assert 'n1 -> n4 [label="Agent"];' in dot
        assert dot.count('->') == 2

    def test_escapes_quotes(self, lexicon):
        dot = to_dot(lexicon)
        assert 'one who \\"sees\\"' in dot
