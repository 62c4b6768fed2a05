#!/usr/bin/env python3
"""
Sentence Assembly
=================
Samples a subject, verb and object from the lexicon and orders them
according to the language's basic word order.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List

from .lexicon import Lexicon

logger = logging.getLogger(__name__)

PLACEHOLDERS = {
    'noun': '[noun]',
    'verb': '[verb]',
}


class WordOrder(Enum):
    """Basic constituent order of a transitive clause."""
    SVO = "SVO"
    SOV = "SOV"
    VSO = "VSO"
    VOS = "VOS"
    OSV = "OSV"
    OVS = "OVS"

    @classmethod
    def parse(cls, value) -> "WordOrder":
        """Parse a word order, falling back to SVO for missing or unknown values."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.SVO
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            logger.warning(f"Unrecognized word order '{value}', using SVO")
            return cls.SVO


@dataclass(frozen=True)
class Grammar:
    """Sentence-level grammar settings."""
    word_order: WordOrder = WordOrder.SVO


def arrange(subject: str, verb: str, obj: str, word_order: WordOrder) -> List[str]:
    """Order the three constituents."""
    slots = {'S': subject, 'V': verb, 'O': obj}
    return [slots[c] for c in WordOrder.parse(word_order).value]


def assemble_sentence(subject: str, verb: str, obj: str, word_order: WordOrder) -> str:
    """Order, capitalize the first character and terminate with a period."""
    sentence = ' '.join(arrange(subject, verb, obj, word_order))
    return sentence[:1].upper() + sentence[1:] + '.'


def _sample_form(lexicon: Lexicon, part_of_speech: str, rng: random.Random) -> str:
    candidates = lexicon.by_part_of_speech(part_of_speech)
    if not candidates:
        logger.warning(f"No {part_of_speech} in lexicon, using placeholder")
        return PLACEHOLDERS[part_of_speech]
    return rng.choice(candidates).form


def generate_sentence(lexicon: Lexicon, grammar: Grammar = None, rng: random.Random = None) -> str:
    """
    Build one sentence.

    Subject and object are independent draws from the nouns, so the same
    lexeme may fill both slots. Missing parts of speech become placeholders.
    """
    rng = rng or random.Random()
    grammar = grammar or Grammar()

    subject = _sample_form(lexicon, 'noun', rng)
    verb = _sample_form(lexicon, 'verb', rng)
    obj = _sample_form(lexicon, 'noun', rng)

    return assemble_sentence(subject, verb, obj, grammar.word_order)


def generate_sentences(lexicon: Lexicon,
                       grammar: Grammar = None,
                       count: int = 5,
                       rng: random.Random = None) -> List[str]:
    """Generate `count` sentences, or none at all for an empty lexicon."""
    if not len(lexicon):
        return []
    rng = rng or random.Random()
    return [generate_sentence(lexicon, grammar, rng) for _ in range(count)]
