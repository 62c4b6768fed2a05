#!/usr/bin/env python3
"""
Lexicon
=======
The lineage graph of generated lexemes.

Lexemes live in an arena keyed by integer id. Parent links always point
at a lexeme that was inserted earlier, so the graph is a forest rooted at
the parentless lexemes produced by root synthesis. Nothing is ever removed
or modified after insertion.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from .errors import InsufficientDiversity
from .phonology import RootSynthesizer

logger = logging.getLogger(__name__)

DEFAULT_PART_OF_SPEECH = "noun"
DEFAULT_MEANING = "placeholder"

# seed_roots() gives up after max(count * ROOT_DRAW_FACTOR, ROOT_DRAW_FLOOR) draws
ROOT_DRAW_FACTOR = 50
ROOT_DRAW_FLOOR = 100


@dataclass
class LexiconGenerationConfig:
    """Parts of speech and candidate meanings handed out to new roots."""
    parts_of_speech: List[str] = field(default_factory=list)
    meanings: Dict[str, List[str]] = field(default_factory=dict)

    def random_part_of_speech(self, rng: random.Random) -> str:
        if not self.parts_of_speech:
            return DEFAULT_PART_OF_SPEECH
        return rng.choice(self.parts_of_speech)

    def random_meaning(self, part_of_speech: str, rng: random.Random) -> str:
        candidates = self.meanings.get(part_of_speech)
        if not candidates:
            return DEFAULT_MEANING
        return rng.choice(candidates)


@dataclass(frozen=True)
class Lexeme:
    """A generated word and its derivation lineage."""
    id: int
    form: str
    part_of_speech: str
    meaning: str
    parent_id: Optional[int] = None
    rule_applied: Optional[str] = None

    def __post_init__(self):
        if (self.parent_id is None) != (self.rule_applied is None):
            raise ValueError(
                f"Lexeme {self.id}: parent_id and rule_applied must both be set or both be None"
            )

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class Lexicon:
    """
    Append-only arena of lexemes.

    Attributes
    ----------
    graph : dict
        id -> Lexeme
    roots : list
        Ids of parentless lexemes, in insertion order.
    """

    def __init__(self):
        self.graph: Dict[int, Lexeme] = {}
        self.roots: List[int] = []
        self._forms = set()
        self._children: Dict[int, List[int]] = {}
        self._next_id = 1

    def new_id(self) -> int:
        """Reserve a fresh identifier. Ids are never handed out twice."""
        lexeme_id = self._next_id
        self._next_id += 1
        return lexeme_id

    def add(self, lexeme: Lexeme) -> Lexeme:
        """
        Insert a lexeme.

        Raises
        ------
        ValueError
            If the id or form is already present, or the parent is missing.
        """
        if lexeme.id in self.graph:
            raise ValueError(f"Duplicate lexeme id {lexeme.id}")
        if lexeme.form in self._forms:
            raise ValueError(f"Duplicate lexeme form '{lexeme.form}'")
        if lexeme.parent_id is not None and lexeme.parent_id not in self.graph:
            raise ValueError(f"Lexeme {lexeme.id} refers to unknown parent {lexeme.parent_id}")

        self.graph[lexeme.id] = lexeme
        self._next_id = max(self._next_id, lexeme.id + 1)
        self._forms.add(lexeme.form)
        if lexeme.is_root:
            self.roots.append(lexeme.id)
        else:
            self._children.setdefault(lexeme.parent_id, []).append(lexeme.id)
        return lexeme

    def add_root(self, form: str, part_of_speech: str, meaning: str) -> Lexeme:
        return self.add(Lexeme(self.new_id(), form, part_of_speech, meaning))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_form(self, form: str) -> bool:
        return form in self._forms

    def get(self, lexeme_id: int) -> Lexeme:
        return self.graph[lexeme_id]

    def by_part_of_speech(self, part_of_speech: str) -> List[Lexeme]:
        return [lx for lx in self.graph.values() if lx.part_of_speech == part_of_speech]

    def children(self, lexeme_id: int) -> List[Lexeme]:
        return [self.graph[i] for i in self._children.get(lexeme_id, [])]

    def lineage(self, lexeme_id: int) -> List[Lexeme]:
        """Lexemes from `lexeme_id` up to its root, inclusive."""
        chain = [self.graph[lexeme_id]]
        while chain[-1].parent_id is not None:
            chain.append(self.graph[chain[-1].parent_id])
        return chain

    def depth(self, lexeme_id: int) -> int:
        """Number of parent hops to the root (0 for a root)."""
        return len(self.lineage(lexeme_id)) - 1

    def generations(self) -> Dict[int, int]:
        """Count of lexemes at each depth."""
        counts: Dict[int, int] = {}
        for lexeme_id in self.graph:
            d = self.depth(lexeme_id)
            counts[d] = counts.get(d, 0) + 1
        return counts

    def derived(self) -> List[Lexeme]:
        return [lx for lx in self.graph.values() if not lx.is_root]

    def __len__(self) -> int:
        return len(self.graph)

    def __iter__(self) -> Iterator[Lexeme]:
        return iter(self.graph.values())

    def __contains__(self, lexeme_id) -> bool:
        return lexeme_id in self.graph

    def __repr__(self) -> str:
        return f"Lexicon(lexemes={len(self.graph)}, roots={len(self.roots)})"


# =============================================================================
# Root Phase
# =============================================================================

def seed_roots(count: int,
               synthesizer: RootSynthesizer,
               generation_config: LexiconGenerationConfig = None,
               rng: random.Random = None,
               lexicon: Lexicon = None,
               max_draws: int = None) -> Lexicon:
    """
    Fill a lexicon with `count` unique roots.

    Parameters
    ----------
    count : int
        Number of distinct roots to collect
    synthesizer : RootSynthesizer
        Produces candidate forms
    generation_config : LexiconGenerationConfig, optional
        Parts of speech and meanings to assign
    rng : random.Random, optional
        Random source for this call
    lexicon : Lexicon, optional
        Lexicon to insert into (a new one by default)
    max_draws : int, optional
        Cap on synthesized candidates, duplicates included

    Returns
    -------
    Lexicon
        The lexicon holding the new roots

    Raises
    ------
    InsufficientDiversity
        If `max_draws` candidates did not contain `count` distinct forms.
    ExhaustedAttempts
        Propagated from the synthesizer.
    """
    rng = rng or random.Random()
    generation_config = generation_config or LexiconGenerationConfig()
    lexicon = lexicon if lexicon is not None else Lexicon()
    if max_draws is None:
        max_draws = max(count * ROOT_DRAW_FACTOR, ROOT_DRAW_FLOOR)

    used_forms = set()
    accepted = 0
    draws = 0
    while accepted < count:
        if draws >= max_draws:
            raise InsufficientDiversity(count, accepted, draws)
        draws += 1

        form = synthesizer.generate_root(rng)
        if form in used_forms or lexicon.has_form(form):
            continue
        used_forms.add(form)

        part_of_speech = generation_config.random_part_of_speech(rng)
        meaning = generation_config.random_meaning(part_of_speech, rng)
        lexicon.add_root(form, part_of_speech, meaning)
        accepted += 1

    logger.info(f"Seeded {accepted} roots in {draws} draws")
    return lexicon


def roots_from_forms(entries: Sequence[tuple], lexicon: Lexicon = None) -> Lexicon:
    """Build a lexicon from explicit (form, part_of_speech, meaning) triples."""
    lexicon = lexicon if lexicon is not None else Lexicon()
    for form, part_of_speech, meaning in entries:
        lexicon.add_root(form, part_of_speech, meaning)
    return lexicon
