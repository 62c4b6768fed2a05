#!/usr/bin/env python3
"""
Derivation Engine
=================
Grows the lexicon one generation at a time by applying derivational rules.

A rule attaches an affix (prefix or suffix) to a parent lexeme, optionally
changes its part of speech and rewrites its meaning through a template.
Each pass only looks at the previous pass's new lexemes (the frontier), and
a pass that produces nothing ends the process.

Usage:
    lexicon = build_etymological_graph(language_config, root_count=20, derivation_passes=3)
"""

import logging
import random
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Sequence, Tuple, Union

from .lexicon import Lexeme, Lexicon, seed_roots

logger = logging.getLogger(__name__)

SAME_AS_INPUT = "SameAsInput"
MEANING_PLACEHOLDER = "{parent_meaning}"


# =============================================================================
# Rule Model
# =============================================================================

@dataclass(frozen=True)
class Prefix:
    """Affix placed before the parent form."""
    form: str


@dataclass(frozen=True)
class Suffix:
    """Affix placed after the parent form."""
    form: str


Process = Union[Prefix, Suffix]


def apply_process(process: Process, base: str) -> str:
    if isinstance(process, Prefix):
        return process.form + base
    if isinstance(process, Suffix):
        return base + process.form
    raise TypeError(f"Unknown derivational process: {process!r}")


@dataclass(frozen=True)
class RuleConstraints:
    """Restrictions on when a rule may fire."""
    cannot_follow_rules: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class DerivationalRule:
    """A transformation from a parent lexeme to a derived child."""
    name: str
    applies_to_pos: FrozenSet[str]
    output_pos: str
    process: Process
    meaning_template: str
    constraints: RuleConstraints = field(default_factory=RuleConstraints)

    def applies_to(self, lexeme: Lexeme) -> bool:
        return lexeme.part_of_speech in self.applies_to_pos

    def is_blocked_after(self, lexeme: Lexeme) -> bool:
        """True if the lexeme was itself made by a rule this one cannot follow."""
        return (lexeme.rule_applied is not None
                and lexeme.rule_applied in self.constraints.cannot_follow_rules)

    def derive_form(self, parent_form: str) -> str:
        return apply_process(self.process, parent_form)

    def derive_part_of_speech(self, parent_pos: str) -> str:
        if self.output_pos == SAME_AS_INPUT:
            return parent_pos
        return self.output_pos

    def derive_meaning(self, parent_meaning: str) -> str:
        # str.replace is a single pass, so placeholders inside parent_meaning stay put
        return self.meaning_template.replace(MEANING_PLACEHOLDER, parent_meaning)


# =============================================================================
# Generational Derivation
# =============================================================================

def derive_generation(lexicon: Lexicon,
                      rules: Sequence[DerivationalRule],
                      frontier_ids: Iterable[int]) -> Tuple[List[Lexeme], List[int]]:
    """
    Apply every eligible rule to every frontier lexeme.

    New lexemes are staged, not inserted: the caller commits them. Forms
    already present in the lexicon, or staged earlier in this pass, are
    dropped silently.

    Returns
    -------
    tuple
        (staged lexemes, their ids as the next frontier)
    """
    staged: List[Lexeme] = []
    staged_forms = set()
    blocked = 0
    duplicates = 0

    for parent_id in frontier_ids:
        parent = lexicon.get(parent_id)
        for rule in rules:
            if not rule.applies_to(parent):
                continue
            if rule.is_blocked_after(parent):
                blocked += 1
                continue

            form = rule.derive_form(parent.form)
            if lexicon.has_form(form) or form in staged_forms:
                duplicates += 1
                continue

            child = Lexeme(
                id=lexicon.new_id(),
                form=form,
                part_of_speech=rule.derive_part_of_speech(parent.part_of_speech),
                meaning=rule.derive_meaning(parent.meaning),
                parent_id=parent.id,
                rule_applied=rule.name,
            )
            staged.append(child)
            staged_forms.add(form)

    if blocked or duplicates:
        logger.debug(f"Skipped {blocked} constrained and {duplicates} duplicate derivations")

    return staged, [lx.id for lx in staged]


def commit_generation(lexicon: Lexicon, lexemes: Iterable[Lexeme]) -> None:
    """Insert staged lexemes in order (parents are always already present)."""
    for lexeme in lexemes:
        lexicon.add(lexeme)


def run_derivation(lexicon: Lexicon,
                   rules: Sequence[DerivationalRule],
                   derivation_passes: int,
                   frontier_ids: Iterable[int] = None) -> int:
    """
    Run up to `derivation_passes` passes starting from `frontier_ids`
    (the lexicon's roots by default).

    Returns
    -------
    int
        Number of passes that ran, including a final empty pass.
    """
    frontier = list(lexicon.roots if frontier_ids is None else frontier_ids)
    passes = 0
    for pass_number in range(1, derivation_passes + 1):
        passes = pass_number
        staged, frontier = derive_generation(lexicon, rules, frontier)
        if not staged:
            logger.info(f"Pass {pass_number}: no new lexemes, stopping early")
            break
        commit_generation(lexicon, staged)
        logger.info(f"Pass {pass_number}: derived {len(staged)} lexemes ({len(lexicon)} total)")
    return passes


def build_etymological_graph(config,
                             root_count: int,
                             derivation_passes: int,
                             rng: random.Random = None) -> Lexicon:
    """
    Seed roots and derive descendants.

    Parameters
    ----------
    config : LanguageConfig
        Supplies the root synthesizer, lexicon generation table and rules
    root_count : int
        Number of unique roots to seed
    derivation_passes : int
        Maximum number of derivation passes
    rng : random.Random, optional
        Random source for this build

    Returns
    -------
    Lexicon
        Roots plus all derived lexemes
    """
    rng = rng or random.Random()
    lexicon = seed_roots(
        root_count,
        config.synthesizer(),
        config.lexicon_generation,
        rng=rng,
    )
    run_derivation(lexicon, config.derivational_rules, derivation_passes)
    return lexicon
