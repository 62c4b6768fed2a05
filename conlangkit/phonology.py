#!/usr/bin/env python3
"""
Phonology
=========
Phoneme inventories and phonotactically constrained root synthesis.

A root is built from syllables. Each syllable realizes a class pattern
such as "CV" or "CVC": every C slot draws a random consonant, every V slot
a random vowel. Sequence rules cap how many vowel-only syllables may follow
each other, and illegal substrings reject whole candidates.

Usage:
    inventory = PhoneticInventory(phonemes)
    synth = RootSynthesizer(inventory, [SyllablePattern("CV")], min_syllables=1, max_syllables=3)
    root = synth.generate_root()
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import ExhaustedAttempts

logger = logging.getLogger(__name__)

# Retry budget for one generate_root() call
MAX_ROOT_ATTEMPTS = 100


# =============================================================================
# Data Classes
# =============================================================================

class SoundType(Enum):
    """Phoneme class."""
    VOWEL = "Vowel"
    CONSONANT = "Consonant"

    @classmethod
    def parse(cls, value: str) -> "SoundType":
        """Match 'vowel' / 'Consonant' / ... case-insensitively."""
        for member in cls:
            if str(value).strip().lower() == member.value.lower():
                return member
        raise ValueError(f"Unknown sound type '{value}' (expected Vowel or Consonant)")


@dataclass(frozen=True)
class Phoneme:
    """A single phoneme, represented by an opaque grapheme."""
    grapheme: str
    sound_type: SoundType


@dataclass(frozen=True)
class SyllablePattern:
    """A syllable template: C = consonant slot, V = vowel slot."""
    pattern: str

    @property
    def is_vowel_only(self) -> bool:
        return all(c == 'V' for c in self.pattern)

    @property
    def slot_count(self) -> int:
        return sum(1 for c in self.pattern if c in ('C', 'V'))


@dataclass(frozen=True)
class SequenceRules:
    """Constraints on syllable sequences within a root."""
    max_vowel_syllables_in_a_row: int = 0


# =============================================================================
# Phonetic Inventory
# =============================================================================

class PhoneticInventory:
    """
    Partitions phonemes into vowels and consonants.

    Draws are uniform and independent. An empty class yields None, and
    callers skip that slot rather than failing.
    """

    def __init__(self, phonemes: Sequence[Phoneme]):
        self.phonemes = list(phonemes)
        self.vowels = [p for p in self.phonemes if p.sound_type is SoundType.VOWEL]
        self.consonants = [p for p in self.phonemes if p.sound_type is SoundType.CONSONANT]

    def random_consonant(self, rng: random.Random = None) -> Optional[Phoneme]:
        if not self.consonants:
            return None
        return (rng or random.Random()).choice(self.consonants)

    def random_vowel(self, rng: random.Random = None) -> Optional[Phoneme]:
        if not self.vowels:
            return None
        return (rng or random.Random()).choice(self.vowels)

    def __len__(self) -> int:
        return len(self.phonemes)


# =============================================================================
# Root Synthesizer
# =============================================================================

class RootSynthesizer:
    """
    Composes syllables into root words.

    Honors the vowel-only run limit from SequenceRules and rejects any
    candidate containing an illegal substring, retrying the whole word up
    to MAX_ROOT_ATTEMPTS times.
    """

    def __init__(self,
                 inventory: PhoneticInventory,
                 patterns: Sequence[SyllablePattern],
                 min_syllables: int = 1,
                 max_syllables: int = 3,
                 sequence_rules: SequenceRules = None,
                 illegal_substrings: Sequence[str] = (),
                 max_attempts: int = MAX_ROOT_ATTEMPTS):
        if not patterns:
            raise ValueError("At least one syllable pattern is required")
        if min_syllables < 1:
            raise ValueError(f"min_syllables must be >= 1, got {min_syllables}")
        if max_syllables < min_syllables:
            raise ValueError(
                f"max_syllables ({max_syllables}) must be >= min_syllables ({min_syllables})"
            )

        self.inventory = inventory
        self.patterns = list(patterns)
        self.min_syllables = min_syllables
        self.max_syllables = max_syllables
        self.sequence_rules = sequence_rules or SequenceRules()
        self.illegal_substrings = list(illegal_substrings)
        self.max_attempts = max_attempts

    def realize_pattern(self, pattern: SyllablePattern, rng: random.Random = None) -> str:
        """Fill each C/V slot with an independent random grapheme."""
        rng = rng or random.Random()
        text = ""
        for char in pattern.pattern:
            if char == 'C':
                phoneme = self.inventory.random_consonant(rng)
            elif char == 'V':
                phoneme = self.inventory.random_vowel(rng)
            else:
                continue
            if phoneme is not None:
                text += phoneme.grapheme
        return text

    def contains_illegal(self, word: str) -> bool:
        return any(s in word for s in self.illegal_substrings)

    def _eligible_patterns(self, vowel_run: int) -> List[SyllablePattern]:
        """Patterns allowed after `vowel_run` consecutive vowel-only syllables."""
        if vowel_run >= self.sequence_rules.max_vowel_syllables_in_a_row:
            eligible = [p for p in self.patterns if not p.is_vowel_only]
            if eligible:
                return eligible
            # Only vowel-only patterns exist, fall back to the full set
            return self.patterns
        return self.patterns

    def generate_syllables(self, rng: random.Random = None) -> Tuple[str, List[SyllablePattern]]:
        """
        Run one synthesis attempt.

        Returns
        -------
        tuple
            (candidate word, patterns chosen for each syllable). The candidate
            has not been checked against illegal substrings.
        """
        rng = rng or random.Random()
        count = rng.randint(self.min_syllables, self.max_syllables)

        word = ""
        chosen = []
        vowel_run = 0
        for _ in range(count):
            pattern = rng.choice(self._eligible_patterns(vowel_run))
            word += self.realize_pattern(pattern, rng)
            chosen.append(pattern)
            if pattern.is_vowel_only:
                vowel_run += 1
            else:
                vowel_run = 0

        return word, chosen

    def generate_root(self, rng: random.Random = None) -> str:
        """
        Generate one root word.

        Raises
        ------
        ExhaustedAttempts
            If no candidate free of illegal substrings was found.
        """
        rng = rng or random.Random()
        for attempt in range(1, self.max_attempts + 1):
            word, _ = self.generate_syllables(rng)
            if not self.contains_illegal(word):
                return word
            logger.debug(f"Root attempt {attempt}/{self.max_attempts} rejected: {word!r}")

        raise ExhaustedAttempts(self.max_attempts)
