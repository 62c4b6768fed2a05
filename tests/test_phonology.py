"""
Tests for Phonology
===================
Tests for the phonetic inventory and root synthesis in conlangkit/phonology.py.
"""

import pytest
import random
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from conlangkit.errors import ExhaustedAttempts
from conlangkit.phonology import (
    MAX_ROOT_ATTEMPTS,
    Phoneme,
    PhoneticInventory,
    RootSynthesizer,
    SequenceRules,
    SoundType,
    SyllablePattern,
)

CONSONANTS = ['p', 't', 'k', 'm', 's']
VOWELS = ['a', 'i', 'u', 'o']


def make_inventory(consonants=CONSONANTS, vowels=VOWELS):
    phonemes = [Phoneme(c, SoundType.CONSONANT) for c in consonants]
    phonemes += [Phoneme(v, SoundType.VOWEL) for v in vowels]
    return PhoneticInventory(phonemes)


class TestSoundType:
    """Tests for SoundType parsing."""

    def test_parse_case_insensitive(self):
        assert SoundType.parse("vowel") is SoundType.VOWEL
        assert SoundType.parse("Consonant") is SoundType.CONSONANT
        assert SoundType.parse(" CONSONANT ") is SoundType.CONSONANT

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            SoundType.parse("glide")


class TestSyllablePattern:
    """Tests for SyllablePattern predicates."""

    def test_vowel_only(self):
        assert SyllablePattern("V").is_vowel_only
        assert SyllablePattern("VV").is_vowel_only
        assert not SyllablePattern("CV").is_vowel_only
        assert not SyllablePattern("VC").is_vowel_only

    def test_empty_pattern_is_vowel_only(self):
        """Every symbol of an empty pattern is V, vacuously."""
        assert SyllablePattern("").is_vowel_only

    def test_slot_count_ignores_other_symbols(self):
        assert SyllablePattern("C-V.C").slot_count == 3


class TestPhoneticInventory:
    """Tests for PhoneticInventory."""

    def test_partitions_phonemes(self):
        inv = make_inventory()
        assert [p.grapheme for p in inv.consonants] == CONSONANTS
        assert [p.grapheme for p in inv.vowels] == VOWELS
        assert len(inv) == 9

    def test_random_draws_come_from_class(self):
        inv = make_inventory()
        rng = random.Random(1)
        for _ in range(50):
            assert inv.random_consonant(rng).grapheme in CONSONANTS
            assert inv.random_vowel(rng).grapheme in VOWELS

    def test_empty_class_returns_none(self):
        inv = make_inventory(vowels=[])
        assert inv.random_vowel() is None
        assert inv.random_consonant() is not None

    def test_draws_cover_inventory(self):
        inv = make_inventory()
        rng = random.Random(7)
        seen = {inv.random_vowel(rng).grapheme for _ in range(200)}
        assert seen == set(VOWELS)


class TestRootSynthesizer:
    """Tests for RootSynthesizer.generate_root()."""

    @pytest.fixture
    def synth(self):
        return RootSynthesizer(
            make_inventory(),
            [SyllablePattern("CV"), SyllablePattern("CVC")],
            min_syllables=2,
            max_syllables=2,
            sequence_rules=SequenceRules(max_vowel_syllables_in_a_row=1),
        )

    def test_two_syllable_scenario(self, synth):
        """CV/CVC with exactly two syllables gives 4-6 characters from the inventory."""
        rng = random.Random(42)
        allowed = set(CONSONANTS) | set(VOWELS)
        for _ in range(200):
            root = synth.generate_root(rng)
            assert 4 <= len(root) <= 6
            assert set(root) <= allowed

    def test_syllable_count_in_bounds(self):
        synth = RootSynthesizer(make_inventory(), [SyllablePattern("CV")], 1, 4)
        rng = random.Random(3)
        lengths = {len(synth.generate_root(rng)) // 2 for _ in range(300)}
        assert lengths == {1, 2, 3, 4}

    def test_illegal_substrings_never_appear(self):
        illegal = ['pa', 'ki', 'tu']
        synth = RootSynthesizer(
            make_inventory(),
            [SyllablePattern("CV"), SyllablePattern("CVC")],
            1, 3,
            illegal_substrings=illegal,
        )
        rng = random.Random(11)
        for _ in range(300):
            root = synth.generate_root(rng)
            assert not any(s in root for s in illegal)

    def test_exhausted_attempts(self):
        synth = RootSynthesizer(
            make_inventory(consonants=['p'], vowels=['a']),
            [SyllablePattern("CV")],
            1, 2,
            illegal_substrings=['pa'],
        )
        with pytest.raises(ExhaustedAttempts) as exc:
            synth.generate_root(random.Random(0))
        assert exc.value.attempts == MAX_ROOT_ATTEMPTS

    def test_empty_vowel_class_is_skipped(self):
        synth = RootSynthesizer(make_inventory(vowels=[]), [SyllablePattern("CVC")], 1, 1)
        root = synth.generate_root(random.Random(5))
        assert len(root) == 2
        assert set(root) <= set(CONSONANTS)

    def test_invalid_bounds(self):
        inv = make_inventory()
        with pytest.raises(ValueError):
            RootSynthesizer(inv, [SyllablePattern("CV")], 3, 2)
        with pytest.raises(ValueError):
            RootSynthesizer(inv, [SyllablePattern("CV")], 0, 2)
        with pytest.raises(ValueError):
            RootSynthesizer(inv, [], 1, 2)

    def test_same_seed_same_roots(self, synth):
        roots1 = [synth.generate_root(random.Random(99)) for _ in range(3)]
        roots2 = [synth.generate_root(random.Random(99)) for _ in range(3)]
        assert roots1 == roots2


class TestVowelRunLimit:
    """Tests for the max_vowel_syllables_in_a_row sequence rule."""

    @staticmethod
    def longest_vowel_run(patterns):
        longest = run = 0
        for p in patterns:
            run = run + 1 if p.is_vowel_only else 0
            longest = max(longest, run)
        return longest

    @pytest.mark.parametrize("limit", [0, 1, 2])
    def test_run_never_exceeds_limit(self, limit):
        synth = RootSynthesizer(
            make_inventory(),
            [SyllablePattern("V"), SyllablePattern("CV"), SyllablePattern("VV")],
            1, 6,
            sequence_rules=SequenceRules(max_vowel_syllables_in_a_row=limit),
        )
        rng = random.Random(limit)
        for _ in range(300):
            _, patterns = synth.generate_syllables(rng)
            assert self.longest_vowel_run(patterns) <= limit

    def test_empty_syllables_count_toward_vowel_run(self):
        """An empty pattern extends the vowel-only run instead of resetting it."""
        synth = RootSynthesizer(
            make_inventory(),
            [SyllablePattern("V"), SyllablePattern(""), SyllablePattern("CV")],
            2, 6,
            sequence_rules=SequenceRules(max_vowel_syllables_in_a_row=1),
        )
        rng = random.Random(21)
        for _ in range(300):
            _, patterns = synth.generate_syllables(rng)
            assert self.longest_vowel_run(patterns) <= 1

    def test_falls_back_when_only_vowel_patterns(self):
        """With only vowel-only patterns the limit is waived instead of failing."""
        synth = RootSynthesizer(
            make_inventory(),
            [SyllablePattern("V")],
            3, 3,
            sequence_rules=SequenceRules(max_vowel_syllables_in_a_row=1),
        )
        word, patterns = synth.generate_syllables(random.Random(8))
        assert len(patterns) == 3
        assert len(word) == 3
        assert set(word) <= set(VOWELS)

    def test_realize_pattern_ignores_literals(self):
        synth = RootSynthesizer(make_inventory(), [SyllablePattern("CV")], 1, 1)
        text = synth.realize_pattern(SyllablePattern("C-V"), random.Random(2))
        assert len(text) == 2
        assert text[0] in CONSONANTS
        assert text[1] in VOWELS
