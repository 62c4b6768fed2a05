#!/usr/bin/env python3
"""
Language Configuration
======================
Loads a language definition from YAML or JSON into typed objects.

A language document supplies the phoneme inventory, syllable patterns,
root length bounds, illegal substrings, sequence rules, the lexicon
generation table, derivational rules and the grammar. See
configs/languages/default.yaml for a complete example.

Usage:
    config = load_language_config("mylang.yaml")
    synth = config.synthesizer()
    for issue in lint_language_config(config):
        print(issue)
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .derivation import (
    MEANING_PLACEHOLDER,
    SAME_AS_INPUT,
    DerivationalRule,
    Prefix,
    RuleConstraints,
    Suffix,
)
from .errors import ConfigurationError
from .grammar import Grammar, WordOrder
from .lexicon import LexiconGenerationConfig
from .phonology import (
    Phoneme,
    PhoneticInventory,
    RootSynthesizer,
    SequenceRules,
    SoundType,
    SyllablePattern,
)

# Accepted spellings for keys, first one is canonical
KEY_ALIASES = {
    'syllable_rules': ('syllable_rules', 'syllable_patterns'),
    'min_syllables': ('min_syllables', 'min_syllables_for_root'),
    'max_syllables': ('max_syllables', 'max_syllables_for_root'),
    'illegal_patterns': ('illegal_patterns', 'illegal_substrings'),
}

PROCESS_TYPES = {
    'prefix': Prefix,
    'suffix': Suffix,
}


@dataclass
class LanguageConfig:
    """A fully parsed language definition."""
    phonemes: List[Phoneme]
    syllable_patterns: List[SyllablePattern]
    min_syllables: int
    max_syllables: int
    illegal_substrings: List[str] = field(default_factory=list)
    sequence_rules: SequenceRules = field(default_factory=SequenceRules)
    lexicon_generation: LexiconGenerationConfig = field(default_factory=LexiconGenerationConfig)
    derivational_rules: List[DerivationalRule] = field(default_factory=list)
    grammar: Grammar = field(default_factory=Grammar)
    source: str = ""

    def inventory(self) -> PhoneticInventory:
        return PhoneticInventory(self.phonemes)

    def synthesizer(self) -> RootSynthesizer:
        return RootSynthesizer(
            self.inventory(),
            self.syllable_patterns,
            min_syllables=self.min_syllables,
            max_syllables=self.max_syllables,
            sequence_rules=self.sequence_rules,
            illegal_substrings=self.illegal_substrings,
        )

    def rule(self, name: str) -> DerivationalRule:
        for rule in self.derivational_rules:
            if rule.name == name:
                return rule
        raise KeyError(name)


# =============================================================================
# Loading
# =============================================================================

def read_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML or JSON document (by suffix) into a dict."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"cannot read file: {e}", path) from e

    try:
        if path.suffix.lower() == '.json':
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"cannot parse document: {e}", path) from e

    if not isinstance(data, dict):
        raise ConfigurationError("top level must be a mapping", path)
    return data


def load_language_config(path: Union[str, Path]) -> LanguageConfig:
    """Load and parse a language document."""
    data = read_document(path)
    try:
        config = parse_language_config(data)
    except ConfigurationError as e:
        raise ConfigurationError(e.reason, path) from e
    config.source = str(path)
    return config


def _lookup(data: Dict[str, Any], key: str, default: Any = None, required: bool = False) -> Any:
    for alias in KEY_ALIASES.get(key, (key,)):
        if alias in data and data[alias] is not None:
            return data[alias]
    if required:
        raise ConfigurationError(f"missing required key '{key}'")
    return default


def _as_list(value: Any, context: str) -> list:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"'{context}' must be a list")
    return list(value)


def _as_mapping(value: Any, context: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{context}' must be a mapping")
    return value


def _as_int(value: Any, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{context}' must be an integer, got {value!r}")
    return value


def _parse_phoneme(entry: Any, index: int) -> Phoneme:
    entry = _as_mapping(entry, f"phonemes[{index}]")
    grapheme = entry.get('grapheme')
    if not isinstance(grapheme, str) or not grapheme:
        raise ConfigurationError(f"phonemes[{index}].grapheme must be a non-empty string")
    try:
        sound_type = SoundType.parse(entry.get('sound_type', ''))
    except ValueError as e:
        raise ConfigurationError(f"phonemes[{index}]: {e}") from e
    return Phoneme(grapheme, sound_type)


def _parse_process(value: Any, context: str):
    """
    Accept either the tagged form {Prefix: "un-"} or the explicit form
    {type: prefix, form: "un-"}.
    """
    value = _as_mapping(value, context)
    if 'type' in value:
        tag, form = value.get('type'), value.get('form')
    elif len(value) == 1:
        tag, form = next(iter(value.items()))
    else:
        raise ConfigurationError(f"'{context}' must name exactly one of Prefix or Suffix")

    cls = PROCESS_TYPES.get(str(tag).strip().lower())
    if cls is None:
        raise ConfigurationError(f"'{context}' has unknown process '{tag}'")
    if not isinstance(form, str):
        raise ConfigurationError(f"'{context}' affix form must be a string")
    return cls(form)


def _parse_rule(entry: Any, index: int) -> DerivationalRule:
    context = f"derivational_rules[{index}]"
    entry = _as_mapping(entry, context)

    name = entry.get('name')
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"{context}.name must be a non-empty string")

    for key in ('applies_to_pos', 'process', 'meaning_template'):
        if key not in entry:
            raise ConfigurationError(f"{context} ({name}) missing '{key}'")

    constraints = _as_mapping(entry.get('constraints'), f"{context}.constraints")
    return DerivationalRule(
        name=name,
        applies_to_pos=frozenset(_as_list(entry['applies_to_pos'], f"{context}.applies_to_pos")),
        output_pos=str(entry.get('output_pos') or SAME_AS_INPUT),
        process=_parse_process(entry['process'], f"{context}.process"),
        meaning_template=str(entry['meaning_template']),
        constraints=RuleConstraints(
            cannot_follow_rules=frozenset(
                _as_list(constraints.get('cannot_follow_rules'), f"{context}.constraints.cannot_follow_rules")
            )
        ),
    )


def parse_language_config(data: Dict[str, Any]) -> LanguageConfig:
    """
    Build a LanguageConfig from a parsed document.

    Raises
    ------
    ConfigurationError
        On missing keys, wrong types or inconsistent values.
    """
    phonemes = [
        _parse_phoneme(entry, i)
        for i, entry in enumerate(_as_list(_lookup(data, 'phonemes', required=True), 'phonemes'))
    ]

    patterns = [
        SyllablePattern(str(p))
        for p in _as_list(_lookup(data, 'syllable_rules', required=True), 'syllable_rules')
    ]
    if not patterns:
        raise ConfigurationError("at least one syllable pattern is required")

    min_syllables = _as_int(_lookup(data, 'min_syllables', required=True), 'min_syllables')
    max_syllables = _as_int(_lookup(data, 'max_syllables', required=True), 'max_syllables')
    if min_syllables < 1:
        raise ConfigurationError(f"min_syllables must be >= 1, got {min_syllables}")
    if max_syllables < min_syllables:
        raise ConfigurationError(
            f"max_syllables ({max_syllables}) must be >= min_syllables ({min_syllables})"
        )

    illegal = [str(s) for s in _as_list(_lookup(data, 'illegal_patterns'), 'illegal_patterns')]
    if any(not s for s in illegal):
        raise ConfigurationError("illegal substrings must be non-empty")

    seq = _as_mapping(_lookup(data, 'sequence_rules'), 'sequence_rules')
    max_vowel_run = _as_int(
        seq.get('max_vowel_syllables_in_a_row', 0),
        'sequence_rules.max_vowel_syllables_in_a_row',
    )
    if max_vowel_run < 0:
        raise ConfigurationError("sequence_rules.max_vowel_syllables_in_a_row must be >= 0")

    lex = _as_mapping(_lookup(data, 'lexicon_generation'), 'lexicon_generation')
    meanings = _as_mapping(lex.get('meanings'), 'lexicon_generation.meanings')
    generation = LexiconGenerationConfig(
        parts_of_speech=[str(p) for p in _as_list(lex.get('parts_of_speech'), 'lexicon_generation.parts_of_speech')],
        meanings={
            str(pos): [str(m) for m in _as_list(values, f"lexicon_generation.meanings.{pos}")]
            for pos, values in meanings.items()
        },
    )

    rules = [
        _parse_rule(entry, i)
        for i, entry in enumerate(_as_list(_lookup(data, 'derivational_rules'), 'derivational_rules'))
    ]
    seen = set()
    for rule in rules:
        if rule.name in seen:
            raise ConfigurationError(f"duplicate derivational rule name '{rule.name}'")
        seen.add(rule.name)

    grammar_data = _as_mapping(_lookup(data, 'grammar'), 'grammar')
    grammar = Grammar(word_order=WordOrder.parse(grammar_data.get('word_order')))

    return LanguageConfig(
        phonemes=phonemes,
        syllable_patterns=patterns,
        min_syllables=min_syllables,
        max_syllables=max_syllables,
        illegal_substrings=illegal,
        sequence_rules=SequenceRules(max_vowel_run),
        lexicon_generation=generation,
        derivational_rules=rules,
        grammar=grammar,
    )


# =============================================================================
# Lint
# =============================================================================

def lint_language_config(config: LanguageConfig) -> List[str]:
    """
    Report problems that do not stop generation but probably are mistakes.

    Returns
    -------
    list[str]
        Human-readable warnings, empty if none.
    """
    issues = []
    inventory = config.inventory()
    uses_c = any('C' in p.pattern for p in config.syllable_patterns)
    uses_v = any('V' in p.pattern for p in config.syllable_patterns)

    if uses_c and not inventory.consonants:
        issues.append("Patterns use C slots but the inventory has no consonants")
    if uses_v and not inventory.vowels:
        issues.append("Patterns use V slots but the inventory has no vowels")

    for pattern in config.syllable_patterns:
        if pattern.slot_count == 0:
            issues.append(f"Syllable pattern '{pattern.pattern}' has no C or V slots")

    if (config.sequence_rules.max_vowel_syllables_in_a_row == 0
            and all(p.is_vowel_only for p in config.syllable_patterns)):
        issues.append("All syllable patterns are vowel-only; the vowel run limit cannot be honored")

    for pos in config.lexicon_generation.parts_of_speech:
        if not config.lexicon_generation.meanings.get(pos):
            issues.append(f"Part of speech '{pos}' has no meanings; roots will use a placeholder")

    # Parts of speech a lexeme can ever have
    reachable = set(config.lexicon_generation.parts_of_speech or ['noun'])
    changed = True
    while changed:
        changed = False
        for rule in config.derivational_rules:
            if rule.applies_to_pos & reachable and rule.output_pos != SAME_AS_INPUT:
                if rule.output_pos not in reachable:
                    reachable.add(rule.output_pos)
                    changed = True

    names = {rule.name for rule in config.derivational_rules}
    for rule in config.derivational_rules:
        if MEANING_PLACEHOLDER not in rule.meaning_template:
            issues.append(f"Rule '{rule.name}': meaning template lacks {MEANING_PLACEHOLDER}")
        for other in sorted(rule.constraints.cannot_follow_rules - names):
            issues.append(f"Rule '{rule.name}': cannot_follow_rules names unknown rule '{other}'")
        if not rule.applies_to_pos & reachable:
            issues.append(f"Rule '{rule.name}' applies to no reachable part of speech")

    return issues
