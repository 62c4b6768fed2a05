#!/usr/bin/env python3
"""
Conlangkit - Constructed Language Vocabulary Generator
======================================================

Grows the vocabulary of a constructed language: roots are synthesized
from a phoneme inventory under phonotactic constraints, derivational rules
build an etymological forest on top of them, and a word-order grammar
strings lexemes into sentences.

Quick Start
-----------
    from conlangkit import load_language_config, build_etymological_graph, generate_sentence

    config = load_language_config("mylang.yaml")
    lexicon = build_etymological_graph(config, root_count=20, derivation_passes=3)
    print(generate_sentence(lexicon, config.grammar))

Modules
-------
    conlangkit.phonology  - Phoneme inventory and root synthesis
    conlangkit.lexicon    - Lexeme arena and root seeding
    conlangkit.derivation - Derivational rules and generational derivation
    conlangkit.grammar    - Word order and sentence assembly
    conlangkit.config     - Language document loading and linting
    conlangkit.export     - DOT / JSON graph export

CLI Usage
---------
    python -m conlangkit generate -n 10
    python -m conlangkit graph --roots 20 --passes 3 -o etymology.dot
    python -m conlangkit narrate -n 5
"""

__version__ = "0.1.0"

from .errors import (
    ConlangkitError,
    ConfigurationError,
    ExhaustedAttempts,
    InsufficientDiversity,
)
from .phonology import (
    MAX_ROOT_ATTEMPTS,
    Phoneme,
    PhoneticInventory,
    RootSynthesizer,
    SequenceRules,
    SoundType,
    SyllablePattern,
)
from .lexicon import (
    Lexeme,
    Lexicon,
    LexiconGenerationConfig,
    seed_roots,
)
from .derivation import (
    SAME_AS_INPUT,
    DerivationalRule,
    Prefix,
    RuleConstraints,
    Suffix,
    build_etymological_graph,
    commit_generation,
    derive_generation,
    run_derivation,
)
from .grammar import (
    Grammar,
    WordOrder,
    assemble_sentence,
    generate_sentence,
    generate_sentences,
)
from .config import (
    LanguageConfig,
    lint_language_config,
    load_language_config,
    parse_language_config,
)
from .export import lexicon_to_dict, to_dot, to_json

__all__ = [
    '__version__',
    # Errors
    'ConlangkitError',
    'ConfigurationError',
    'ExhaustedAttempts',
    'InsufficientDiversity',
    # Phonology
    'MAX_ROOT_ATTEMPTS',
    'Phoneme',
    'PhoneticInventory',
    'RootSynthesizer',
    'SequenceRules',
    'SoundType',
    'SyllablePattern',
    # Lexicon
    'Lexeme',
    'Lexicon',
    'LexiconGenerationConfig',
    'seed_roots',
    # Derivation
    'SAME_AS_INPUT',
    'DerivationalRule',
    'Prefix',
    'RuleConstraints',
    'Suffix',
    'build_etymological_graph',
    'commit_generation',
    'derive_generation',
    'run_derivation',
    # Grammar
    'Grammar',
    'WordOrder',
    'assemble_sentence',
    'generate_sentence',
    'generate_sentences',
    # Config
    'LanguageConfig',
    'lint_language_config',
    'load_language_config',
    'parse_language_config',
    # Export
    'lexicon_to_dict',
    'to_dot',
    'to_json',
]
