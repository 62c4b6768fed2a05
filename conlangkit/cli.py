#!/usr/bin/env python3
"""
Conlangkit CLI
==============
Command-line interface for vocabulary generation.

Usage:
    conlangkit generate -n 10
    conlangkit --config mylang.yaml validate
    conlangkit graph --roots 20 --passes 3 --format dot -o etymology.dot
    conlangkit narrate -n 5
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import lint_language_config, load_language_config
from .derivation import build_etymological_graph
from .errors import ConfigurationError, ConlangkitError
from .export import to_dot, to_json
from .grammar import generate_sentences
from .lexicon import seed_roots
from .settings import default_language_path, get_setting

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ['dot', 'json']
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False, markup=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def raw(self, text: str):
        """Write text verbatim, even in quiet mode (command results)."""
        sys.stdout.write(text)
        if not text.endswith('\n'):
            sys.stdout.write('\n')

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def warning(self, msg: str):
        print(f"Warning: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            self.console.print(f"OK: {msg}")

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return
        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def setup_logging(level: str = None):
    level = (level or get_setting('logging.level', 'WARNING')).upper()
    logging.basicConfig(
        level=level,
        format=get_setting('logging.format', '%(message)s'),
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def make_rng(seed) -> random.Random:
    return random.Random(seed) if seed is not None else random.Random()


def load_config(args):
    path = Path(args.config) if args.config else default_language_path()
    logger.info(f"Loading language config {path}")
    return load_language_config(path)


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate root words."""
    config = load_config(args)
    rng = make_rng(args.seed)

    lexicon = seed_roots(args.count, config.synthesizer(), config.lexicon_generation, rng=rng)

    if args.json:
        out.raw(json.dumps(
            [{'form': lx.form, 'part_of_speech': lx.part_of_speech, 'meaning': lx.meaning}
             for lx in lexicon],
            indent=2,
            ensure_ascii=False,
        ))
        return 0

    rows = [[i, lx.form, lx.part_of_speech, lx.meaning] for i, lx in enumerate(lexicon, 1)]
    out.table(['#', 'Form', 'Part of speech', 'Meaning'], rows)
    return 0


def cmd_validate(args, out: Output):
    """Load and lint a language config."""
    try:
        config = load_config(args)
    except ConfigurationError as e:
        out.error(str(e))
        return 1

    out.success(
        f"{config.source}: {len(config.phonemes)} phonemes, "
        f"{len(config.syllable_patterns)} syllable patterns, "
        f"{len(config.derivational_rules)} derivational rules, "
        f"word order {config.grammar.word_order.value}"
    )
    for issue in lint_language_config(config):
        out.warning(issue)
    return 0


def cmd_graph(args, out: Output):
    """Build the etymological graph and export it."""
    config = load_config(args)
    rng = make_rng(args.seed)

    lexicon = build_etymological_graph(config, args.roots, args.passes, rng=rng)

    if args.format == 'json':
        text = to_json(lexicon)
    else:
        text = to_dot(lexicon, name=get_setting('graph.name', 'etymology'))

    if args.output:
        Path(args.output).write_text(text, encoding='utf-8')
        out.success(
            f"Wrote {len(lexicon)} lexemes ({len(lexicon.roots)} roots) to {args.output}"
        )
    else:
        out.raw(text)
    return 0


def cmd_narrate(args, out: Output):
    """Build a lexicon and print sample sentences."""
    config = load_config(args)
    rng = make_rng(args.seed)

    lexicon = build_etymological_graph(config, args.roots, args.passes, rng=rng)
    if not len(lexicon):
        out.print("Lexicon is empty, nothing to narrate.")
        return 0

    for sentence in generate_sentences(lexicon, config.grammar, args.count, rng=rng):
        out.raw(sentence)
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='conlangkit',
        description='Conlangkit - Constructed Language Vocabulary Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 10
  %(prog)s --config mylang.yaml validate
  %(prog)s --seed 42 graph --roots 20 --passes 3 -o etymology.dot
  %(prog)s narrate -n 5
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--config', '-c', help='Language config file (YAML or JSON)')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible output')
    parser.add_argument('--log-level', choices=LOG_LEVELS, help='Logging level')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate root words')
    p.add_argument('-n', '--count', type=int, default=get_setting('generate.count', 10),
                   help='Number of roots (default: %(default)s)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- validate ---
    subparsers.add_parser('validate', aliases=['val'], help='Validate a language config')

    # --- graph ---
    p = subparsers.add_parser('graph', aliases=['export'], help='Build and export the lineage graph')
    p.add_argument('--roots', '-r', type=int, default=get_setting('graph.roots', 20),
                   help='Number of roots (default: %(default)s)')
    p.add_argument('--passes', '-p', type=int, default=get_setting('graph.passes', 3),
                   help='Maximum derivation passes (default: %(default)s)')
    p.add_argument('--format', '-f', choices=EXPORT_FORMATS, default=get_setting('graph.format', 'dot'),
                   help='Export format (default: %(default)s)')
    p.add_argument('--output', '-o', help='Output file path (default: stdout)')

    # --- narrate ---
    p = subparsers.add_parser('narrate', aliases=['sentences', 's'], help='Print sample sentences')
    p.add_argument('-n', '--count', type=int, default=get_setting('narrate.count', 5),
                   help='Number of sentences (default: %(default)s)')
    p.add_argument('--roots', '-r', type=int, default=get_setting('narrate.roots', 30),
                   help='Number of roots (default: %(default)s)')
    p.add_argument('--passes', '-p', type=int, default=get_setting('narrate.passes', 2),
                   help='Maximum derivation passes (default: %(default)s)')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.log_level)

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'val': 'validate',
        'export': 'graph',
        'sentences': 'narrate', 's': 'narrate',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'validate': cmd_validate,
        'graph': cmd_graph,
        'narrate': cmd_narrate,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except ConlangkitError as e:
            out.error(str(e))
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
