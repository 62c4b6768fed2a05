#!/usr/bin/env python3
"""
Graph Export
============
Renders a lexicon's lineage graph as Graphviz DOT or JSON.

Each lexeme becomes a node (form, part of speech, meaning; roots drawn as
boxes) and each parent link a directed edge labelled with the rule name.
"""

import json
from typing import Any, Dict

from .lexicon import Lexeme, Lexicon


def lexicon_to_dict(lexicon: Lexicon) -> Dict[str, Any]:
    """Plain-data view of a lexicon."""
    return {
        'roots': list(lexicon.roots),
        'lexemes': [
            {
                'id': lx.id,
                'form': lx.form,
                'part_of_speech': lx.part_of_speech,
                'meaning': lx.meaning,
                'parent_id': lx.parent_id,
                'rule_applied': lx.rule_applied,
                'is_root': lx.is_root,
            }
            for lx in lexicon
        ],
    }


def to_json(lexicon: Lexicon, indent: int = 2) -> str:
    return json.dumps(lexicon_to_dict(lexicon), indent=indent, ensure_ascii=False)


def _escape(text: str) -> str:
    return text.replace('\\', '\\\\').replace('"', '\\"')


def _node_label(lexeme: Lexeme) -> str:
    return f'{_escape(lexeme.form)}\\n{_escape(lexeme.part_of_speech)}\\n\\"{_escape(lexeme.meaning)}\\"'


def to_dot(lexicon: Lexicon, name: str = "etymology") -> str:
    """Render the lexicon as a DOT digraph."""
    lines = [f'digraph "{_escape(name)}" {{', '    rankdir=LR;']

    for lexeme in lexicon:
        shape = 'box' if lexeme.is_root else 'ellipse'
        lines.append(f'    n{lexeme.id} [label="{_node_label(lexeme)}", shape={shape}];')

    for lexeme in lexicon:
        if lexeme.parent_id is not None:
            lines.append(
                f'    n{lexeme.parent_id} -> n{lexeme.id} [label="{_escape(lexeme.rule_applied)}"];'
            )

    lines.append('}')
    return '\n'.join(lines) + '\n'
