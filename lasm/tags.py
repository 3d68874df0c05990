"""
Tag table builder (pass 1).

Walks the classified lines once, giving every instruction line an address
(its index among instruction lines) and binding each tag to the address of the
next instruction that follows it. Tags and comments never consume an address.

The whole source must go through this pass before anything is encoded:
an instruction may reference a tag defined further down (forward reference).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .lines import LineKind, SourceLine

__all__ = ['InstructionLine', 'build_tag_table']


@dataclass
class InstructionLine:
    """An instruction line with its assigned address."""
    address: int
    text: str
    line_num: int = 0


def build_tag_table(lines: Iterable[SourceLine]) -> Tuple[List[InstructionLine], Dict[str, int]]:
    """Assign addresses and collect tags.

    Returns (instructions, tags). A tag defined more than once keeps its last
    definition. A tag after the last instruction binds to the instruction
    count, one past the end of the program.
    """
    instructions: List[InstructionLine] = []
    tags: Dict[str, int] = {}
    counter = 0

    for line in lines:
        if line.kind is LineKind.TAG:
            tags[line.text] = counter
        elif line.kind is LineKind.INSTRUCTION:
            instructions.append(InstructionLine(counter, line.text, line.line_num))
            counter += 1

    return instructions, tags
