"""
Line classifier for lasm source text.

Every physical line falls into exactly one category:

  BLANK        — nothing left after stripping whitespace
  COMMENT      — starts with '//'
  TAG          — starts with '#', the rest is the label name   e.g. #loop
  INSTRUCTION  — anything else                                  e.g. LOD R1 #loop

Blank and comment lines are kept in the classified list (so line numbers stay
meaningful) but carry no meaning for the later passes.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List

__all__ = ['LineKind', 'SourceLine', 'classify_line', 'classify_source']

COMMENT_PREFIX = '//'
TAG_PREFIX = '#'


class LineKind(Enum):
    BLANK = 'blank'
    COMMENT = 'comment'
    TAG = 'tag'
    INSTRUCTION = 'instruction'


@dataclass
class SourceLine:
    """One classified source line."""
    kind: LineKind
    text: str = ""       # Stripped line text (tag name for TAG lines)
    line_num: int = 0    # 1-based physical line number


def classify_line(raw: str, line_num: int = 0) -> SourceLine:
    """Strip and classify one raw line. Never raises."""
    text = raw.strip()
    if not text:
        return SourceLine(LineKind.BLANK, "", line_num)
    if text.startswith(COMMENT_PREFIX):
        return SourceLine(LineKind.COMMENT, text, line_num)
    if text.startswith(TAG_PREFIX):
        return SourceLine(LineKind.TAG, text[len(TAG_PREFIX):], line_num)
    return SourceLine(LineKind.INSTRUCTION, text, line_num)


def classify_source(source: str) -> List[SourceLine]:
    """Classify every line of a source text, numbering lines from 1.

    Lines end at '\\n' only; a trailing '\\r' is removed by the strip.
    """
    return [classify_line(line, i) for i, line in enumerate(source.split('\n'), 1)]
