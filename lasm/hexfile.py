"""
Hex memory image writer.

Each encoded word (a bit string) becomes one row of four uppercase hex
digits followed by ';'. The image is padded with '0000;' rows up to a fixed
number of rows (64 by default, the size of the target's program memory).

A program longer than the image is written out in full with no filler,
unless strict=True, in which case it is rejected.
"""

from __future__ import annotations
from typing import Iterable, List

__all__ = ['HexImageError', 'CapacityError', 'IMAGE_ROWS', 'FILL_ROW', 'format_word', 'to_hex_image']

IMAGE_ROWS = 64
FILL_ROW = '0000;'


class HexImageError(Exception):
    """Raised when the image cannot be produced.

    A malformed bit string here means the encoder handed over something it
    should not have; it is an internal error, not a source error.
    """


class CapacityError(HexImageError):
    """Raised in strict mode when the program has more rows than the image."""


def format_word(bits: str) -> str:
    """Render one bit string as a 'HHHH;' row."""
    if not bits or bits.strip('01'):
        raise HexImageError(f"malformed instruction bits: '{bits}'")
    return f"{int(bits, 2):04X};"


def to_hex_image(program: Iterable[str], rows: int = IMAGE_ROWS, strict: bool = False) -> str:
    """Render a program (bit strings, in address order) as a hex image."""
    lines: List[str] = [format_word(bits) for bits in program]

    if strict and len(lines) > rows:
        raise CapacityError(f"program has {len(lines)} instructions, image holds {rows}")

    lines.extend([FILL_ROW] * (rows - len(lines)))
    return ''.join(line + '\n' for line in lines)
