"""
lasm — assembler for a two-register teaching microcontroller
=============================================================
Translates lasm assembly into fixed-width machine words and writes them as a
hex memory image ('HHHH;' rows, 64 rows) for the programming tool.

Pipeline:
    ┌──────────┐    ┌────────────┐    ┌──────────┐    ┌───────────┐    ┌───────────┐
    │  Source  │───>│ Classifier │───>│   Tags   │───>│  Encoder  │───>│ Hex image │
    │  (.asm)  │    │  (lines)   │    │ (pass 1) │    │ (pass 2)  │    │  (.hex)   │
    └──────────┘    └────────────┘    └──────────┘    └───────────┘    └───────────┘

    - lines.py:     classify each line (blank, comment, tag, instruction)
    - tags.py:      give instructions addresses, bind tags (pass 1)
    - encoder.py:   opcode / destination / data fields for one line (pass 2)
    - assembler.py: drive both passes, collect per-line errors
    - hexfile.py:   render the program as a padded hex image
    - config.py:    load the opcode table from config.json
"""

from typing import Mapping

__version__ = "1.0.0"

from .lines import LineKind, SourceLine, classify_line, classify_source
from .tags import InstructionLine, build_tag_table
from .encoder import Encoder, EncodeError, EncodedInstruction
from .assembler import Assembler, AssemblerError, LineResult
from .hexfile import CapacityError, HexImageError, IMAGE_ROWS, to_hex_image
from .config import ConfigError, load_opcodes


def assemble_source(source: str, opcodes: Mapping[str, str], *, rows: int = IMAGE_ROWS,
                    strict: bool = False) -> str:
    """Assemble source text straight to a hex image.

    Args:
        source: lasm assembly text.
        opcodes: mnemonic -> opcode bit string.
        rows: number of rows in the image (default 64).
        strict: reject data values above 255 and programs longer than the image.

    Returns:
        The hex image text.

    Raises:
        AssemblerError: one or more lines failed to encode (all are listed).
        HexImageError: the program does not fit (strict) or is malformed.
    """
    asm = Assembler(opcodes, strict_data=strict)
    program = asm.assemble(source)
    asm.raise_for_errors()
    return to_hex_image(program, rows=rows, strict=strict)
