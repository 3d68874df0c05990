"""
Two-pass assembler for the lasm teaching microcontroller.

Input:  Assembly source text and an opcode table
Output: The program as a list of bit strings, one per instruction

How the two passes work:
  Pass 1: Classify every line, give each instruction its address (index among
          instruction lines) and bind every tag to the next instruction's
          address. Nothing is encoded yet, so forward references are fine.
  Pass 2: Encode every instruction with the completed tag table.

Errors in pass 2 do not stop the run. Each failing line is recorded and
logged, the remaining lines are still encoded, and `failed` is set so the
caller knows not to write an image. Successful lines stay in the program in
source order even when other lines fail.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Dict, List, Mapping, Optional

from .encoder import Encoder, EncodeError, EncodedInstruction
from .lines import classify_source
from .tags import InstructionLine, build_tag_table

__all__ = ['Assembler', 'AssemblerError', 'LineResult']

logger = logging.getLogger(__name__)

RULE = '-' * 39


class AssemblerError(Exception):
    """Raised by convenience helpers when a run had per-line errors."""
    def __init__(self, message: str, line_num: int = 0, line_text: str = "",
                 errors: Optional[List[EncodeError]] = None):
        self.line_num = line_num
        self.line_text = line_text
        self.errors = errors or []
        super().__init__(f"Line {line_num}: {message}" if line_num else message)


@dataclass
class LineResult:
    """Outcome of encoding one instruction line: a word or an error."""
    line: InstructionLine
    word: Optional[EncodedInstruction] = None
    error: Optional[EncodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Assembler:
    """Two-pass assembler.

    Usage:
        asm = Assembler(opcodes)
        program = asm.assemble(source_text)
        if not asm.failed:
            image = to_hex_image(program)
    """

    def __init__(self, opcodes: Mapping[str, str], strict_data: bool = False):
        self.encoder = Encoder(opcodes, strict_data=strict_data)
        self.tags: Dict[str, int] = {}            # Tag name -> instruction address
        self.instructions: List[InstructionLine] = []
        self.results: List[LineResult] = []       # One per instruction, in address order
        self.program: List[str] = []              # Bit strings of the lines that encoded
        self.errors: List[EncodeError] = []

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def assemble(self, source: str) -> List[str]:
        """Assemble source text and return the encoded program.

        Check `failed` afterwards: the program only holds the lines that
        encoded and must not be written out when any line failed.
        """
        self.results = []
        self.program = []
        self.errors = []

        self._pass1(source)
        self._pass2()

        if self.failed:
            logger.error(f"Assembly failed: {len(self.errors)} error(s), "
                         f"{len(self.program)} of {len(self.instructions)} instructions encoded")
        else:
            logger.info(f"{len(self.program)} instructions assembled")
        return self.program

    def _pass1(self, source: str):
        """Pass 1: addresses and tags."""
        self.instructions, self.tags = build_tag_table(classify_source(source))
        logger.debug(f"Pass 1: {len(self.instructions)} instructions, {len(self.tags)} tags")

    def _pass2(self):
        """Pass 2: encode every instruction against the completed tag table."""
        logger.info("Assembling binary:")
        logger.info(RULE)

        for line in self.instructions:
            self.results.append(self._pass2_line(line))

        logger.info(RULE)

    def _pass2_line(self, line: InstructionLine) -> LineResult:
        try:
            word = self.encoder.encode(line.text, self.tags, line.address)
        except EncodeError as e:
            e.line_num = line.line_num
            e.line_text = line.text
            self.errors.append(e)
            logger.error(f"Error assembling instruction (line {line.line_num}): {e}\n    {line.text}")
            return LineResult(line, error=e)

        self.program.append(word.bits)
        return LineResult(line, word=word)

    def raise_for_errors(self):
        """Raise AssemblerError summarising every failed line, if any."""
        if not self.failed:
            return
        detail = "\n".join(f"Line {e.line_num}: {e} ({e.line_text})" for e in self.errors)
        raise AssemblerError(f"{len(self.errors)} error(s):\n{detail}", errors=list(self.errors))

    def get_listing(self) -> str:
        """Return a listing showing address, encoded bits, and source."""
        lines = [f"{'ADDR':>4}  {'BITS':<17}  SOURCE", "-" * 60]
        for result in self.results:
            if result.ok:
                fields = f"{result.word.opcode} {result.word.dest} {result.word.data}"
            else:
                fields = "ERROR"
            lines.append(f"{result.line.address:>4}  {fields:<17}  {result.line.text}")
        return '\n'.join(lines)
