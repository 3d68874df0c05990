"""
Instruction encoder (pass 2).

Turns one instruction line into its machine word, written as a bit string:

    opcode      destination   data
    (N bits)    (1 bit)       (8 bits)

  opcode       comes from the opcode table, width fixed per mnemonic
  destination  R0 -> '0', R1 -> '1', default '0'
  data         default '00000000', otherwise one of:
                 #name       tag address, 8-bit zero padded
                 0bXXXXXXXX  exactly 8 binary digits, used verbatim
                 123         decimal, zero padded to at least 8 digits

Operand forms accepted after the mnemonic:

    MNEM
    MNEM R1          destination only
    MNEM 42          data only
    MNEM R0 #loop    destination and data

Decimal values above 255 are not range checked unless the encoder is built
with strict_data=True; they produce a data field wider than 8 bits.
Negative decimals (LOD -5) are rejected as invalid decimal data.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import re
from typing import Dict, List, Mapping, Optional, Tuple

__all__ = [
    'Encoder', 'EncodeError', 'EncodedInstruction',
    'INVALID_FORMAT', 'UNKNOWN_OPCODE', 'INVALID_DESTINATION', 'UNKNOWN_TAG',
    'BAD_BINARY', 'BAD_DECIMAL', 'DATA_RANGE',
]

logger = logging.getLogger(__name__)

# Error kinds (also the message prefix)
INVALID_FORMAT = 'invalid instruction format'
UNKNOWN_OPCODE = 'unknown opcode'
INVALID_DESTINATION = 'invalid destination'
UNKNOWN_TAG = 'unknown tag'
BAD_BINARY = 'binary data should be 8 bits long'
BAD_DECIMAL = 'invalid decimal data'
DATA_RANGE = 'data out of range'

DEST_BITS = 1
DATA_BITS = 8
DEFAULT_DEST = '0' * DEST_BITS
DEFAULT_DATA = '0' * DATA_BITS

DESTINATIONS: Dict[str, str] = {
    'R0': '0',
    'R1': '1',
}

TAG_PREFIX = '#'
BINARY_PREFIX = '0b'

_BINARY_RE = re.compile(r'^[01]{%d}$' % DATA_BITS)
_DECIMAL_RE = re.compile(r'^\+?[0-9]+$')


class EncodeError(Exception):
    """Raised when a single instruction cannot be encoded."""
    def __init__(self, kind: str, detail: str = "", line_num: int = 0, line_text: str = ""):
        self.kind = kind
        self.line_num = line_num
        self.line_text = line_text
        super().__init__(f"{kind}: {detail}" if detail else kind)


@dataclass
class EncodedInstruction:
    """One encoded machine word plus its decoded fields."""
    mnemonic: str
    opcode: str
    dest: str
    data: str
    text: str = ""
    address: int = 0

    @property
    def bits(self) -> str:
        return self.opcode + self.dest + self.data

    def pretty(self) -> str:
        """Trace line: address, source text, then the three fields."""
        return f"{self.address}: {self.text:<20} {self.opcode} {self.dest} {self.data:<13}"


def is_destination(token: str) -> bool:
    return token in DESTINATIONS


def _split_operands(operands: List[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split the tokens after the mnemonic into (destination, data) tokens."""
    if len(operands) == 0:
        return None, None
    if len(operands) == 1:
        if is_destination(operands[0]):
            return operands[0], None
        return None, operands[0]
    if len(operands) == 2:
        if not is_destination(operands[0]):
            raise EncodeError(INVALID_DESTINATION, operands[0])
        return operands[0], operands[1]
    raise EncodeError(INVALID_FORMAT, ' '.join(operands))


class Encoder:
    """Encodes instruction lines against an opcode table.

    Usage:
        enc = Encoder({'LOD': '0001', 'BRN': '1001'})
        word = enc.encode('LOD R1 10', tags={}, address=0)
        word.bits   # '0001' + '1' + '00001010'
    """

    def __init__(self, opcodes: Mapping[str, str], strict_data: bool = False):
        self.opcodes = opcodes
        self.strict_data = strict_data

    def encode(self, text: str, tags: Mapping[str, int], address: int = 0) -> EncodedInstruction:
        """Encode one instruction. Raises EncodeError on any problem with the line."""
        parts = text.split()
        if not parts:
            raise EncodeError(INVALID_FORMAT, text)

        mnemonic = parts[0]
        opcode = self.opcodes.get(mnemonic)
        if opcode is None:
            raise EncodeError(UNKNOWN_OPCODE, mnemonic)

        dest_tok, data_tok = _split_operands(parts[1:])

        dest = DESTINATIONS[dest_tok] if dest_tok is not None else DEFAULT_DEST
        data = self.encode_data(data_tok, tags) if data_tok is not None else DEFAULT_DATA

        word = EncodedInstruction(mnemonic, opcode, dest, data, text=text, address=address)
        logger.info(word.pretty())
        return word

    def encode_data(self, token: str, tags: Mapping[str, int]) -> str:
        """Resolve a data operand to its bit string."""
        if token.startswith(TAG_PREFIX):
            name = token[len(TAG_PREFIX):]
            if name not in tags:
                raise EncodeError(UNKNOWN_TAG, name)
            return format(tags[name], '0%db' % DATA_BITS)

        if token.startswith(BINARY_PREFIX):
            digits = token[len(BINARY_PREFIX):]
            if not _BINARY_RE.match(digits):
                raise EncodeError(BAD_BINARY, digits)
            return digits

        # Negative values cannot be written as a plain bit string
        if not _DECIMAL_RE.match(token):
            raise EncodeError(BAD_DECIMAL, token)
        value = int(token)
        if self.strict_data and value >= 1 << DATA_BITS:
            raise EncodeError(DATA_RANGE, f"{value} does not fit in {DATA_BITS} bits")
        return format(value, '0%db' % DATA_BITS)
