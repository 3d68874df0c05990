"""
Opcode table loading.

The opcode table lives in a JSON file (config.json by default):

    {
        "opcodes": {
            "LOD": "0001",
            "BRN": "1001"
        }
    }

Each value is the opcode bit pattern for that mnemonic. Widths may differ
between mnemonics, but opcode + 1 destination bit + 8 data bits should stay
within 16 bits for the hex image to make sense.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

__all__ = ['ConfigError', 'DEFAULT_CONFIG', 'load_opcodes', 'parse_opcodes']

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = 'config.json'


class ConfigError(Exception):
    """Raised when the opcode configuration cannot be loaded."""


def parse_opcodes(document: object) -> Mapping[str, str]:
    """Validate a decoded config document and return a read-only opcode table."""
    if not isinstance(document, dict) or not isinstance(document.get('opcodes'), dict):
        raise ConfigError("config must contain an 'opcodes' object")

    opcodes = {}
    for mnemonic, bits in document['opcodes'].items():
        if not isinstance(bits, str) or not bits or bits.strip('01'):
            raise ConfigError(f"opcode for '{mnemonic}' must be a binary string, got {bits!r}")
        opcodes[mnemonic] = bits

    return MappingProxyType(opcodes)


def load_opcodes(path: Union[str, Path] = DEFAULT_CONFIG) -> Mapping[str, str]:
    """Load the opcode table from a JSON config file."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read config {path}: {e}")

    opcodes = parse_opcodes(document)
    logger.debug(f"Loaded {len(opcodes)} opcodes from {path}")
    return opcodes
