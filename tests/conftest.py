import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(ROOT, "config.json")

# Small synthetic table; opcode + 1 + 8 stays within 16 bits
TEST_OPCODES = {
    "NOP": "0000",
    "LOD": "0001",
    "STO": "0010",
    "SUB": "0100",
    "BRA": "1000",
    "BRZ": "1001",
    "BRN": "1010",
    "HLT": "1111",
    "OUT": "110",
}


@pytest.fixture
def opcodes():
    return dict(TEST_OPCODES)
