"""Opcode table loading tests."""
import json

import pytest
from lasm.config import ConfigError, load_opcodes, parse_opcodes

from conftest import CONFIG_PATH


def _write(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadOpcodes:
    def test_shipped_config(self):
        opcodes = load_opcodes(CONFIG_PATH)
        for mnem in ("LOD", "SUB", "BRZ", "BRN"):
            assert mnem in opcodes
        # opcode + destination bit + data byte must fit a 16-bit row
        assert all(len(bits) + 1 + 8 <= 16 for bits in opcodes.values())

    def test_loads_valid_file(self, tmp_path):
        path = _write(tmp_path, json.dumps({"opcodes": {"LOD": "0001", "OUT": "110"}}))
        assert dict(load_opcodes(path)) == {"LOD": "0001", "OUT": "110"}

    def test_table_is_read_only(self, tmp_path):
        opcodes = load_opcodes(_write(tmp_path, '{"opcodes": {"LOD": "0001"}}'))
        with pytest.raises(TypeError):
            opcodes["LOD"] = "1111"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_opcodes(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read config"):
            load_opcodes(_write(tmp_path, '{"opcodes": {'))


class TestParseOpcodes:
    @pytest.mark.parametrize("document", [
        [],
        {},
        {"opcodes": ["LOD"]},
    ])
    def test_missing_opcodes_object(self, document):
        with pytest.raises(ConfigError, match="'opcodes' object"):
            parse_opcodes(document)

    @pytest.mark.parametrize("bits", ["", "01a1", 5, None])
    def test_bad_bit_pattern(self, bits):
        with pytest.raises(ConfigError, match="LOD"):
            parse_opcodes({"opcodes": {"LOD": bits}})

    def test_empty_table_is_allowed(self):
        assert dict(parse_opcodes({"opcodes": {}})) == {}
