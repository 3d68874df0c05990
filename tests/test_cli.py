"""Command-line tests for lasmtool."""
import io

import lasmtool

from conftest import CONFIG_PATH

PROGRAM = "// demo\nLOD R0 3\n#loop\nSUB R0 1\nBRZ #done\nBRA #loop\n#done\nHLT\n"


def _run(*args):
    return lasmtool.main(list(args) + ["--config", CONFIG_PATH])


class TestFileMode:
    def test_writes_hex_next_to_source(self, tmp_path, capsys):
        src = tmp_path / "prog.asm"
        src.write_text(PROGRAM, encoding="utf-8")
        assert _run(str(src)) == 0

        hex_path = tmp_path / "prog.hex"
        rows = hex_path.read_text(encoding="utf-8").splitlines()
        assert len(rows) == 64
        assert rows[:5] == ["0203;", "0801;", "1204;", "1001;", "1E00;"]
        assert f"5 instructions assembled and written to {hex_path}." in capsys.readouterr().out

    def test_explicit_output(self, tmp_path):
        src = tmp_path / "prog.asm"
        src.write_text("HLT\n", encoding="utf-8")
        out = tmp_path / "build.hex"
        assert _run(str(src), "-o", str(out)) == 0
        assert out.read_text(encoding="utf-8").startswith("1E00;\n0000;\n")

    def test_rejects_wrong_extension(self, tmp_path):
        src = tmp_path / "prog.txt"
        src.write_text("HLT\n", encoding="utf-8")
        assert _run(str(src)) == 1

    def test_missing_input(self, tmp_path):
        assert _run(str(tmp_path / "gone.asm")) == 1

    def test_non_utf8_source(self, tmp_path, caplog):
        src = tmp_path / "prog.asm"
        src.write_bytes(b"// caf\xe9\nHLT\n")
        assert _run(str(src)) == 1
        assert not (tmp_path / "prog.hex").exists()
        assert "Error reading" in caplog.text

    def test_no_output_on_error(self, tmp_path, caplog):
        src = tmp_path / "bad.asm"
        src.write_text("LOD 1\nJMP 2\nLOD 0b1\n", encoding="utf-8")
        assert _run(str(src)) == 1
        assert not (tmp_path / "bad.hex").exists()
        assert "unknown opcode: JMP" in caplog.text
        assert "binary data should be 8 bits long: 1" in caplog.text

    def test_missing_config(self, tmp_path):
        src = tmp_path / "prog.asm"
        src.write_text("HLT\n", encoding="utf-8")
        assert lasmtool.main([str(src), "--config", str(tmp_path / "none.json")]) == 1
        assert not (tmp_path / "prog.hex").exists()


class TestStdinMode:
    def test_non_utf8_stdin(self, monkeypatch, capsys, caplog):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"// caf\xe9\nHLT\n"),
                                                          encoding="utf-8"))
        assert _run() == 1
        assert "Error reading stdin" in caplog.text
        assert "instructions assembled" not in capsys.readouterr().out

    def test_prints_image(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("LOD R1 10\nHLT\n"))
        assert _run() == 0
        out = capsys.readouterr().out
        assert "2 instructions assembled:" in out
        assert out.count("-----") == 2
        assert "030A;\n1E00;\n" in out
        assert out.count("0000;") == 62

    def test_listing(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("LOD R1 10\n"))
        assert _run("--listing") == 0
        assert "0001 1 00001010" in capsys.readouterr().out


class TestStrictMode:
    def test_large_decimal_accepted_by_default(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("LOD 999999\n"))
        assert _run() == 0

    def test_large_decimal_rejected(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("LOD 999999\n"))
        assert _run("--strict") == 1

    def test_capacity(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("NOP\n" * 5))
        assert _run("--rows", "4") == 0
        assert capsys.readouterr().out.count("0000;") == 5

        monkeypatch.setattr("sys.stdin", io.StringIO("NOP\n" * 5))
        assert _run("--rows", "4", "--strict") == 1
