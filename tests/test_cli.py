"""Tests for the quickgen CLI"""

import json
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quickgen.cli import main


def write(tmp_path, text, name="sample.js"):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


class TestInspect:
    """classify / tokens / extract subcommands"""

    def test_classify(self, tmp_path, capsys):
        path = write(tmp_path, "x = /abc/;")
        assert main(["classify", path, "4"]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["kind"] == "regex_literal"
        assert result["end"] == 9

    def test_tokens(self, tmp_path, capsys):
        path = write(tmp_path, "a / b")
        assert main(["tokens", path]) == 0
        tokens = json.loads(capsys.readouterr().out)["tokens"]
        assert [t["kind"] for t in tokens] == ["other", "other", "other"]

    def test_extract(self, tmp_path, capsys):
        path = write(tmp_path, 'const data = {"a": [1, 2]};')
        assert main(["extract", path]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["found"] is True
        assert result["value"] == {"a": [1, 2]}

    def test_extract_nothing(self, tmp_path, capsys):
        path = write(tmp_path, "nothing here")
        assert main(["extract", path]) == 0
        assert json.loads(capsys.readouterr().out) == {"found": False}


class TestCommand:
    """command / init subcommands"""

    def test_command_uses_config(self, tmp_path, capsys):
        assert main(["init", "--lang", "go", "--project-dir", str(tmp_path)]) == 0
        capsys.readouterr()

        assert main([
            "command", "--source-kind", "file", "--source", "a.json",
            "--project-dir", str(tmp_path), "--flag=--no-enums",
        ]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["arguments"][:5] == ["quicktype", "--src-lang", "json", "--lang", "go"]
        assert "--no-enums" in result["arguments"]
        assert result["arguments"][-1] == "a.json"
        assert result["stdin"] is False

    def test_command_error(self, tmp_path, capsys):
        code = main(["command", "--source-kind", "file", "--project-dir", str(tmp_path)])
        assert code == 1
        error = json.loads(capsys.readouterr().err)
        assert error["code"] == "ARG-001"


class TestErrors:
    """Bad input and config give structured errors, never tracebacks"""

    def test_date_like_key(self, tmp_path, capsys):
        path = write(tmp_path, "x = {2024-01-01: 1}")
        assert main(["extract", path]) == 0
        assert json.loads(capsys.readouterr().out) == {"found": False}

    def test_numeric_key_is_string(self, tmp_path, capsys):
        path = write(tmp_path, "x = {1: 'a', on: off}")
        assert main(["extract", path]) == 0
        assert json.loads(capsys.readouterr().out)["value"] == {"1": "a", "on": "off"}

    def test_missing_file(self, tmp_path, capsys):
        code = main(["classify", str(tmp_path / "missing.js"), "0"])
        assert code == 1
        assert json.loads(capsys.readouterr().err)["code"] == "INP-001"

    def test_not_utf8(self, tmp_path, capsys):
        path = tmp_path / "binary.js"
        path.write_bytes(b"x = \xff\xfe;")
        assert main(["tokens", str(path)]) == 1
        error = json.loads(capsys.readouterr().err)
        assert error["code"] == "INP-001"
        assert error["position"] == 4

    def test_bad_config_types(self, tmp_path, capsys):
        config_dir = tmp_path / ".quickgen"
        config_dir.mkdir()
        for text in ("flags: 5\n", "top_level: 123\n"):
            (config_dir / "config.yaml").write_text(text)
            code = main(["command", "--source-kind", "buffer", "--project-dir", str(tmp_path)])
            assert code == 1
            assert json.loads(capsys.readouterr().err)["code"] == "CFG-001"
