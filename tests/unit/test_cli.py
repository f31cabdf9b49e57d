"""Unit tests for quill.cli.main — commands driven through click's CliRunner."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from quill.cli.main import cli

VALID = "x = 1;\ny = x + 2;\n"
UNFORMATTED = "x=1;y=x+2"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def workdir(runner: CliRunner, tmp_path: Path):
    """Run each test inside an isolated directory so paths stay short."""
    with runner.isolated_filesystem(temp_dir=tmp_path) as path:
        yield Path(path)


def write(name: str, text: str) -> str:
    Path(name).write_text(text, encoding="utf-8")
    return name


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_valid_file(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["check", write("prog.ql", VALID)])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "2 statement(s)" in result.output

    def test_parse_error_exits_one(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["check", write("bad.ql", "x = )")])
        assert result.exit_code == 1
        assert "Parse error" in result.output

    def test_lex_error_exits_one(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["check", write("bad.ql", "x = #")])
        assert result.exit_code == 1
        assert "Lex error" in result.output

    def test_missing_file(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["check", "nope.ql"])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_reads_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "-"], input="a = 1; b")
        assert result.exit_code == 0
        assert "2 statement(s)" in result.output

    def test_verbose_flag_enables_debug_logging(
        self, runner: CliRunner, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[dict[str, object]] = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        result = runner.invoke(cli, ["--verbose", "check", write("prog.ql", VALID)])
        assert result.exit_code == 0
        assert calls[0]["level"] == logging.DEBUG


# ---------------------------------------------------------------------------
# tokens
# ---------------------------------------------------------------------------


class TestTokensCommand:
    def test_lists_token_types(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["tokens", write("prog.ql", "x = 1; // hi")])
        assert result.exit_code == 0
        assert "IDENT" in result.output
        assert "ASSIGN" in result.output
        assert "EOF" in result.output
        assert "COMMENT" not in result.output

    def test_comments_flag(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["tokens", "--comments", write("prog.ql", "x = 1; // hi")])
        assert result.exit_code == 0
        assert "COMMENT" in result.output

    def test_lex_error(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["tokens", write("bad.ql", '"open')])
        assert result.exit_code == 1
        assert "Lex error" in result.output


# ---------------------------------------------------------------------------
# fmt
# ---------------------------------------------------------------------------


class TestFmtCommand:
    def test_prints_formatted_source(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["fmt", write("prog.ql", UNFORMATTED)])
        assert result.exit_code == 0
        assert "x = 1;" in result.output
        assert "y = x + 2;" in result.output

    def test_check_formatted(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["fmt", "--check", write("prog.ql", VALID)])
        assert result.exit_code == 0
        assert "already formatted" in result.output

    def test_check_unformatted(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["fmt", "--check", write("prog.ql", UNFORMATTED)])
        assert result.exit_code == 1
        assert "NEEDS FORMATTING" in result.output

    def test_in_place(self, runner: CliRunner, workdir: Path) -> None:
        path = write("prog.ql", UNFORMATTED)
        result = runner.invoke(cli, ["fmt", "--in-place", path])
        assert result.exit_code == 0
        assert Path(path).read_text(encoding="utf-8") == VALID

    def test_in_place_with_indent(self, runner: CliRunner, workdir: Path) -> None:
        path = write("prog.ql", "{x=1;}")
        result = runner.invoke(cli, ["fmt", "--in-place", "--indent", "4", path])
        assert result.exit_code == 0
        assert Path(path).read_text(encoding="utf-8") == "{\n    x = 1;\n};\n"

    def test_in_place_rejects_stdin(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fmt", "--in-place", "-"], input=VALID)
        assert result.exit_code == 1
        assert "stdin" in result.output

    def test_parse_error(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["fmt", write("bad.ql", "[1, 2")])
        assert result.exit_code == 1


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


class TestParseCommand:
    def test_json_to_file(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["parse", write("prog.ql", VALID), "-o", "ast.json"])
        assert result.exit_code == 0
        assert "AST written to" in result.output
        data = json.loads(Path("ast.json").read_text(encoding="utf-8"))
        assert data["kind"] == "Block"
        assert [s["kind"] for s in data["body"]] == ["Assign", "Assign"]

    def test_yaml_to_file(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(
            cli, ["parse", write("prog.ql", VALID), "--format", "yaml", "-o", "ast.yaml"]
        )
        assert result.exit_code == 0
        data = yaml.safe_load(Path("ast.yaml").read_text(encoding="utf-8"))
        assert data["body"][1]["value"]["operator"] == "ADD"

    def test_prints_to_stdout(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["parse", write("prog.ql", "x = 1")])
        assert result.exit_code == 0
        assert "Block" in result.output

    def test_parse_error(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["parse", write("bad.ql", "++1")])
        assert result.exit_code == 1
        assert "Invalid left-hand side" in result.output


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersionCommand:
    def test_shows_package_version(self, runner: CliRunner) -> None:
        from quill import __version__

        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "quill-lang" in result.output
        assert __version__ in result.output
