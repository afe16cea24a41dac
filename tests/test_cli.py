from __future__ import annotations

import textwrap
from pathlib import Path

from strscan.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_prints_tokens_from_options(cli_runner, tmp_path):
    target = _write(tmp_path, "input.txt", "sum = 3 + 42\n")

    result = cli_runner.invoke(
        cli,
        [
            str(target),
            "--rule",
            r"number=\d+",
            "--rule",
            r"name=\w+",
            "--rule",
            "op=[=+]",
            "--rule",
            r"space=\s+",
            "--skip",
            "space",
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "1:1\tname\t'sum'",
        "1:5\top\t'='",
        "1:7\tnumber\t'3'",
        "1:9\top\t'+'",
        "1:11\tnumber\t'42'",
    ]


def test_cli_reads_rules_from_pyproject(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.strscan]
        skip = ["space"]

        [tool.strscan.rules]
        word = '[a-z]+'
        space = '\\s+'
        """,
    )
    target = _write(tmp_path, "words.txt", "alpha\nbeta\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["1:1\tword\t'alpha'", "2:1\tword\t'beta'"]


def test_cli_option_rules_extend_configured_rules(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.strscan.rules]
        word = '[a-z]+'
        """,
    )
    target = _write(tmp_path, "mixed.txt", "ab12")

    result = cli_runner.invoke(cli, [str(target), "--rule", r"digits=\d+"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["1:1\tword\t'ab'", "1:3\tdigits\t'12'"]


def test_cli_binary_mode(cli_runner, tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"ab\xffcd")

    result = cli_runner.invoke(
        cli, [str(target), "--binary", "--rule", "word=[a-z]+", "--rule", "other=."]
    )

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "1:1\tword\tb'ab'",
        "1:3\tother\tb'\\xff'",
        "1:4\tword\tb'cd'",
    ]


def test_cli_reports_unmatched_text(cli_runner, tmp_path):
    target = _write(tmp_path, "bad.txt", "abc\n!")

    result = cli_runner.invoke(cli, [str(target), "--rule", r"word=\w+", "--rule", r"nl=\n"])

    assert result.exit_code != 0
    assert "2:1: unexpected '!'" in result.output


def test_cli_requires_rules(cli_runner, tmp_path):
    target = _write(tmp_path, "empty-rules.txt", "abc")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "no rules defined" in result.output


def test_cli_rejects_malformed_rule(cli_runner, tmp_path):
    target = _write(tmp_path, "malformed.txt", "abc")

    result = cli_runner.invoke(cli, [str(target), "--rule", "missing-separator"])

    assert result.exit_code == 2
    assert "expected NAME=REGEX" in result.output


def test_cli_rejects_invalid_pattern(cli_runner, tmp_path):
    target = _write(tmp_path, "invalid.txt", "abc")

    result = cli_runner.invoke(cli, [str(target), "--rule", "broken=("])

    assert result.exit_code == 2
    assert "not a valid pattern" in result.output


def test_cli_rejects_unknown_skip(cli_runner, tmp_path):
    target = _write(tmp_path, "skip.txt", "abc")

    result = cli_runner.invoke(cli, [str(target), "--rule", r"word=\w+", "--skip", "space"])

    assert result.exit_code == 2
    assert "undefined rules" in result.output


def test_cli_rejects_unknown_encoding(cli_runner, tmp_path):
    target = _write(tmp_path, "encoding.txt", "abc")

    result = cli_runner.invoke(
        cli, [str(target), "--rule", r"word=\w+", "--encoding", "klingon"]
    )

    assert result.exit_code == 2
    assert "encoding" in result.output


def test_cli_enforces_max_file_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("STRSCAN_MAX_FILE_SIZE", "4")
    target = _write(tmp_path, "large.txt", "abcdefgh")

    result = cli_runner.invoke(cli, [str(target), "--rule", r"word=\w+"])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 4 bytes" in result.output


def test_cli_rejects_invalid_max_file_size(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("STRSCAN_MAX_FILE_SIZE", "lots")
    target = _write(tmp_path, "any.txt", "abc")

    result = cli_runner.invoke(cli, [str(target), "--rule", r"word=\w+"])

    assert result.exit_code == 1
    assert "STRSCAN_MAX_FILE_SIZE" in result.output


def test_cli_rejects_invalid_utf8(cli_runner, tmp_path):
    target = tmp_path / "latin1.txt"
    target.write_bytes("café".encode("latin-1"))

    result = cli_runner.invoke(cli, [str(target), "--rule", r"word=\w+"])

    assert result.exit_code == 1
    assert "Invalid UTF-8" in result.output


def test_cli_missing_file(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, [str(tmp_path / "missing.txt"), "--rule", r"word=\w+"])

    assert result.exit_code == 2
