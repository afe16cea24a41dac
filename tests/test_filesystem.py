from __future__ import annotations

import os
from pathlib import Path

import pytest

from strscan.filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    read_source,
)


def test_get_max_file_size_uses_default(monkeypatch):
    monkeypatch.delenv("STRSCAN_MAX_FILE_SIZE", raising=False)

    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv("STRSCAN_MAX_FILE_SIZE", "2048")

    assert get_max_file_size(default=1) == 2048


def test_get_max_file_size_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("STRSCAN_MAX_FILE_SIZE", "invalid")
    with pytest.raises(ValueError, match="expected positive integer"):
        get_max_file_size(default=1)


def test_get_max_file_size_rejects_non_positive(monkeypatch):
    monkeypatch.setenv("STRSCAN_MAX_FILE_SIZE", "0")
    with pytest.raises(ValueError, match="must be a positive integer"):
        get_max_file_size(default=1)


def test_collect_file_stat_rejects_directory(tmp_path: Path):
    with pytest.raises(IOError, match="not a regular file"):
        collect_file_stat(tmp_path)


def test_collect_file_stat_missing_file(tmp_path: Path):
    with pytest.raises(IOError, match="Error accessing"):
        collect_file_stat(tmp_path / "missing.txt")


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "input.txt"
    target.write_text("abcdef", encoding="utf-8")
    stat_result = os.stat(target)

    enforce_file_size(stat_result, 6, target)
    with pytest.raises(IOError, match="exceeds the maximum allowed size"):
        enforce_file_size(stat_result, 5, target)


def test_read_source_text_and_binary(tmp_path: Path):
    target = tmp_path / "input.txt"
    target.write_bytes("añ".encode("utf-8"))

    assert read_source(target) == "añ"
    assert read_source(target, binary=True) == b"a\xc3\xb1"


def test_read_source_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "input.txt"
    target.write_bytes(b"\xff")

    with pytest.raises(IOError, match="Invalid UTF-8"):
        read_source(target)
    assert read_source(target, binary=True) == b"\xff"


def test_read_source_missing_file(tmp_path: Path):
    with pytest.raises(IOError, match="Error reading"):
        read_source(tmp_path / "missing.txt")
