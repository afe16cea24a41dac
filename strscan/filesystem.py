"""Filesystem helpers for the strscan command line tool."""

from __future__ import annotations

import os
import stat
from pathlib import Path

MAX_FILE_SIZE_ENV_VAR = "STRSCAN_MAX_FILE_SIZE"


def get_max_file_size(default: int) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["STRSCAN_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Raises:
        IOError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path) -> None:
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def read_source(filepath: Path, binary: bool = False) -> str | bytes:
    """Read a file to scan, as UTF-8 text or raw bytes.

    Args:
        filepath: Path to the file.
        binary: Return the raw bytes instead of decoded text.

    Returns:
        str | bytes: File contents.

    Raises:
        IOError: If the file cannot be read or is not valid UTF-8 in text mode.

    Examples:
        source = read_source(Path("grammar.txt"))
    """
    try:
        if binary:
            return filepath.read_bytes()
        return filepath.read_text(encoding="UTF-8")
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise IOError(error_message) from error
    except OSError as error:
        error_message = f"Error reading {filepath}: {error}"
        raise IOError(error_message) from error
