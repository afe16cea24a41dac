"""Package-specific exception types."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for scanner errors.

    A pattern that simply does not match is never an error; scanning
    operations return None for that case.
    """


class InvalidStateError(ScanError):
    """Raised when `unscan` is called without a successful previous match."""

    def __init__(self, message: str = "cannot unscan: prev match had failed"):
        super().__init__(message)


class PositionOutOfRangeError(ScanError, IndexError):
    """Raised when the scan pointer is set outside the buffer.

    Args:
        position: Requested position after negative-index normalization.
        length: Length of the scanned buffer.
    """

    def __init__(self, position: int, length: int):
        self.position = position
        self.length = length
        super().__init__("index out of range")


class EngineOverflowError(ScanError):
    """Raised when the pattern engine exhausts its internal resources."""

    def __init__(self, message: str = "regexp buffer overflow"):
        super().__init__(message)


class UninitializedError(ScanError):
    """Raised when a scanner is used before a string has been assigned."""

    def __init__(self):
        super().__init__("uninitialized StringScanner object")


class TokenizeError(ScanError):
    """Raised when no tokenizer rule matches at the current position.

    Args:
        message: Error description.
        position: Zero-based offset where scanning got stuck.
        line: One-based line number of `position`.
        column: One-based column number of `position`.
    """

    def __init__(self, message: str, position: int, line: int, column: int):
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"
