"""
strscan: lexical scanning over strings with a movable scan pointer.

This package can be used both as a library and as a CLI tokenizer.

Library Usage:
    import re
    from strscan import StringScanner

    s = StringScanner("3 + 42")
    s.scan(re.compile(r"\\d+"))   # "3"
    s.skip(re.compile(r"\\s*"))   # 1
    s.scan(re.compile(r"[+-]"))   # "+"

CLI Usage:
    strscan input.txt --rule number='\\d+' --rule space='\\s+' --skip space
"""

from .config import ConfigError, ScannerConfig
from .engine import Pattern, RegexPattern
from .exceptions import (
    EngineOverflowError,
    InvalidStateError,
    PositionOutOfRangeError,
    ScanError,
    TokenizeError,
    UninitializedError,
)
from .models import MatchResult, Span
from .scanner import StringScanner
from .tokenizer import Rule, Token, compile_rules, tokenize

__version__ = "0.7.0"

__all__ = [
    # Core functionality
    "StringScanner",
    "tokenize",
    "compile_rules",
    # Pattern engine interface
    "Pattern",
    "RegexPattern",
    # Data models
    "MatchResult",
    "Span",
    "Rule",
    "Token",
    # Configuration
    "ScannerConfig",
    # Exceptions
    "ConfigError",
    "EngineOverflowError",
    "InvalidStateError",
    "PositionOutOfRangeError",
    "ScanError",
    "TokenizeError",
    "UninitializedError",
    # Version
    "__version__",
]
