"""Rule-table tokenizer built on `StringScanner`."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace

from .config import ConfigError, ScannerConfig
from .exceptions import TokenizeError
from .logger import get_logger
from .scanner import StringScanner

logger = get_logger(__name__)


@dataclass(frozen=True)
class Rule:
    """A named token pattern.

    Attributes:
        name: Token kind reported for matches of this rule.
        pattern: Compiled pattern tried at the scan pointer.
        skip: Consume matches without emitting tokens (whitespace, comments).
    """

    name: str
    pattern: re.Pattern
    skip: bool = False


@dataclass(frozen=True)
class Token:
    """A token produced by `tokenize`.

    Attributes:
        kind: Name of the rule that matched.
        text: Matched text (or bytes).
        start: Zero-based offset of the first character.
        end: Zero-based offset just past the last character.
        line: One-based line number of `start`.
        column: One-based column number of `start`.
    """

    kind: str
    text: str | bytes
    start: int
    end: int
    line: int
    column: int


def compile_rules(
    rules: Mapping[str, str],
    skip: Iterable[str] = (),
    binary: bool = False,
    ignore_case: bool = False,
) -> list[Rule]:
    """Compile a name-to-pattern table into ordered `Rule` objects.

    Args:
        rules: Ordered mapping of token names to regular expressions.
        skip: Names of rules whose tokens are dropped.
        binary: Compile bytes patterns for scanning bytes buffers.
        ignore_case: Compile patterns case-insensitively.

    Returns:
        list[Rule]: Rules in the order they are tried.

    Raises:
        ConfigError: If a pattern does not compile or `skip` names an
            undefined rule.

    Examples:
        compile_rules({"number": r"\\d+", "space": r"\\s+"}, skip=["space"])
    """
    skip_names = set(skip)
    unknown = skip_names.difference(rules)
    if unknown:
        raise ConfigError(f"`skip` references undefined rules: {', '.join(sorted(unknown))}")

    flags = re.IGNORECASE if ignore_case else 0
    compiled = []
    for name, source in rules.items():
        try:
            pattern = re.compile(source.encode("utf-8") if binary else source, flags)
        except re.error as error:
            raise ConfigError(f"rule `{name}` is not a valid pattern: {error}") from error
        compiled.append(Rule(name=name, pattern=pattern, skip=name in skip_names))
    return compiled


def rules_from_config(config: ScannerConfig, binary: bool = False) -> list[Rule]:
    return compile_rules(config.rules, config.skip, binary=binary, ignore_case=config.ignore_case)


def tokenize(
    text: str | bytes, rules: Iterable[Rule], config: ScannerConfig | None = None
) -> Iterator[Token]:
    """Split `text` into tokens using the first rule that matches at each position.

    Rules are tried in order at the scan pointer. Empty matches are ignored so
    that a rule such as ``\\s*`` cannot stall the scanner.

    The scanner always runs with ``fixed_anchor=True`` so that each attempt
    matches in place and tokenizing stays linear in the input size. Inside
    rules, ``\\A`` therefore matches only at the start of `text`, ``^`` only
    there or (with ``re.MULTILINE``) at line starts, and ``\\b`` and
    look-behind see the text already consumed.

    Args:
        text: Text or bytes to tokenize.
        rules: Rules to try, in priority order.
        config: Scanner configuration; defaults to a new `ScannerConfig`.

    Yields:
        Token: Non-skipped tokens in source order.

    Raises:
        TokenizeError: If no rule matches at some position.

    Examples:
        rules = compile_rules({"word": r"\\w+", "space": r"\\s+"}, skip=["space"])
        [token.text for token in tokenize("test string", rules)]  # ["test", "string"]
    """
    rules = list(rules)
    scanner = StringScanner(text, replace(config or ScannerConfig(), fixed_anchor=True))
    line = 1
    line_start = 0
    newline = "\n" if isinstance(scanner.string, str) else b"\n"

    while not scanner.eos:
        start = scanner.pos
        for rule in rules:
            matched = scanner.scan(rule.pattern)
            if matched:
                break
            if matched is not None:
                # Empty match: put the pointer back and try the next rule
                scanner.unscan()
        else:
            column = start - line_start + 1
            logger.debug("No rule matched at %d:%d", line, column)
            raise TokenizeError(f"unexpected {scanner.peek(10)!r}", start, line, column)

        if not rule.skip:
            yield Token(
                kind=rule.name,
                text=matched,
                start=start,
                end=scanner.pos,
                line=line,
                column=start - line_start + 1,
            )

        newlines = matched.count(newline)
        if newlines:
            line += newlines
            line_start = start + matched.rindex(newline) + 1
