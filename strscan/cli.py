"""
Tokenizes a file with a table of regular-expression rules and prints one
token per line.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import EngineOverflowError, TokenizeError
from .filesystem import collect_file_stat, enforce_file_size, get_max_file_size, read_source
from .tokenizer import rules_from_config, tokenize

__all__ = ["cli"]


def _parse_rules(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]):
    rules: dict[str, str] = {}
    for value in values:
        name, separator, pattern = value.partition("=")
        if not separator or not name or not pattern:
            raise click.BadParameter(f"expected NAME=REGEX, got {value!r}", ctx=ctx, param=param)
        rules[name] = pattern
    return rules


@click.command()
@click.version_option(package_name="strscan")
@click.option(
    "--rule",
    "rules",
    multiple=True,
    callback=_parse_rules,
    metavar="NAME=REGEX",
    help="Token rule; repeat to add more. Tried in order after configured rules.",
)
@click.option("--skip", multiple=True, metavar="NAME", help="Rule whose tokens are not printed")
@click.option("--encoding", help="Character encoding for --binary scanning")
@click.option("--binary", is_flag=True, help="Scan raw bytes instead of UTF-8 text")
@click.option("--ignore-case", is_flag=True, help="Match rules case-insensitively")
@click.option("-v", "--verbose", is_flag=True, help="Log debug information to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def cli(
    filepath: Path,
    rules: dict[str, str],
    skip: tuple[str, ...] = (),
    encoding: str | None = None,
    binary: bool = False,
    ignore_case: bool = False,
    verbose: bool = False,
):
    """
    Tokenize FILEPATH and print `line:column`, rule name and token text.

    Rules come from the `[tool.strscan]` table of the nearest pyproject.toml
    (or `[strscan]` in .strscan.toml) and from --rule options.

    Raises:
        click.BadParameter: If rule or configuration values are invalid.
        click.ClickException: If the file cannot be read, is too large, or
            contains text no rule matches.

    Examples:
        strscan notes.txt --rule word='\\w+' --rule space='\\s+' --skip space
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = build_config(
            filepath.resolve().parent,
            rules=rules,
            skip=list(skip),
            encoding=encoding,
            ignore_case=ignore_case or None,
        )
        compiled_rules = rules_from_config(config, binary=binary)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if not compiled_rules:
        raise click.BadParameter("no rules defined; pass --rule or configure [tool.strscan]")

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
        source = read_source(filepath, binary=binary)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        for token in tokenize(source, compiled_rules, config):
            click.echo(f"{token.line}:{token.column}\t{token.kind}\t{token.text!r}")
    except (TokenizeError, EngineOverflowError) as error:
        raise click.ClickException(f"{filepath}:{error}") from error


if __name__ == "__main__":
    cli()
