"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .charsets import CHAR_LENGTH_FUNCTIONS, canonical_encoding
from .logger import get_logger

logger = get_logger(__name__)


@dataclass
class ScannerConfig:
    """Configuration for string scanners and the tokenizer built on them.

    Attributes:
        encoding: Encoding whose character boundaries `getch` follows on byte
            buffers (``"utf-8"``, ``"euc-jp"``, ``"shift_jis"``, ``"binary"``
            or ``"ascii"``, plus aliases such as ``"sjis"``).
        fixed_anchor: When True, patterns see the whole buffer, so ``\\A``
            means the buffer start and look-behind sees consumed text. When
            False, ``\\A`` and ``^`` anchor at the scan pointer, at the cost
            of copying the unscanned text on every attempt. `tokenize`
            ignores this setting and always scans with True.
        inspect_length: Characters shown on each side of the pointer by
            ``repr()``.
        max_file_size: Maximum file size in bytes the CLI will scan.
        rules: Ordered mapping of token names to regular expressions.
        skip: Rule names whose tokens are consumed but not emitted.
        ignore_case: Compile tokenizer rules case-insensitively.

    Examples:
        ScannerConfig(encoding="binary", inspect_length=8)
    """

    # Scanning
    encoding: str = "utf-8"
    fixed_anchor: bool = False

    # Formatting
    inspect_length: int = 5

    # Limits
    max_file_size: int = 10 * 1024 * 1024

    # Tokenizer
    rules: dict[str, str] = field(default_factory=dict)
    skip: list[str] = field(default_factory=list)
    ignore_case: bool = False


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`inspect_length` must be a positive integer")
    """


def load_config(search_path: Path) -> ScannerConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.strscan]`` table from `pyproject.toml` and the ``[strscan]`` or
    ``[tool.strscan]`` table from `.strscan.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ScannerConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("grammars"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "strscan")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".strscan.toml",
            table_paths=[("strscan",), ("tool", "strscan")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ScannerConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ScannerConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Using [%s] from %s", ".".join(table_path), config_file)
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ScannerConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ScannerConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ScannerConfig()

    try:
        return ScannerConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: ScannerConfig) -> ScannerConfig:
    encoding = config.encoding
    if isinstance(encoding, str):
        encoding = canonical_encoding(encoding)

    return replace(config, encoding=encoding)


def validate_config(config: ScannerConfig) -> None:
    """Validate a `ScannerConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the encoding is unknown, flags are not booleans,
            numeric limits are non-positive, or tokenizer rules are malformed.

    Examples:
        validate_config(ScannerConfig(encoding="sjis"))
    """
    config = normalize_config(config)

    if not isinstance(config.encoding, str) or config.encoding not in CHAR_LENGTH_FUNCTIONS:
        supported = ", ".join(CHAR_LENGTH_FUNCTIONS)
        raise ConfigError(f"`encoding` must be one of: {supported}")
    if not isinstance(config.fixed_anchor, bool):
        raise ConfigError("`fixed_anchor` must be a boolean")
    if not isinstance(config.ignore_case, bool):
        raise ConfigError("`ignore_case` must be a boolean")

    _ensure_integers(
        {
            "inspect_length": config.inspect_length,
            "max_file_size": config.max_file_size,
        }
    )
    _ensure_positive(
        {
            "inspect_length": config.inspect_length,
            "max_file_size": config.max_file_size,
        }
    )

    if not isinstance(config.rules, dict):
        raise ConfigError("`rules` must be a table of name = pattern entries")
    for name, pattern in config.rules.items():
        if not name:
            raise ConfigError("rule names must not be empty")
        if not isinstance(pattern, str) or not pattern:
            raise ConfigError(f"rule `{name}` must be a non-empty pattern string")

    if not isinstance(config.skip, list) or not all(isinstance(name, str) for name in config.skip):
        raise ConfigError("`skip` must be a list of rule names")
    unknown = [name for name in config.skip if name not in config.rules]
    if unknown:
        raise ConfigError(f"`skip` references undefined rules: {', '.join(unknown)}")


def apply_overrides(config: ScannerConfig, **overrides: object) -> ScannerConfig:
    """Apply override values to a `ScannerConfig`.

    Rule tables are merged: overriding rules replace same-named entries and
    new names are appended after the configured ones. Skip lists are unioned.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None (or empty rule tables and skip lists) are ignored.

    Returns:
        ScannerConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ScannerConfig`.

    Examples:
        updated = apply_overrides(config, encoding="binary", rules={"word": r"\\w+"})
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "rules" in changes:
        if changes["rules"]:
            changes["rules"] = {**config.rules, **changes["rules"]}
        else:
            del changes["rules"]
    if "skip" in changes:
        if changes["skip"]:
            changes["skip"] = list(dict.fromkeys([*config.skip, *changes["skip"]]))
        else:
            del changes["skip"]
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ScannerConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None
            values are ignored.

    Returns:
        ScannerConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), encoding="utf-8")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
