"""Configuration loading and management."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class OutlineConfig:
    """Configuration for expanding outline markers in HTML documents.

    Attributes:
        marker: Name of the outline marker, as in ``[outline]``.
        tags: Default comma-separated heading tags for markers without a
            ``tags`` attribute.
        title: Default outline title for markers without a ``title``
            attribute; an empty string omits the title block.
        include_styles: Whether to inject the outline stylesheet into
            processed documents.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        OutlineConfig(tags="h2,h3,h4", title="Contents")
    """

    marker: str = "outline"
    tags: str = "h2,h3"
    title: str = "Table of Contents"
    include_styles: bool = False

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`marker` must not be empty")
    """


def load_config(search_path: Path) -> OutlineConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.html-outline]`` table from `pyproject.toml` and the
    ``[html-outline]`` or ``[tool.html-outline]`` table from
    `.html-outline.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        OutlineConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("site"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "html-outline")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".html-outline.toml",
            table_paths=[("html-outline",), ("tool", "html-outline")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return OutlineConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> OutlineConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
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
) -> OutlineConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return OutlineConfig()

    try:
        return OutlineConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: OutlineConfig) -> None:
    """Validate an `OutlineConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the marker is empty or malformed, a text field is not
            a string, `include_styles` is not a boolean, or the size limit is
            not a positive integer.

    Examples:
        validate_config(OutlineConfig(marker="toc"))
    """
    for key in ("marker", "tags", "title"):
        if not isinstance(getattr(config, key), str):
            raise ConfigError(f"`{key}` must be a string")

    if not config.marker:
        raise ConfigError("`marker` must not be empty")
    if any(char.isspace() or char in "[]" for char in config.marker):
        raise ConfigError("`marker` must not contain whitespace or brackets")

    if not isinstance(config.include_styles, bool):
        raise ConfigError("`include_styles` must be a boolean")

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: OutlineConfig, **overrides: object) -> OutlineConfig:
    """Apply override values to an `OutlineConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        OutlineConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `OutlineConfig`.

    Examples:
        updated = apply_overrides(config, title="Contents", tags="h2")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


MAX_FILE_SIZE_ENV_VAR = "HTML_OUTLINE_MAX_FILE_SIZE"


def apply_environment(config: OutlineConfig) -> OutlineConfig:
    """Apply settings taken from environment variables.

    ``HTML_OUTLINE_MAX_FILE_SIZE`` replaces `max_file_size`; positivity is
    left to `validate_config`.

    Args:
        config: Configuration loaded from files and overrides.

    Returns:
        OutlineConfig: Configuration with environment values applied.

    Raises:
        ConfigError: If the environment value is not an integer.

    Examples:
        os.environ["HTML_OUTLINE_MAX_FILE_SIZE"] = "204800"
        config = apply_environment(OutlineConfig())
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return config

    try:
        max_file_size = int(env_value)
    except ValueError as error:
        raise ConfigError(f"{MAX_FILE_SIZE_ENV_VAR} must be an integer, got {env_value!r}") from error

    return replace(config, max_file_size=max_file_size)


def build_config(search_path: Path, **overrides: object) -> OutlineConfig:
    """Load configuration, apply overrides and environment values, then validate.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        OutlineConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), tags="h2,h3,h4")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = apply_environment(config)
    validate_config(config)
    return config
