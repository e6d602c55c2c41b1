"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .exceptions import ConfigError
from .highlight import HIGHLIGHTERS

HIGHLIGHTER_NAMES = tuple(sorted(HIGHLIGHTERS))


@dataclass
class SiteConfig:
    """Configuration for building a site.

    Attributes:
        site_name: Name shown in page titles, the header and the feed.
        out_dir: Directory the build result is written to.
        twitter_handle: Twitter handle linked from the layout, if any.
        github_handle: GitHub user name linked from the layout, if any.
        url: Absolute URL of the site. The Atom feed is only written when set.
        highlighter: Code highlighting backend (``"pygments"`` or
            ``"categories"``).
        strikethrough: Whether ``~~text~~`` renders as ``<s>``.
        max_file_size: Maximum markdown file size in bytes.

    Examples:
        SiteConfig(site_name="Notes", url="https://example.com")
    """

    site_name: str = "Blog"
    out_dir: str = "./out"

    # Links
    twitter_handle: str | None = None
    github_handle: str | None = None
    url: str | None = None

    # Rendering
    highlighter: str = "pygments"
    strikethrough: bool = True

    # Limits
    max_file_size: int = 10 * 1024 * 1024


def load_config(search_path: Path) -> SiteConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.mdr]`` table from `pyproject.toml` and the ``[mdr]`` or
    ``[tool.mdr]`` table from `.mdr.toml` when present. Returns default values
    when no configuration is found. TOML files that cannot be read or decoded
    are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        SiteConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("blog"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(current / "pyproject.toml", table_paths=[("tool", "mdr")])
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".mdr.toml",
            table_paths=[("mdr",), ("tool", "mdr")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return SiteConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> SiteConfig | None:
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
) -> SiteConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return SiteConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: SiteConfig) -> None:
    """Validate a `SiteConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If required fields are empty, optional fields have the
            wrong type, the highlighter is unknown, or the size limit is not a
            positive integer.

    Examples:
        validate_config(SiteConfig(highlighter="categories"))
    """
    for key in ("site_name", "out_dir"):
        value = getattr(config, key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"`{key}` must be a non-empty string")

    for key in ("twitter_handle", "github_handle", "url"):
        value = getattr(config, key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"`{key}` must be a string")

    if config.highlighter not in HIGHLIGHTER_NAMES:
        raise ConfigError(f"`highlighter` must be one of: {', '.join(HIGHLIGHTER_NAMES)}")
    if not isinstance(config.strikethrough, bool):
        raise ConfigError("`strikethrough` must be a boolean")

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: SiteConfig, **overrides: object) -> SiteConfig:
    """Apply override values to a `SiteConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        SiteConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `SiteConfig`.

    Examples:
        updated = apply_overrides(config, site_name="Notes", url=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> SiteConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        SiteConfig: Validated configuration ready for building.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), site_name="Notes")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
