"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class MdrError(Exception):
    """Base class for errors raised while building a site.

    Represents failures of a single input file or of the output directory.
    """


class NonMarkdownFileError(MdrError):
    """Raised when an input path is not a regular ``.md`` file.

    Args:
        path: The offending input path.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"path is not a markdown file: {self.path}")


class MissingDateError(MdrError):
    """Raised when a post has neither a date meta tag nor a dated file name.

    Args:
        path: The markdown file lacking a creation date.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"could not extract date for post: {self.path}")


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`site_name` must not be empty")
    """
