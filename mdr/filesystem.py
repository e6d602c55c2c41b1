"""Filesystem helpers for mdr."""

from __future__ import annotations

import base64
import hashlib
import logging
import os
import stat
import tempfile
from importlib.resources import files
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS
from .exceptions import NonMarkdownFileError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_ENV_VAR = "MDR_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed markdown file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["MDR_MAX_FILE_SIZE"] = "204800"
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


def ensure_markdown_file(path: Path) -> Path:
    """Check that `path` is a regular file with a markdown extension.

    The extension check is case-insensitive.

    Args:
        path: Input path as given on the command line.

    Returns:
        Path: The same path, for chaining.

    Raises:
        NonMarkdownFileError: If the path is missing, not a regular file, or has
            another extension.

    Examples:
        ensure_markdown_file(Path("posts/2021-03-14-hello.md"))
    """
    if not path.is_file() or path.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise NonMarkdownFileError(path)
    return path


def enforce_file_size(filepath: Path, max_size: int):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If the file cannot be inspected or is larger than `max_size`.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> str:
    """Read a UTF-8 text file with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        str: File contents.

    Raises:
        IOError: If the path is missing, inaccessible, not a file, or not valid
            UTF-8.

    Examples:
        source = safe_read(Path("posts/hello.md"))
    """
    try:
        with open(filepath, "r", encoding="UTF-8") as file:
            return file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise IOError(error_message) from error
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def read_theme_file(name: str) -> str:
    """Return the text of a file shipped in the package's ``theme`` directory."""
    return (files(__package__) / "theme" / name).read_text(encoding="UTF-8")


def content_hash(content: bytes | str) -> str:
    """Return a short, URL-safe digest of `content`.

    The digest is the first 16 bytes of the SHA-256 hash, base64 encoded with
    the URL-safe alphabet and without padding (22 characters).

    Examples:
        content_hash(b"body { margin: 0 }")
    """
    if isinstance(content, str):
        content = content.encode("UTF-8")
    digest = hashlib.sha256(content).digest()
    return base64.urlsafe_b64encode(digest[:16]).rstrip(b"=").decode("ascii")


def hashed_name(name: str, ext: str | None, content: bytes | str) -> str:
    """Build a content-addressed file name.

    Examples:
        hashed_name("style", "css", css)  # "style-<hash>.css"
        hashed_name("LICENSE", None, text)  # "LICENSE-<hash>"
    """
    digest = content_hash(content)
    if ext:
        return f"{name}-{digest}.{ext}"
    return f"{name}-{digest}"


def hash_and_write(out_dir: Path, name: str, ext: str | None, content: bytes | str) -> str:
    """Write `content` under a content-addressed name in `out_dir`.

    Args:
        out_dir: Output directory of the site.
        name: Base name without extension.
        ext: Extension without the leading dot, or None.
        content: File contents.

    Returns:
        str: The file name written, relative to `out_dir`.

    Raises:
        IOError: If the file cannot be written.
    """
    file_name = hashed_name(name, ext, content)
    data = content.encode("UTF-8") if isinstance(content, str) else content
    write_file(out_dir / file_name, data)
    logger.info("Wrote asset %s", file_name)
    return file_name


def write_file(filepath: Path, content: bytes | str):
    """Atomically replace `filepath` with `content`.

    The data is written to a temporary file in the same directory, synced, and
    moved into place, so readers never observe a partially written page.

    Raises:
        IOError: If the file cannot be written.
    """
    data = content.encode("UTF-8") if isinstance(content, str) else content
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(mode="wb", delete=False, dir=filepath.parent) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(data)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH)
        os.replace(temp_path, filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
