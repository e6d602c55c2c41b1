"""Site generation: post pages, index page and feed."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path

from bs4 import BeautifulSoup  # type: ignore[import-untyped]

from .config import SiteConfig
from .constants import DATED_FILE_NAME_PATTERN, FEED_LINK, INDEX_FILE
from .exceptions import MissingDateError
from .feed import site_url, write_feed
from .filesystem import (
    enforce_file_size,
    ensure_markdown_file,
    get_max_file_size,
    safe_read,
    write_file,
)
from .highlight import Highlighter, get_highlighter
from .layout import create_page, prepare_layout, render_post_item, rewrite_images
from .models import Post
from .render import render_markdown

logger = logging.getLogger(__name__)


def parse_date(value: str) -> datetime | None:
    """Parse an RFC 3339 or RFC 2822 timestamp into an aware UTC datetime.

    Returns None for anything else, including timestamps without an offset.

    Examples:
        parse_date("2021-03-14T09:26:53+01:00")  # 2021-03-14 08:26:53+00:00
        parse_date("Sun, 14 Mar 2021 09:26:53 +0100")  # 2021-03-14 08:26:53+00:00
        parse_date("yesterday")  # None
    """
    value = value.strip()
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
    if parsed is not None and parsed.tzinfo is not None:
        return parsed.astimezone(timezone.utc)

    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    # "-0000" means UTC without a known local offset.
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def extract_date(meta: str) -> datetime | None:
    """Find the creation date in ``<meta name="date" content="...">`` markup.

    When several date tags are present the last one wins.
    """
    if not meta:
        return None
    created_at = None
    for element in BeautifulSoup(meta, "html.parser").select("meta[name=date]"):
        content = element.get("content")
        created_at = parse_date(content) if content else None
    return created_at


def output_name(path: Path) -> tuple[str, datetime | None]:
    """Derive the output file name and the file-name date of a post.

    A leading ``YYYY-MM-DD`` and the single character after it are removed
    from the name; the date is returned as midnight UTC.

    Examples:
        output_name(Path("2021-03-14-hello.md"))  # ("hello.html", 2021-03-14 00:00 UTC)
        output_name(Path("about.md"))  # ("about.html", None)
    """
    file_name = path.with_suffix(".html").name
    match = DATED_FILE_NAME_PATTERN.match(file_name)
    if match is None:
        return file_name, None
    try:
        date = datetime.strptime(match.group(1), "%Y-%m-%d")
    except ValueError:
        return file_name, None
    return file_name[11:], date.replace(tzinfo=timezone.utc)


def build_post(
    path: Path,
    layout: str,
    config: SiteConfig,
    out_dir: Path,
    highlighter: Highlighter | None = None,
    max_file_size: int | None = None,
) -> Post:
    """Render one markdown file and write its page.

    Args:
        path: Markdown file.
        layout: Prepared layout.
        config: Site configuration.
        out_dir: Output directory.
        highlighter: Code highlighting backend.
        max_file_size: Size limit in bytes; defaults to `config.max_file_size`.

    Returns:
        Post: The post as listed in the index and the feed.

    Raises:
        NonMarkdownFileError: If `path` is not a markdown file.
        MissingDateError: If no creation date can be determined.
        IOError: If reading the post or writing its page or assets fails.
    """
    ensure_markdown_file(path)
    enforce_file_size(path, max_file_size or config.max_file_size)
    source = safe_read(path)

    document = render_markdown(source, highlighter, strikethrough=config.strikethrough)
    content = rewrite_images(document.content, path, out_dir)
    page = create_page(
        layout,
        content,
        title=document.title,
        site_name=config.site_name,
        meta=document.meta,
    )

    created_at = extract_date(document.meta)
    file_name, file_date = output_name(path)
    if created_at is None:
        created_at = file_date
    if created_at is None:
        raise MissingDateError(path)

    out_path = out_dir / file_name
    write_file(out_path, page)
    logger.info("Wrote %s", out_path)

    return Post(
        file_name=file_name,
        title=document.title or "",
        content=content,
        created_at=created_at,
    )


def create_index(layout: str, posts: list[Post], config: SiteConfig) -> str:
    """Render the index page listing `posts` in the given order."""
    items = "".join(
        "<li>"
        + render_post_item(
            post.file_name,
            post.title,
            post.created_at.isoformat(),
            post.created_at.date().isoformat(),
        )
        + "</li>"
        for post in posts
    )
    head_extra = f"{FEED_LINK}\n" if site_url(config) else ""
    return create_page(layout, f'<ul class="posts">{items}</ul>', head_extra=head_extra)


def build_site(paths: list[Path], config: SiteConfig) -> list[Post]:
    """Build the whole site into `config.out_dir`.

    Renders every post, then writes ``index.html`` with posts sorted newest
    first and, when a site URL is configured, ``feed.xml``.

    Args:
        paths: Markdown files to render, in command-line order.
        config: Validated site configuration.

    Returns:
        list[Post]: The rendered posts, newest first.

    Raises:
        ConfigError: If the highlighter backend is unknown.
        MdrError: If an input file is rejected.
        IOError: If reading inputs or writing outputs fails.
        ValueError: If ``MDR_MAX_FILE_SIZE`` is invalid.
    """
    out_dir = Path(config.out_dir)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise IOError(f"Error creating {out_dir}: {error}") from error

    highlighter = get_highlighter(config.highlighter)
    max_file_size = get_max_file_size(default=config.max_file_size)
    layout = prepare_layout(config, out_dir)

    posts = [
        build_post(path, layout, config, out_dir, highlighter, max_file_size) for path in paths
    ]
    posts.sort(key=lambda post: post.created_at, reverse=True)

    index_path = out_dir / INDEX_FILE
    write_file(index_path, create_index(layout, posts, config))
    logger.info("Wrote %s", index_path)

    write_feed(posts, config, out_dir)
    return posts
