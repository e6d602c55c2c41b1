"""HTML layout handling: theme preparation, page assembly and asset links."""

from __future__ import annotations

import logging
from pathlib import Path

from bs4 import BeautifulSoup  # type: ignore[import-untyped]

from .config import SiteConfig
from .constants import STYLESHEETS
from .filesystem import hash_and_write, read_theme_file

logger = logging.getLogger(__name__)


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _append_html(tag, html: str) -> None:
    for node in list(_parse(html).contents):
        tag.append(node)


def _insert_html_after(tag, html: str) -> None:
    for node in reversed(list(_parse(html).contents)):
        tag.insert_after(node)


def prepare_layout(config: SiteConfig, out_dir: Path) -> str:
    """Fill the theme layout with site-wide values.

    Writes the theme stylesheets under content-addressed names and points the
    layout's ``<link rel="stylesheet">`` elements at them, sets the site name in
    ``<title>`` and the header, and sets or removes the GitHub and Twitter
    links.

    Args:
        config: Site configuration.
        out_dir: Output directory receiving the stylesheets.

    Returns:
        str: Layout HTML shared by every page.

    Raises:
        IOError: If a stylesheet cannot be written.
    """
    soup = _parse(read_theme_file("layout.html"))

    for link in soup.select("link[rel=stylesheet]"):
        href = link.get("href")
        if href in STYLESHEETS:
            name, ext = href.rsplit(".", 1)
            link["href"] = hash_and_write(out_dir, name, ext, read_theme_file(href))

    if soup.title is not None:
        soup.title.string = config.site_name

    for anchor in soup.select("#header h1 a"):
        anchor.clear()
        _append_html(anchor, config.site_name)

    _set_or_remove_link(soup, "#link-github", config.github_handle, "https://github.com/{}")
    _set_or_remove_link(soup, "#link-twitter", config.twitter_handle, "https://twitter.com/{}")

    return str(soup)


def _set_or_remove_link(soup: BeautifulSoup, selector: str, handle: str | None, url: str) -> None:
    for element in soup.select(selector):
        if handle:
            element["href"] = url.format(handle)
        else:
            element.decompose()


def create_page(
    layout: str,
    content: str,
    *,
    title: str | None = None,
    site_name: str = "",
    meta: str = "",
    head_extra: str = "",
) -> str:
    """Place rendered content into the layout.

    Args:
        layout: Prepared layout from `prepare_layout`.
        content: HTML placed inside the ``[role=main]`` element.
        title: Page title; the document title becomes ``"{title} - {site_name}"``.
        site_name: Site name appended to `title`.
        meta: Markup inserted right after ``<title>``.
        head_extra: Markup appended to ``<head>``.

    Returns:
        str: The complete page.

    Examples:
        create_page(layout, "<p>Hi</p>", title="Hello", site_name="Blog")
    """
    soup = _parse(layout)

    for main in soup.select("[role=main]"):
        main.clear()
        _append_html(main, content)

    if soup.title is not None:
        if meta:
            _insert_html_after(soup.title, meta)
        if title is not None:
            soup.title.string = f"{title} - {site_name}"

    if head_extra and soup.head is not None:
        _append_html(soup.head, head_extra)

    return str(soup)


def rewrite_images(content: str, source_path: Path, out_dir: Path) -> str:
    """Copy images referenced by a post into the output directory.

    Relative ``src`` attributes are resolved against the markdown file's
    directory. Existing files are written under content-addressed names and
    the attribute is rewritten; absolute paths, URLs and missing files are
    left alone.

    Args:
        content: Rendered post HTML.
        source_path: Path of the markdown file the content came from.
        out_dir: Output directory of the site.

    Returns:
        str: Content with rewritten image sources. Returned unchanged when no
            image was copied.

    Raises:
        IOError: If an image cannot be read or written.
    """
    if "<img" not in content:
        return content

    soup = _parse(content)
    changed = False
    for image in soup.find_all("img"):
        src = image.get("src")
        if not src or Path(src).is_absolute():
            continue

        asset = source_path.parent / src
        if not asset.is_file():
            continue

        try:
            data = asset.read_bytes()
        except OSError as error:
            raise IOError(f"Error accessing {asset}: {error}") from error

        name = asset.stem or "image"
        ext = asset.suffix[1:] or None
        image["src"] = hash_and_write(out_dir, name, ext, data)
        logger.info("Copied image %s referenced by %s", src, source_path)
        changed = True

    return str(soup) if changed else content


def render_post_item(file_name: str, title: str, created_at_rfc3339: str, created_on: str) -> str:
    """Render one index entry from the theme's post snippet."""
    soup = _parse(read_theme_file("post.html"))
    for link in soup.select("a.post-link"):
        link["href"] = file_name
        link.string = title
    for time in soup.select("time"):
        time["datetime"] = created_at_rfc3339
        time.string = created_on
    return str(soup).strip()
