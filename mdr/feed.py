"""Atom feed generation."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from .config import SiteConfig
from .constants import ATOM_NAMESPACE, FEED_FILE
from .filesystem import write_file
from .models import Post

logger = logging.getLogger(__name__)


def site_url(config: SiteConfig) -> str | None:
    """Return the configured site URL without a trailing slash, or None."""
    if not config.url:
        return None
    return config.url[:-1] if config.url.endswith("/") else config.url


def _text_element(parent: ET.Element, tag: str, text: str, **attrs: str) -> ET.Element:
    element = ET.SubElement(parent, tag, attrs)
    element.text = text
    return element


def build_feed(posts: list[Post], config: SiteConfig, url: str) -> ET.ElementTree:
    """Build an Atom 1.0 document for `posts`.

    Args:
        posts: Posts sorted newest first.
        config: Site configuration providing the feed title and author.
        url: Site URL without trailing slash.

    Returns:
        ET.ElementTree: The feed document.
    """
    feed = ET.Element("feed", {"xmlns": ATOM_NAMESPACE})
    _text_element(feed, "title", config.site_name)
    ET.SubElement(feed, "link", {"href": f"{url}/{FEED_FILE}", "rel": "self"})
    ET.SubElement(feed, "link", {"href": url})
    _text_element(feed, "id", f"{url}/")

    if posts:
        _text_element(feed, "updated", posts[0].created_at.isoformat())

    author = ET.SubElement(feed, "author")
    _text_element(author, "name", config.site_name)

    for post in posts:
        entry = ET.SubElement(feed, "entry")
        post_url = f"{url}/{post.file_name}"
        _text_element(entry, "title", post.title)
        ET.SubElement(entry, "link", {"href": post_url})
        _text_element(entry, "id", post_url)
        _text_element(entry, "updated", post.created_at.isoformat())
        _text_element(entry, "content", post.content, type="html")

    tree = ET.ElementTree(feed)
    ET.indent(tree)
    return tree


def write_feed(posts: list[Post], config: SiteConfig, out_dir: Path) -> Path | None:
    """Write ``feed.xml`` when the site URL is configured.

    Returns:
        Path | None: Path of the written feed, or None when no URL is set.

    Raises:
        IOError: If the feed cannot be written.
    """
    url = site_url(config)
    if url is None:
        logger.info("No site URL configured; skipping %s", FEED_FILE)
        return None

    tree = build_feed(posts, config, url)
    out_path = out_dir / FEED_FILE
    data = ET.tostring(tree.getroot(), encoding="utf-8", xml_declaration=True)
    write_file(out_path, data)
    logger.info("Wrote %s with %d entries", out_path, len(posts))
    return out_path
