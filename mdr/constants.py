"""Constants used across the mdr package."""

from __future__ import annotations

import re

from .config import SiteConfig

DEFAULT_CONFIG = SiteConfig()

# Input files
MARKDOWN_EXTENSIONS = (".md",)
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
# Posts named like "2021-03-14-title.md" take their date from the name.
DATED_FILE_NAME_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})")

# Output files
INDEX_FILE = "index.html"
FEED_FILE = "feed.xml"
STYLESHEETS = ("normalize.css", "style.css")

# Feed
ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
FEED_LINK = '<link href="/feed.xml" type="application/atom+xml" rel="alternate" title="Atom feed" />'
