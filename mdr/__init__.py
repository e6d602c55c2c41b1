"""
mdr: a simple, opinionated markdown renderer.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    mdr --name "My Blog" --url https://example.com posts/*.md

Library Usage:
    from mdr import PygmentsHighlighter, render_markdown

    document = render_markdown(Path("post.md").read_text(), PygmentsHighlighter())
    document.content, document.title, document.meta
"""

from .events import Code, End, Event, HardBreak, Html, Rule, SoftBreak, Start, Tag, TagKind, Text
from .exceptions import MdrError, MissingDateError, NonMarkdownFileError
from .highlight import CategoryHighlighter, PygmentsHighlighter, get_highlighter
from .models import Post, RenderedDocument
from .render import render_markdown
from .serializer import push_html
from .site import build_site
from .slugify import create_anchor
from .tokenizer import parse_events
from .transform import Transformer

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "Transformer",
    "render_markdown",
    "parse_events",
    "push_html",
    "create_anchor",
    "build_site",
    # Highlighting
    "PygmentsHighlighter",
    "CategoryHighlighter",
    "get_highlighter",
    # Data models
    "Event",
    "Start",
    "End",
    "Text",
    "Code",
    "Html",
    "SoftBreak",
    "HardBreak",
    "Rule",
    "Tag",
    "TagKind",
    "Post",
    "RenderedDocument",
    # Exceptions
    "MdrError",
    "NonMarkdownFileError",
    "MissingDateError",
    # Version
    "__version__",
]
