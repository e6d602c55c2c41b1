"""Rendering of a single markdown document."""

from __future__ import annotations

import logging

from .highlight import Highlighter
from .models import RenderedDocument
from .serializer import push_html
from .tokenizer import parse_events
from .transform import Transformer

logger = logging.getLogger(__name__)


def render_markdown(
    source: str, highlighter: Highlighter | None = None, strikethrough: bool = True
) -> RenderedDocument:
    """Render markdown to HTML and collect the document's title and meta tags.

    Args:
        source: Markdown text.
        highlighter: Backend for fenced code blocks; code stays unhighlighted
            when omitted.
        strikethrough: Enable ``~~text~~``.

    Returns:
        RenderedDocument: HTML body, extracted ``<meta>`` markup, and title.

    Examples:
        document = render_markdown("# Hello\\n", PygmentsHighlighter())
        document.title  # "Hello"
    """
    transformer = Transformer(parse_events(source, strikethrough=strikethrough), highlighter)
    content = push_html(transformer)
    logger.debug("Rendered %r with %d bytes of meta", transformer.title, len(transformer.meta))
    return RenderedDocument(content=content, meta=transformer.meta, title=transformer.title)
