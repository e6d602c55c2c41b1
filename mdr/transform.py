"""Streaming enrichment of markdown events.

`Transformer` sits between the tokenizer and the serializer. It adds anchor
links to headings, replaces the text of fenced code blocks with highlighted
HTML and moves ``<meta>`` tags out of the body, while pulling upstream events
one at a time.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from .events import Code, End, Event, Html, Start, TagKind, Text
from .filesystem import read_theme_file
from .highlight import Highlighter
from .models import CodeCapture, HeadingCapture, Idle, TransformerState
from .slugify import create_anchor

logger = logging.getLogger(__name__)

META_TAG_PREFIX = "<meta "
LINK_ICON = read_theme_file("link.svg").strip()

_LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+")


def lines_with_endings(text: str) -> list[str]:
    """Split text into lines, keeping each ``\\n`` terminator.

    Examples:
        lines_with_endings("a\\nb")  # ["a\\n", "b"]
    """
    return _LINE_PATTERN.findall(text)


def anchor_html(slug: str) -> str:
    return (
        f'<a href="#{slug}" id="{slug}" class="anchor" aria-hidden="true" tabindex="-1">'
        f"{LINK_ICON}</a>"
    )


class Transformer:
    """Lazy, single-pass iterator over enriched markdown events.

    Heading ends are preceded by a synthesized anchor link, highlighted code
    blocks have their text replaced by one raw HTML event, and raw HTML events
    starting with ``<meta `` are collected into `meta` instead of being
    emitted. The first heading's text becomes `title`.

    A synthesized event is returned before the event that triggered it; the
    triggering event waits in a single-slot buffer for the next pull. The
    iterator cannot be restarted once exhausted.

    Args:
        events: Upstream events, typically from `parse_events`.
        highlighter: Backend used to highlight fenced code blocks. Code blocks
            are left untouched when omitted.

    Examples:
        transformer = Transformer(parse_events(source), PygmentsHighlighter())
        html = push_html(transformer)
        transformer.title, transformer.meta
    """

    def __init__(self, events: Iterable[Event], highlighter: Highlighter | None = None):
        self._events: Iterator[Event] = iter(events)
        self._highlighter = highlighter
        self._pending: Event | None = None
        self._state: TransformerState = Idle()
        self._meta: list[str] = []
        self.title: str | None = None

    @property
    def meta(self) -> str:
        """All extracted ``<meta>`` markup, in document order."""
        return "".join(self._meta)

    def __iter__(self) -> Transformer:
        return self

    def __next__(self) -> Event:
        if self._pending is not None:
            event, self._pending = self._pending, None
            return event

        for event in self._events:
            output = self._process(event)
            if output is not None:
                return output

        # Truncated input: whatever was being captured is dropped.
        self._state = Idle()
        raise StopIteration

    def _process(self, event: Event) -> Event | None:
        if isinstance(event, Html) and event.html.startswith(META_TAG_PREFIX):
            self._meta.append(event.html)
            return None
        if isinstance(event, Start):
            return self._start(event)
        if isinstance(event, End):
            return self._end(event)
        if isinstance(event, Text):
            return self._text(event)
        if isinstance(event, Code) and isinstance(self._state, HeadingCapture):
            self._state.parts.append(event.text)
        return event

    def _start(self, event: Start) -> Event:
        tag = event.tag
        if tag.kind is TagKind.HEADING:
            self._state = HeadingCapture()
        elif tag.kind is TagKind.CODE_BLOCK and tag.language and self._highlighter is not None:
            session = self._highlighter.resolve(tag.language)
            if session is None:
                logger.debug("Leaving %r code block unhighlighted", tag.language)
            else:
                self._state = CodeCapture(session)
        return event

    def _end(self, event: End) -> Event:
        state = self._state
        if event.tag.kind is TagKind.HEADING and isinstance(state, HeadingCapture):
            self._state = Idle()
            text = state.text
            # TODO: disambiguate repeated slugs within one document
            slug = create_anchor(text)
            if self.title is None:
                self.title = text
            self._pending = event
            return Html(anchor_html(slug))

        if event.tag.kind is TagKind.CODE_BLOCK and isinstance(state, CodeCapture):
            self._state = Idle()
            rendered = state.session.finalize()
            self._pending = event
            return Html(rendered)

        return event

    def _text(self, event: Text) -> Event | None:
        state = self._state
        if isinstance(state, HeadingCapture):
            state.parts.append(event.text)
        elif isinstance(state, CodeCapture):
            for line in lines_with_endings(event.text):
                state.session.feed(line)
            return None
        return event
