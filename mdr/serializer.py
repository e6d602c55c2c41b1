"""HTML serialization of markdown events."""

from __future__ import annotations

from collections.abc import Iterable

from markdown_it.common.utils import escapeHtml

from .events import (
    Code,
    End,
    Event,
    HardBreak,
    Html,
    Rule,
    SoftBreak,
    Start,
    Tag,
    TagKind,
    Text,
)

# Closing tags of these containers are followed by a newline.
BLOCK_KINDS = frozenset(
    {
        TagKind.PARAGRAPH,
        TagKind.HEADING,
        TagKind.BLOCK_QUOTE,
        TagKind.LIST,
        TagKind.ITEM,
        TagKind.TABLE,
        TagKind.TABLE_HEAD,
        TagKind.TABLE_BODY,
        TagKind.TABLE_ROW,
    }
)
# Opening tags of these containers are followed by a newline.
OPEN_NEWLINE_KINDS = frozenset(
    {
        TagKind.BLOCK_QUOTE,
        TagKind.LIST,
        TagKind.TABLE,
        TagKind.TABLE_HEAD,
        TagKind.TABLE_BODY,
        TagKind.TABLE_ROW,
    }
)


def render_attrs(attrs: Iterable[tuple[str, str]]) -> str:
    return "".join(f' {name}="{escapeHtml(value)}"' for name, value in attrs)


class HtmlWriter:
    """Accumulates the HTML for a stream of events.

    `Text` is escaped, `Html` is copied verbatim. Text inside an image is
    collected into the ``alt`` attribute.
    """

    def __init__(self):
        self._parts: list[str] = []
        self._image_depth = 0

    def getvalue(self) -> str:
        return "".join(self._parts)

    def write(self, event: Event) -> None:
        if self._image_depth:
            self._write_alt(event)
        elif isinstance(event, Start):
            self._start(event.tag)
        elif isinstance(event, End):
            self._end(event.tag)
        elif isinstance(event, Text):
            self._parts.append(escapeHtml(event.text))
        elif isinstance(event, Code):
            self._parts.append(f"<code>{escapeHtml(event.text)}</code>")
        elif isinstance(event, Html):
            self._parts.append(event.html)
        elif isinstance(event, SoftBreak):
            self._parts.append("\n")
        elif isinstance(event, HardBreak):
            self._parts.append("<br />\n")
        elif isinstance(event, Rule):
            self._parts.append("<hr />\n")

    def _start(self, tag: Tag) -> None:
        if tag.kind is TagKind.CODE_BLOCK:
            if tag.language:
                self._parts.append(f'<pre><code class="language-{escapeHtml(tag.language)}">')
            else:
                self._parts.append("<pre><code>")
        elif tag.kind is TagKind.IMAGE:
            self._image_depth = 1
            self._parts.append(f'<img src="{escapeHtml(tag.get("src", ""))}" alt="')
        else:
            self._parts.append(f"<{tag.name}{render_attrs(tag.attrs)}>")
            if tag.kind in OPEN_NEWLINE_KINDS:
                self._parts.append("\n")

    def _end(self, tag: Tag) -> None:
        if tag.kind is TagKind.CODE_BLOCK:
            self._parts.append("</code></pre>\n")
            return
        self._parts.append(f"</{tag.name}>")
        if tag.kind in BLOCK_KINDS:
            self._parts.append("\n")

    def _write_alt(self, event: Event) -> None:
        if isinstance(event, Start):
            self._image_depth += 1
        elif isinstance(event, End):
            self._image_depth -= 1
            if self._image_depth == 0:
                title = event.tag.get("title")
                if title:
                    self._parts.append(f'" title="{escapeHtml(title)}" />')
                else:
                    self._parts.append('" />')
        elif isinstance(event, (Text, Code)):
            self._parts.append(escapeHtml(event.text))
        elif isinstance(event, (SoftBreak, HardBreak)):
            self._parts.append(" ")


def push_html(events: Iterable[Event]) -> str:
    """Serialize events to an HTML string.

    Args:
        events: Event stream, usually a `Transformer`.

    Returns:
        str: The rendered HTML.

    Examples:
        push_html(parse_events("*hi*"))  # "<p><em>hi</em></p>\\n"
    """
    writer = HtmlWriter()
    for event in events:
        writer.write(event)
    return writer.getvalue()
