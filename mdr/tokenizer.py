"""Markdown tokenization into a flat event stream.

markdown-it-py produces block tokens with nested inline children. This module
flattens them into `Start`/`End` pairs and leaf events so that every
consumer sees one ordered sequence, with code block content delivered as text
between the block's boundaries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

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
from .transform import lines_with_endings

logger = logging.getLogger(__name__)

CONTAINER_KINDS = {
    "paragraph": TagKind.PARAGRAPH,
    "heading": TagKind.HEADING,
    "blockquote": TagKind.BLOCK_QUOTE,
    "bullet_list": TagKind.LIST,
    "ordered_list": TagKind.LIST,
    "list_item": TagKind.ITEM,
    "table": TagKind.TABLE,
    "thead": TagKind.TABLE_HEAD,
    "tbody": TagKind.TABLE_BODY,
    "tr": TagKind.TABLE_ROW,
    "th": TagKind.TABLE_CELL,
    "td": TagKind.TABLE_CELL,
    "em": TagKind.EMPHASIS,
    "strong": TagKind.STRONG,
    "s": TagKind.STRIKETHROUGH,
    "link": TagKind.LINK,
}


def create_parser(strikethrough: bool = True, tables: bool = True) -> MarkdownIt:
    """Build a CommonMark parser with raw HTML enabled.

    Args:
        strikethrough: Enable ``~~text~~``.
        tables: Enable GFM-style pipe tables.

    Returns:
        MarkdownIt: Configured parser.
    """
    parser = MarkdownIt("commonmark", {"html": True})
    if strikethrough:
        parser.enable("strikethrough")
    if tables:
        parser.enable("table")
    return parser


def parse_events(source: str, strikethrough: bool = True, tables: bool = True) -> Iterator[Event]:
    """Tokenize markdown and yield its events in document order.

    Args:
        source: Markdown text.
        strikethrough: Enable ``~~text~~``.
        tables: Enable pipe tables.

    Returns:
        Iterator[Event]: Lazily produced events. Heading and code block
            boundaries are always paired.

    Examples:
        list(parse_events("# Hi\\n"))
        # [Start(Tag(HEADING, "h1")), Text("Hi"), End(Tag(HEADING, "h1"))]
    """
    tokens = create_parser(strikethrough, tables).parse(source)
    return _flatten(tokens, [])


def _flatten(tokens: Iterable[Token], open_tags: list[Tag]) -> Iterator[Event]:
    for token in tokens:
        if token.type == "inline":
            yield from _flatten(token.children or [], open_tags)
        elif token.type in ("fence", "code_block"):
            fenced = token.type == "fence"
            tag = Tag(TagKind.CODE_BLOCK, "pre", info=token.info.strip(), fenced=fenced)
            yield Start(tag)
            if token.content:
                yield Text(token.content)
            yield End(tag)
        elif token.type == "image":
            tag = Tag(TagKind.IMAGE, "img", attrs=_attrs(token, exclude=("alt",)))
            yield Start(tag)
            yield from _flatten(token.children or [], open_tags)
            yield End(tag)
        elif token.type in ("text", "text_special"):
            yield Text(token.content)
        elif token.type == "code_inline":
            yield Code(token.content)
        elif token.type == "html_block":
            # Each line of an HTML block is its own event.
            for line in lines_with_endings(token.content):
                yield Html(line)
        elif token.type == "html_inline":
            yield Html(token.content)
        elif token.type == "softbreak":
            yield SoftBreak()
        elif token.type == "hardbreak":
            yield HardBreak()
        elif token.type == "hr":
            yield Rule()
        elif token.nesting != 0:
            event = _container_event(token, open_tags)
            if event is not None:
                yield event
        else:
            logger.debug("Skipping unsupported token %s", token.type)


def _container_event(token: Token, open_tags: list[Tag]) -> Event | None:
    # Paragraphs inside tight lists are hidden and render without <p>.
    if token.hidden:
        return None

    if token.nesting < 0:
        return End(open_tags.pop())

    base = token.type.rsplit("_", 1)[0]
    kind = CONTAINER_KINDS.get(base)
    if kind is None:
        logger.debug("Skipping unsupported container %s", token.type)
        # Keep open and close balanced for the matching close token.
        kind = TagKind.PARAGRAPH
    tag = Tag(kind, token.tag, attrs=_attrs(token))
    open_tags.append(tag)
    return Start(tag)


def _attrs(token: Token, exclude: tuple[str, ...] = ()) -> tuple[tuple[str, str], ...]:
    return tuple(
        (str(key), str(value)) for key, value in token.attrs.items() if key not in exclude
    )
