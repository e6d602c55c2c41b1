"""Data models for mdr."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from .highlight import HighlightSession


@dataclass
class Idle:
    """No block is being captured."""


@dataclass
class HeadingCapture:
    """Inside a heading, collecting its plain text.

    Attributes:
        parts: Text and inline code content seen so far, in order.
    """

    parts: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.parts)


@dataclass
class CodeCapture:
    """Inside a fenced code block whose language resolved to a highlighter.

    Attributes:
        session: Highlighting session receiving the block's lines.
    """

    session: HighlightSession


TransformerState = Union[Idle, HeadingCapture, CodeCapture]


@dataclass
class RenderedDocument:
    """Result of rendering one markdown document.

    Attributes:
        content: Serialized HTML body.
        meta: Concatenated ``<meta>`` fragments pulled out of the body.
        title: Text of the first heading, or None when there is none.
    """

    content: str
    meta: str = ""
    title: str | None = None


@dataclass
class Post:
    """A rendered post as listed in the index and the feed.

    Attributes:
        file_name: Output file name relative to the site root.
        title: Post title, empty when the post has no heading.
        content: Rendered HTML body with rewritten asset links.
        created_at: Creation date in UTC.
    """

    file_name: str
    title: str
    content: str
    created_at: datetime
