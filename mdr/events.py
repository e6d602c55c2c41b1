"""Event types flowing from the tokenizer through the transformer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


class TagKind(Enum):
    """Block and inline containers that open with `Start` and close with `End`."""

    PARAGRAPH = auto()
    HEADING = auto()
    BLOCK_QUOTE = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    ITEM = auto()
    TABLE = auto()
    TABLE_HEAD = auto()
    TABLE_BODY = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()
    EMPHASIS = auto()
    STRONG = auto()
    STRIKETHROUGH = auto()
    LINK = auto()
    IMAGE = auto()


@dataclass(frozen=True)
class Tag:
    """A container boundary.

    Attributes:
        kind: What kind of container this is.
        name: HTML element name used when serializing (``h2``, ``pre``, ``a``).
        attrs: Attribute pairs in source order (``href``, ``src``, ``start``...).
        info: Fence info string for fenced code blocks, empty otherwise.
        fenced: Whether a code block was fenced rather than indented.
    """

    kind: TagKind
    name: str = ""
    attrs: tuple[tuple[str, str], ...] = ()
    info: str = ""
    fenced: bool = False

    @property
    def level(self) -> int:
        """Heading level derived from the element name, 0 for non-headings."""
        if self.kind is TagKind.HEADING and self.name[1:].isdigit():
            return int(self.name[1:])
        return 0

    @property
    def language(self) -> str | None:
        """First word of the fence info string, if any."""
        if not self.fenced:
            return None
        words = self.info.split()
        return words[0] if words else None

    def get(self, attr: str, default: str | None = None) -> str | None:
        for key, value in self.attrs:
            if key == attr:
                return value
        return default


@dataclass(frozen=True)
class Start:
    tag: Tag


@dataclass(frozen=True)
class End:
    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Code:
    """Inline code span."""

    text: str


@dataclass(frozen=True)
class Html:
    """Raw HTML, copied verbatim by the serializer."""

    html: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class Rule:
    pass


Event = Union[Start, End, Text, Code, Html, SoftBreak, HardBreak, Rule]


def heading(level: int) -> Tag:
    return Tag(TagKind.HEADING, f"h{level}")


def fenced_code(info: str) -> Tag:
    return Tag(TagKind.CODE_BLOCK, "pre", info=info, fenced=True)
