"""Syntax highlighting backends for fenced code blocks.

A backend resolves a fence language label to a session. The session receives
the block's source line by line and renders classed HTML when finalized.
Both backends look languages up in the pygments lexer database; they differ
only in the classes they emit.
"""

from __future__ import annotations

import html
import logging
from typing import Protocol

from pygments import highlight, lex
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String
from pygments.util import ClassNotFound

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class HighlightSession(Protocol):
    """Per-block highlighting state."""

    def feed(self, line: str) -> None:
        ...

    def finalize(self) -> str:
        ...


class Highlighter(Protocol):
    """Resolves fence language labels to highlighting sessions."""

    def resolve(self, language: str) -> HighlightSession | None:
        ...


def find_lexer(language: str) -> Lexer | None:
    """Look up a pygments lexer by alias, then by file extension.

    Alias lookup is case-insensitive and covers the usual short names
    (``js``, ``ts``, ``py``...).

    Args:
        language: Language label from the fence info string.

    Returns:
        Lexer | None: A lexer configured to keep leading and trailing newlines,
            or None when the label is unknown.

    Examples:
        find_lexer("JavaScript")  # JavascriptLexer
        find_lexer("rs")  # RustLexer, matched as a file extension
        find_lexer("no-such-language")  # None
    """
    if not language:
        return None
    try:
        return get_lexer_by_name(language, stripnl=False)
    except ClassNotFound:
        pass
    try:
        return get_lexer_for_filename(f"code.{language}", stripnl=False)
    except ClassNotFound:
        logger.debug("No lexer found for language %r", language)
        return None


class _BufferedSession:
    # Lines are lexed together on finalize so that multi-line strings and
    # comments are tokenized with their full context.
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self._lines: list[str] = []

    def feed(self, line: str) -> None:
        self._lines.append(line)

    def finalize(self) -> str:
        return self.render("".join(self._lines))

    def render(self, code: str) -> str:
        raise NotImplementedError


class PygmentsSession(_BufferedSession):
    def __init__(self, lexer: Lexer, formatter: HtmlFormatter):
        super().__init__(lexer)
        self.formatter = formatter

    def render(self, code: str) -> str:
        return highlight(code, self.lexer, self.formatter)


class PygmentsHighlighter:
    """Backend emitting pygments' short token classes (``c1``, ``p``, ``s2``, ``kt``)."""

    def __init__(self, classprefix: str = ""):
        self.formatter = HtmlFormatter(nowrap=True, classprefix=classprefix)

    def resolve(self, language: str) -> PygmentsSession | None:
        lexer = find_lexer(language)
        if lexer is None:
            return None
        return PygmentsSession(lexer, self.formatter)


# Checked in order; the first matching token type wins.
CATEGORIES = (
    (Comment, "comment"),
    (String, "string"),
    (Number, "number"),
    (Keyword.Type, "type"),
    (Name.Class, "type"),
    (Name.Builtin.Pseudo, "keyword"),
    (Keyword, "keyword"),
    (Name.Function, "function"),
    (Operator, "operator"),
    (Punctuation, "punctuation"),
)


def categorize(token_type) -> str | None:
    for parent, category in CATEGORIES:
        if token_type in parent:
            return category
    return None


class CategorySession(_BufferedSession):
    def render(self, code: str) -> str:
        parts = []
        for token_type, value in lex(code, self.lexer):
            escaped = html.escape(value, quote=False)
            category = categorize(token_type)
            if category is None or not value.strip():
                parts.append(escaped)
            else:
                parts.append(f'<span class="{category}">{escaped}</span>')
        return "".join(parts)


class CategoryHighlighter:
    """Backend emitting a fixed set of classes.

    Classes: ``comment``, ``string``, ``number``, ``type``, ``keyword``,
    ``function``, ``operator`` and ``punctuation``. Anything else is emitted
    as escaped text without a span.
    """

    def resolve(self, language: str) -> CategorySession | None:
        lexer = find_lexer(language)
        if lexer is None:
            return None
        return CategorySession(lexer)


HIGHLIGHTERS = {
    "pygments": PygmentsHighlighter,
    "categories": CategoryHighlighter,
}


def get_highlighter(name: str) -> Highlighter:
    """Instantiate a highlighting backend by name.

    Raises:
        ConfigError: If `name` is not a known backend.
    """
    try:
        factory = HIGHLIGHTERS[name]
    except KeyError as error:
        names = ", ".join(sorted(HIGHLIGHTERS))
        raise ConfigError(f"`highlighter` must be one of: {names}") from error
    return factory()
