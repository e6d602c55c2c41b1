"""Anchor generation for rendered headings."""

from __future__ import annotations

import string

from unidecode import unidecode

_ANCHOR_CHARACTERS = frozenset(string.ascii_letters + string.digits)


def create_anchor(title: str) -> str:
    """Generate a URL-fragment slug from heading text.

    Transliterates the title to its closest ASCII form, lowercases it, and
    replaces every character that is not an ASCII letter or digit with a
    hyphen, one for one. Consecutive hyphens are kept and nothing is trimmed,
    so the slug length always equals the transliterated length.

    Args:
        title: Plain text of the heading.

    Returns:
        str: Slug suitable for ``id`` and ``href="#..."`` attributes. Empty when
            the title transliterates to nothing.

    Examples:
        create_anchor("Hello World")  # "hello-world"
        create_anchor("Hëllo, World!")  # "hello--world-"
        create_anchor("Привет")  # "privet"
    """
    slug = unidecode(title).lower()
    return "".join(c if c in _ANCHOR_CHARACTERS else "-" for c in slug)
