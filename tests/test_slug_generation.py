from __future__ import annotations

import pytest

from mdr.slugify import create_anchor


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Hello World", "hello-world"),
        ("Hëllo, World!", "hello--world-"),
        ("What's New?", "what-s-new-"),
        ("Café", "cafe"),
        ("  padded  ", "--padded--"),
        ("Version 2.0", "version-2-0"),
        ("Привет", "privet"),
        ("", ""),
    ],
)
def test_create_anchor_expected_examples(title: str, expected: str):
    """Validates anchor generation for representative examples."""
    assert create_anchor(title) == expected


def test_create_anchor_keeps_consecutive_hyphens():
    assert create_anchor("a -- b") == "a----b"


def test_create_anchor_maps_underscores_and_tabs():
    assert create_anchor("snake_case\tname") == "snake-case-name"


def test_create_anchor_is_deterministic():
    assert create_anchor("Straße & Öl") == create_anchor("Straße & Öl")
