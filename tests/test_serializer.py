from __future__ import annotations

import pytest

from mdr.events import End, Html, Start, Text, fenced_code
from mdr.serializer import push_html
from mdr.tokenizer import parse_events


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("*hi*\n", "<p><em>hi</em></p>\n"),
        ("**hi**\n", "<p><strong>hi</strong></p>\n"),
        ("~~hi~~\n", "<p><s>hi</s></p>\n"),
        ("a < b & c\n", "<p>a &lt; b &amp; c</p>\n"),
        ("a\nb\n", "<p>a\nb</p>\n"),
        ("# Title\n", "<h1>Title</h1>\n"),
        ("`x < y`\n", "<p><code>x &lt; y</code></p>\n"),
        ("    x\n", "<pre><code>x\n</code></pre>\n"),
        ("```py\nx\n```\n", '<pre><code class="language-py">x\n</code></pre>\n'),
        ("- a\n- b\n", "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"),
        ("> q\n", "<blockquote>\n<p>q</p>\n</blockquote>\n"),
        ("[a](http://x.com)\n", '<p><a href="http://x.com">a</a></p>\n'),
        ('![alt *x*](a.png "T")\n', '<p><img src="a.png" alt="alt x" title="T" /></p>\n'),
        ("---\n", "<hr />\n"),
        ("<div>raw</div>\n", "<div>raw</div>\n"),
    ],
)
def test_push_html(source: str, expected: str):
    assert push_html(parse_events(source)) == expected


def test_ordered_list_start_attribute():
    assert push_html(parse_events("3. a\n4. b\n")).startswith('<ol start="3">\n')


def test_html_events_are_copied_verbatim():
    block = fenced_code("js")
    events = [Start(block), Html('<span class="kd">let</span>'), End(block)]

    assert push_html(events) == (
        '<pre><code class="language-js"><span class="kd">let</span></code></pre>\n'
    )


def test_text_events_are_escaped():
    assert push_html([Text('<a href="x">')]) == "&lt;a href=&quot;x&quot;&gt;"
