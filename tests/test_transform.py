from __future__ import annotations

import pytest

from mdr.events import Code, End, Html, Start, Tag, TagKind, Text, fenced_code, heading
from mdr.highlight import PygmentsHighlighter
from mdr.models import CodeCapture, HeadingCapture, Idle
from mdr.transform import Transformer, anchor_html, lines_with_endings

H1 = heading(1)
H2 = heading(2)
JS = fenced_code("js")


def test_heading_and_code_block_scenario(stub_highlighter):
    events = [
        Start(H1),
        Text("Hi"),
        End(H1),
        Start(JS),
        Text("let x=1;\n"),
        End(JS),
    ]
    transformer = Transformer(events, stub_highlighter)

    output = list(transformer)

    assert output == [
        Start(H1),
        Text("Hi"),
        Html(anchor_html("hi")),
        End(H1),
        Start(JS),
        Html('<span class="javascript">let x=1;\n</span>'),
        End(JS),
    ]
    assert transformer.title == "Hi"
    assert transformer.meta == ""


def test_anchor_markup_links_to_itself():
    markup = anchor_html("hello--world-")

    assert markup.startswith('<a href="#hello--world-" id="hello--world-" class="anchor"')
    assert 'aria-hidden="true" tabindex="-1"' in markup
    assert "<svg" in markup
    assert markup.endswith("</a>")


def test_heading_text_collects_text_and_inline_code():
    events = [Start(H2), Text("Using "), Code("mdr"), Text(" today"), End(H2)]
    transformer = Transformer(events)

    output = list(transformer)

    assert output[:4] == events[:4]
    assert output[4] == Html(anchor_html("using-mdr-today"))
    assert output[5] == End(H2)
    assert transformer.title == "Using mdr today"


def test_first_heading_wins_title():
    events = [Start(H2), Text("A"), End(H2), Start(H1), Text("B"), End(H1)]
    transformer = Transformer(events)

    output = list(transformer)

    assert transformer.title == "A"
    assert output.count(Html(anchor_html("b"))) == 1


def test_duplicate_slugs_are_not_disambiguated():
    events = [Start(H2), Text("Same"), End(H2), Start(H2), Text("Same"), End(H2)]

    output = list(Transformer(events))

    assert output.count(Html(anchor_html("same"))) == 2


def test_meta_tags_are_extracted_in_order():
    date = '<meta name="date" content="2021-03-14T10:00:00Z" />\n'
    author = '<meta name="author" content="Jane" />\n'
    events = [Html(date), Start(H1), Text("Post"), End(H1), Html(author), Html("<div></div>")]
    transformer = Transformer(events)

    output = list(transformer)

    assert Html(date) not in output
    assert Html(author) not in output
    assert Html("<div></div>") in output
    assert transformer.meta == date + author


def test_meta_tags_are_extracted_inside_open_capture():
    tag = '<meta name="keywords" content="x" />'
    events = [Start(H1), Text("T"), Html(tag), End(H1)]
    transformer = Transformer(events)

    output = list(transformer)

    assert Html(tag) not in output
    assert transformer.meta == tag


def test_only_meta_prefix_is_extracted():
    events = [Html("<metadata>"), Html(" <meta name='x' />")]
    transformer = Transformer(events)

    assert list(transformer) == events
    assert transformer.meta == ""


def test_unresolved_language_passes_block_through(stub_highlighter):
    block = fenced_code("brainfuck")
    events = [Start(block), Text("+[-->++<]>.\n"), End(block)]

    assert list(Transformer(events, stub_highlighter)) == events
    assert stub_highlighter.sessions == []


def test_language_resolution_is_case_insensitive_and_alias_aware(stub_highlighter):
    blocks = [fenced_code("JavaScript"), fenced_code("TS")]
    events = [event for block in blocks for event in (Start(block), Text("x\n"), End(block))]

    output = list(Transformer(events, stub_highlighter))

    assert [session.language for session in stub_highlighter.sessions] == [
        "javascript",
        "typescript",
    ]
    assert sum(isinstance(event, Html) for event in output) == 2


def test_code_blocks_without_highlighter_pass_through():
    events = [Start(JS), Text("let x = 1;\n"), End(JS)]

    assert list(Transformer(events)) == events


def test_indented_code_block_is_not_highlighted(stub_highlighter):
    block = Tag(TagKind.CODE_BLOCK, "pre")
    events = [Start(block), Text("let x = 1;\n"), End(block)]

    assert list(Transformer(events, stub_highlighter)) == events


def test_code_text_is_fed_line_by_line(stub_highlighter):
    events = [Start(JS), Text("a\nb\n"), Text("c"), End(JS)]

    list(Transformer(events, stub_highlighter))

    assert stub_highlighter.sessions[0].lines == ["a\n", "b\n", "c"]


def test_synthesized_event_defers_original_by_one_pull():
    transformer = Transformer([Start(H1), Text("Hi"), End(H1), Text("after")])

    assert next(transformer) == Start(H1)
    assert next(transformer) == Text("Hi")
    assert next(transformer) == Html(anchor_html("hi"))
    assert transformer._pending == End(H1)
    assert next(transformer) == End(H1)
    assert transformer._pending is None
    assert next(transformer) == Text("after")


def test_state_transitions():
    transformer = Transformer([Start(H1), Text("Hi"), End(H1), End(H1)], PygmentsHighlighter())

    assert isinstance(transformer._state, Idle)
    next(transformer)
    assert isinstance(transformer._state, HeadingCapture)
    next(transformer)
    next(transformer)
    assert isinstance(transformer._state, Idle)
    # A stray end event passes through without an anchor.
    assert list(transformer) == [End(H1), End(H1)]


def test_code_capture_state_holds_session(stub_highlighter):
    transformer = Transformer([Start(JS), Text("x\n"), End(JS)], stub_highlighter)

    next(transformer)

    assert isinstance(transformer._state, CodeCapture)
    assert transformer._state.session is stub_highlighter.sessions[0]


def test_truncated_heading_is_discarded():
    transformer = Transformer([Start(H1), Text("Cut")])

    assert list(transformer) == [Start(H1), Text("Cut")]
    assert transformer.title is None
    assert isinstance(transformer._state, Idle)


def test_truncated_code_block_is_discarded(stub_highlighter):
    transformer = Transformer([Start(JS), Text("let x;\n")], stub_highlighter)

    assert list(transformer) == [Start(JS)]


def test_exhausted_transformer_yields_nothing_more():
    transformer = Transformer([Start(H1), Text("Hi"), End(H1)])

    assert len(list(transformer)) == 4
    assert list(transformer) == []
    with pytest.raises(StopIteration):
        next(transformer)


def test_accepts_lazy_upstream():
    def upstream():
        yield Start(H1)
        yield Text("Lazy")
        yield End(H1)

    transformer = Transformer(upstream())

    assert iter(transformer) is transformer
    assert len(list(transformer)) == 4
    assert transformer.title == "Lazy"


class _FailingSession:
    def feed(self, line: str) -> None:
        pass

    def finalize(self) -> str:
        raise RuntimeError("highlighter failed")


class _FailingHighlighter:
    def resolve(self, language: str) -> _FailingSession:
        return _FailingSession()


def test_highlighter_errors_propagate():
    transformer = Transformer([Start(JS), Text("x\n"), End(JS)], _FailingHighlighter())

    with pytest.raises(RuntimeError, match="highlighter failed"):
        list(transformer)


class _FeedFailingSession:
    def feed(self, line: str) -> None:
        raise ValueError(f"cannot lex {line!r}")

    def finalize(self) -> str:
        return ""


class _FeedFailingHighlighter:
    def resolve(self, language: str) -> _FeedFailingSession:
        return _FeedFailingSession()


def test_highlighter_feed_errors_propagate():
    transformer = Transformer([Start(JS), Text("x\n"), End(JS)], _FeedFailingHighlighter())

    assert next(transformer) == Start(JS)
    with pytest.raises(ValueError, match="cannot lex"):
        next(transformer)


def test_with_pygments_backend():
    transformer = Transformer([Start(JS), Text("let x=1;\n"), End(JS)], PygmentsHighlighter())

    start, rendered, end = list(transformer)

    assert start == Start(JS)
    assert end == End(JS)
    assert isinstance(rendered, Html)
    assert '<span class="kd">let</span>' in rendered.html


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", []),
        ("a", ["a"]),
        ("a\n", ["a\n"]),
        ("a\nb", ["a\n", "b"]),
        ("\n\n", ["\n", "\n"]),
        ("a\r\nb\n", ["a\r\n", "b\n"]),
    ],
)
def test_lines_with_endings(text: str, expected: list[str]):
    assert lines_with_endings(text) == expected
