"""Tests for text and HTML rendering."""

import io

from compat_diff.annotations import AnnotationRegistry
from compat_diff.grouper import Block
from compat_diff.render import BlockWriter, HtmlRenderer, TextRenderer
from compat_diff.spans import Span, Style, line


def _write(blocks, renderer, registry=None, values_are_paths=False):
    out = io.StringIO()
    BlockWriter(renderer, registry or AnnotationRegistry(), out,
                values_are_paths=values_are_paths).write(blocks)
    return out.getvalue()


CHANGE = line("chrome.version = ", Span(Style.INSERTION, '"20+'), Span(Style.DELETION, '10+'), '"')


def test_text_renderer_without_color_is_plain():
    renderer = TextRenderer(color=False)
    assert renderer.render(CHANGE) == 'chrome.version = "20+10+"'


def test_text_renderer_forced_color():
    renderer = TextRenderer(color=True)
    rendered = renderer.render(CHANGE)
    assert "\x1b[32m" in rendered  # green insertion
    assert "\x1b[31m" in rendered  # red deletion
    assert rendered.startswith("chrome.version = ")


def test_html_renderer_tags_and_escaping():
    renderer = HtmlRenderer()
    assert renderer.render(CHANGE) == (
        'chrome.version = <ins style="color: green">"20+</ins>'
        '<del style="color: red">10+</del>"'
    )
    assert renderer.render(line(Span(Style.EMPHASIS, "<b>&"))) == "<strong>&lt;b&gt;&amp;</strong>"
    assert renderer.render(line(Span(Style.PLACEHOLDER, "{}"))) == "<small>{}</small>"
    assert renderer.begin() == '<pre style="font-family: monospace">'
    assert renderer.end() == "</pre>"


def test_feature_block_output():
    block = Block(keys=[line(Span(Style.HEADING, "api.Foo.__compat.support"))], values=[CHANGE])
    output = _write([block], TextRenderer(color=False))

    assert output == (
        "api.Foo.__compat.support\n"
        '  chrome.version = "20+10+"\n'
        "\n"
    )


def test_feature_block_without_heading():
    block = Block(keys=[()], values=[CHANGE])
    output = _write([block], TextRenderer(color=False))
    assert output == '  chrome.version = "20+10+"\n\n'


def test_value_block_single_path():
    block = Block(keys=[CHANGE], values=[line("api.Foo.__compat.support.{}")])
    output = _write([block], TextRenderer(color=False), values_are_paths=True)

    assert output == (
        'chrome.version = "20+10+"\n'
        "  api.Foo.{}\n"
        "\n"
    )


def test_value_block_several_paths_in_details():
    block = Block(
        keys=[CHANGE],
        values=[line("api.A.__compat.support.{}"), line("api.Bb.__compat.support.{}")],
    )
    output = _write([block], HtmlRenderer(), values_are_paths=True)

    assert "<details><summary>2 paths</summary>" in output
    assert output.rstrip().endswith("</details>")
    assert "  api.<strong>A</strong>" in output
    assert "  api.<strong>Bb</strong>" in output


def test_value_block_paths_are_padded_in_text():
    block = Block(
        keys=[CHANGE],
        values=[line("api.A.__compat.support.{}"), line("api.Bb.__compat.support.{}")],
    )
    output = _write([block], TextRenderer(color=False), values_are_paths=True)
    lines = output.splitlines()

    assert lines[1] == "  api.A .{}"
    assert lines[2] == "  api.Bb.{}"


def test_footnotes_follow_their_block():
    registry = AnnotationRegistry()
    ref = registry.add_flags([{"type": "preference", "name": "x"}])
    block = Block(
        keys=[line(Span(Style.HEADING, "api.Foo"))],
        values=[line(f'chrome.version = "20+ {ref}"')],
    )
    output = _write([block], TextRenderer(color=False), registry=registry)

    assert output.splitlines() == [
        "api.Foo",
        '  chrome.version = "20+ [^f1]"',
        "",
        '[^f1]: [{"type":"preference","name":"x"}]',
        "",
    ]


def test_html_footnotes_are_emphasized():
    registry = AnnotationRegistry()
    ref = registry.add_notes("See <bug>")
    block = Block(keys=[()], values=[line(f"safari.version = \"1+ {ref}\"")])
    output = _write([block], HtmlRenderer(), registry=registry)

    assert '<em>[^n1]: "See &lt;bug&gt;"</em>' in output
