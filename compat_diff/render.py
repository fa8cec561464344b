"""Text and HTML rendering of grouped change blocks."""

import html
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from termcolor import colored

from .annotations import AnnotationRegistry
from .differ import diff_keys
from .grouper import Block
from .spans import Line, Span, Style, plain


class Renderer(ABC):
    """Turns span lines into output text."""

    @abstractmethod
    def span(self, span: Span) -> str:
        pass

    def render(self, value: Line) -> str:
        return "".join(self.span(span) for span in value)

    def begin(self) -> Optional[str]:
        return None

    def end(self) -> Optional[str]:
        return None

    def details_open(self, count: int) -> str:
        return ""

    def details_close(self) -> str:
        return ""


class TextRenderer(Renderer):
    """Plain or ANSI-colored terminal output.

    Args:
        color: True forces colors, False disables them, None lets termcolor
            decide from the terminal and the NO_COLOR/FORCE_COLOR variables.
    """

    STYLES = {
        Style.LITERAL: (None, None),
        Style.EMPHASIS: ("blue", None),
        Style.INSERTION: ("green", None),
        Style.DELETION: ("red", None),
        Style.BROWSER: ("cyan", None),
        Style.PLACEHOLDER: (None, ["dark"]),
        Style.HEADING: (None, ["bold"]),
        Style.FOOTNOTE: (None, ["italic"]),
    }

    def __init__(self, color: Optional[bool] = None):
        self.color = color

    def span(self, span: Span) -> str:
        color, attrs = self.STYLES[span.style]
        if self.color is False or (color is None and attrs is None):
            return span.text
        return colored(span.text, color, attrs=attrs, force_color=self.color or None)


class HtmlRenderer(Renderer):
    """HTML fragments meant to sit inside a ``<pre>`` element."""

    TAGS = {
        Style.EMPHASIS: ("<strong>", "</strong>"),
        Style.INSERTION: ('<ins style="color: green">', "</ins>"),
        Style.DELETION: ('<del style="color: red">', "</del>"),
        Style.BROWSER: ("<strong>", "</strong>"),
        Style.PLACEHOLDER: ("<small>", "</small>"),
        Style.HEADING: ("<h3>", "</h3>"),
        Style.FOOTNOTE: ("<em>", "</em>"),
    }

    def span(self, span: Span) -> str:
        text = html.escape(span.text, quote=False)
        opening, closing = self.TAGS.get(span.style, ("", ""))
        return f"{opening}{text}{closing}"

    def begin(self) -> str:
        return '<pre style="font-family: monospace">'

    def end(self) -> str:
        return "</pre>"

    def details_open(self, count: int) -> str:
        noun = "path" if count == 1 else "paths"
        return f"<details><summary>{count} {noun}</summary>"

    def details_close(self) -> str:
        return "</details>"


class BlockWriter:
    """Writes merged blocks and their footnotes to a stream."""

    def __init__(self, renderer: Renderer, registry: AnnotationRegistry,
                 out: TextIO, values_are_paths: bool = False):
        self.renderer = renderer
        self.registry = registry
        self.out = out
        self.values_are_paths = values_are_paths

    def _print(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def _footnotes(self, block: Block) -> None:
        refs = self.registry.footnotes(*block.texts())
        if not refs:
            return
        self._print()
        for ref in refs:
            self._print(self.renderer.render((Span(Style.FOOTNOTE, ref),)))

    def _write_paths(self, block: Block) -> None:
        for key in block.keys:
            self._print(self.renderer.render(key))
        paths: List[str] = [plain(value) for value in block.values]
        if len(paths) == 1:
            self._print("  " + self.renderer.render(diff_keys(paths[0], paths[0])))
            return

        fill = max(len(path) for path in paths)
        self.out.write(self.renderer.details_open(len(paths)))
        previous = None
        for path in paths:
            key_diff = diff_keys(path, previous or paths[1], fill=fill)
            self._print("  " + self.renderer.render(key_diff))
            previous = path
        self.out.write(self.renderer.details_close())

    def _write_changes(self, block: Block) -> None:
        for key in block.keys:
            if key:
                self._print(self.renderer.render(key))
        for value in block.values:
            self._print("  " + self.renderer.render(value))

    def write(self, blocks: List[Block]) -> None:
        for block in blocks:
            if self.values_are_paths:
                self._write_paths(block)
            else:
                self._write_changes(block)
            self._footnotes(block)
            self._print()
