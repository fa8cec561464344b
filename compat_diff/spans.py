"""Styled span model shared by the text and HTML renderers.

Diffing and grouping produce lines made of spans; renderers only decide how
each style looks. Lines are tuples so they can be stored in sets and compared.
"""

from enum import Enum
from typing import Iterable, NamedTuple, Tuple


class Style(Enum):
    """Visual role of a span."""
    LITERAL = "literal"
    EMPHASIS = "emphasis"        # key segment new relative to the previous key
    INSERTION = "insertion"      # head-side value token
    DELETION = "deletion"        # base-side value token
    BROWSER = "browser"
    PLACEHOLDER = "placeholder"
    HEADING = "heading"
    FOOTNOTE = "footnote"


class Span(NamedTuple):
    style: Style
    text: str


Line = Tuple[Span, ...]


def literal(text: str) -> Span:
    return Span(Style.LITERAL, text)


def line(*parts) -> Line:
    """Build a line from spans, nested lines and plain strings.

    Plain strings become literal spans; empty spans are dropped.
    """
    spans = []
    for part in parts:
        if isinstance(part, str):
            part = literal(part)
        if isinstance(part, Span):
            if part.text:
                spans.append(part)
        else:
            spans.extend(s for s in part if s.text)
    return tuple(spans)


def join(lines: Iterable[Line], separator: str) -> Line:
    out = []
    for index, item in enumerate(lines):
        if index:
            out.append(literal(separator))
        out.extend(item)
    return line(*out)


def plain(value: Line) -> str:
    """Text of a line without any styling."""
    return "".join(span.text for span in value)
