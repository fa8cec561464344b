"""Key-path and value diffing.

Both differs build on :func:`diff_sequences`, a thin wrapper over
:class:`difflib.SequenceMatcher` yielding runs of common, removed and added
items in order.
"""

import json
import re
from difflib import SequenceMatcher
from typing import List, Sequence, Tuple

from .normalizer import MIRROR, STRUCTURAL_KEYS
from .spans import Line, Span, Style, join, line

EQUAL = "equal"
REMOVED = "removed"
ADDED = "added"

# Token boundaries: after an opening quote, after ] , / and space,
# before [ , / and space, before a closing quote.
VALUE_SPLIT_RE = re.compile(r'(?<=^")|(?<=[\],/ ])|(?=[\[,/ ])|(?="$)')

ARROW = " → "

# Stands for the browser/field segments of a key path in value grouping
PLACEHOLDER = "{}"


def diff_sequences(old: Sequence, new: Sequence) -> List[Tuple[str, list]]:
    """Diff two sequences into ``(op, items)`` runs.

    Within a replaced region the removed run comes before the added one.
    """
    matcher = SequenceMatcher(None, list(old), list(new), autojunk=False)
    runs = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            runs.append((EQUAL, list(old[i1:i2])))
            continue
        if i2 > i1:
            runs.append((REMOVED, list(old[i1:i2])))
        if j2 > j1:
            runs.append((ADDED, list(new[j1:j2])))
    return runs


def key_segments(key: str) -> List[str]:
    return [part for part in key.split(".") if part not in STRUCTURAL_KEYS]


def diff_keys(key: str, previous_key: str, fill: int = 0) -> Line:
    """Render ``key`` relative to ``previous_key``.

    Segments shared with the previous key are plain, new segments are
    emphasized, segments only in the previous key are dropped. With ``fill``,
    the first emphasized run is padded so the whole key reaches ``fill``
    characters.
    """
    length = len(key)
    parts = []
    for op, items in diff_sequences(key_segments(previous_key), key_segments(key)):
        if op == REMOVED:
            continue
        style = Style.EMPHASIS if op == ADDED else Style.LITERAL
        segments = join(
            [(Span(Style.PLACEHOLDER if item == PLACEHOLDER else style, item),) for item in items],
            ".",
        )
        if op == ADDED:
            padding = " " * (fill - length) if fill and length < fill else ""
            fill = 0
            parts.append(line(segments, padding))
        else:
            parts.append(segments)
    return join(parts, ".")


def serialize_value(value) -> str:
    return json.dumps(value, ensure_ascii=False)


def has_value(value) -> bool:
    """Whether a flattened value carries information worth displaying."""
    return isinstance(value, bool) or (bool(value) and value != MIRROR)


def tokenize(serialized: str) -> List[str]:
    return [token for token in VALUE_SPLIT_RE.split(serialized) if token]


def is_invisible_change(old, new) -> bool:
    """Transitions from nothing to mirrored or unsupported show nothing new."""
    return old is None and (new == MIRROR or new is False or new == "false")


def diff_value(old, new, arrow: bool = False) -> Line:
    """Render the change of a flattened value from ``old`` (base) to ``new`` (head).

    Returns an empty line when the change is not visible, in which case the
    key is not reported at all.
    """
    if is_invisible_change(old, new):
        return ()
    old_text = serialize_value(old) if has_value(old) else ""
    new_text = serialize_value(new) if has_value(new) else ""
    if old_text == new_text:
        return ()

    if arrow:
        return line(Span(Style.DELETION, old_text), ARROW, Span(Style.INSERTION, new_text))

    spans = []
    # Head first: its tokens come out as "removed" runs, base tokens as "added".
    for op, tokens in diff_sequences(tokenize(new_text), tokenize(old_text)):
        text = "".join(tokens)
        if op == REMOVED:
            spans.append(Span(Style.INSERTION, text))
        elif op == ADDED:
            spans.append(Span(Style.DELETION, text))
        else:
            spans.append(Span(Style.LITERAL, text))
    return line(*spans)
