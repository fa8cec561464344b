"""Grouping of per-key changes into printable blocks.

Two strategies decide how changes are bucketed:

- :class:`FeatureGrouping` buckets every change line of a file under the
  feature path common to that file.
- :class:`ValueGrouping` buckets key paths under the change they share, e.g.
  every path where ``chrome.version`` went from ``10+`` to ``20+``.

Buckets with identical contents are then merged into one :class:`Block`.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from .differ import EQUAL, PLACEHOLDER, diff_keys, diff_sequences, diff_value, serialize_value
from .flatten import FlatData
from .normalizer import BROWSER_NAMES
from .spans import Line, Span, Style, line, plain

_NUMERIC_RE = re.compile(r"^\d+$")
_NATURAL_SPLIT_RE = re.compile(r"(\d+)")


def natural_key(text: str) -> tuple:
    """Case-insensitive sort key ordering digit runs by numeric value."""
    key = []
    for token in _NATURAL_SPLIT_RE.split(text.casefold()):
        if not token:
            continue
        if token.isdigit():
            key.append((0, int(token), token))
        else:
            key.append((1, 0, token))
    return tuple(key)


def common_prefix(first: str, last: str) -> str:
    """Leading key segments shared by two keys, never the whole of ``first``."""
    first_parts = first.split(".")
    runs = diff_sequences(first_parts, last.split("."))
    if not runs or runs[0][0] != EQUAL:
        return ""
    shared = runs[0][1][: len(first_parts) - 1]
    return ".".join(shared)


@dataclass
class Block:
    """Merged groups: several group keys sharing the same change lines."""
    keys: List[Line]
    values: List[Line]

    def texts(self) -> List[str]:
        return [plain(item) for item in self.keys + self.values]


class GroupingStrategy(ABC):
    """How one visible change is turned into a ``(group key, description)`` pair."""

    #: Whether the rendered paths of a block are its values (value grouping)
    values_are_paths = False

    def begin_file(self, keys: Sequence[str]) -> None:
        """Called with the sorted keys of each file before its changes."""

    @abstractmethod
    def describe(self, key: str, previous_key: str, value: Line) -> Tuple[Line, Line]:
        pass

    @abstractmethod
    def order(self, blocks: List[Block]) -> List[Block]:
        pass


class FeatureGrouping(GroupingStrategy):
    """Group change lines under the feature path common to each file."""

    def __init__(self, sort_by_size: bool = False):
        self.sort_by_size = sort_by_size
        self.prefix = ""

    def begin_file(self, keys: Sequence[str]) -> None:
        self.prefix = common_prefix(keys[0], keys[-1])

    def _relative(self, key: str) -> str:
        if not self.prefix:
            return key
        return ".".join(key.split(".")[len(self.prefix.split(".")):])

    def describe(self, key: str, previous_key: str, value: Line) -> Tuple[Line, Line]:
        key_diff = diff_keys(self._relative(key), self._relative(previous_key))
        return line(Span(Style.HEADING, self.prefix)), line(key_diff, " = ", value)

    def order(self, blocks: List[Block]) -> List[Block]:
        if self.sort_by_size:
            return sorted(blocks, key=lambda block: -len(block.values))
        return blocks


class ValueGrouping(GroupingStrategy):
    """Group key paths under the ``browser.field = value`` change they share."""

    values_are_paths = True

    def describe(self, key: str, previous_key: str, value: Line) -> Tuple[Line, Line]:
        parts = key.split(".")
        reverse_parts = parts[::-1]
        browser = next((part for part in reverse_parts if part in BROWSER_NAMES), None)
        field_name = next((part for part in reverse_parts if not _NUMERIC_RE.match(part)), "")

        if browser:
            group_key = line(Span(Style.BROWSER, browser), ".", field_name, " = ", value)
        else:
            group_key = line(field_name, " = ", value)

        path = [PLACEHOLDER if part in (browser, field_name) else part for part in parts]
        if path and path[-1] == PLACEHOLDER:
            path.pop()
        return group_key, line(".".join(path))

    def order(self, blocks: List[Block]) -> List[Block]:
        return sorted(blocks, key=lambda block: natural_key(plain(block.keys[0])))


@dataclass
class ChangeGrouper:
    """Accumulates changes of every file of a run.

    Groups map a group key to the ordered, duplicate-free change descriptions
    filed under it.
    """
    strategy: GroupingStrategy
    arrow: bool = False
    groups: Dict[Line, Dict[Line, None]] = field(default_factory=dict)

    def add(self, group_key: Line, description: Line) -> None:
        self.groups.setdefault(group_key, {})[description] = None

    def add_file(self, base_data: FlatData, head_data: FlatData) -> int:
        """Diff two flattenings of one file and record every visible change.

        Returns the number of changes recorded.
        """
        keys = sorted(set(base_data) | set(head_data))
        if not keys:
            return 0
        self.strategy.begin_file(keys)

        count = 0
        last_key: Optional[str] = None
        for key in keys:
            old = base_data.get(key)
            new = head_data.get(key)
            if serialize_value(old) == serialize_value(new):
                continue
            if last_key is None:
                last_key = key
            value = diff_value(old, new, arrow=self.arrow)
            if not value:
                continue
            self.add(*self.strategy.describe(key, last_key, value))
            count += 1
            last_key = key
        return count

    def blocks(self) -> List[Block]:
        """Merge groups with set-equal descriptions and order the result.

        A merged block lists its descriptions in the order of its first group.
        """
        merged: Dict[FrozenSet[Line], Block] = {}
        for group_key, descriptions in self.groups.items():
            block = merged.setdefault(
                frozenset(descriptions), Block(keys=[], values=list(descriptions))
            )
            block.keys.append(group_key)
        return self.strategy.order(list(merged.values()))
