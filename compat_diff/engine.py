"""High-level diff engine used by the CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .annotations import AnnotationRegistry
from .flatten import flatten
from .grouper import Block, ChangeGrouper, FeatureGrouping, GroupingStrategy, ValueGrouping
from .render import BlockWriter, HtmlRenderer, Renderer, TextRenderer
from .sources.base import ContentSource, DiffStatus

logger = logging.getLogger(__name__)


@dataclass
class DiffOptions:
    """Output settings of one diff run."""
    group: bool = False                 # group by value instead of by feature
    html: bool = False
    arrow: bool = False                 # "old → new" instead of interleaved tokens
    color: Optional[bool] = None        # None: decided by the terminal
    sort_by_size: bool = False          # feature grouping: biggest blocks first
    allow_added_deleted: bool = False   # diff added/deleted files against {}


def is_data_file(status: DiffStatus) -> bool:
    """Only JSON files inside a directory hold compat data."""
    return status.head_path.endswith(".json") and "/" in status.head_path


class DiffEngine:
    """Orchestrates flattening, grouping and rendering for a base/head pair."""

    def __init__(self, source: ContentSource, options: Optional[DiffOptions] = None,
                 registry: Optional[AnnotationRegistry] = None) -> None:
        self.source = source
        self.options = options or DiffOptions()
        self.registry = registry if registry is not None else AnnotationRegistry()
        self.strategy = self._create_strategy()

    def _create_strategy(self) -> GroupingStrategy:
        if self.options.group:
            return ValueGrouping()
        return FeatureGrouping(sort_by_size=self.options.sort_by_size)

    def _create_renderer(self) -> Renderer:
        if self.options.html:
            return HtmlRenderer()
        return TextRenderer(color=self.options.color)

    def collect(self, base: str, head: str) -> List[Block]:
        """Diff every changed data file and return the merged, ordered blocks.

        Flags and notes not referenced by any block are pruned from the
        registry afterwards.
        """
        self.registry.reset()
        self.strategy = self._create_strategy()
        grouper = ChangeGrouper(self.strategy, arrow=self.options.arrow)

        for status in self.source.get_diff_statuses(base, head):
            if not is_data_file(status):
                continue
            contents = self.source.get_contents(
                base, head, status, allow_missing=self.options.allow_added_deleted
            )
            if contents is None:
                continue
            base_data = flatten(contents[0], registry=self.registry)
            head_data = flatten(contents[1], registry=self.registry)
            count = grouper.add_file(base_data, head_data)
            logger.debug("%s [%s]: %d change(s)", status.head_path, status.value, count)

        blocks = grouper.blocks()
        self.registry.prune("\n".join(text for block in blocks for text in block.texts()))
        return blocks

    def run(self, base: str, head: str, out: Optional[TextIO] = None) -> int:
        """Print the diff between ``base`` and ``head``; return the number of blocks."""
        out = out or sys.stdout
        blocks = self.collect(base, head)
        renderer = self._create_renderer()

        begin = renderer.begin()
        if begin is not None:
            out.write(begin + "\n")
        BlockWriter(
            renderer, self.registry, out,
            values_are_paths=self.strategy.values_are_paths,
        ).write(blocks)
        end = renderer.end()
        if end is not None:
            out.write(end + "\n")
        return len(blocks)
