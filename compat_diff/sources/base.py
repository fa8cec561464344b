"""Base interface for content sources."""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)

ADDED = "A"
MODIFIED = "M"
DELETED = "D"


@dataclass
class DiffStatus:
    """One changed file between two refs."""
    base_path: str
    head_path: str
    value: str  # "A", "M" or "D"


class ContentSource(ABC):
    """Abstract base class for content sources.

    A source knows which files changed between two refs and what a file
    contained at a given ref. Refs are source specific: commits for git,
    directories for the local source.
    """

    @abstractmethod
    def get_diff_statuses(self, base: str, head: str) -> List[DiffStatus]:
        """Return the files changed between ``base`` and ``head``.

        Renamed files are reported as a deletion plus an addition.
        """
        pass

    @abstractmethod
    def get_file_content(self, ref: str, path: str) -> str:
        """Return the content of ``path`` at ``ref``.

        Raises:
            RuntimeError: If the file cannot be read at that ref
        """
        pass

    def resolve(self, ref) -> str:
        """Turn a user-supplied ref into one this source can read from."""
        return str(ref)

    def merge_base(self, base: str, head: str) -> str:
        """Best common ancestor of two refs; sources without history return ``base``."""
        return base

    def get_contents(self, base: str, head: str, status: DiffStatus,
                     allow_missing: bool = False) -> Optional[Tuple[Any, Any]]:
        """Parse the JSON content of a changed file on both sides (convenience method).

        Args:
            base: Base ref
            head: Head ref
            status: The changed file
            allow_missing: Treat the missing side of an added or deleted file
                as an empty object instead of skipping the file

        Returns:
            ``(base_content, head_content)``, or None when the file is skipped

        Raises:
            json.JSONDecodeError: If either side is not valid JSON
        """
        if status.value in (ADDED, DELETED) and not allow_missing:
            kind = "additions" if status.value == ADDED else "deletions"
            logger.warning("File %s not supported yet, skipping %s", kind, status.head_path)
            return None

        base_content = {} if status.value == ADDED else json.loads(
            self.get_file_content(base, status.base_path))
        head_content = {} if status.value == DELETED else json.loads(
            self.get_file_content(head, status.head_path))
        return base_content, head_content
