"""Factory for creating content sources from a source kind."""

from pathlib import Path
from typing import Optional

from .base import ContentSource
from .git import GitSource
from .local import LocalSource

SOURCE_KINDS = ("git", "local")


def create_source(kind: str, repo: Optional[Path] = None) -> ContentSource:
    """Create the ContentSource implementation for ``kind``.

    Mapping:
    - git   -> GitSource(repo)
    - local -> LocalSource() (base and head are directories)
    """
    if kind == "git":
        return GitSource(repo=repo)
    if kind == "local":
        return LocalSource()

    raise ValueError(f"Unsupported source: {kind}")
