"""Content source adapters for compat-diff.

Provides a unified interface for reading changed files between two refs:
- Git repositories (commits, branches, pull request refs)
- Local directory trees
"""

from .base import ContentSource, DiffStatus
from .git import GitSource
from .local import LocalSource
from .factory import create_source

__all__ = [
    'ContentSource',
    'DiffStatus',
    'GitSource',
    'LocalSource',
    'create_source',
]
