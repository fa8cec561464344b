"""compat-diff: readable diffs of browser compatibility data between two refs."""

__version__ = "0.1.0"
