"""Shared fixtures: base/head directory trees of compat data."""

import json

import pytest


class Trees:
    """Writes JSON files into a base and a head directory."""

    def __init__(self, root):
        self.base = root / "base"
        self.head = root / "head"
        self.base.mkdir()
        self.head.mkdir()

    def write(self, side, path, content):
        target = getattr(self, side) / path
        target.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content, indent=2)
        target.write_text(text, encoding="utf-8")
        return target

    def write_both(self, path, base_content, head_content):
        self.write("base", path, base_content)
        self.write("head", path, head_content)


@pytest.fixture
def trees(tmp_path):
    return Trees(tmp_path)
