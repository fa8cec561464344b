"""Tests for base ContentSource interface."""

import json
import logging

import pytest

from compat_diff.sources.base import ContentSource, DiffStatus


def test_diff_status_creation():
    """Test DiffStatus dataclass initialization."""
    status = DiffStatus(base_path='api/Foo.json', head_path='api/Foo.json', value='M')

    assert status.base_path == 'api/Foo.json'
    assert status.head_path == 'api/Foo.json'
    assert status.value == 'M'


def test_content_source_is_abstract():
    """Test that ContentSource cannot be instantiated directly."""
    with pytest.raises(TypeError):
        ContentSource()


class DummySource(ContentSource):
    """Minimal concrete implementation for testing."""

    def __init__(self, files):
        self.files = files
        self.reads = []

    def get_diff_statuses(self, base: str, head: str):
        return []

    def get_file_content(self, ref: str, path: str) -> str:
        self.reads.append((ref, path))
        return self.files[ref][path]


@pytest.fixture
def dummy_source():
    return DummySource({
        'base': {'api/Foo.json': '{"a": 1}', 'api/Bad.json': '{'},
        'head': {'api/Foo.json': '{"a": 2}', 'api/New.json': '{"b": 1}', 'api/Bad.json': '{}'},
    })


def test_default_resolve_and_merge_base(dummy_source):
    """Test the history-less defaults."""
    assert dummy_source.resolve('base') == 'base'
    assert dummy_source.merge_base('base', 'head') == 'base'


def test_get_contents_modified(dummy_source):
    """Test that both sides are parsed."""
    status = DiffStatus('api/Foo.json', 'api/Foo.json', 'M')

    assert dummy_source.get_contents('base', 'head', status) == ({'a': 1}, {'a': 2})
    assert dummy_source.reads == [('base', 'api/Foo.json'), ('head', 'api/Foo.json')]


def test_get_contents_added_is_skipped(dummy_source, caplog):
    """Test that additions are skipped unless allowed."""
    status = DiffStatus('api/New.json', 'api/New.json', 'A')

    with caplog.at_level(logging.WARNING):
        assert dummy_source.get_contents('base', 'head', status) is None

    assert 'File additions not supported yet, skipping api/New.json' in caplog.text
    assert dummy_source.reads == []


def test_get_contents_added_allowed(dummy_source):
    """Test that the missing side becomes an empty object."""
    status = DiffStatus('api/New.json', 'api/New.json', 'A')

    assert dummy_source.get_contents('base', 'head', status, allow_missing=True) == ({}, {'b': 1})


def test_get_contents_deleted_allowed(dummy_source):
    """Test that the head of a deleted file is empty."""
    status = DiffStatus('api/Foo.json', 'api/Foo.json', 'D')

    assert dummy_source.get_contents('base', 'head', status, allow_missing=True) == ({'a': 1}, {})
    assert dummy_source.reads == [('base', 'api/Foo.json')]


def test_get_contents_invalid_json(dummy_source):
    """Test that malformed JSON propagates."""
    status = DiffStatus('api/Bad.json', 'api/Bad.json', 'M')

    with pytest.raises(json.JSONDecodeError):
        dummy_source.get_contents('base', 'head', status)
