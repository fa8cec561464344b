"""Tests for key-path and value diffing."""

import pytest

from compat_diff.differ import (
    ADDED,
    EQUAL,
    REMOVED,
    diff_keys,
    diff_sequences,
    diff_value,
    tokenize,
)
from compat_diff.spans import Span, Style, plain


def _styled(value, style):
    return [span.text for span in value if span.style is style]


def test_diff_sequences_orders_removed_before_added():
    runs = diff_sequences(["api", "Foo", "version"], ["api", "Bar", "version"])
    assert runs == [
        (EQUAL, ["api"]),
        (REMOVED, ["Foo"]),
        (ADDED, ["Bar"]),
        (EQUAL, ["version"]),
    ]


def test_diff_keys_drops_structural_segments():
    key = "api.Foo.__compat.support.chrome.version"
    result = diff_keys(key, key)
    assert plain(result) == "api.Foo.chrome.version"
    assert _styled(result, Style.EMPHASIS) == []


def test_diff_keys_emphasizes_new_segments_only():
    result = diff_keys(
        "api.Foo.__compat.support.firefox.version",
        "api.Foo.__compat.support.chrome.version",
    )
    assert plain(result) == "api.Foo.firefox.version"
    assert _styled(result, Style.EMPHASIS) == ["firefox"]


def test_diff_keys_pads_first_emphasized_run_only():
    result = diff_keys("a.b.x.c.y", "a.B.x.C.y", fill=12)
    assert plain(result) == "a.b   .x.c.y"
    assert _styled(result, Style.EMPHASIS) == ["b", "c"]


def test_diff_keys_styles_placeholders():
    result = diff_keys("api.Foo.{}.version", "api.Foo.{}.version")
    assert Span(Style.PLACEHOLDER, "{}") in result


def test_tokenize_splits_on_value_boundaries():
    assert tokenize('"10+ [^f1] prefix=webkit"') == [
        '"', "10+", " ", "[^f1]", " ", "prefix=webkit", '"',
    ]
    assert tokenize('"a,b/c"') == ['"', "a", ",", "b", "/", "c", '"']


def test_version_change_puts_head_first():
    result = diff_value("10+", "20+")
    assert plain(result) == '"20+10+"'
    assert _styled(result, Style.INSERTION) == ["20+"]
    assert _styled(result, Style.DELETION) == ["10+"]


def test_only_changed_tokens_are_marked():
    result = diff_value("10+ [^f1]", "10+ [^f2]")
    assert _styled(result, Style.INSERTION) == ["[^f2]"]
    assert _styled(result, Style.DELETION) == ["[^f1]"]
    assert plain(result).startswith('"10+ ')


@pytest.mark.parametrize("new", ["mirror", False, "false"])
def test_absent_to_mirror_or_false_is_invisible(new):
    assert diff_value(None, new) == ()


def test_mirror_side_is_treated_as_empty():
    result = diff_value("mirror", "10+")
    assert plain(result) == '"10+"'
    assert _styled(result, Style.DELETION) == []


def test_booleans_are_always_shown():
    result = diff_value(True, False)
    assert _styled(result, Style.INSERTION) == ["false"]
    assert _styled(result, Style.DELETION) == ["true"]


def test_added_value():
    result = diff_value(None, "Foo")
    assert _styled(result, Style.INSERTION) == ['"Foo"']


def test_no_visible_difference_yields_empty_line():
    assert diff_value("mirror", "") == ()
    assert diff_value(None, None) == ()


def test_arrow_variant():
    result = diff_value("10+", "20+", arrow=True)
    assert plain(result) == '"10+" → "20+"'
    assert _styled(result, Style.DELETION) == ['"10+"']
    assert _styled(result, Style.INSERTION) == ['"20+"']
