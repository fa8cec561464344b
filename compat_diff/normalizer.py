"""Normalization of compat records into canonical scalar fields.

A support statement such as::

    {"version_added": "10", "version_removed": "20", "prefix": "webkit",
     "flags": [{"type": "preference", "name": "x"}]}

is collapsed into a single display field::

    {"version": "10−20 [^f1] prefix=webkit"}

Flags and notes are replaced by footnote markers from an
:class:`~compat_diff.annotations.AnnotationRegistry`.
"""

from enum import Enum

from .annotations import AnnotationRegistry

BROWSER_NAMES = (
    "chrome",
    "chrome_android",
    "edge",
    "firefox",
    "firefox_android",
    "safari",
    "safari_ios",
    "webview_android",
)

# Key segments with no meaning for a reader
STRUCTURAL_KEYS = ("__compat", "support")

MIRROR = "mirror"
STATUS_FLAGS = ("deprecated", "standard_track", "experimental")
STATEMENT_FIELDS = (
    "version_added",
    "version_removed",
    "version_last",
    "partial_implementation",
    "alternative_name",
    "prefix",
    "flags",
    "notes",
)
RANGE_SEPARATOR = "−"  # minus sign


class SupportState(Enum):
    """What a support statement says about a browser."""
    ADDED = "added"
    MIRRORED = "mirrored"
    REMOVED = "removed"
    UNKNOWN = "unknown"


def classify_statement(statement) -> SupportState:
    if statement == MIRROR:
        return SupportState.MIRRORED
    if not isinstance(statement, dict):
        return SupportState.UNKNOWN
    if statement.get("version") == MIRROR:
        return SupportState.MIRRORED
    added = statement.get("version_added")
    if added is None:
        return SupportState.UNKNOWN
    if added is False or statement.get("version_removed") or statement.get("version_last"):
        return SupportState.REMOVED
    return SupportState.ADDED


def _text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_version_range(statement: dict) -> str:
    """``10+`` for open-ended support, ``10−20`` for a closed range."""
    state = classify_statement(statement)
    if state is SupportState.UNKNOWN:
        return ""
    added = statement.get("version_added")
    if added is False:
        return "false"
    last = statement.get("version_last") or statement.get("version_removed")
    if last:
        return f"{_text(added)}{RANGE_SEPARATOR}{_text(last)}"
    return f"{_text(added)}+"


def normalize_status(status: dict) -> str:
    return ",".join(name for name in STATUS_FLAGS if status.get(name))


def normalize_statement(statement: dict, registry: AnnotationRegistry) -> dict:
    """Replace the statement fields of ``statement`` by a composite ``version``.

    Mutates and returns ``statement``; callers pass a private copy.
    """
    flags = registry.add_flags(statement["flags"]) if "flags" in statement else ""
    notes = registry.add_notes(statement["notes"]) if "notes" in statement else ""
    prefix = statement.get("prefix")
    alternative_name = statement.get("alternative_name")

    parts = [
        format_version_range(statement),
        statement.get("partial_implementation") and "(partial)",
        flags,
        prefix and f"prefix={prefix}",
        alternative_name and f"altname={alternative_name}",
        notes,
    ]
    statement["version"] = " ".join(part for part in parts if part)
    for name in STATEMENT_FIELDS:
        statement.pop(name, None)
    return statement


def normalize_node(node: dict, registry: AnnotationRegistry) -> dict:
    """Normalize ``status``, ``tags`` and statement fields of one mapping."""
    if "status" in node:
        node["status"] = normalize_status(node["status"])
    if "tags" in node:
        node["tags"] = ",".join(node["tags"])
    if "version_added" in node:
        normalize_statement(node, registry)
    return node


def normalize_statements(value) -> list:
    """Statements of one browser as a list, newest first.

    ``"mirror"`` statements become ``{"version": "mirror"}`` so that they line
    up with the composite ``version`` field of regular statements.
    """
    statements = value if isinstance(value, list) else [value]
    statements = [{"version": MIRROR} if s == MIRROR else s for s in statements]
    return list(reversed(statements))
