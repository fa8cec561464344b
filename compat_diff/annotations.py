"""Run-scoped registry deduplicating flags and notes into footnotes."""

import json
from typing import List


def format_flag_ref(index: int) -> str:
    """Footnote marker for a 0-based flag index."""
    return f"[^f{index + 1}]"


def format_note_ref(index: int) -> str:
    """Footnote marker for a 0-based note index."""
    return f"[^n{index + 1}]"


def serialize(payload) -> str:
    """Compact JSON used both as dedup key and as footnote text."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


class AnnotationRegistry:
    """Flag and note payloads in first-seen order.

    Entries are compared by their serialized form. Indices are stable for the
    lifetime of the registry: pruning blanks entries instead of removing them.
    """

    def __init__(self):
        self.flags: List[str] = []
        self.notes: List[str] = []

    def reset(self) -> None:
        self.flags.clear()
        self.notes.clear()

    @staticmethod
    def _index(entries: List[str], payload) -> int:
        serialized = serialize(payload)
        if serialized not in entries:
            entries.append(serialized)
        return entries.index(serialized)

    def add_flags(self, flags) -> str:
        """Register a flags payload and return its footnote marker."""
        return format_flag_ref(self._index(self.flags, flags))

    def add_notes(self, notes) -> str:
        """Register each note and return the comma-joined markers.

        Markers are ordered by registry index, not by position in ``notes``.
        """
        if not isinstance(notes, list):
            notes = [notes]
        indices = sorted(self._index(self.notes, note) for note in notes)
        return ",".join(format_note_ref(index) for index in indices)

    def prune(self, text: str) -> None:
        """Blank every entry whose marker does not occur in ``text``."""
        for index in range(len(self.flags)):
            if format_flag_ref(index) not in text:
                self.flags[index] = ""
        for index in range(len(self.notes)):
            if format_note_ref(index) not in text:
                self.notes[index] = ""

    def footnotes(self, *inputs: str) -> List[str]:
        """Footnote lines for the non-blank entries referenced by ``inputs``."""
        lines = []
        for entries, fmt in ((self.flags, format_flag_ref), (self.notes, format_note_ref)):
            for index, content in enumerate(entries):
                ref = fmt(index)
                if content and any(ref in text for text in inputs):
                    lines.append(f"{ref}: {content}")
        return lines

    def __len__(self) -> int:
        return len(self.flags) + len(self.notes)
