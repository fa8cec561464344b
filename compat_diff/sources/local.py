"""Local filesystem content source."""

from pathlib import Path
from typing import List

from .base import ADDED, DELETED, MODIFIED, ContentSource, DiffStatus


class LocalSource(ContentSource):
    """Adapter comparing two directory trees.

    Refs are directory paths: the base tree and the head tree. Unlike the git
    adapter there is no history, so the merge base is the base directory.
    """

    @staticmethod
    def _json_files(root: Path) -> dict:
        return {
            path.relative_to(root).as_posix(): path
            for path in sorted(root.rglob("*.json"))
            if path.is_file()
        }

    def get_diff_statuses(self, base: str, head: str) -> List[DiffStatus]:
        """Compare the ``*.json`` files of two directories by content."""
        base_root = Path(base).expanduser().resolve()
        head_root = Path(head).expanduser().resolve()
        for root in (base_root, head_root):
            if not root.is_dir():
                raise RuntimeError(f"Not a directory: {root}")

        base_files = self._json_files(base_root)
        head_files = self._json_files(head_root)

        statuses = []
        for path in sorted(set(base_files) | set(head_files)):
            if path not in base_files:
                value = ADDED
            elif path not in head_files:
                value = DELETED
            elif base_files[path].read_bytes() != head_files[path].read_bytes():
                value = MODIFIED
            else:
                continue
            statuses.append(DiffStatus(base_path=path, head_path=path, value=value))
        return statuses

    def get_file_content(self, ref: str, path: str) -> str:
        file_path = Path(ref).expanduser() / path
        if not file_path.is_file():
            raise RuntimeError(f"Cannot read {path} in {ref}: file not found")
        return file_path.read_text(encoding="utf-8")
