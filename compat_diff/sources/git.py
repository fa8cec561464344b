"""Git repository content source."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from ..refspec import RefSpec
from .base import ADDED, DELETED, MODIFIED, ContentSource, DiffStatus

logger = logging.getLogger(__name__)

# Type changes keep the path, so they diff like modifications
_STATUS_MAP = {"A": ADDED, "M": MODIFIED, "D": DELETED, "T": MODIFIED}


class GitSource(ContentSource):
    """Adapter reading files and change lists from a git checkout.

    Uses the ``git`` executable; nothing is checked out or modified except for
    ``git fetch`` when resolving ``origin/`` and ``pull/`` refs.
    """

    def __init__(self, repo: Optional[Path] = None, executable: str = "git"):
        """Initialize git source.

        Args:
            repo: Working directory of the repository (default: current directory)
            executable: Git executable to use
        """
        self.repo = repo
        self.executable = executable

    def _git(self, *args: str) -> str:
        """Run a git command and return its stdout."""
        git = shutil.which(self.executable) or self.executable
        cmd = [git, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=True,
            )
        except FileNotFoundError:
            raise RuntimeError(
                f"{self.executable} not found. Install git or pass its path."
            ) from None
        return result.stdout

    def get_diff_statuses(self, base: str, head: str) -> List[DiffStatus]:
        """Parse ``git diff --name-status`` between two commits."""
        args = ["diff", "--name-status", "--no-renames", "--no-color", base]
        if head:
            args.append(head)
        statuses = []
        for raw in self._git(*args).splitlines():
            if not raw.strip():
                continue
            code, _, path = raw.partition("\t")
            value = _STATUS_MAP.get(code[:1])
            if value is None:
                logger.debug("Ignoring status %s for %s", code, path)
                continue
            statuses.append(DiffStatus(base_path=path, head_path=path, value=value))
        return statuses

    def get_file_content(self, ref: str, path: str) -> str:
        try:
            return self._git("show", f"{ref}:{path}")
        except subprocess.CalledProcessError as e:
            raise RuntimeError(
                f"Cannot read {path} at {ref}: {(e.stderr or '').strip()}"
            ) from e

    def resolve(self, ref) -> str:
        """Resolve a ref to a commit hash, fetching remote refs first."""
        spec = ref if isinstance(ref, RefSpec) else RefSpec.parse(str(ref))
        if spec.kind == RefSpec.REMOTE:
            self._git("fetch", "origin", spec.remote_ref)
            return self._git("rev-parse", spec.ref).strip()
        if spec.kind == RefSpec.PULL:
            self._git("fetch", "origin", spec.ref)
            return self._git("rev-parse", "FETCH_HEAD").strip()
        return self._git("rev-parse", spec.ref).strip()

    def merge_base(self, base: str, head: str) -> str:
        return self._git("merge-base", base, head).strip()
