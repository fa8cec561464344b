"""Git ref specification parser.

Parses the refs accepted on the command line:

Examples:
    origin/main        remote branch, fetched before use
    pull/1234/head     pull request head, fetched before use
    1234               pull request number (compared against origin/main)
    HEAD, v5.2.0, a1b2c3d   any other ref, resolved locally
"""

import re
from dataclasses import dataclass
from typing import Tuple

DEFAULT_BASE = "origin/main"
DEFAULT_HEAD = "HEAD"

_PULL_RE = re.compile(r"^pull/\d+/head$")


@dataclass
class RefSpec:
    """Represents a ref to compare."""

    REMOTE = "remote"
    PULL = "pull"
    LOCAL = "local"

    kind: str
    ref: str

    @classmethod
    def parse(cls, spec: str) -> "RefSpec":
        """Parse a ref string.

        Args:
            spec: Ref as given by the user

        Returns:
            RefSpec object

        Raises:
            ValueError: If spec is empty or malformed
        """
        spec = (spec or "").strip()
        if not spec:
            raise ValueError("Empty ref")

        if spec.isdigit():
            return cls(kind=cls.PULL, ref=f"pull/{spec}/head")

        if spec.startswith("pull/"):
            if not _PULL_RE.match(spec):
                raise ValueError(
                    f"Invalid pull request ref '{spec}'. "
                    f"Expected format: pull/<number>/head"
                )
            return cls(kind=cls.PULL, ref=spec)

        if spec.startswith("origin/"):
            if spec == "origin/":
                raise ValueError(f"Empty branch name in ref '{spec}'")
            return cls(kind=cls.REMOTE, ref=spec)

        return cls(kind=cls.LOCAL, ref=spec)

    @classmethod
    def from_arguments(cls, base: str = DEFAULT_BASE,
                       head: str = DEFAULT_HEAD) -> Tuple["RefSpec", "RefSpec"]:
        """Parse the base/head pair given on the command line.

        A pull request number as base compares that pull request against
        ``origin/main``.
        """
        if (base or "").strip().isdigit():
            return cls.parse(DEFAULT_BASE), cls.parse(base)
        return cls.parse(base), cls.parse(head)

    @property
    def remote_ref(self) -> str:
        """Branch name on the remote for ``origin/`` refs."""
        if self.kind != self.REMOTE:
            raise ValueError(f"Not a remote ref: {self.ref}")
        return self.ref[len("origin/"):]

    def __str__(self) -> str:
        return self.ref


def validate_ref(spec: str) -> bool:
    """Quick validation without keeping the parsed result."""
    try:
        RefSpec.parse(spec)
        return True
    except ValueError:
        return False
