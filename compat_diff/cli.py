"""CLI interface for compat-diff."""

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from . import __version__
from .engine import DiffEngine, DiffOptions
from .refspec import DEFAULT_BASE, DEFAULT_HEAD, RefSpec
from .sources import create_source
from .sources.factory import SOURCE_KINDS

logger = logging.getLogger(__name__)


def _resolve_refs(source, args) -> "tuple[str, str]":
    """Resolve base/head for the selected source.

    Git refs go through RefSpec (pull request numbers, remote refs) and the
    base is replaced by the merge base unless disabled.
    """
    if args.source == "local":
        return args.base, args.head

    base_spec, head_spec = RefSpec.from_arguments(args.base, args.head)
    base = source.resolve(base_spec)
    head = source.resolve(head_spec)
    if not args.no_merge_base:
        base = source.merge_base(base, head)
    logger.debug("Comparing %s (%s) with %s (%s)", base, base_spec, head, head_spec)
    return base, head


def cmd_diff(args) -> int:
    """Print a formatted diff for changes between base and head."""
    source = create_source(args.source, repo=args.repo)
    color = args.color
    if color is None and args.output:
        color = False
    options = DiffOptions(
        group=args.group,
        html=args.html,
        arrow=args.arrow,
        color=color,
        sort_by_size=args.sort_by_size,
        allow_added_deleted=args.include_added_deleted,
    )

    try:
        base, head = _resolve_refs(source, args)
        engine = DiffEngine(source, options)
        if args.output:
            with open(args.output, "w", encoding="utf-8") as out:
                engine.run(base, head, out)
            print(f"Diff written to {args.output}", file=sys.stderr)
        else:
            engine.run(base, head)
    except subprocess.CalledProcessError as e:
        stderr_tail = (e.stderr or "").strip()[-300:]
        print(f"Error: {' '.join(map(str, e.cmd))} failed: {stderr_tail}", file=sys.stderr)
        return 1
    except (RuntimeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def create_parser():
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="compat-diff",
        description="Print a formatted diff of compat data changes between base and head commits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Changes of the current branch against origin/main
  compat-diff

  # Changes of pull request #1234, grouped by value
  compat-diff 1234 --group

  # HTML output, e.g. for a review comment
  compat-diff origin/main HEAD --html --output diff.html

  # Compare two checkouts without git
  compat-diff --source local ./old ./new

Notes:
  --mirror (filling "mirror" statements from the upstream browser) is not
  supported; "mirror" values are compared as-is.
"""
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("base", nargs="?", default=DEFAULT_BASE,
                        help="The base commit; may be a commit hash, other git ref "
                             "(e.g. origin/main) or pull request number "
                             f"(default: {DEFAULT_BASE})")
    parser.add_argument("head", nargs="?", default=DEFAULT_HEAD,
                        help="The head commit that changes are applied to "
                             f"(default: {DEFAULT_HEAD})")
    parser.add_argument("--html", action="store_true",
                        help="Output HTML rather than plain text")
    parser.add_argument("--group", action="store_true",
                        help="Group by value rather than by the common feature")
    parser.add_argument("--arrow", action="store_true",
                        help="Show values as 'old → new' instead of interleaving changed tokens")
    parser.add_argument("--sort-by-size", action="store_true",
                        help="Without --group: list features with the most changes first")
    parser.add_argument("--include-added-deleted", action="store_true",
                        help="Diff added/deleted files against an empty object instead of skipping them")
    parser.add_argument("--color", dest="color", action="store_true", default=None,
                        help="Force colored text output")
    parser.add_argument("--no-color", dest="color", action="store_false",
                        help="Disable colored text output")
    parser.add_argument("--source", choices=SOURCE_KINDS, default="git",
                        help="Where contents come from: git refs or two local directories")
    parser.add_argument("--repo", type=Path, help="Git repository (default: current directory)")
    parser.add_argument("--no-merge-base", action="store_true",
                        help="Compare against base itself rather than the merge base of base and head")
    parser.add_argument("--output", metavar="FILE", help="Write the diff to FILE instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.set_defaults(color=None)

    return parser


def main(argv=None):
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    return cmd_diff(args)


if __name__ == "__main__":
    sys.exit(main())
