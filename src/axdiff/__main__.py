"""axdiff entry point.

Diffs two accessibility trees saved as JSON, e.g. from a recorded session.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from axdiff.browser.diff import diff_snapshots
from axdiff.browser.normalizer import normalize_snapshot
from axdiff.browser.report import format_diff
from axdiff.config import get_settings
from axdiff.logging_setup import setup_logging
from axdiff.tools.builtin import build_registry
from axdiff.tools.registry import SCHEMA_FORMATS

logger = logging.getLogger(__name__)

EXIT_UNCHANGED = 0
EXIT_CHANGED = 1
EXIT_BAD_INPUT = 2


def load_tree(path: Path) -> dict[str, Any]:
    """Read a raw accessibility tree from a JSON file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object at the root")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="axdiff",
        description="Report accessibility changes between two captured trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  axdiff before.json after.json          Human-readable report
  axdiff before.json after.json --json   Machine-readable diff
  axdiff --list-tools anthropic          Agent tool schemas
""",
    )
    parser.add_argument("baseline", type=Path, nargs="?", help="Baseline tree (JSON)")
    parser.add_argument("current", type=Path, nargs="?", help="Current tree (JSON)")
    parser.add_argument("--json", action="store_true", help="Print the diff as JSON")
    parser.add_argument(
        "--fingerprint",
        action="store_true",
        default=None,
        help="Key nodes without identifiers by role/name fingerprint",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default from settings)")
    parser.add_argument(
        "--list-tools",
        nargs="?",
        const="openai",
        choices=SCHEMA_FORMATS,
        metavar="FORMAT",
        help="Print the built-in agent tool schemas (openai or anthropic) and exit",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(level=args.log_level or settings.log_level)

    if args.list_tools:
        definitions = build_registry().definitions(args.list_tools)
        print(json.dumps(definitions, indent=2, ensure_ascii=False))
        return EXIT_UNCHANGED

    if args.baseline is None or args.current is None:
        parser.error("baseline and current trees are required")

    fingerprint = settings.fingerprint_identity if args.fingerprint is None else args.fingerprint

    try:
        baseline_tree = load_tree(args.baseline)
        current_tree = load_tree(args.current)
    except (OSError, ValueError) as e:
        logger.error("Cannot read input: %s", e)
        return EXIT_BAD_INPUT

    baseline = normalize_snapshot(baseline_tree, fingerprint_identity=fingerprint)
    current = normalize_snapshot(current_tree, fingerprint_identity=fingerprint)
    diff = diff_snapshots(baseline, current)

    if args.json:
        print(json.dumps(diff.to_dict(), indent=2, ensure_ascii=False, default=str))
    else:
        print(format_diff(diff, args.baseline.name))

    return EXIT_CHANGED if diff.has_changes else EXIT_UNCHANGED


if __name__ == "__main__":
    sys.exit(main())
