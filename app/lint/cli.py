"""Command line entry point for the route-module linter."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from app.lint.engine import UnknownRuleError, available_rules, get_rule, lint_paths

logger = logging.getLogger(__name__)

DEFAULT_PATHS = ("app/api",)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartcook-lint",
        description="Check API route modules for request schema conventions.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=list(DEFAULT_PATHS),
        help="Files or directories to check (default: app/api).",
    )
    parser.add_argument(
        "--rule",
        action="append",
        dest="rules",
        metavar="NAME",
        help="Only run this rule. Can be given more than once.",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format.",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="Print available rules and exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.list_rules:
        for rule in available_rules():
            print(f"{rule.name}: {rule.description}")
        return EXIT_OK

    try:
        rules = [get_rule(name) for name in args.rules] if args.rules else available_rules()
    except UnknownRuleError as e:
        print(f"error: unknown rule {e.args[0]!r}", file=sys.stderr)
        return EXIT_USAGE

    missing: List[str] = [p for p in args.paths if not Path(p).exists()]
    if missing:
        for path in missing:
            print(f"error: path not found: {path}", file=sys.stderr)
        return EXIT_USAGE

    logger.debug("Running rules %s on %s", [rule.name for rule in rules], args.paths)
    diagnostics = lint_paths(args.paths, rules)

    if args.format == "json":
        print(json.dumps([d.to_dict() for d in diagnostics], indent=2))
    else:
        for diagnostic in diagnostics:
            print(diagnostic.format())
        if diagnostics:
            print(f"Found {len(diagnostics)} problem(s).", file=sys.stderr)

    return EXIT_VIOLATIONS if diagnostics else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
