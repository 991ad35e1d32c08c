"""CLI entrypoint for checking a packaged library tree."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from .assertions import RULES_BY_ID, UnknownAssertionError, select_rules
from .core import check
from .errors import PackageRootNotFound, ProfileError
from .logging import configure_logging
from .profile import load_profile
from .summary import render_summary

EXIT_OK = 0
EXIT_PROFILE_ERROR = 1
EXIT_ROOT_NOT_FOUND = 2
EXIT_SUMMARY_ERROR = 3
EXIT_FAILED = 10


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="npm-conformance",
        description="Verify that a packaged npm library matches its expected package format.",
    )
    parser.add_argument("root", type=Path, help="Directory produced by the packaging step")
    parser.add_argument(
        "--profile",
        default=None,
        help=(
            "Bundled profile name, path or URL of the package profile "
            "(default: $NPM_CONFORMANCE_PROFILE or angular-core)"
        ),
    )
    parser.add_argument(
        "--only",
        action="append",
        dest="only",
        metavar="ASSERTION",
        choices=sorted(RULES_BY_ID),
        help="Evaluate only the named assertion; may be repeated",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Append a Markdown summary to this file (default: $GITHUB_STEP_SUMMARY)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs here")
    return parser


def _summary_path(explicit: Path | None) -> Path | None:
    if explicit is not None:
        return explicit
    env_path = os.getenv("GITHUB_STEP_SUMMARY", "").strip()
    return Path(env_path) if env_path else None


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logger = configure_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        profile = load_profile(args.profile)
        rules = select_rules(args.only)
    except (ProfileError, UnknownAssertionError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_PROFILE_ERROR

    try:
        report = check(args.root, rules=rules, profile=profile)
    except PackageRootNotFound as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ROOT_NOT_FOUND

    summary = render_summary(report)
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(summary, end="")

    summary_path = _summary_path(args.summary)
    if summary_path is not None:
        try:
            with summary_path.open("a", encoding="utf-8") as handle:
                handle.write(summary)
        except OSError as exc:
            print(f"ERROR: Failed to write summary to {summary_path}: {exc}", file=sys.stderr)
            return EXIT_SUMMARY_ERROR
        logger.debug("Summary appended to %s", summary_path)

    return EXIT_OK if report.passed else EXIT_FAILED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
