"""Core conformance entrypoint.

This module MUST NOT depend on the CLI so a test harness can call
:func:`check` directly against a freshly packaged tree.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .assertions import DEFAULT_RULES, Assertion
from .logging import get_logger
from .models import AssertionResult, PackageSnapshot
from .profile import PackageProfile, load_profile
from .report import Report, aggregate

logger = get_logger("core")


def check(
    root: Path | str,
    rules: Sequence[Assertion] = DEFAULT_RULES,
    profile: PackageProfile | None = None,
) -> Report:
    """Check a packaged library tree against every rule.

    Params:
        root: directory produced by the packaging step
        rules: ordered assertions to evaluate; all of them run regardless of
            earlier failures
        profile: expected package shape; when None the profile is resolved by
            :func:`npm_conformance.profile.load_profile`

    Returns: a Report with one or more results per rule, in rule order

    Raises:
        PackageRootNotFound: if ``root`` is not an existing directory. This is
            the only condition that stops a run before any rule is evaluated.
    """
    if profile is None:
        profile = load_profile()

    snapshot = PackageSnapshot.load(Path(root), profile)
    logger.debug(
        "Checking %s (%s) with %d secondary entry point(s)",
        snapshot.root,
        profile.package_name,
        len(snapshot.secondaries),
    )

    results: list[AssertionResult] = []
    for rule in rules:
        rule_results = _evaluate(rule, snapshot, profile)
        for result in rule_results:
            extra = {"assertion_id": result.assertion_id}
            if result.passed:
                logger.debug("PASS", extra=extra)
            else:
                logger.info(
                    "FAIL %s: %s", result.kind, result.detail or result.observed, extra=extra
                )
        results.extend(rule_results)

    report = aggregate(snapshot.root, profile.package_name, results)
    logger.info(
        "%s: %d/%d assertions passed",
        profile.package_name,
        report.totals["passed"],
        report.totals["assertions"],
    )
    return report


def _evaluate(
    rule: Assertion, snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """Run one rule, scoping unexpected read and decode errors to that rule."""
    try:
        results = rule.evaluate(snapshot, profile)
    except FileNotFoundError as exc:
        path = snapshot.relative(Path(exc.filename)) if exc.filename else str(exc)
        return [AssertionResult.not_found(rule.assertion_id, path)]
    except (OSError, ValueError) as exc:
        logger.debug("Rule %s raised %r", rule.assertion_id, exc)
        return [
            AssertionResult.mismatch(
                rule.assertion_id,
                expected=rule.description,
                observed=f"{type(exc).__name__}: {exc}",
            )
        ]
    return results or [AssertionResult.ok(rule.assertion_id)]
