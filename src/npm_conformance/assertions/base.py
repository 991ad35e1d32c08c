"""Assertion type and helpers shared by the individual checks.

Each assertion is a pure predicate over a loaded snapshot: it returns
structured results, passing and failing alike, rather than raising, so one
failure never hides another.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from ..models import AssertionResult, EntryPoint, PackageSnapshot
from ..profile import PackageProfile

Evaluate: TypeAlias = Callable[[PackageSnapshot, PackageProfile], list[AssertionResult]]


@dataclass(slots=True, frozen=True)
class Assertion:
    """Binds an assertion ID to its predicate and a one-line description."""

    assertion_id: str
    description: str
    evaluate: Evaluate


def read_text(path: Path) -> str | None:
    """Return the file content, or None when the file does not exist."""
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8", errors="replace")


def manifest_missing(assertion_id: str, entry: EntryPoint) -> AssertionResult:
    """Failure for an entry point whose manifest could not be loaded."""
    if entry.manifest_error == "file absent":
        return AssertionResult.not_found(assertion_id, entry.manifest_display)
    return AssertionResult.mismatch(
        assertion_id,
        expected=f"a JSON object in {entry.manifest_display}",
        observed=entry.manifest_error,
    )


def declared_files(
    assertion_id: str, entry: EntryPoint, snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """Check every declared format path resolves to an existing file."""
    if entry.manifest is None:
        return []
    results: list[AssertionResult] = []
    for fmt, value in entry.manifest.resolution_fields(profile.formats).items():
        check_id = f"{assertion_id}:file:{fmt}"
        if not isinstance(value, str):
            results.append(
                AssertionResult.mismatch(check_id, expected="a relative path", observed=value)
            )
            continue
        target = (entry.directory / value).resolve()
        if target.is_file():
            results.append(AssertionResult.ok(check_id))
        else:
            results.append(
                AssertionResult.not_found(
                    check_id,
                    snapshot.relative(target),
                    detail=f"{entry.manifest_display} declares {fmt}={value!r} but the file is absent",
                )
            )
    return results
