"""Root metadata presence check."""

from __future__ import annotations

from ..models import AssertionResult, PackageSnapshot
from ..profile import PackageProfile
from .base import read_text

ASSERTION_ID = "root-metadata"


def check_root_metadata(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """The README must exist and mention the project name and repository URL."""
    readme = profile.readme
    text = read_text(snapshot.root / readme.file)
    if text is None:
        return [AssertionResult.not_found(ASSERTION_ID, readme.file)]

    results: list[AssertionResult] = []
    for token in readme.required:
        check_id = f"{ASSERTION_ID}:{token}"
        if token in text:
            results.append(AssertionResult.ok(check_id))
        else:
            results.append(
                AssertionResult.mismatch(
                    check_id,
                    expected=f"{readme.file} containing {token!r}",
                    observed="substring absent",
                )
            )
    return results or [AssertionResult.ok(ASSERTION_ID)]
