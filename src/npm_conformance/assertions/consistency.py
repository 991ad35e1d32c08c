"""Version consistency across manifests and bundle headers."""

from __future__ import annotations

from ..models import AssertionResult, PackageSnapshot
from ..parsers.version import header_version, raw_header_version, same_version
from ..profile import PackageProfile
from .base import manifest_missing, read_text


def check_version_consistency(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """Every secondary manifest and bundle header must carry the primary version.

    Missing bundles and malformed headers are reported by the bundle checks, so
    only versions that are actually present are compared here.
    """
    assertion_id = "version-consistency"
    manifest = snapshot.primary.manifest
    if manifest is None:
        return [manifest_missing(assertion_id, snapshot.primary)]
    expected = manifest.version

    results: list[AssertionResult] = []

    for entry in snapshot.secondaries:
        if entry.manifest is None or "version" not in entry.manifest.data:
            continue
        check_id = f"{assertion_id}:{entry.manifest_display}"
        observed = entry.manifest.version
        if same_version(expected, observed):
            results.append(AssertionResult.ok(check_id))
        else:
            results.append(
                AssertionResult.mismatch(check_id, expected=expected, observed=observed)
            )

    for fmt in profile.flattened_formats:
        for entry in snapshot.entry_points:
            text = read_text(entry.emitted.path(fmt))
            if text is None:
                continue
            if header_version(text, profile.license_marker, profile.placeholder) is None:
                continue
            observed = raw_header_version(text, profile.license_marker)
            check_id = f"{assertion_id}:{entry.emitted.relative(fmt)}"
            if same_version(expected, observed):
                results.append(AssertionResult.ok(check_id))
            else:
                results.append(
                    AssertionResult.mismatch(
                        check_id,
                        expected=expected,
                        observed=observed,
                        detail="license header version differs from package.json",
                    )
                )

    return results or [AssertionResult.ok(assertion_id)]
