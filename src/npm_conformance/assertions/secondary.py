"""Secondary entry point manifest checks."""

from __future__ import annotations

from ..models import AssertionResult, EntryPoint, PackageSnapshot
from ..profile import PackageProfile
from .base import declared_files, manifest_missing


def check_secondary_manifests(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    results: list[AssertionResult] = []
    for entry in snapshot.secondaries:
        results.extend(_check_secondary(entry, snapshot, profile))
    return results


def _check_secondary(
    entry: EntryPoint, snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    assertion_id = f"secondary-manifests:{entry.label}"
    manifest = entry.manifest
    if manifest is None:
        return [manifest_missing(assertion_id, entry)]

    results: list[AssertionResult] = []

    expected_name = f"{profile.package_name}/{entry.subpath}"
    if manifest.name == expected_name:
        results.append(AssertionResult.ok(f"{assertion_id}:name"))
    else:
        results.append(
            AssertionResult.mismatch(
                f"{assertion_id}:name", expected=expected_name, observed=manifest.name
            )
        )

    expected_fields = profile.expected_resolution_fields(entry.subpath)
    observed_fields = manifest.resolution_fields(profile.formats)
    if observed_fields == expected_fields:
        results.append(AssertionResult.ok(f"{assertion_id}:formats"))
    else:
        root_relative = profile.expected_resolution_fields(None)
        copied = sorted(
            fmt
            for fmt, value in observed_fields.items()
            if fmt in expected_fields
            and value != expected_fields[fmt]
            and value == "./" + profile.format_path(fmt, entry.subpath)
        )
        detail = "paths must be relative to the entry point directory"
        if copied:
            detail += f"; root-relative paths used for: {', '.join(copied)}"
        elif observed_fields and observed_fields == root_relative:
            detail += "; fields duplicate the primary entry point"
        results.append(
            AssertionResult.mismatch(
                f"{assertion_id}:formats",
                expected=expected_fields,
                observed=observed_fields,
                detail=detail,
            )
        )

    if manifest.has_exports:
        results.append(
            AssertionResult.mismatch(
                f"{assertion_id}:exports",
                expected="exports not declared",
                observed=manifest.exports,
                detail="secondary entry points must not declare an exports map, even an empty one",
            )
        )
    else:
        results.append(AssertionResult.ok(f"{assertion_id}:exports"))

    results.extend(declared_files(assertion_id, entry, snapshot, profile))
    return results
