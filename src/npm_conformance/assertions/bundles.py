"""Flattened bundle presence, source map and license header checks."""

from __future__ import annotations

from ..models import AssertionResult, EntryPoint, PackageSnapshot
from ..parsers.version import header_version, raw_header_version
from ..profile import PackageProfile
from .base import read_text


def source_map_prefix(bundle_file: str) -> str:
    """Leading JSON a version-3 source map for ``bundle_file`` must start with."""
    return f'{{"version":3,"file":"{bundle_file}","sources":'


def check_bundles(snapshot: PackageSnapshot, profile: PackageProfile) -> list[AssertionResult]:
    """Run the bundle checks for every flattened format and entry point."""
    results: list[AssertionResult] = []
    for fmt in profile.flattened_formats:
        for entry in snapshot.entry_points:
            results.extend(_check_bundle(fmt, entry, profile))
    return results


def _check_bundle(fmt: str, entry: EntryPoint, profile: PackageProfile) -> list[AssertionResult]:
    assertion_id = f"bundles:{fmt}:{entry.label}"
    bundle_path = entry.emitted.path(fmt)
    display = entry.emitted.relative(fmt)
    results: list[AssertionResult] = []

    text = read_text(bundle_path)
    if text is None:
        results.append(AssertionResult.not_found(f"{assertion_id}:exports", display))
        results.append(AssertionResult.not_found(f"{assertion_id}:license", display))
    else:
        marker = profile.bundle_export_marker
        if marker in text:
            results.append(AssertionResult.ok(f"{assertion_id}:exports"))
        else:
            results.append(
                AssertionResult.mismatch(
                    f"{assertion_id}:exports",
                    expected=f"{display} containing {marker!r}",
                    observed="no export statement",
                )
            )

        if header_version(text, profile.license_marker, profile.placeholder):
            results.append(AssertionResult.ok(f"{assertion_id}:license"))
        else:
            observed = raw_header_version(text, profile.license_marker)
            results.append(
                AssertionResult.mismatch(
                    f"{assertion_id}:license",
                    expected=rf"{profile.license_marker}\d+\.\d+\.\d+ "
                    f"not followed by -{profile.placeholder}",
                    observed=(
                        f"{profile.license_marker}{observed}"
                        if observed is not None
                        else "no license header"
                    ),
                )
            )

    map_path = entry.emitted.source_map(fmt)
    map_display = f"{display}.map"
    map_text = read_text(map_path)
    prefix = source_map_prefix(bundle_path.name)
    if map_text is None:
        results.append(AssertionResult.not_found(f"{assertion_id}:source-map", map_display))
    elif map_text.startswith(prefix):
        results.append(AssertionResult.ok(f"{assertion_id}:source-map"))
    else:
        results.append(
            AssertionResult.mismatch(
                f"{assertion_id}:source-map",
                expected=f"{map_display} starting with {prefix}",
                observed=map_text[: len(prefix) + 20],
            )
        )

    return results
