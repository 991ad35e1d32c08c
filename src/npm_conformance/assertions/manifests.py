"""Primary manifest checks: identity, version, resolution fields and ng-update metadata."""

from __future__ import annotations

from ..models import AssertionResult, PackageSnapshot
from ..parsers.version import is_well_formed
from ..profile import PackageProfile
from .base import declared_files, manifest_missing


def check_manifest_identity(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    assertion_id = "manifest-identity"
    manifest = snapshot.primary.manifest
    if manifest is None:
        return [manifest_missing(assertion_id, snapshot.primary)]
    if manifest.name == profile.package_name:
        return [AssertionResult.ok(assertion_id)]
    return [
        AssertionResult.mismatch(
            assertion_id, expected=profile.package_name, observed=manifest.name
        )
    ]


def check_version_format(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """Version must be MAJOR.MINOR.PATCH with the build placeholder substituted."""
    assertion_id = "version-format"
    manifest = snapshot.primary.manifest
    if manifest is None:
        return [manifest_missing(assertion_id, snapshot.primary)]
    if is_well_formed(manifest.version, profile.placeholder):
        return [AssertionResult.ok(assertion_id)]
    return [
        AssertionResult.mismatch(
            assertion_id,
            expected=rf"\d+\.\d+\.\d+ not followed by -{profile.placeholder}",
            observed=manifest.version,
        )
    ]


def check_resolution_fields(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """Format fields and the exports map must equal the expected shape exactly."""
    assertion_id = "resolution-fields"
    entry = snapshot.primary
    manifest = entry.manifest
    if manifest is None:
        return [manifest_missing(assertion_id, entry)]

    results: list[AssertionResult] = []

    expected_fields = profile.expected_resolution_fields()
    observed_fields = manifest.resolution_fields(profile.formats)
    if observed_fields == expected_fields:
        results.append(AssertionResult.ok(f"{assertion_id}:formats"))
    else:
        results.append(
            AssertionResult.mismatch(
                f"{assertion_id}:formats",
                expected=expected_fields,
                observed=observed_fields,
                detail=_describe_key_drift(expected_fields, observed_fields),
            )
        )

    secondaries = [sub.subpath for sub in snapshot.secondaries if sub.subpath]
    expected_exports = profile.expected_exports(secondaries)
    if not manifest.has_exports:
        results.append(
            AssertionResult.mismatch(
                f"{assertion_id}:exports",
                expected=expected_exports,
                observed=None,
                detail="exports map is not declared",
            )
        )
    elif manifest.exports == expected_exports:
        results.append(AssertionResult.ok(f"{assertion_id}:exports"))
    else:
        observed_exports = manifest.exports
        detail = ""
        if isinstance(observed_exports, dict):
            detail = _describe_key_drift(expected_exports, observed_exports)
        results.append(
            AssertionResult.mismatch(
                f"{assertion_id}:exports",
                expected=expected_exports,
                observed=observed_exports,
                detail=detail,
            )
        )

    results.extend(declared_files(assertion_id, entry, snapshot, profile))
    return results


def check_update_group(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """The ng-update package group must list this package and be fully templated."""
    assertion_id = "update-group"
    manifest = snapshot.primary.manifest
    if manifest is None:
        return [manifest_missing(assertion_id, snapshot.primary)]

    results: list[AssertionResult] = []

    group = manifest.update_group(profile.update_metadata_key, profile.update_group_field)
    group_id = f"{assertion_id}:{profile.update_group_field}"
    if isinstance(group, list) and profile.package_name in group:
        results.append(AssertionResult.ok(group_id))
    else:
        results.append(
            AssertionResult.mismatch(
                group_id,
                expected=f"{profile.update_metadata_key}.{profile.update_group_field} "
                f"containing {profile.package_name!r}",
                observed=group,
            )
        )

    for token in profile.template_tokens:
        token_id = f"{assertion_id}:template:{token}"
        if token in manifest.raw_text:
            results.append(
                AssertionResult.forbidden(
                    token_id,
                    expected=f"no {token!r} in {snapshot.primary.manifest_display}",
                    observed=token,
                    detail="template token was not substituted by the build",
                )
            )
        else:
            results.append(AssertionResult.ok(token_id))

    return results


def _describe_key_drift(expected: dict, observed: dict) -> str:
    missing = sorted(set(expected) - set(observed))
    extra = sorted(set(observed) - set(expected))
    changed = sorted(k for k in set(expected) & set(observed) if expected[k] != observed[k])
    parts = []
    if missing:
        parts.append(f"missing keys: {', '.join(missing)}")
    if extra:
        parts.append(f"unexpected keys: {', '.join(extra)}")
    if changed:
        parts.append(f"different values: {', '.join(changed)}")
    return "; ".join(parts)
