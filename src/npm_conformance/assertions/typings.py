"""Type declaration sanity checks."""

from __future__ import annotations

from ..models import AssertionResult, EntryPoint, PackageSnapshot
from ..profile import PackageProfile
from .base import read_text


def check_typings(snapshot: PackageSnapshot, profile: PackageProfile) -> list[AssertionResult]:
    """Root typings must be free of AMD names, export declarations and no dead files.

    Secondary entry points get the required-marker check only.
    """
    assertion_id = "typings"
    rule = profile.typings
    results: list[AssertionResult] = []

    primary = snapshot.primary
    typings_path = primary.emitted.path(profile.typings_format)
    text = read_text(typings_path)
    display = primary.emitted.relative(profile.typings_format)

    if text is None:
        results.append(AssertionResult.not_found(assertion_id, display))
    else:
        for marker in rule.forbidden_markers:
            check_id = f"{assertion_id}:forbidden:{marker}"
            if marker in text:
                results.append(
                    AssertionResult.forbidden(
                        check_id,
                        expected=f"no {marker!r} in {display}",
                        observed=marker,
                    )
                )
            else:
                results.append(AssertionResult.ok(check_id))
        results.extend(_required_markers(assertion_id, display, text, rule.required_markers))

    for relative in rule.forbidden_files:
        check_id = f"{assertion_id}:legacy-file:{relative}"
        if (snapshot.root / relative).exists():
            results.append(
                AssertionResult.forbidden(
                    check_id,
                    expected=f"{relative} absent",
                    observed=f"{relative} present",
                    detail="legacy build output must not ship",
                )
            )
        else:
            results.append(AssertionResult.ok(check_id))

    for entry in snapshot.secondaries:
        results.extend(_secondary_typings(entry, profile))

    return results


def _secondary_typings(entry: EntryPoint, profile: PackageProfile) -> list[AssertionResult]:
    assertion_id = f"typings:{entry.label}"
    display = entry.emitted.relative(profile.typings_format)
    text = read_text(entry.emitted.path(profile.typings_format))
    if text is None:
        return [AssertionResult.not_found(assertion_id, display)]
    return _required_markers(assertion_id, display, text, profile.typings.required_markers)


def _required_markers(
    assertion_id: str, display: str, text: str, markers: tuple[str, ...]
) -> list[AssertionResult]:
    results = []
    for marker in markers:
        check_id = f"{assertion_id}:required:{marker}"
        if marker in text:
            results.append(AssertionResult.ok(check_id))
        else:
            results.append(
                AssertionResult.mismatch(
                    check_id,
                    expected=f"{display} containing {marker!r}",
                    observed="marker absent",
                )
            )
    return results
