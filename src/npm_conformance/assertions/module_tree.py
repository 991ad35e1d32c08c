"""Per-module output tree hygiene."""

from __future__ import annotations

from ..discovery import find_files
from ..models import AssertionResult, PackageSnapshot
from ..profile import PackageProfile


def check_module_tree(
    snapshot: PackageSnapshot, profile: PackageProfile
) -> list[AssertionResult]:
    """No file anywhere in the per-module tree may carry a retired-pipeline marker."""
    assertion_id = "module-tree"
    directory_name = profile.format_directory(profile.per_module_format)
    directory = snapshot.root / directory_name
    if not directory.is_dir():
        return [AssertionResult.not_found(assertion_id, f"{directory_name}/")]

    files = find_files(directory)
    results: list[AssertionResult] = []
    for marker in profile.forbidden_artifacts:
        check_id = f"{assertion_id}:{marker}"
        matches = [snapshot.relative(path) for path in files if marker in path.name]
        if matches:
            results.append(
                AssertionResult.forbidden(
                    check_id,
                    expected=[],
                    observed=matches,
                    detail=f"{len(matches)} file(s) under {directory_name}/ contain {marker!r}",
                )
            )
        else:
            results.append(AssertionResult.ok(check_id))
    return results or [AssertionResult.ok(assertion_id)]
