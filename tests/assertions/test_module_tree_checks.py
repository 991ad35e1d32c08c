"""Tests for the per-module tree hygiene assertion."""

from __future__ import annotations

from npm_conformance.assertions.module_tree import check_module_tree
from npm_conformance.models import FORBIDDEN_ARTIFACT, NOT_FOUND, PackageSnapshot
from npm_conformance.profile import PackageProfile
from tests._fixtures.package_builder import PackageBuilder


def _results(builder: PackageBuilder, profile: PackageProfile):  # type: ignore[no-untyped-def]
    snapshot = PackageSnapshot.load(builder.path(), profile)
    return {result.assertion_id: result for result in check_module_tree(snapshot, profile)}


def test_clean_tree_passes(package_builder: PackageBuilder, profile: PackageProfile) -> None:
    results = _results(package_builder, profile)

    assert set(results) == {"module-tree:.ngfactory", "module-tree:.ngsummary"}
    assert all(result.passed for result in results.values())


def test_scan_is_recursive(package_builder: PackageBuilder, profile: PackageProfile) -> None:
    package_builder.write(
        {
            "esm2020/testing/src/deep/nested/test_bed.ngsummary.mjs": "export {};\n",
            "esm2020/src/a.ngsummary.json": "{}",
        }
    )

    results = _results(package_builder, profile)

    failed = results["module-tree:.ngsummary"]
    assert failed.kind == FORBIDDEN_ARTIFACT
    assert failed.observed == [
        "esm2020/src/a.ngsummary.json",
        "esm2020/testing/src/deep/nested/test_bed.ngsummary.mjs",
    ]
    assert results["module-tree:.ngfactory"].passed


def test_artifacts_outside_the_tree_are_ignored(
    package_builder: PackageBuilder, profile: PackageProfile
) -> None:
    package_builder.write({"fesm2020/core.ngfactory.js": "export {};\n"})

    results = _results(package_builder, profile)

    assert results["module-tree:.ngfactory"].passed


def test_missing_tree_is_not_found(tmp_path, profile: PackageProfile) -> None:  # type: ignore[no-untyped-def]
    root = tmp_path / "empty"
    root.mkdir()
    snapshot = PackageSnapshot.load(root, profile)

    [result] = check_module_tree(snapshot, profile)

    assert result.kind == NOT_FOUND
    assert result.expected == "esm2020/"
