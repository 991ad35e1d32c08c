"""Tests for type declaration assertions."""

from __future__ import annotations

from npm_conformance.assertions.typings import check_typings
from npm_conformance.models import FORBIDDEN_ARTIFACT, NOT_FOUND, SHAPE_MISMATCH, PackageSnapshot
from npm_conformance.profile import PackageProfile
from tests._fixtures.package_builder import PackageBuilder


def _results(builder: PackageBuilder, profile: PackageProfile):  # type: ignore[no-untyped-def]
    snapshot = PackageSnapshot.load(builder.path(), profile)
    return {result.assertion_id: result for result in check_typings(snapshot, profile)}


def test_conforming_typings_pass(package_builder: PackageBuilder, profile: PackageProfile) -> None:
    results = _results(package_builder, profile)

    assert all(result.passed for result in results.values())
    assert "typings:testing:required:export declare" in results


def test_amd_module_name_is_forbidden(
    package_builder: PackageBuilder, profile: PackageProfile
) -> None:
    package_builder.write(
        {"core.d.ts": '/// <amd-module name="@angular/core" />\nexport declare const a: 1;\n'}
    )

    results = _results(package_builder, profile)

    assert results["typings:forbidden:<amd-module name"].kind == FORBIDDEN_ARTIFACT
    assert results["typings:required:export declare"].passed


def test_legacy_r3_symbols_file_is_forbidden(
    package_builder: PackageBuilder, profile: PackageProfile
) -> None:
    package_builder.write({"src/r3_symbols.d.ts": "export declare const x: 1;\n"})

    results = _results(package_builder, profile)

    failed = results["typings:legacy-file:src/r3_symbols.d.ts"]
    assert failed.kind == FORBIDDEN_ARTIFACT
    assert failed.observed == "src/r3_symbols.d.ts present"


def test_missing_root_typings_is_not_found(
    package_builder: PackageBuilder, profile: PackageProfile
) -> None:
    package_builder.remove("core.d.ts")

    results = _results(package_builder, profile)

    assert results["typings"].kind == NOT_FOUND
    assert results["typings:legacy-file:src/r3_symbols.d.ts"].passed


def test_secondary_typings_need_declarations(
    package_builder: PackageBuilder, profile: PackageProfile
) -> None:
    package_builder.write({"testing/testing.d.ts": "// empty\n"})

    results = _results(package_builder, profile)

    assert results["typings:testing:required:export declare"].kind == SHAPE_MISMATCH
