"""Tests for npm_conformance.profile."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from npm_conformance import profile as profile_mod
from npm_conformance.errors import ProfileError
from npm_conformance.profile import (
    PROFILES_DIR,
    PackageProfile,
    list_bundled_profiles,
    load_profile,
)


def _angular_document() -> dict:
    return json.loads((PROFILES_DIR / "angular-core.json").read_text(encoding="utf-8"))


def test_bundled_profile_is_listed() -> None:
    assert "angular-core" in list_bundled_profiles()


def test_bundled_profile_defaults(profile: PackageProfile) -> None:
    assert profile.package_name == "@angular/core"
    assert profile.flattened_formats == ("fesm2020", "fesm2015")
    assert profile.per_module_format == "esm2020"
    assert profile.forbidden_artifacts == (".ngfactory", ".ngsummary")
    assert profile.secondary_entry_points == ("testing",)
    assert profile.bundle_name() == "core"
    assert profile.bundle_name("testing") == "testing"


def test_expected_primary_resolution_fields(profile: PackageProfile) -> None:
    assert profile.expected_resolution_fields() == {
        "module": "./fesm2015/core.mjs",
        "es2020": "./fesm2020/core.mjs",
        "esm2020": "./esm2020/core.mjs",
        "fesm2020": "./fesm2020/core.mjs",
        "fesm2015": "./fesm2015/core.mjs",
        "typings": "./core.d.ts",
    }


def test_expected_secondary_resolution_fields_walk_back_to_root(
    profile: PackageProfile,
) -> None:
    assert profile.expected_resolution_fields("testing") == {
        "module": "../fesm2015/testing.mjs",
        "es2020": "../fesm2020/testing.mjs",
        "esm2020": "../esm2020/testing/testing.mjs",
        "fesm2020": "../fesm2020/testing.mjs",
        "fesm2015": "../fesm2015/testing.mjs",
        "typings": "./testing.d.ts",
    }


def test_expected_exports(profile: PackageProfile) -> None:
    exports = profile.expected_exports(["testing"])

    assert list(exports) == [".", "./package.json", "./testing", "./schematics/*"]
    assert exports["."] == {
        "types": "./core.d.ts",
        "es2015": "./fesm2015/core.mjs",
        "node": "./fesm2015/core.mjs",
        "default": "./fesm2020/core.mjs",
    }
    assert exports["./testing"]["types"] == "./testing/testing.d.ts"
    assert exports["./package.json"] == {"default": "./package.json"}


def test_load_profile_from_json_path(tmp_path: Path) -> None:
    document = _angular_document()
    document["package_name"] = "@angular/common"
    document["secondary_entry_points"] = ["http", "http/testing"]
    path = tmp_path / "common.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    loaded = load_profile(path)

    assert loaded.package_name == "@angular/common"
    assert loaded.bundle_name() == "common"
    assert loaded.bundle_name("http/testing") == "testing"
    assert loaded.expected_resolution_fields("http/testing")["module"] == (
        "../../fesm2015/testing.mjs"
    )


def test_load_profile_from_yaml_path(tmp_path: Path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text(
        """
package_name: "@acme/widgets"
readme:
  file: README.md
  required: [Widgets]
formats:
  module: "fesm2015/{name}.mjs"
  fesm2015: "fesm2015/{name}.mjs"
  esm2020: "esm2020/{prefix}{name}.mjs"
  typings: "{prefix}{name}.d.ts"
flattened_formats: [fesm2015]
per_module_format: esm2020
export_conditions:
  types: typings
  default: fesm2015
secondary_entry_points: null
license_marker: "@license Widgets v"
""",
        encoding="utf-8",
    )

    loaded = load_profile(path)

    assert loaded.package_name == "@acme/widgets"
    assert loaded.secondary_entry_points is None
    assert loaded.placeholder == "PLACEHOLDER"
    assert loaded.update_metadata_key == "ng-update"
    assert loaded.typings.required_markers == ()
    assert loaded.extra_exports == {}


def test_environment_variable_selects_profile(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    document = _angular_document()
    document["package_name"] = "@angular/forms"
    path = tmp_path / "forms.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    monkeypatch.setenv("NPM_CONFORMANCE_PROFILE", str(path))

    assert load_profile().package_name == "@angular/forms"


def test_explicit_source_beats_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("NPM_CONFORMANCE_PROFILE", str(tmp_path / "missing.json"))

    assert load_profile("angular-core").package_name == "@angular/core"


class _FakeResponse:
    def __init__(self, status_code: int, text: str) -> None:
        self.status_code = status_code
        self.text = text


def test_load_profile_from_url(monkeypatch: pytest.MonkeyPatch) -> None:
    requested: list[str] = []

    def _fake_get(url: str) -> _FakeResponse:
        requested.append(url)
        return _FakeResponse(200, json.dumps(_angular_document()))

    monkeypatch.setattr(profile_mod, "_http_get", _fake_get)

    loaded = load_profile("https://example.invalid/profiles/angular-core.json")

    assert loaded.package_name == "@angular/core"
    assert requested == ["https://example.invalid/profiles/angular-core.json"]


def test_url_error_status_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(profile_mod, "_http_get", lambda url: _FakeResponse(404, "nope"))

    with pytest.raises(ProfileError, match="status code 404"):
        load_profile("https://example.invalid/profile.json")


def test_unknown_profile_name_lists_bundled() -> None:
    with pytest.raises(ProfileError, match="Bundled profiles: angular-core"):
        load_profile("vue-core")


def test_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ProfileError, match="Invalid JSON"):
        load_profile(path)


def test_schema_errors_are_listed(tmp_path: Path) -> None:
    document = _angular_document()
    del document["license_marker"]
    document["flattened_formats"] = "fesm2020"
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    with pytest.raises(ProfileError) as excinfo:
        load_profile(path)

    message = str(excinfo.value)
    assert "- <root>: 'license_marker' is a required property" in message
    assert "- flattened_formats:" in message


def test_unknown_format_reference_is_rejected(tmp_path: Path) -> None:
    document = _angular_document()
    document["export_conditions"]["browser"] = "umd"
    path = tmp_path / "bad-ref.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    with pytest.raises(ProfileError, match="unknown format 'umd'"):
        load_profile(path)
