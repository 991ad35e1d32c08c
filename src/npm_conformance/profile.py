"""Package profile loader.

A profile captures everything about a packaging pipeline generation that the
checks depend on: the expected package name, the module-format layout, the
placeholder and template tokens a build must substitute and the legacy
artifacts that must no longer ship. Profiles are JSON or YAML documents
validated against ``data/profile.schema.json``.

Source resolution priority:
1. Explicit source argument
2. NPM_CONFORMANCE_PROFILE environment variable
3. The bundled ``angular-core`` profile

A source may be a bundled profile name, a filesystem path or an http(s) URL.
"""

from __future__ import annotations

import json
import os
import posixpath
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
import yaml
from jsonschema import Draft202012Validator
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .errors import ProfileError

DATA_DIR = Path(__file__).resolve().parent / "data"
SCHEMA_PATH = DATA_DIR / "profile.schema.json"
PROFILES_DIR = DATA_DIR / "profiles"
DEFAULT_PROFILE = "angular-core"
PROFILE_ENV_VAR = "NPM_CONFORMANCE_PROFILE"

_YAML_SUFFIXES = (".yaml", ".yml")


@dataclass(slots=True, frozen=True)
class ReadmeRule:
    """Human-readable root file and the literal substrings it must contain."""

    file: str
    required: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class TypingsRule:
    """Markers checked in type declaration files."""

    forbidden_markers: tuple[str, ...]
    required_markers: tuple[str, ...]
    forbidden_files: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class PackageProfile:
    """Expected shape of one packaged library."""

    package_name: str
    readme: ReadmeRule
    placeholder: str
    template_tokens: tuple[str, ...]
    update_metadata_key: str
    update_group_field: str
    formats: dict[str, str]
    flattened_formats: tuple[str, ...]
    per_module_format: str
    typings_format: str
    export_conditions: dict[str, str]
    extra_exports: dict[str, dict[str, str]]
    secondary_entry_points: tuple[str, ...] | None
    typings: TypingsRule
    bundle_export_marker: str
    license_marker: str
    forbidden_artifacts: tuple[str, ...]
    manifest_file: str = "package.json"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageProfile:
        """Build a profile from a schema-valid document, checking cross references."""
        formats = {str(k): str(v) for k, v in data["formats"].items()}

        def _format_key(value: str, field: str) -> str:
            if value not in formats:
                raise ProfileError(f"'{field}' references unknown format '{value}'")
            return value

        flattened = tuple(_format_key(v, "flattened_formats") for v in data["flattened_formats"])
        per_module = _format_key(data["per_module_format"], "per_module_format")
        typings_format = _format_key(data.get("typings_format", "typings"), "typings_format")
        conditions = {
            str(cond): _format_key(fmt, "export_conditions")
            for cond, fmt in data["export_conditions"].items()
        }

        secondaries = data.get("secondary_entry_points")
        readme = data["readme"]
        typings = data.get("typings", {})
        update_metadata = data.get("update_metadata", {})

        return cls(
            package_name=data["package_name"],
            readme=ReadmeRule(file=readme["file"], required=tuple(readme.get("required", []))),
            placeholder=data.get("placeholder", "PLACEHOLDER"),
            template_tokens=tuple(data.get("template_tokens", [])),
            update_metadata_key=update_metadata.get("key", "ng-update"),
            update_group_field=update_metadata.get("group_field", "packageGroup"),
            formats=formats,
            flattened_formats=flattened,
            per_module_format=per_module,
            typings_format=typings_format,
            export_conditions=conditions,
            extra_exports={
                str(subpath): dict(targets)
                for subpath, targets in data.get("extra_exports", {}).items()
            },
            secondary_entry_points=tuple(secondaries) if secondaries is not None else None,
            typings=TypingsRule(
                forbidden_markers=tuple(typings.get("forbidden_markers", [])),
                required_markers=tuple(typings.get("required_markers", [])),
                forbidden_files=tuple(typings.get("forbidden_files", [])),
            ),
            bundle_export_marker=data.get("bundle_export_marker", "export {"),
            license_marker=data["license_marker"],
            forbidden_artifacts=tuple(data.get("forbidden_artifacts", [])),
            manifest_file=data.get("manifest_file", "package.json"),
        )

    def bundle_name(self, subpath: str | None = None) -> str:
        """Return the output file stem, e.g. ``core`` or ``testing``."""
        source = self.package_name if subpath is None else subpath
        return source.rstrip("/").rsplit("/", 1)[-1]

    def format_path(self, fmt: str, subpath: str | None = None) -> str:
        """Return the root-relative POSIX path of a format file for an entry point."""
        prefix = f"{subpath}/" if subpath else ""
        return self.formats[fmt].format(name=self.bundle_name(subpath), prefix=prefix)

    def format_directory(self, fmt: str) -> str:
        """Return the top-level directory a format is emitted into."""
        return self.formats[fmt].split("/", 1)[0]

    def emitted_directories(self) -> set[str]:
        """Top-level output directories that never hold an entry-point manifest."""
        return {
            template.split("/", 1)[0]
            for template in self.formats.values()
            if "/" in template and "{" not in template.split("/", 1)[0]
        }

    def expected_resolution_fields(self, subpath: str | None = None) -> dict[str, str]:
        """Format key -> path, relative to the entry point's own directory."""
        start = subpath or "."
        return {
            fmt: _relative_reference(self.format_path(fmt, subpath), start)
            for fmt in self.formats
        }

    def expected_exports(self, secondaries: Iterable[str] = ()) -> dict[str, dict[str, str]]:
        """The exact exports map the primary manifest must declare."""
        exports: dict[str, dict[str, str]] = {
            ".": self._export_conditions(None),
            f"./{self.manifest_file}": {"default": f"./{self.manifest_file}"},
        }
        for subpath in secondaries:
            exports[f"./{subpath}"] = self._export_conditions(subpath)
        exports.update({k: dict(v) for k, v in self.extra_exports.items()})
        return exports

    def _export_conditions(self, subpath: str | None) -> dict[str, str]:
        return {
            cond: "./" + self.format_path(fmt, subpath)
            for cond, fmt in self.export_conditions.items()
        }


def _relative_reference(target: str, start: str) -> str:
    rel = posixpath.relpath(target, start)
    return rel if rel.startswith("../") else f"./{rel}"


def _resolve_profile_source(source: Path | str | None = None) -> str:
    if source is not None:
        return str(source)

    env_source = os.environ.get(PROFILE_ENV_VAR)
    if env_source:
        return env_source

    return DEFAULT_PROFILE


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, timeout=30)


def fetch_profile(url: str) -> str:
    """Return the raw profile document served at ``url``."""
    try:
        response = _http_get(url)
    except requests.RequestException as exc:  # pragma: no cover - network failure path
        raise ProfileError(f"Failed to fetch profile: {exc}") from exc

    if response.status_code != 200:
        raise ProfileError(f"Unexpected status code {response.status_code} fetching profile")

    return response.text


def _read_profile_text(source: str) -> tuple[str, str]:
    """Return ``(text, name)`` where ``name`` decides JSON vs. YAML parsing."""
    if source.startswith("http://") or source.startswith("https://"):
        return fetch_profile(source), source.split("?", 1)[0]

    path = Path(source)
    if not path.is_file():
        bundled = PROFILES_DIR / f"{source}.json"
        if not bundled.is_file():
            known = ", ".join(list_bundled_profiles())
            raise ProfileError(f"Profile not found: {source}. Bundled profiles: {known}")
        path = bundled

    try:
        return path.read_text(encoding="utf-8"), path.name
    except OSError as exc:
        raise ProfileError(f"Failed to read profile: {exc}") from exc


def _parse_profile_text(text: str, name: str) -> Any:
    if name.lower().endswith(_YAML_SUFFIXES):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ProfileError(f"Invalid YAML in profile: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProfileError(f"Invalid JSON in profile: {exc}") from exc


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_profile_document(document: Any) -> None:
    """Raise ProfileError listing every schema violation in ``document``."""
    schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    validator = Draft202012Validator(schema)
    errors = sorted(
        validator.iter_errors(document), key=lambda e: "/".join(str(p) for p in e.path)
    )
    if errors:
        raise ProfileError("Profile failed validation:\n" + _format_errors(errors))


def list_bundled_profiles() -> list[str]:
    return sorted(p.stem for p in PROFILES_DIR.glob("*.json"))


def load_profile(source: Path | str | None = None) -> PackageProfile:
    """Load, validate and build a package profile.

    Raises:
        ProfileError: If the source cannot be found, read, parsed or validated.
    """
    text, name = _read_profile_text(_resolve_profile_source(source))
    document = _parse_profile_text(text, name)
    validate_profile_document(document)
    return PackageProfile.from_dict(document)
