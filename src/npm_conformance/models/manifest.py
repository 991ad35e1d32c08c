"""Manifest model for a single entry point's package.json."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..parsers.package_json import parse as parse_package_json


@dataclass(frozen=True)
class Manifest:
    """Read-only view over a parsed package.json and its raw text."""

    path: Path
    raw_text: str
    data: dict[str, Any]

    @property
    def name(self) -> Any:
        return self.data.get("name")

    @property
    def version(self) -> Any:
        return self.data.get("version")

    @property
    def has_exports(self) -> bool:
        """True when the exports key is declared at all, even as an empty map."""
        return "exports" in self.data

    @property
    def exports(self) -> Any:
        return self.data.get("exports")

    def resolution_fields(self, keys: Iterable[str]) -> dict[str, Any]:
        """Return the declared subset of the given format keys."""
        return {key: self.data[key] for key in keys if key in self.data}

    def update_group(self, key: str, field: str) -> Any:
        block = self.data.get(key)
        if isinstance(block, dict):
            return block.get(field)
        return None

    @classmethod
    def from_path(cls, path: Path) -> Manifest:
        """Load a manifest; raises FileNotFoundError or ValueError."""
        raw, data = parse_package_json(path)
        return cls(path=path, raw_text=raw, data=data)
