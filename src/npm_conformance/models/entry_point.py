"""Entry point and emitted module set models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .manifest import Manifest


@dataclass(frozen=True)
class EmittedModuleSet:
    """Expected module-format output files for one entry point, keyed by format."""

    root: Path
    files: dict[str, Path] = field(default_factory=dict)

    def path(self, fmt: str) -> Path:
        return self.files[fmt]

    def source_map(self, fmt: str) -> Path:
        bundle = self.files[fmt]
        return bundle.with_name(bundle.name + ".map")

    def relative(self, fmt: str) -> str:
        """Return the root-relative POSIX path of a format file, for reporting."""
        return self.files[fmt].relative_to(self.root).as_posix()

    def missing(self) -> list[str]:
        return sorted(fmt for fmt, path in self.files.items() if not path.is_file())


@dataclass(frozen=True)
class EntryPoint:
    """An independently importable unit of the packaged library.

    ``subpath`` is None for the primary entry point and the subdirectory
    (e.g. ``"testing"``) for secondary ones.
    """

    bundle_name: str
    subpath: str | None
    directory: Path
    manifest_path: Path
    emitted: EmittedModuleSet
    manifest: Manifest | None = None
    manifest_error: str | None = None

    @property
    def is_primary(self) -> bool:
        return self.subpath is None

    @property
    def label(self) -> str:
        return "primary" if self.subpath is None else self.subpath

    @property
    def manifest_display(self) -> str:
        return self.manifest_path.relative_to(self.emitted.root).as_posix()
