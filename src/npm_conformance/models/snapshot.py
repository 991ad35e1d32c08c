"""Read-only snapshot of a packaged library tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..discovery import discover_entry_points
from ..errors import PackageRootNotFound
from ..logging import get_logger
from ..profile import PackageProfile
from .entry_point import EmittedModuleSet, EntryPoint
from .manifest import Manifest

logger = get_logger("snapshot")


@dataclass(frozen=True)
class PackageSnapshot:
    """Entry points, manifests and emitted files loaded once per run."""

    root: Path
    primary: EntryPoint
    secondaries: tuple[EntryPoint, ...]

    @property
    def entry_points(self) -> tuple[EntryPoint, ...]:
        return (self.primary, *self.secondaries)

    def relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)

    @classmethod
    def load(cls, root: Path, profile: PackageProfile) -> PackageSnapshot:
        """Load the snapshot; the only fatal condition is a missing root."""
        root = Path(root).resolve()
        if not root.is_dir():
            raise PackageRootNotFound(f"Package root not found: {root}")

        if profile.secondary_entry_points is not None:
            subpaths = list(profile.secondary_entry_points)
        else:
            subpaths = discover_entry_points(
                root,
                manifest_file=profile.manifest_file,
                skip_dirs=profile.emitted_directories(),
            )
            logger.debug("Discovered secondary entry points: %s", subpaths or "none")

        primary = _load_entry_point(root, profile, None)
        secondaries = tuple(_load_entry_point(root, profile, sub) for sub in subpaths)
        return cls(root=root, primary=primary, secondaries=secondaries)


def _load_entry_point(root: Path, profile: PackageProfile, subpath: str | None) -> EntryPoint:
    directory = root / subpath if subpath else root
    manifest_path = directory / profile.manifest_file
    manifest, error = _load_manifest(manifest_path)
    emitted = EmittedModuleSet(
        root=root,
        files={fmt: root / profile.format_path(fmt, subpath) for fmt in profile.formats},
    )
    return EntryPoint(
        bundle_name=profile.bundle_name(subpath),
        subpath=subpath,
        directory=directory,
        manifest_path=manifest_path,
        emitted=emitted,
        manifest=manifest,
        manifest_error=error,
    )


def _load_manifest(path: Path) -> tuple[Manifest | None, str | None]:
    try:
        return Manifest.from_path(path), None
    except FileNotFoundError:
        return None, "file absent"
    except (OSError, ValueError) as exc:
        logger.debug("Could not load manifest %s: %s", path, exc)
        return None, f"unreadable manifest: {exc}"
