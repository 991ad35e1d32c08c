"""Entry point and emitted file discovery utilities."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


EXCLUDES = {"node_modules", ".git"}


def discover_entry_points(
    root: Path,
    manifest_file: str = "package.json",
    skip_dirs: Iterable[str] = (),
) -> list[str]:
    """Find secondary entry points: nested directories holding their own manifest.

    Returns POSIX subpaths relative to ``root`` (e.g. ``["testing"]``). The
    root manifest itself and anything under vendor or emitted-format
    directories are ignored.
    """
    root = root.resolve()
    skipped = EXCLUDES | set(skip_dirs)
    found: list[str] = []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in skipped)

    for path in root.rglob(manifest_file):
        if not path.is_file():
            continue
        relative = path.parent.relative_to(root)
        if relative == Path("."):
            continue
        if should_skip(relative):
            continue
        found.append(relative.as_posix())

    return sorted(found)


def find_files(directory: Path) -> list[Path]:
    """Return every file under ``directory``, recursively, in a stable order."""
    return sorted(path for path in directory.rglob("*") if path.is_file())
