"""Data models for packaged library snapshots and check results."""

from __future__ import annotations

from .entry_point import EmittedModuleSet, EntryPoint
from .manifest import Manifest
from .result import (
    FORBIDDEN_ARTIFACT,
    NOT_FOUND,
    SHAPE_MISMATCH,
    AssertionResult,
)
from .snapshot import PackageSnapshot

__all__ = [
    "AssertionResult",
    "EmittedModuleSet",
    "EntryPoint",
    "FORBIDDEN_ARTIFACT",
    "Manifest",
    "NOT_FOUND",
    "PackageSnapshot",
    "SHAPE_MISMATCH",
]
