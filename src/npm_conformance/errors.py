"""Exceptions raised outside of the per-assertion reporting flow."""

from __future__ import annotations


class ConformanceError(RuntimeError):
    """Base error for conditions that stop a conformance run."""


class PackageRootNotFound(ConformanceError):
    """Raised when the package root is not an existing directory."""


class ProfileError(ConformanceError):
    """Raised when a package profile cannot be loaded or is invalid."""
