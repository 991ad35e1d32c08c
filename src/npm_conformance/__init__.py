"""npm-conformance core package.

This package verifies that a directory produced by packaging a library for
npm matches the expected package format. The checks are callable from the
bundled CLI or directly from a test harness via :func:`npm_conformance.core.check`.
"""

__all__ = [
    "core",
]
