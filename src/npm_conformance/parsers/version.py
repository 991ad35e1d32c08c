"""Version string checks built atop packaging.version.

Covers three shapes that appear in packaged output:
- manifest versions, e.g. "12.0.0" or "12.0.0-next.3"
- license header versions, e.g. "@license Angular v12.0.0"
- placeholder versions left behind by an incomplete build, e.g. "12.0.0-PLACEHOLDER"
"""

from __future__ import annotations

import re

from packaging.version import Version

DEFAULT_PLACEHOLDER = "PLACEHOLDER"

_CORE = r"\d+\.\d+\.\d+"
_NPM_VERSION = _CORE + r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?"
_RELEASE = re.compile(_CORE)


def version_pattern(placeholder: str = DEFAULT_PLACEHOLDER) -> re.Pattern[str]:
    """Return a pattern matching MAJOR.MINOR.PATCH not followed by ``-<placeholder>``."""
    return re.compile(rf"(?P<version>{_CORE})(?![\d.])(?!-{re.escape(placeholder)})")


def is_well_formed(value: object, placeholder: str = DEFAULT_PLACEHOLDER) -> bool:
    """Return True when ``value`` is a release version with the placeholder replaced."""
    if not isinstance(value, str):
        return False
    if value.endswith(f"-{placeholder}"):
        return False
    return version_pattern(placeholder).match(value) is not None


def header_version(text: str, marker: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str | None:
    """Return the version following ``marker`` in ``text`` if it is well formed."""
    pattern = re.compile(
        re.escape(marker) + rf"(?P<version>{_CORE})(?![\d.])(?!-{re.escape(placeholder)})"
    )
    match = pattern.search(text)
    return match.group("version") if match else None


def raw_header_version(text: str, marker: str) -> str | None:
    """Return the npm version following ``marker``, prerelease and build tags included.

    Falls back to the whitespace-delimited token when no version follows the
    marker, so a bad header can still be echoed.
    """
    match = re.search(re.escape(marker) + rf"({_NPM_VERSION})", text)
    if match is None:
        match = re.search(re.escape(marker) + r"(\S*)", text)
    return match.group(1) if match else None


def same_version(left: object, right: object) -> bool:
    """Compare two npm version strings.

    Plain MAJOR.MINOR.PATCH releases are compared numerically. Anything with a
    prerelease or build tag must match verbatim: PEP 440 normalisation would
    treat distinct npm versions such as "1.0.0-rc.1" and "1.0.0-rc1" as equal.
    """
    if not isinstance(left, str) or not isinstance(right, str):
        return False
    if left == right:
        return True
    if not (_RELEASE.fullmatch(left) and _RELEASE.fullmatch(right)):
        return False
    return Version(left) == Version(right)
