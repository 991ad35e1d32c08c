"""Parse package.json manifests emitted into a packaged library."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def loads(text: str) -> dict[str, Any]:
    """Return the manifest object parsed from ``text``.

    Raises ValueError (including json.JSONDecodeError) when the document is not
    a JSON object.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("package.json must contain a JSON object")
    return data


def parse(path: Path) -> tuple[str, dict[str, Any]]:
    """Return ``(raw_text, data)`` for the manifest at ``path``.

    The raw text is kept alongside the parsed object because some checks look
    for literal tokens that JSON parsing would hide.
    """
    raw = path.read_text(encoding="utf-8")
    return raw, loads(raw)
