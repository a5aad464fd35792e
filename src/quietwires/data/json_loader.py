"""Low-level JSON helpers for repositories."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import ContentLoadError


def load_json(path: Path) -> object:
    """Load JSON from disk and raise ContentLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ContentLoadError(f"Content file not found: {path}") from exc
    except OSError as exc:
        raise ContentLoadError(f"Unable to read content file: {path}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ContentLoadError(f"Invalid JSON in {path}: {exc}") from exc
