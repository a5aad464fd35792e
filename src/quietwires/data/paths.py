"""Helpers for resolving content file locations."""
from __future__ import annotations

import os
from pathlib import Path

CONTENT_ENV_VAR = "QUIETWIRES_CONTENT"


def get_repo_root() -> Path:
    """Return the repository root."""
    return Path(__file__).resolve().parents[3]


def get_content_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing the world content files."""
    if base_path is not None:
        return Path(base_path)
    override = os.environ.get(CONTENT_ENV_VAR)
    if override:
        return Path(override)
    return get_repo_root() / "data" / "content"
