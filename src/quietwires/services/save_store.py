"""Key-value storage backing the save/load commands."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


class SaveStore:
    """Stores one text document per key as ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: Path | str) -> None:
        self._base_dir = Path(base_dir)

    def exists(self, key: str) -> bool:
        return self._key_path(key).exists()

    def read(self, key: str) -> str | None:
        """Return the stored text, or None when nothing is stored under key."""
        path = self._key_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, key: str, text: str) -> None:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._key_path(key)
        path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %d characters to %s", len(text), path)

    def delete(self, key: str) -> None:
        """Delete the stored document if it exists."""
        try:
            self._key_path(key).unlink()
        except FileNotFoundError:
            return

    def _key_path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._base_dir / f"{key}.json"


class MemorySaveStore:
    """In-process store with the same interface as SaveStore."""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def exists(self, key: str) -> bool:
        return key in self._entries

    def read(self, key: str) -> str | None:
        return self._entries.get(key)

    def write(self, key: str, text: str) -> None:
        self._entries[key] = text

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)
