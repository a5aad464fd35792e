"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

_DEFAULT_LOG_LEVEL = "WARNING"
_KNOWN_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = logging.getLogger(__name__)


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "QuietWires"
        return Path.home() / "QuietWires"
    return Path.home() / ".config" / "quiet_wires"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


def debug_enabled() -> bool:
    """Return True only when QUIETWIRES_DEBUG is explicitly set to '1'."""
    return os.getenv("QUIETWIRES_DEBUG") == "1"


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _KNOWN_LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def load_config(path: Path | None = None) -> Dict[str, str]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {"log_level": _DEFAULT_LOG_LEVEL}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return {"log_level": _DEFAULT_LOG_LEVEL}
    if not isinstance(raw, dict):
        return {"log_level": _DEFAULT_LOG_LEVEL}
    return {"log_level": _normalize_log_level(raw.get("log_level"))}


def save_config(config: Dict[str, str], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"log_level": _normalize_log_level(config.get("log_level"))}
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def configure_logging(config: Dict[str, str]) -> None:
    """Configure the root logger once for the console session."""
    level = "DEBUG" if debug_enabled() else _normalize_log_level(config.get("log_level"))
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
