"""Serialization helpers for save/load and portable export."""
from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, List, Mapping, Protocol

from quietwires.domain.state import PlayerState
from quietwires.services.errors import CorruptSaveError

logger = logging.getLogger(__name__)

SAVE_KEY = "quiet_wires_save_v1"

SavePayload = Dict[str, Any]


class KeyValueStore(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, text: str) -> None: ...


class SaveService:
    """Converts player state to/from a validated, versioned payload."""

    SAVE_VERSION = 1

    def __init__(self, *, key: str = SAVE_KEY) -> None:
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def serialize(self, state: PlayerState) -> str:
        """Return a deterministic JSON document for the state."""
        payload: SavePayload = {
            "save_version": self.SAVE_VERSION,
            "state": self._serialize_state(state),
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    def deserialize(self, text: str) -> PlayerState:
        """Rebuild a PlayerState, raising CorruptSaveError on any defect."""
        if not isinstance(text, str):
            raise CorruptSaveError("Save data must be text.")
        try:
            payload = json.loads(text)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise CorruptSaveError(f"Save data is not valid JSON: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise CorruptSaveError("Save data must be a JSON object.")
        version = payload.get("save_version")
        if version != self.SAVE_VERSION:
            raise CorruptSaveError(f"Unsupported save version: {version!r}")
        state_payload = payload.get("state")
        if not isinstance(state_payload, Mapping):
            raise CorruptSaveError("Save data is missing the state section.")

        room_id = self._require_str(state_payload.get("room_id"), "state.room_id")
        turns = self._require_int(state_payload.get("turns"), "state.turns")
        if turns < 0:
            raise CorruptSaveError("state.turns must be a non-negative integer.")
        return PlayerState(
            room_id=room_id,
            turns=turns,
            inventory=self._coerce_unique_str_list(state_payload.get("inventory"), "state.inventory"),
            flags=self._coerce_bool_dict(state_payload.get("flags"), "state.flags"),
            visited=self._coerce_unique_str_list(state_payload.get("visited"), "state.visited"),
        )

    def export_portable(self, state: PlayerState) -> str:
        """Encode the save as printable base64 for copy/paste."""
        raw = self.serialize(state).encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    def import_portable(self, blob: str) -> PlayerState:
        """Decode a blob produced by export_portable."""
        if not isinstance(blob, str):
            raise CorruptSaveError("Portable save must be text.")
        compact = "".join(blob.split())
        if not compact:
            raise CorruptSaveError("Portable save is empty.")
        try:
            text = base64.b64decode(compact, validate=True).decode("utf-8")
        except (binascii.Error, ValueError) as exc:
            raise CorruptSaveError(f"Portable save is not valid base64 text: {exc}") from exc
        return self.deserialize(text)

    def save(self, state: PlayerState, store: KeyValueStore) -> None:
        store.write(self._key, self.serialize(state))
        logger.info("Saved game at room '%s' (turn %d)", state.room_id, state.turns)

    def load(self, store: KeyValueStore) -> PlayerState | None:
        """Return the stored state, or None when no save exists."""
        text = store.read(self._key)
        if text is None:
            return None
        state = self.deserialize(text)
        logger.info("Loaded game at room '%s' (turn %d)", state.room_id, state.turns)
        return state

    @staticmethod
    def _serialize_state(state: PlayerState) -> Dict[str, Any]:
        return {
            "room_id": state.room_id,
            "turns": state.turns,
            "inventory": list(state.inventory),
            "flags": dict(state.flags),
            "visited": list(state.visited),
        }

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise CorruptSaveError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise CorruptSaveError(f"{context} must be an integer.")
        return value

    def _coerce_unique_str_list(self, value: Any, context: str) -> List[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise CorruptSaveError(f"{context} must be a list.")
        result: List[str] = []
        for entry in value:
            entry = self._require_str(entry, f"{context} entries")
            if entry not in result:
                result.append(entry)
        return result

    @staticmethod
    def _coerce_bool_dict(value: Any, context: str) -> Dict[str, bool]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise CorruptSaveError(f"{context} must be an object.")
        result: Dict[str, bool] = {}
        for key, entry in value.items():
            if not isinstance(entry, bool):
                raise CorruptSaveError(f"{context}.{key} must be a boolean.")
            result[key] = entry
        return result
