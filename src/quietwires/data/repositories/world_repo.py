"""Repository for the world document: rooms, choices and the start room."""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Tuple

from quietwires.data import paths
from quietwires.data.errors import DataValidationError
from quietwires.data.json_loader import load_json
from quietwires.domain.defs import (
    ChoiceDef,
    EffectBundleDef,
    OnEnterDef,
    RequirementDef,
    RoomDef,
    WorldDef,
)

logger = logging.getLogger(__name__)


class WorldRepository:
    """Loads ``world.json`` once and exposes it as an immutable WorldDef."""

    def __init__(self, base_path: Path | str | None = None, filename: str = "world.json") -> None:
        self._file_path = paths.get_content_path(base_path) / filename
        self._world: WorldDef | None = None

    def load(self) -> WorldDef:
        """Return the parsed world, reading the file on first use."""
        if self._world is None:
            raw = load_json(self._file_path)
            if not isinstance(raw, dict):
                raise DataValidationError(f"Expected top-level object in {self._file_path}")
            self._world = self._build(raw)
        return self._world

    def get(self, room_id: str) -> RoomDef:
        """Return a room by id, raising KeyError when it is not defined."""
        try:
            return self.load().rooms[room_id]
        except KeyError as exc:
            raise KeyError(room_id) from exc

    def _build(self, raw: dict[str, object]) -> WorldDef:
        start_room_id = self._require_str(raw.get("startRoomId"), "world startRoomId")
        rooms_payload = self._require_mapping(raw.get("rooms"), "world rooms")
        rooms: Dict[str, RoomDef] = {}
        for room_id, room_payload in rooms_payload.items():
            room_data = self._require_mapping(room_payload, f"room '{room_id}'")
            rooms[room_id] = self._parse_room(room_id, room_data)
        logger.info("Loaded %d rooms from %s (start room '%s')", len(rooms), self._file_path, start_room_id)
        return WorldDef(start_room_id=start_room_id, rooms=MappingProxyType(rooms))

    def _parse_room(self, room_id: str, room_data: dict[str, object]) -> RoomDef:
        title = self._require_str(room_data.get("title"), f"room '{room_id}' title")
        text = self._parse_str_list(room_data.get("text"), f"room '{room_id}' text")
        choices = self._parse_choices(room_data.get("choices"), room_id)
        on_enter = None
        if room_data.get("onEnter") is not None:
            on_enter_data = self._require_mapping(room_data["onEnter"], f"room '{room_id}' onEnter")
            on_enter = OnEnterDef(
                set_flags=self._parse_str_list(
                    on_enter_data.get("setFlags"), f"room '{room_id}' onEnter.setFlags"
                )
            )
        return RoomDef(id=room_id, title=title, text=text, choices=choices, on_enter=on_enter)

    def _parse_choices(self, raw_choices: object, room_id: str) -> Tuple[ChoiceDef, ...]:
        if raw_choices is None:
            return ()
        if not isinstance(raw_choices, list):
            raise DataValidationError(f"room '{room_id}' choices must be a list if provided.")
        choices = []
        for index, entry in enumerate(raw_choices):
            choice_ctx = f"room '{room_id}' choices[{index}]"
            choice_data = self._require_mapping(entry, choice_ctx)
            label = self._require_str(choice_data.get("label"), f"{choice_ctx} label")
            target = self._require_str(choice_data.get("to"), f"{choice_ctx} to")
            requires = tuple(
                RequirementDef.parse(raw)
                for raw in self._parse_str_list(choice_data.get("requires"), f"{choice_ctx} requires")
            )
            once = choice_data.get("once", False)
            if not isinstance(once, bool):
                raise DataValidationError(f"{choice_ctx} once must be a boolean.")
            choices.append(
                ChoiceDef(
                    label=label,
                    to=target,
                    requires=requires,
                    effects=self._parse_effects(choice_data.get("effects"), f"{choice_ctx} effects"),
                    once=once,
                    log=self._optional_str(choice_data.get("log"), f"{choice_ctx} log"),
                    lock_text=self._optional_str(choice_data.get("lockText"), f"{choice_ctx} lockText"),
                )
            )
        return tuple(choices)

    def _parse_effects(self, raw_effects: object, context: str) -> EffectBundleDef | None:
        if raw_effects is None:
            return None
        effects_data = self._require_mapping(raw_effects, context)
        return EffectBundleDef(
            add_items=self._parse_str_list(effects_data.get("addItems"), f"{context}.addItems"),
            remove_items=self._parse_str_list(effects_data.get("removeItems"), f"{context}.removeItems"),
            set_flags=self._parse_str_list(effects_data.get("setFlags"), f"{context}.setFlags"),
        )

    def _parse_str_list(self, value: object, context: str) -> Tuple[str, ...]:
        if value is None:
            return ()
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list if provided.")
        return tuple(self._require_str(entry, f"{context} entries") for entry in value)

    def _optional_str(self, value: object, context: str) -> str | None:
        if value is None:
            return None
        return self._require_str(value, context)

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value
