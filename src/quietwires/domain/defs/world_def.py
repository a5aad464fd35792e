"""World definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Tuple

HAS_ITEM_PREFIX = "hasItem:"
FLAG_PREFIX = "flag:"


class RequirementKind(Enum):
    """Closed set of requirement predicates understood by the engine."""

    HAS_ITEM = "hasItem"
    FLAG = "flag"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class RequirementDef:
    """Tagged requirement: the kind plus its item id, flag name or raw text."""

    kind: RequirementKind
    value: str

    @classmethod
    def parse(cls, raw: str) -> "RequirementDef":
        """Turn a content string such as ``hasItem:key`` into a variant."""
        if raw.startswith(HAS_ITEM_PREFIX):
            return cls(RequirementKind.HAS_ITEM, raw[len(HAS_ITEM_PREFIX):])
        if raw.startswith(FLAG_PREFIX):
            return cls(RequirementKind.FLAG, raw[len(FLAG_PREFIX):])
        return cls(RequirementKind.UNKNOWN, raw)


@dataclass(frozen=True, slots=True)
class EffectBundleDef:
    """State mutations applied when a choice is selected."""

    add_items: Tuple[str, ...] = ()
    remove_items: Tuple[str, ...] = ()
    set_flags: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class OnEnterDef:
    """Effects applied on every room entry. Must stay idempotent."""

    set_flags: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ChoiceDef:
    """Represents a selectable choice in a room."""

    label: str
    to: str
    requires: Tuple[RequirementDef, ...] = ()
    effects: EffectBundleDef | None = None
    once: bool = False
    log: str | None = None
    lock_text: str | None = None


@dataclass(frozen=True, slots=True)
class RoomDef:
    """Fully parsed room."""

    id: str
    title: str
    text: Tuple[str, ...] = ()
    choices: Tuple[ChoiceDef, ...] = ()
    on_enter: OnEnterDef | None = None


@dataclass(frozen=True, slots=True)
class WorldDef:
    """Immutable world: every room plus the id of the first one."""

    start_room_id: str
    rooms: Mapping[str, RoomDef] = field(default_factory=dict)

    def room(self, room_id: str) -> RoomDef | None:
        return self.rooms.get(room_id)
