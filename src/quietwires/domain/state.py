"""Domain-level player state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

ONCE_FLAG_PREFIX = "once:"


def once_flag_key(room_id: str, choice_index: int) -> str:
    """Return the hidden flag recording that a one-shot choice was consumed."""
    return f"{ONCE_FLAG_PREFIX}{room_id}:{choice_index}"


@dataclass
class PlayerState:
    """Mutable record of where the player is and what they carry."""

    room_id: str
    turns: int = 0
    inventory: List[str] = field(default_factory=list)
    flags: Dict[str, bool] = field(default_factory=dict)
    visited: List[str] = field(default_factory=list)

    @classmethod
    def new(cls, start_room_id: str) -> "PlayerState":
        return cls(room_id=start_room_id)

    def has_item(self, item_id: str) -> bool:
        return item_id in self.inventory

    def flag_is_set(self, flag: str) -> bool:
        return bool(self.flags.get(flag))

    def set_flag(self, flag: str) -> None:
        self.flags[flag] = True

    def add_item(self, item_id: str) -> None:
        """Append the item unless already carried."""
        if item_id not in self.inventory:
            self.inventory.append(item_id)

    def remove_items(self, item_ids: Iterable[str]) -> None:
        doomed = set(item_ids)
        self.inventory = [item for item in self.inventory if item not in doomed]

    def mark_visited(self, room_id: str) -> None:
        if room_id not in self.visited:
            self.visited.append(room_id)

    def copy(self) -> "PlayerState":
        return PlayerState(
            room_id=self.room_id,
            turns=self.turns,
            inventory=list(self.inventory),
            flags=dict(self.flags),
            visited=list(self.visited),
        )
