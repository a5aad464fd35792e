"""Rules engine: room transitions, requirement checks and effects."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from quietwires.core.types import RequirementReason, SelectionFailureReason
from quietwires.domain.defs import (
    EffectBundleDef,
    RequirementDef,
    RequirementKind,
    RoomDef,
    WorldDef,
)
from quietwires.domain.state import PlayerState, once_flag_key
from quietwires.services.errors import UnknownRoomError

logger = logging.getLogger(__name__)

DONE_SUFFIX = " (done)"


@dataclass(frozen=True, slots=True)
class RequirementCheck:
    """Outcome of evaluating a requirement list."""

    ok: bool
    reason: RequirementReason | None = None


REQUIREMENTS_MET = RequirementCheck(ok=True)


@dataclass(slots=True)
class ChoiceView:
    """A choice as the presentation layer should show it."""

    index: int
    label: str
    disabled: bool
    used: bool = False
    reason: RequirementReason | None = None


@dataclass(slots=True)
class RoomView:
    """Data returned to the presentation layer for rendering."""

    room_id: str
    title: str
    text: List[str]
    choices: List[ChoiceView]


@dataclass(slots=True)
class StatusView:
    turns: int
    inventory: List[str]
    flag_count: int


@dataclass(slots=True)
class EngineEvent:
    """Base class for engine events."""


@dataclass(slots=True)
class RequirementFailedEvent(EngineEvent):
    label: str
    reason: SelectionFailureReason
    lock_text: str | None = None


@dataclass(slots=True)
class ChoiceLogEvent(EngineEvent):
    text: str


@dataclass(slots=True)
class ChoiceResult:
    """Result returned after selecting a choice."""

    moved: bool
    room_view: RoomView
    events: List[EngineEvent] = field(default_factory=list)


class RulesEngine:
    """Drives the player through the world. The only writer of PlayerState."""

    def __init__(self, world: WorldDef, state: PlayerState | None = None) -> None:
        self._world = world
        self._state = state if state is not None else PlayerState.new(world.start_room_id)

    @property
    def world(self) -> WorldDef:
        return self._world

    @property
    def state(self) -> PlayerState:
        """Live player state. Read it, never mutate it from outside."""
        return self._state

    def room_by_id(self, room_id: str) -> RoomDef:
        room = self._world.room(room_id)
        if room is None:
            raise UnknownRoomError(room_id)
        return room

    def enter_room(self, room_id: str, is_initial_entry: bool) -> RoomView:
        """Move into a room, apply its entry flags and return its view."""
        room = self.room_by_id(room_id)
        state = self._state
        if not is_initial_entry:
            state.turns += 1
        state.room_id = room_id
        state.mark_visited(room_id)
        if room.on_enter is not None:
            for flag in room.on_enter.set_flags:
                state.set_flag(flag)
        logger.debug("Entered room '%s' (turn %d, initial=%s)", room_id, state.turns, is_initial_entry)
        return RoomView(
            room_id=room.id,
            title=room.title,
            text=list(room.text),
            choices=self.build_choice_views(room),
        )

    def render_current(self) -> RoomView:
        """Re-render the current room without spending a turn."""
        return self.enter_room(self._state.room_id, is_initial_entry=True)

    def build_choice_views(self, room: RoomDef) -> List[ChoiceView]:
        views: List[ChoiceView] = []
        for index, choice in enumerate(room.choices):
            used = choice.once and self._state.flag_is_set(once_flag_key(room.id, index))
            check = self.check_requirements(choice.requires)
            label = f"{choice.label}{DONE_SUFFIX}" if used else choice.label
            views.append(
                ChoiceView(
                    index=index,
                    label=label,
                    disabled=used or not check.ok,
                    used=used,
                    reason=check.reason,
                )
            )
        return views

    def check_requirements(self, requirements: Sequence[RequirementDef] | None) -> RequirementCheck:
        """Evaluate requirements in order; the first failure decides the reason."""
        if not requirements:
            return REQUIREMENTS_MET
        for requirement in requirements:
            if requirement.kind is RequirementKind.HAS_ITEM:
                if not self._state.has_item(requirement.value):
                    return RequirementCheck(ok=False, reason="missingItem")
            elif requirement.kind is RequirementKind.FLAG:
                if not self._state.flag_is_set(requirement.value):
                    return RequirementCheck(ok=False, reason="missingFlag")
            else:
                return RequirementCheck(ok=False, reason="unknownRequirement")
        return REQUIREMENTS_MET

    def select_choice(self, room_id: str, index: int) -> ChoiceResult:
        """Validate and apply the choice at ``index`` of the current room."""
        if room_id != self._state.room_id:
            raise ValueError(
                f"Selection targets room '{room_id}' but the player is in '{self._state.room_id}'."
            )
        room = self.room_by_id(room_id)
        if not 0 <= index < len(room.choices):
            raise IndexError(f"Choice index {index} is invalid for room '{room.id}'.")
        choice = room.choices[index]
        once_key = once_flag_key(room.id, index)

        failure: SelectionFailureReason | None = None
        if choice.once and self._state.flag_is_set(once_key):
            failure = "alreadyUsed"
        else:
            check = self.check_requirements(choice.requires)
            if not check.ok:
                failure = check.reason
        if failure is not None:
            logger.debug("Choice %d in room '%s' refused: %s", index, room.id, failure)
            event = RequirementFailedEvent(label=choice.label, reason=failure, lock_text=choice.lock_text)
            return ChoiceResult(moved=False, room_view=self.render_current(), events=[event])

        self.room_by_id(choice.to)
        events: List[EngineEvent] = []
        self.apply_effects(choice.effects)
        if choice.once:
            self._state.set_flag(once_key)
        if choice.log:
            events.append(ChoiceLogEvent(text=choice.log))
        view = self.enter_room(choice.to, is_initial_entry=False)
        return ChoiceResult(moved=True, room_view=view, events=events)

    def apply_effects(self, effects: EffectBundleDef | None) -> None:
        """Add items, then remove items, then set flags."""
        if effects is None:
            return
        for item_id in effects.add_items:
            self._state.add_item(item_id)
        if effects.remove_items:
            self._state.remove_items(effects.remove_items)
        for flag in effects.set_flags:
            self._state.set_flag(flag)

    def reset_to_start(self) -> RoomView:
        """Start over from the world's start room with an empty state."""
        self._state = PlayerState.new(self._world.start_room_id)
        return self.enter_room(self._world.start_room_id, is_initial_entry=True)

    def restore_state(self, state: PlayerState) -> RoomView:
        """Install a decoded state and render its room as an initial entry."""
        if self._world.room(state.room_id) is None:
            raise UnknownRoomError(state.room_id, f"Save references unknown room id: {state.room_id}")
        self._state = state
        return self.render_current()

    def status(self) -> StatusView:
        return StatusView(
            turns=self._state.turns,
            inventory=list(self._state.inventory),
            flag_count=len(self._state.flags),
        )
