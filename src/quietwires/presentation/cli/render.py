"""Shared CLI rendering helpers."""
from __future__ import annotations

from typing import Iterable, Sequence

from quietwires.presentation.cli.config import debug_enabled
from quietwires.services import (
    ChoiceLogEvent,
    ChoiceView,
    EngineEvent,
    RequirementFailedEvent,
    RoomView,
    StatusView,
)

_LOCK_REASON_TEXT = {
    "missingItem": "you lack something",
    "missingFlag": "not yet",
    "unknownRequirement": "unavailable",
}


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_room(view: RoomView) -> None:
    """Render the room title, its narrative lines and its choices."""
    render_heading(view.title)
    if debug_enabled():
        print(f"[{view.room_id}]")
    for line in view.text:
        print(line)
    render_choices(view.choices)


def format_choice(choice: ChoiceView) -> str:
    text = f"{choice.index + 1}. {choice.label}"
    if choice.disabled and not choice.used:
        text += f" [locked: {_LOCK_REASON_TEXT.get(choice.reason or '', 'unavailable')}]"
    return text


def render_choices(choices: Sequence[ChoiceView]) -> None:
    """Display numbered choices; locked ones stay visible but marked."""
    if not choices:
        return
    render_heading("Choices")
    for choice in choices:
        print(format_choice(choice))


def format_status(status: StatusView) -> str:
    inventory = ", ".join(status.inventory) if status.inventory else "empty"
    return f"Turns: {status.turns} | Inventory: {inventory} | Flags: {status.flag_count}"


def render_status(status: StatusView) -> None:
    print(format_status(status))


def render_events(events: Iterable[EngineEvent]) -> None:
    for event in events:
        if isinstance(event, RequirementFailedEvent):
            if event.lock_text:
                print(event.lock_text)
        elif isinstance(event, ChoiceLogEvent):
            print(event.text)


def render_system(messages: Iterable[str]) -> None:
    for message in messages:
        print(f"[System] {message}")


def render_commands() -> None:
    print("Commands: [n]ew  [s]ave  [l]oad  [e]xport  [i]mport  [q]uit")
