"""Console-driven UI loop for Quiet Wires."""
from __future__ import annotations

import logging
import sys
from typing import Literal

from quietwires.data.errors import ContentLoadError
from quietwires.data.repositories import WorldRepository
from quietwires.presentation.cli import config, render
from quietwires.services import (
    GameSession,
    RoomView,
    RulesEngine,
    SaveService,
    SaveStore,
    SessionOutcome,
    UnknownRoomError,
)
from quietwires.services.world_validator import ensure_world_integrity

logger = logging.getLogger(__name__)

LoopAction = Literal["continue", "quit"]


def main() -> None:
    """Start the interactive CLI session."""
    config.configure_logging(config.load_config())
    try:
        session = build_session()
    except (ContentLoadError, UnknownRoomError) as exc:
        logger.error("Startup failed: %s", exc)
        print(f"Failed to start game: {exc}")
        sys.exit(1)
    print("=== Quiet Wires ===")
    render.render_commands()
    view = session.start()
    while True:
        _show(session, view)
        raw = input("> ").strip().lower()
        try:
            action, next_view = _handle_input(session, view, raw)
        except UnknownRoomError as exc:
            logger.error("Command %r failed: %s", raw, exc)
            print(f"Failed: {exc}")
            continue
        if action == "quit":
            break
        view = next_view
    print("Goodbye!")


def build_session(store: SaveStore | None = None, content_dir=None) -> GameSession:
    """Load the world, check it, and wire engine, codec and store together."""
    world = WorldRepository(base_path=content_dir).load()
    ensure_world_integrity(world)
    engine = RulesEngine(world)
    return GameSession(engine, SaveService(), store or SaveStore(config.get_save_dir()))


def _show(session: GameSession, view: RoomView) -> None:
    render.render_room(view)
    render.render_status(session.engine.status())


def _handle_input(session: GameSession, view: RoomView, raw: str) -> tuple[LoopAction, RoomView]:
    if raw == "q":
        return "quit", view
    if raw.isdigit():
        return "continue", _choose(session, view, int(raw) - 1)
    if raw == "n":
        return "continue", _apply(session.new_game(), view)
    if raw == "s":
        return "continue", _apply(session.save(), view)
    if raw == "l":
        return "continue", _apply(session.load(), view)
    if raw == "e":
        outcome = session.export_save()
        render.render_system(outcome.messages)
        print(outcome.export_blob)
        return "continue", view
    if raw == "i":
        return "continue", _apply(session.import_save(input("Paste save data: ")), view)
    render.render_commands()
    return "continue", view


def _choose(session: GameSession, view: RoomView, index: int) -> RoomView:
    if not 0 <= index < len(view.choices):
        print("Invalid selection.")
        return view
    choice = view.choices[index]
    if choice.disabled:
        print("That choice is not available.")
        return view
    print(f"> {choice.label}")
    result = session.choose(index)
    render.render_events(result.events)
    return result.room_view


def _apply(outcome: SessionOutcome, current: RoomView) -> RoomView:
    render.render_system(outcome.messages)
    return outcome.view or current
