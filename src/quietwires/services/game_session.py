"""Operation boundary between the presentation layer and the engine."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from quietwires.services.errors import CorruptSaveError
from quietwires.services.rules_engine import ChoiceResult, RoomView, RulesEngine
from quietwires.services.save_service import KeyValueStore, SaveService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SessionOutcome:
    """What the adapter should show after a session command.

    ``view`` is set when the room must be redrawn; ``cleared`` asks the
    adapter to drop its transcript first (new game, load, import).
    """

    view: RoomView | None = None
    messages: List[str] = field(default_factory=list)
    cleared: bool = False
    export_blob: str | None = None


class GameSession:
    """Routes every command through the engine and the save codec."""

    def __init__(self, engine: RulesEngine, save_service: SaveService, store: KeyValueStore) -> None:
        self._engine = engine
        self._save_service = save_service
        self._store = store

    @property
    def engine(self) -> RulesEngine:
        return self._engine

    def start(self) -> RoomView:
        """Render the current room for the first time."""
        return self._engine.render_current()

    def new_game(self) -> SessionOutcome:
        view = self._engine.reset_to_start()
        return SessionOutcome(view=view, messages=["New game started."], cleared=True)

    def choose(self, index: int) -> ChoiceResult:
        return self._engine.select_choice(self._engine.state.room_id, index)

    def save(self) -> SessionOutcome:
        self._save_service.save(self._engine.state, self._store)
        return SessionOutcome(messages=["Game saved."])

    def load(self) -> SessionOutcome:
        try:
            state = self._save_service.load(self._store)
        except CorruptSaveError as exc:
            logger.warning("Stored save could not be decoded: %s", exc)
            return SessionOutcome(messages=["Save data was corrupted."])
        if state is None:
            return SessionOutcome(messages=["No save found."])
        view = self._engine.restore_state(state)
        return SessionOutcome(view=view, messages=["Game loaded."], cleared=True)

    def export_save(self) -> SessionOutcome:
        blob = self._save_service.export_portable(self._engine.state)
        return SessionOutcome(messages=["Copy your save data:"], export_blob=blob)

    def import_save(self, blob: str | None) -> SessionOutcome:
        if not blob or not blob.strip():
            return SessionOutcome()
        try:
            state = self._save_service.import_portable(blob)
        except CorruptSaveError as exc:
            logger.warning("Imported save could not be decoded: %s", exc)
            return SessionOutcome(messages=["Import failed."])
        view = self._engine.restore_state(state)
        return SessionOutcome(view=view, messages=["Save imported."], cleared=True)
