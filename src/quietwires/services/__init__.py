"""Service layer exports."""

from .errors import CorruptSaveError, EngineError, SaveLoadError, UnknownRoomError
from .game_session import GameSession, SessionOutcome
from .rules_engine import (
    ChoiceLogEvent,
    ChoiceResult,
    ChoiceView,
    EngineEvent,
    RequirementCheck,
    RequirementFailedEvent,
    RoomView,
    RulesEngine,
    StatusView,
)
from .save_service import SAVE_KEY, SaveService
from .save_store import MemorySaveStore, SaveStore

__all__ = [
    "CorruptSaveError",
    "EngineError",
    "SaveLoadError",
    "UnknownRoomError",
    "GameSession",
    "SessionOutcome",
    "ChoiceLogEvent",
    "ChoiceResult",
    "ChoiceView",
    "EngineEvent",
    "RequirementCheck",
    "RequirementFailedEvent",
    "RoomView",
    "RulesEngine",
    "StatusView",
    "SAVE_KEY",
    "SaveService",
    "MemorySaveStore",
    "SaveStore",
]
