"""Service-layer exceptions."""


class EngineError(Exception):
    """Base exception for rules engine faults."""


class UnknownRoomError(EngineError):
    """Raised when content or a save references a room the world lacks."""

    def __init__(self, room_id: str, message: str | None = None) -> None:
        super().__init__(message or f"Unknown room id: {room_id}")
        self.room_id = room_id


class SaveLoadError(Exception):
    """Raised when save or load operations fail."""


class CorruptSaveError(SaveLoadError):
    """Raised when save data or an imported blob cannot be decoded."""
