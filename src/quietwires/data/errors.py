"""Custom exceptions for content loading and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class ContentLoadError(DataError):
    """Raised when the world content is missing, unreadable or not valid JSON."""


class DataValidationError(ContentLoadError):
    """Raised when JSON content fails structural validation."""
