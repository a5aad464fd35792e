"""Data layer utilities for loading JSON world content."""

from .errors import ContentLoadError, DataError, DataValidationError
from .paths import get_content_path, get_repo_root

__all__ = [
    "ContentLoadError",
    "DataError",
    "DataValidationError",
    "get_content_path",
    "get_repo_root",
]
