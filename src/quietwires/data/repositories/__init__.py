"""Repository exports."""

from .world_repo import WorldRepository

__all__ = ["WorldRepository"]
