"""Domain definition exports."""

from .world_def import (
    ChoiceDef,
    EffectBundleDef,
    OnEnterDef,
    RequirementDef,
    RequirementKind,
    RoomDef,
    WorldDef,
)

__all__ = [
    "ChoiceDef",
    "EffectBundleDef",
    "OnEnterDef",
    "RequirementDef",
    "RequirementKind",
    "RoomDef",
    "WorldDef",
]
