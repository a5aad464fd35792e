"""Shared type aliases for the core and domain layers."""
from typing import Literal

RequirementReason = Literal["missingItem", "missingFlag", "unknownRequirement"]
SelectionFailureReason = Literal["missingItem", "missingFlag", "unknownRequirement", "alreadyUsed"]
Severity = Literal["ERROR", "WARN"]

__all__ = ["RequirementReason", "SelectionFailureReason", "Severity"]
