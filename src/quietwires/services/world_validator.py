"""Static world integrity checks run once at startup."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from quietwires.core.types import Severity
from quietwires.domain.defs import RequirementKind, WorldDef
from quietwires.services.errors import UnknownRoomError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def validate_world(world: WorldDef) -> list[Issue]:
    """Report dangling room references, unknown requirements and dead rooms."""
    issues: list[Issue] = []
    room_ids = set(world.rooms.keys())

    if world.start_room_id not in room_ids:
        issues.append(
            Issue(
                severity="ERROR",
                code="MISSING_START_ROOM",
                message="Start room is not defined.",
                context={"room_id": world.start_room_id},
            )
        )

    for room in world.rooms.values():
        for index, choice in enumerate(room.choices):
            if choice.to not in room_ids:
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="MISSING_CHOICE_TARGET",
                        message="Choice points to a missing room.",
                        context={"room_id": room.id, "choice": str(index), "referenced_id": choice.to},
                    )
                )
            for requirement in choice.requires:
                if requirement.kind is RequirementKind.UNKNOWN:
                    issues.append(
                        Issue(
                            severity="WARN",
                            code="UNKNOWN_REQUIREMENT",
                            message="Requirement kind is not recognised; the choice can never be taken.",
                            context={"room_id": room.id, "choice": str(index), "requirement": requirement.value},
                        )
                    )

    for room_id in sorted(room_ids - _reachable_rooms(world)):
        issues.append(
            Issue(
                severity="WARN",
                code="UNREACHABLE_ROOM",
                message="Room cannot be reached from the start room.",
                context={"room_id": room_id},
            )
        )
    return issues


def ensure_world_integrity(world: WorldDef) -> list[Issue]:
    """Log warnings and raise UnknownRoomError if any error was found."""
    issues = validate_world(world)
    errors = [issue for issue in issues if issue.severity == "ERROR"]
    for issue in issues:
        if issue.severity == "WARN":
            logger.warning(format_issue(issue))
    if errors:
        first_ref = errors[0].context.get("referenced_id") or errors[0].context.get("room_id", "")
        detail = "; ".join(format_issue(issue) for issue in errors)
        raise UnknownRoomError(first_ref, f"World content failed integrity check: {detail}")
    return issues


def _reachable_rooms(world: WorldDef) -> set[str]:
    if world.start_room_id not in world.rooms:
        return set()
    seen = {world.start_room_id}
    queue = deque([world.start_room_id])
    while queue:
        room = world.rooms[queue.popleft()]
        for choice in room.choices:
            if choice.to in world.rooms and choice.to not in seen:
                seen.add(choice.to)
                queue.append(choice.to)
    return seen
