from __future__ import annotations

import pytest

from quietwires.domain.defs import (
    ChoiceDef,
    EffectBundleDef,
    OnEnterDef,
    RequirementDef,
    RoomDef,
    WorldDef,
)


@pytest.fixture
def key_world() -> WorldDef:
    """Room A offers a one-shot key; room B needs the key; C needs a flag."""
    rooms = {
        "A": RoomDef(
            id="A",
            title="Room A",
            text=("A bare room.",),
            on_enter=OnEnterDef(set_flags=("visitedA",)),
            choices=(
                ChoiceDef(
                    label="take key",
                    to="A",
                    effects=EffectBundleDef(add_items=("key",)),
                    once=True,
                    log="You pocket the key.",
                ),
                ChoiceDef(
                    label="open door",
                    to="B",
                    requires=(RequirementDef.parse("hasItem:key"),),
                    lock_text="The door is locked.",
                ),
                ChoiceDef(
                    label="grab and drop torch",
                    to="A",
                    effects=EffectBundleDef(add_items=("torch",), remove_items=("torch",)),
                ),
                ChoiceDef(label="chant", to="C", requires=(RequirementDef.parse("spell:open"),)),
            ),
        ),
        "B": RoomDef(
            id="B",
            title="Room B",
            text=("Beyond the door.",),
            choices=(
                ChoiceDef(
                    label="press on",
                    to="C",
                    requires=(RequirementDef.parse("hasItem:key"), RequirementDef.parse("flag:doorUnlocked")),
                ),
                ChoiceDef(label="go back", to="A"),
            ),
        ),
        "C": RoomDef(id="C", title="Room C", text=("The end.",)),
    }
    return WorldDef(start_room_id="A", rooms=rooms)
