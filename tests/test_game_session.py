from __future__ import annotations

import pytest

from quietwires.domain.defs import WorldDef
from quietwires.domain.state import PlayerState
from quietwires.services import (
    GameSession,
    MemorySaveStore,
    RulesEngine,
    SAVE_KEY,
    SaveService,
    UnknownRoomError,
)


def _session(world: WorldDef) -> tuple[GameSession, MemorySaveStore]:
    store = MemorySaveStore()
    session = GameSession(RulesEngine(world), SaveService(), store)
    session.start()
    return session, store


def test_load_without_save_reports_message(key_world: WorldDef) -> None:
    session, _ = _session(key_world)

    outcome = session.load()
    assert outcome.messages == ["No save found."]
    assert outcome.view is None


def test_corrupt_save_leaves_state_untouched(key_world: WorldDef) -> None:
    session, store = _session(key_world)
    session.choose(0)
    before = SaveService().serialize(session.engine.state)
    live_state = session.engine.state
    store.write(SAVE_KEY, '{"save_version": 1, "state": {"room_id": ')

    outcome = session.load()
    assert outcome.messages == ["Save data was corrupted."]
    assert session.engine.state is live_state
    assert SaveService().serialize(session.engine.state) == before


def test_once_choice_stays_disabled_after_save_and_load(key_world: WorldDef) -> None:
    session, _ = _session(key_world)
    session.choose(0)
    session.save()
    session.new_game()
    assert session.engine.state.inventory == []

    outcome = session.load()
    assert outcome.messages == ["Game loaded."]
    assert outcome.cleared is True
    assert outcome.view is not None
    assert outcome.view.choices[0].disabled is True
    assert outcome.view.choices[0].label.endswith("(done)")
    assert session.engine.state.turns == 1


def test_export_then_import_restores_state(key_world: WorldDef) -> None:
    session, _ = _session(key_world)
    session.choose(0)
    session.choose(1)
    exported = session.export_save()
    expected = session.engine.state.copy()
    session.new_game()

    outcome = session.import_save(exported.export_blob)
    assert outcome.messages == ["Save imported."]
    assert session.engine.state == expected
    assert outcome.view is not None and outcome.view.room_id == "B"


def test_bad_import_reports_failure_and_keeps_state(key_world: WorldDef) -> None:
    session, _ = _session(key_world)
    session.choose(0)
    before = session.engine.state.copy()

    outcome = session.import_save("definitely not a save")
    assert outcome.messages == ["Import failed."]
    assert session.engine.state == before


def test_empty_import_is_ignored(key_world: WorldDef) -> None:
    session, _ = _session(key_world)

    outcome = session.import_save("")
    assert outcome.messages == []
    assert outcome.view is None


def test_import_with_unknown_room_is_fatal(key_world: WorldDef) -> None:
    session, _ = _session(key_world)
    blob = SaveService().export_portable(PlayerState(room_id="ghost"))

    with pytest.raises(UnknownRoomError):
        session.import_save(blob)
    assert session.engine.state.room_id == "A"


def test_new_game_resets_progress(key_world: WorldDef) -> None:
    session, _ = _session(key_world)
    session.choose(0)

    outcome = session.new_game()
    assert outcome.messages == ["New game started."]
    assert session.engine.state.turns == 0
    assert session.engine.state.inventory == []


def test_deeply_nested_save_is_reported_as_corrupt(key_world: WorldDef) -> None:
    session, store = _session(key_world)
    before = session.engine.state.copy()
    store.write(SAVE_KEY, "[" * 100000 + "]" * 100000)

    outcome = session.load()
    assert outcome.messages == ["Save data was corrupted."]
    assert session.engine.state == before
