from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from quietwires.domain.state import PlayerState
from quietwires.services import CorruptSaveError, MemorySaveStore, SAVE_KEY, SaveService, SaveStore


def _sample_state() -> PlayerState:
    return PlayerState(
        room_id="pylon_field",
        turns=7,
        inventory=["key", "lamp"],
        flags={"arrived": True, "once:relay_hut:0": True, "lampLit": True},
        visited=["relay_hut", "pylon_field"],
    )


def test_serialize_round_trip_preserves_state() -> None:
    service = SaveService()
    state = _sample_state()

    assert service.deserialize(service.serialize(state)) == state


def test_serialize_is_deterministic() -> None:
    service = SaveService()
    state = _sample_state()
    reordered = PlayerState(
        room_id=state.room_id,
        turns=state.turns,
        inventory=list(state.inventory),
        flags=dict(reversed(list(state.flags.items()))),
        visited=list(state.visited),
    )

    assert service.serialize(state) == service.serialize(reordered)


def test_portable_round_trip_preserves_state() -> None:
    service = SaveService()
    state = _sample_state()
    blob = service.export_portable(state)

    assert blob.isascii()
    assert service.import_portable(blob) == state


def test_portable_import_tolerates_pasted_whitespace() -> None:
    service = SaveService()
    state = _sample_state()
    blob = service.export_portable(state)
    pasted = "  " + blob[:10] + "\n" + blob[10:] + "\n"

    assert service.import_portable(pasted) == state


def test_portable_round_trip_keeps_non_ascii_ids() -> None:
    service = SaveService()
    state = PlayerState(room_id="café", inventory=["clé"], visited=["café"])

    assert service.import_portable(service.export_portable(state)) == state


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[" * 100000 + "]" * 100000,
        "[]",
        json.dumps({"state": {"room_id": "a", "turns": 0}}),
        json.dumps({"save_version": 99, "state": {"room_id": "a", "turns": 0}}),
        json.dumps({"save_version": 1}),
        json.dumps({"save_version": 1, "state": {"room_id": 3, "turns": 0}}),
        json.dumps({"save_version": 1, "state": {"room_id": "a", "turns": -1}}),
        json.dumps({"save_version": 1, "state": {"room_id": "a", "turns": True}}),
        json.dumps({"save_version": 1, "state": {"room_id": "a", "turns": 0, "flags": {"x": 1}}}),
        json.dumps({"save_version": 1, "state": {"room_id": "a", "turns": 0, "inventory": "key"}}),
    ],
)
def test_deserialize_rejects_corrupt_payloads(text: str) -> None:
    with pytest.raises(CorruptSaveError):
        SaveService().deserialize(text)


def test_deserialize_drops_duplicate_entries() -> None:
    text = json.dumps(
        {
            "save_version": 1,
            "state": {"room_id": "a", "turns": 1, "inventory": ["key", "key"], "visited": ["a", "a"]},
        }
    )
    state = SaveService().deserialize(text)

    assert state.inventory == ["key"]
    assert state.visited == ["a"]
    assert state.flags == {}


@pytest.mark.parametrize("blob", ["!!!not-base64!!!", "   ", base64.b64encode(b"\xff\xfe").decode("ascii")])
def test_import_portable_rejects_garbage(blob: str) -> None:
    with pytest.raises(CorruptSaveError):
        SaveService().import_portable(blob)


def test_save_and_load_through_file_store(tmp_path: Path) -> None:
    service = SaveService()
    store = SaveStore(tmp_path / "saves")
    state = _sample_state()

    service.save(state, store)
    assert (tmp_path / "saves" / f"{SAVE_KEY}.json").exists()
    assert service.load(store) == state


def test_load_without_save_returns_none(tmp_path: Path) -> None:
    assert SaveService().load(SaveStore(tmp_path)) is None
    assert SaveService().load(MemorySaveStore()) is None


def test_load_corrupt_store_raises() -> None:
    store = MemorySaveStore()
    store.write(SAVE_KEY, "garbage")

    with pytest.raises(CorruptSaveError):
        SaveService().load(store)


def test_file_store_delete_and_key_validation(tmp_path: Path) -> None:
    store = SaveStore(tmp_path)
    store.write("slot", "text")
    assert store.exists("slot")
    assert store.read("slot") == "text"

    store.delete("slot")
    store.delete("slot")
    assert store.read("slot") is None
    with pytest.raises(ValueError):
        store.write("../escape", "text")


def test_import_portable_rejects_deeply_nested_json() -> None:
    blob = base64.b64encode(("[" * 100000 + "]" * 100000).encode("utf-8")).decode("ascii")

    with pytest.raises(CorruptSaveError):
        SaveService().import_portable(blob)
