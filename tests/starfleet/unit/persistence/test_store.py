import pytest

from starfleet.game.persistence.store import JsonFileStore, MemoryStore


def test_memory_store_get_set_remove() -> None:
    store = MemoryStore()
    assert store.get("k") is None
    store.set("k", "v")
    assert store.get("k") == "v"
    store.remove("k")
    store.remove("k")
    assert store.get("k") is None


def test_json_file_store_round_trip(tmp_path) -> None:
    store = JsonFileStore(tmp_path / "saves")
    store.set("st_battleship_save_v1", '{"a": 1}')
    assert (tmp_path / "saves" / "st_battleship_save_v1.json").exists()
    assert store.get("st_battleship_save_v1") == '{"a": 1}'
    assert not list((tmp_path / "saves").glob("*.tmp"))
    store.remove("st_battleship_save_v1")
    assert store.get("st_battleship_save_v1") is None


def test_json_file_store_normalizes_keys(tmp_path) -> None:
    store = JsonFileStore(tmp_path)
    store.set("my key/../x", "1")
    assert (tmp_path / "my_key____x.json").exists()
    with pytest.raises(ValueError):
        store.set("  ", "1")
