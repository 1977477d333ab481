import json

import pytest

from rgbtone.internal.color_codec import RGB, Color, InvalidFormat, parse_hex, parse_rgb, read_hex_input
from rgbtone.internal.kv_store import FileKVStore, MemoryKVStore
from rgbtone.internal.saved_colors import SavedColorStore


def _hexes(colors):
    return [c.hex for c in colors]


def test_load_empty_when_nothing_stored(kv):
    assert SavedColorStore(kv).load() == []


def test_save_puts_newest_first_and_persists(kv):
    store = SavedColorStore(kv)
    store.save(parse_hex("ff0000"))
    colors = store.save(parse_hex("00ff00"))
    assert _hexes(colors) == ["00ff00", "ff0000"]

    payload = json.loads(kv.get("colors"))
    assert payload == [
        {"hex": "00ff00", "rgb": {"r": 0, "g": 255, "b": 0}},
        {"hex": "ff0000", "rgb": {"r": 255, "g": 0, "b": 0}},
    ]


def test_save_deduplicates_case_insensitively(kv):
    store = SavedColorStore(kv)
    store.save(parse_hex("ABCDEF"))
    colors = store.save(parse_hex("abcdef"))
    assert len(colors) == 1
    assert colors[0].hex == "ABCDEF"


def test_save_dedups_shorthand_against_expanded(kv):
    store = SavedColorStore(kv)
    store.save(parse_hex("f00"))
    assert len(store.save(parse_rgb("255,0,0"))) == 1


def test_save_at_capacity_evicts_oldest(kv):
    store = SavedColorStore(kv, max_save=3)
    for h in ("111111", "222222", "333333"):
        store.save(parse_hex(h))
    colors = store.save(parse_hex("444444"))
    assert _hexes(colors) == ["444444", "333333", "222222"]


def test_save_invalid_color_is_noop(kv):
    store = SavedColorStore(kv)
    store.save(parse_hex("123456"))
    before = kv.get("colors")
    colors = store.save(read_hex_input("nope"))
    assert _hexes(colors) == ["123456"]
    assert kv.get("colors") == before


def test_save_never_stores_shorthand(kv):
    store = SavedColorStore(kv)
    store.save(parse_hex("abc"))
    assert json.loads(kv.get("colors"))[0]["hex"] == "aabbcc"


def test_clear_then_fresh_load_is_empty(tmp_path):
    path = str(tmp_path / "colors.json")
    store = SavedColorStore(FileKVStore(path))
    store.save(parse_hex("ff0000"))
    assert store.clear() == []
    assert len(store) == 0
    assert SavedColorStore(FileKVStore(path)).load() == []


def test_load_restores_across_instances(tmp_path):
    path = str(tmp_path / "colors.json")
    first = SavedColorStore(FileKVStore(path))
    first.save(parse_hex("ff0000"))
    first.save(parse_hex("0000ff"))
    assert _hexes(SavedColorStore(FileKVStore(path)).load()) == ["0000ff", "ff0000"]


@pytest.mark.parametrize("payload", [
    "not json",
    "{}",
    "null",
    '[{"hex": "zzzzzz", "rgb": {"r": 0, "g": 0, "b": 0}}]',
    '[{"hex": "ff0000", "rgb": {"r": 300, "g": 0, "b": 0}}]',
    '[{"hex": "ff0000"}]',
])
def test_load_malformed_payload_is_empty(kv, payload):
    kv.set("colors", payload)
    assert SavedColorStore(kv).load() == []


def test_load_expands_shorthand_and_drops_duplicates(kv):
    kv.set("colors", json.dumps([
        {"hex": "f00", "rgb": {"r": 255, "g": 0, "b": 0}},
        {"hex": "FF0000", "rgb": {"r": 255, "g": 0, "b": 0}},
        {"hex": "00ff00", "rgb": {"r": 0, "g": 255, "b": 0}},
    ]))
    colors = SavedColorStore(kv).load()
    assert _hexes(colors) == ["ff0000", "00ff00"]


def test_load_truncates_to_max_save(kv):
    kv.set("colors", json.dumps([
        {"hex": f"{i:02x}0000", "rgb": {"r": i, "g": 0, "b": 0}} for i in range(5)
    ]))
    assert _hexes(SavedColorStore(kv, max_save=2).load()) == ["000000", "010000"]


def test_contains(kv):
    store = SavedColorStore(kv)
    store.save(parse_hex("abcdef"))
    assert parse_hex("ABCDEF") in store
    assert Color(hex="000000", rgb=None, valid=False) not in store


def test_colors_is_a_copy(kv):
    store = SavedColorStore(kv)
    store.save(parse_hex("abcdef"))
    store.colors.clear()
    assert len(store) == 1


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        SavedColorStore(MemoryKVStore(), max_save=0)


@pytest.mark.parametrize("hex_str, rgb", [
    ("abc", RGB(170, 187, 204)),
    ("000000", RGB(255, 255, 255)),
])
def test_saved_entries_always_derive_from_canonical_hex(kv, hex_str, rgb):
    store = SavedColorStore(kv)
    store.save(parse_hex("123456"))
    before = kv.get("colors")

    with pytest.raises(InvalidFormat):
        store.save(Color(hex=hex_str, rgb=rgb))

    assert _hexes(store.colors) == ["123456"]
    assert kv.get("colors") == before


def test_try_save_reports_change(kv):
    store = SavedColorStore(kv)
    colors, changed = store.try_save(parse_hex("abcdef"))
    assert changed
    assert _hexes(colors) == ["abcdef"]

    colors, changed = store.try_save(parse_hex("ABCDEF"))
    assert not changed
    assert _hexes(colors) == ["abcdef"]

    _, changed = store.try_save(read_hex_input("zz"))
    assert not changed
