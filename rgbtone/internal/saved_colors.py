import threading
from pydantic import TypeAdapter, ValidationError
from colorama import Fore, init
from rgbtone.internal.color_codec import Color, expand_shorthand, hex_to_rgb
from rgbtone.internal.kv_store import KeyValueStore
from rgbtone.internal.models import SavedColorRecord
init(autoreset=True)


DEFAULT_MAX_SAVE = 9
DEFAULT_KEY = "colors"

_records_adapter = TypeAdapter(list[SavedColorRecord])


class SavedColorStore:
    """
    Newest-first list of saved colors, bounded by ``max_save`` and free of
    duplicate hex values (compared case-insensitively).

    The whole list is written to one slot of the key-value store on every
    change; nothing else writes that slot.
    """

    def __init__(self, kv_store: KeyValueStore, max_save: int = DEFAULT_MAX_SAVE, key: str = DEFAULT_KEY):
        if max_save < 1:
            raise ValueError("max_save must be at least 1")
        self._kv_store = kv_store
        self._max_save = max_save
        self._key = key
        self._lock = threading.Lock()
        self._colors: list[Color] = []

    @property
    def max_save(self) -> int:
        return self._max_save

    @property
    def colors(self) -> list[Color]:
        return list(self._colors)

    def __len__(self):
        return len(self._colors)

    def __contains__(self, color: Color):
        return any(c.key == color.key for c in self._colors)

    def load(self) -> list[Color]:
        with self._lock:
            self._colors = self._read()
            return list(self._colors)

    def save(self, color: Color) -> list[Color]:
        colors, _ = self.try_save(color)
        return colors

    def try_save(self, color: Color) -> tuple[list[Color], bool]:
        """Like save, also telling whether this call changed the list."""
        with self._lock:
            if not color.valid or color.rgb is None or color in self:
                return list(self._colors), False

            colors = list(self._colors)
            while len(colors) >= self._max_save:
                evicted = colors.pop()
                print(f"[SavedColors] Evicted #{evicted.hex}")
            colors.insert(0, color)

            self._write(colors)
            self._colors = colors
            print(f"[SavedColors] Saved #{color.hex} ({len(colors)}/{self._max_save})")
            return list(self._colors), True

    def clear(self) -> list[Color]:
        with self._lock:
            self._kv_store.delete(self._key)
            self._colors = []
            print("[SavedColors] Cleared all saved colors")
            return []

    def _read(self) -> list[Color]:
        raw = self._kv_store.get(self._key)
        if raw is None:
            return []

        try:
            records = _records_adapter.validate_json(raw)
        except ValidationError as e:
            print(f"[SavedColors] {Fore.YELLOW}|::| Stored colors are malformed, starting empty ({e.error_count()} errors)")
            return []

        colors: list[Color] = []
        seen: set[str] = set()
        for record in records:
            hex_str = expand_shorthand(record.hex)
            color = Color(hex=hex_str, rgb=hex_to_rgb(hex_str))
            if color.key in seen:
                continue
            seen.add(color.key)
            colors.append(color)

        if len(colors) > self._max_save:
            print(f"[SavedColors] {Fore.YELLOW}|::| {len(colors)} stored colors exceed max_save, keeping the newest {self._max_save}")
            colors = colors[:self._max_save]

        print(f"[SavedColors] Loaded {len(colors)} colors")
        return colors

    def _write(self, colors: list[Color]):
        records = [SavedColorRecord.from_color(c) for c in colors]
        self._kv_store.set(self._key, _records_adapter.dump_json(records).decode("utf-8"))
