from rgbtone.internal.config import Config
from rgbtone.internal.kv_store import KeyValueStore, create_kv_store
from rgbtone.internal.saved_colors import SavedColorStore


class AppContext:
    """Configuration plus the saved color store, built once per application."""

    def __init__(self, config: Config, kv_store: KeyValueStore | None = None):
        print(f"[AppContext] Init")
        self.config = config
        self.kv_store = kv_store if kv_store is not None else create_kv_store(config)
        self.saved_colors = SavedColorStore(self.kv_store, config.max_save, config.storage_key)
        self.saved_colors.load()
        print(f"[AppContext] Ready")

    @property
    def shorthand(self) -> bool:
        return self.config.shorthand
