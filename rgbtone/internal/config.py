import configparser
import os
from colorama import Fore, Back, Style, init
init(autoreset=True)


DEFAULT_SHORTHAND = True
DEFAULT_MAX_SAVE = 9
DEFAULT_STORAGE_BACKEND = "file"
DEFAULT_STORAGE_PATH = "saved_colors.json"
DEFAULT_STORAGE_KEY = "colors"
STORAGE_BACKENDS = ("file", "memory", "mysql")


class Config:
    def __init__(self, config_filepath: str | None = None):
        config = configparser.ConfigParser()
        if config_filepath is not None:
            print(f"[Config] Starting to read '{config_filepath}'")
            if not os.path.isfile(config_filepath):
                print(f"[Config] {Fore.YELLOW}|::| Warning! '{config_filepath}' not found, using defaults")
            _ = config.read(config_filepath)

        if config_filepath is not None and not config.has_section("RGBTONE"):
            print(f"[Config] {Fore.YELLOW}|::| Warning! No 'RGBTONE' section found, using defaults")

        try:
            self._shorthand: bool = config.getboolean("RGBTONE", "shorthand", fallback=DEFAULT_SHORTHAND)
        except ValueError:
            print(f"[Config] {Fore.YELLOW}|::| Warning! 'shorthand' is not a boolean, using {DEFAULT_SHORTHAND}")
            self._shorthand = DEFAULT_SHORTHAND

        try:
            raw_max_save = config.getint("RGBTONE", "max_save", fallback=DEFAULT_MAX_SAVE)
        except ValueError:
            print(f"[Config] {Back.RED + Style.BRIGHT}|!!| ERROR! 'max_save' is not an integer |!!|")
            print(f"[Config] Falling back to max_save = {DEFAULT_MAX_SAVE}")
            raw_max_save = DEFAULT_MAX_SAVE

        self._max_save: int = max(raw_max_save, 1)
        if raw_max_save < 1:
            print(f"[Config] {Fore.YELLOW}|::| Warning! max_save = {raw_max_save} is below 1, clamped to 1")
        print(f"[Config] Shorthand: {self._shorthand}, max saved colors: {self._max_save}")

        backend = config.get("STORAGE", "backend", fallback=DEFAULT_STORAGE_BACKEND).strip().lower()
        if backend not in STORAGE_BACKENDS:
            print(f"[Config] {Fore.YELLOW}|::| Warning! Unknown storage backend '{backend}', using '{DEFAULT_STORAGE_BACKEND}'")
            backend = DEFAULT_STORAGE_BACKEND
        self._storage_backend: str = backend
        self._storage_path: str = config.get("STORAGE", "path", fallback=DEFAULT_STORAGE_PATH)
        self._storage_key: str = config.get("STORAGE", "key", fallback=DEFAULT_STORAGE_KEY)

        #Load [DATABASE] section
        self._db_enabled = False
        if self._storage_backend == "mysql":
            if config.has_section("DATABASE"):
                try:
                    self._db_host = config["DATABASE"]["host"]
                    self._db_port = int(config["DATABASE"]["port"])
                    self._db_name = config["DATABASE"]["name"]
                    self._db_user = config["DATABASE"]["user"]
                    self._db_password = config["DATABASE"]["password"]
                    self._db_enabled = True
                except (KeyError, ValueError):
                    print(f"[Config] {Fore.YELLOW}|::| Warning! DATABASE section is incomplete in {config_filepath}!")
                    print(f"[Config] {Fore.YELLOW}|::| Working in VOLATILE mode")
            else:
                print(f"[Config] {Fore.YELLOW}|::| Warning! DATABASE section not found in {config_filepath}!")
                print(f"[Config] {Fore.YELLOW}|::| Working in VOLATILE mode")

        self._volatile = self._storage_backend == "memory" or (
            self._storage_backend == "mysql" and not self._db_enabled
        )
        print(f"[Config] Storage backend: {self._storage_backend}{' (volatile)' if self._volatile else ''}")
        print(f"[Config] Ready")

    @property
    def shorthand(self) -> bool:
        return self._shorthand

    @property
    def max_save(self) -> int:
        return self._max_save

    @property
    def storage_backend(self) -> str:
        return self._storage_backend

    @property
    def storage_path(self) -> str:
        return self._storage_path

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def is_volatile_mode(self) -> bool:
        return self._volatile

    @property
    def is_db_configured(self) -> bool:
        return self._db_enabled

    @property
    def db_host(self) -> str:
        return self._db_host

    @property
    def db_port(self) -> int:
        return self._db_port

    @property
    def db_user(self) -> str:
        return self._db_user

    @property
    def db_password(self) -> str:
        return_password = self._db_password or ""
        self._db_password = None
        return return_password

    @property
    def db_name(self) -> str:
        return self._db_name

    def set_volatile_mode(self):
        self._volatile = True
