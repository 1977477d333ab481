import json
import os
import tempfile
from abc import ABC, abstractmethod
import mysql.connector
from colorama import Fore, init
init(autoreset=True)


class KeyValueStore(ABC):
    """Single-process string key/value storage. Values are opaque strings."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str):
        ...

    @abstractmethod
    def delete(self, key: str):
        ...


class MemoryKVStore(KeyValueStore):
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value

    def delete(self, key: str):
        self._data.pop(key, None)


class FileKVStore(KeyValueStore):
    """
    Keeps every slot in one JSON object on disk.

    Writes go to a temporary file in the same directory which then replaces
    the previous file, so a reader never sees a half written file.
    """

    def __init__(self, path: str):
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not os.path.isfile(self._path):
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"[KVStore] {Fore.YELLOW}|::| Couldn't read '{self._path}': {e}")
            return {}
        if not isinstance(data, dict):
            print(f"[KVStore] {Fore.YELLOW}|::| '{self._path}' does not hold a JSON object, ignoring it")
            return {}
        return data

    def _write_all(self, data: dict[str, str]):
        directory = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".kv-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str):
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str):
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class MySQLKVStore(KeyValueStore):
    def __init__(self, config, host, port, user, password, database):
        print("[KVStore] Initializing MySQL backend...")
        self._connection = None
        try:
            self._connection = mysql.connector.connect(
                host=host,
                port=port,
                user=user,
                password=password,
                database=database
            )
        except mysql.connector.Error:
            print(f"[KVStore] {Fore.YELLOW}|::| Failed to connect to DB {user}@{host}!")
            print(f"[KVStore] {Fore.YELLOW}|::| Working in VOLATILE mode!")
            config.set_volatile_mode()
            return

        if not self._connection.is_connected():
            print(f"[KVStore] {Fore.YELLOW}|::| Failed to connect to DB {user}@{host}!")
            print(f"[KVStore] {Fore.YELLOW}|::| Working in VOLATILE mode!")
            config.set_volatile_mode()
            self._connection = None
            return

        print(f"[KVStore] Connected to DB {user}@{host}!")
        self._create_table()
        print("[KVStore] Ready")

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def __del__(self):
        self.close()

    def close(self):
        if getattr(self, "_connection", None):
            self._connection.close()
            print("[KVStore] Closed connection to DB")
            self._connection = None

    def _create_table(self):
        cursor = self._connection.cursor()
        try:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS kv_store ("
                "slot VARCHAR(64) NOT NULL PRIMARY KEY, "
                "payload MEDIUMTEXT NOT NULL)"
            )
            self._connection.commit()
        finally:
            cursor.close()

    def get(self, key: str) -> str | None:
        if not self._connection:
            return None

        cursor = self._connection.cursor()
        try:
            cursor.execute("SELECT payload FROM kv_store WHERE slot = %s", (key,))
            row = cursor.fetchone()
            return row[0] if row else None
        finally:
            cursor.close()

    def set(self, key: str, value: str):
        if not self._connection:
            return

        cursor = self._connection.cursor()
        try:
            query = ("INSERT INTO kv_store (slot, payload) VALUES (%s, %s) "
                     "ON DUPLICATE KEY UPDATE payload = VALUES(payload)")
            cursor.execute(query, (key, value))
            self._connection.commit()
        finally:
            cursor.close()

    def delete(self, key: str):
        if not self._connection:
            return

        cursor = self._connection.cursor()
        try:
            cursor.execute("DELETE FROM kv_store WHERE slot = %s", (key,))
            self._connection.commit()
        finally:
            cursor.close()


def create_kv_store(config) -> KeyValueStore:
    if config.storage_backend == "file":
        print(f"[KVStore] Using file storage '{config.storage_path}'")
        return FileKVStore(config.storage_path)

    if config.storage_backend == "mysql" and config.is_db_configured:
        store = MySQLKVStore(
            config,
            config.db_host,
            config.db_port,
            config.db_user,
            config.db_password,
            config.db_name,
        )
        if store.is_connected:
            return store

    print(f"[KVStore] {Fore.YELLOW}|::| Saved colors will not outlive this process")
    return MemoryKVStore()
