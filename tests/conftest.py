import pytest
from fastapi.testclient import TestClient

from rgbtone.internal.app_context import AppContext
from rgbtone.internal.config import Config
from rgbtone.internal.kv_store import MemoryKVStore
from rgbtone.main import create_app


@pytest.fixture
def write_config(tmp_path):
    def _write(body, name="config.ini"):
        path = tmp_path / name
        path.write_text(body)
        return str(path)
    return _write


@pytest.fixture
def kv():
    return MemoryKVStore()


@pytest.fixture
def context(write_config, kv):
    config = Config(write_config("[RGBTONE]\nshorthand = true\nmax_save = 3\n"))
    return AppContext(config, kv_store=kv)


@pytest.fixture
def client(context):
    return TestClient(create_app(context))
