import json

import pytest
import redis

from campusdesk.config import Settings
from campusdesk.core.schema import Preset
from campusdesk.errors import StoreError
from campusdesk.storage import InMemoryPresetStore, JsonFilePresetStore, build_preset_store
from campusdesk.storage.redis_store import RedisPresetStore

PRESETS = [
    Preset(name="Grade 7", filters={"class_id": "7", "status": ""}),
    Preset(name="Pending", filters={"class_id": "", "status": "pending"}),
]


class FakeRedis:
    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True


class DownRedis:
    def get(self, key):
        raise redis.ConnectionError("connection refused")

    def set(self, key, value):
        raise redis.ConnectionError("connection refused")


def test_memory_store_round_trip():
    store = InMemoryPresetStore()
    assert store.load("exam") == []

    assert store.save("exam", PRESETS) is True
    assert store.load("exam") == PRESETS
    assert store.load("class") == []


def test_file_store_keys_by_namespace(tmp_path):
    path = tmp_path / "nested" / "presets.json"
    store = JsonFilePresetStore(path)

    store.save("teacher", PRESETS)
    store.save("exam", PRESETS[:1])

    data = json.loads(path.read_text(encoding="utf-8"))
    assert set(data) == {"teacherFilterPresets", "examFilterPresets"}
    assert data["examFilterPresets"] == [{"name": "Grade 7", "filters": {"class_id": "7", "status": ""}}]
    assert JsonFilePresetStore(path).load("teacher") == PRESETS


def test_file_store_missing_file_is_empty(tmp_path):
    assert JsonFilePresetStore(tmp_path / "absent.json").load("exam") == []


def test_file_store_corrupt_file(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError):
        JsonFilePresetStore(path).load("exam")


def test_file_store_malformed_presets(tmp_path):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps({"examFilterPresets": [{"filters": {}}]}), encoding="utf-8")

    with pytest.raises(StoreError):
        JsonFilePresetStore(path).load("exam")


def test_redis_store_round_trip():
    client = FakeRedis()
    store = RedisPresetStore(client=client)

    assert store.load("class") == []
    store.save("class", PRESETS)

    assert json.loads(client.data["classFilterPresets"])[1]["name"] == "Pending"
    assert store.load("class") == PRESETS


def test_redis_store_errors():
    store = RedisPresetStore(client=DownRedis())

    with pytest.raises(StoreError):
        store.load("class")
    with pytest.raises(StoreError):
        store.save("class", PRESETS)


def test_redis_store_garbage_value():
    client = FakeRedis()
    client.data["classFilterPresets"] = "]["
    with pytest.raises(StoreError):
        RedisPresetStore(client=client).load("class")


def test_build_preset_store_backends(tmp_path, monkeypatch):
    memory = build_preset_store(Settings(preset_backend="memory", preset_key_suffix="Saved"))
    assert isinstance(memory, InMemoryPresetStore)
    assert memory.key("exam") == "examSaved"

    file_store = build_preset_store(Settings(preset_backend="file", preset_file_path=str(tmp_path / "p.json")))
    assert isinstance(file_store, JsonFilePresetStore)
    assert file_store.path == tmp_path / "p.json"

    created = {}

    def fake_from_url(url, **kwargs):
        created["url"] = url
        return FakeRedis()

    monkeypatch.setattr(redis, "from_url", fake_from_url)
    redis_store = build_preset_store(Settings(preset_backend="redis", redis_url="redis://cache:6379/2"))
    assert isinstance(redis_store, RedisPresetStore)
    assert created["url"] == "redis://cache:6379/2"
