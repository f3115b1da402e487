from __future__ import annotations

from typing import Optional

from campusdesk.config import Settings, get_settings
from campusdesk.core.schema import PresetStore
from campusdesk.storage.file import JsonFilePresetStore
from campusdesk.storage.memory import InMemoryPresetStore

__all__ = ["InMemoryPresetStore", "JsonFilePresetStore", "build_preset_store"]


def build_preset_store(settings: Optional[Settings] = None) -> PresetStore:
    """Preset store for the configured backend."""
    settings = settings or get_settings()

    if settings.preset_backend == "memory":
        return InMemoryPresetStore(key_suffix=settings.preset_key_suffix)
    if settings.preset_backend == "redis":
        from campusdesk.storage.redis_store import RedisPresetStore

        return RedisPresetStore(url=settings.redis_url, key_suffix=settings.preset_key_suffix)
    return JsonFilePresetStore(settings.preset_file_path, key_suffix=settings.preset_key_suffix)
