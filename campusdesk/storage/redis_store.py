from __future__ import annotations

import json
import logging
from typing import List, Optional, Sequence

import redis
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from campusdesk.core.schema import Preset
from campusdesk.errors import StoreError

logger = logging.getLogger(__name__)

_presets_adapter = TypeAdapter(List[Preset])


class RedisPresetStore:
    """Presets as one JSON list per namespace key, without expiry."""

    def __init__(
        self,
        url: str = "redis://redis:6379/1",
        key_suffix: str = "FilterPresets",
        client: Optional["redis.Redis"] = None,
    ):
        self.url = url
        self.key_suffix = key_suffix
        self.client = client if client is not None else redis.from_url(self.url, decode_responses=True)

    def key(self, namespace: str) -> str:
        return f"{namespace}{self.key_suffix}"

    def load(self, namespace: str) -> List[Preset]:
        try:
            value = self.client.get(self.key(namespace))
        except redis.RedisError as e:
            logger.error(f"Redis GET error: {e}")
            raise StoreError(f"Cannot load presets for {namespace!r}") from e
        if not value:
            return []
        try:
            return _presets_adapter.validate_python(json.loads(value))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise StoreError(f"Malformed presets under {self.key(namespace)!r}") from e

    def save(self, namespace: str, presets: Sequence[Preset]) -> bool:
        payload = _presets_adapter.dump_python(list(presets), mode="json")
        try:
            self.client.set(self.key(namespace), json.dumps(payload, ensure_ascii=False))
            return True
        except redis.RedisError as e:
            logger.error(f"Redis SET error: {e}")
            raise StoreError(f"Cannot save presets for {namespace!r}") from e
