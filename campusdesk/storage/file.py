from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from campusdesk.core.schema import Preset
from campusdesk.errors import StoreError

logger = logging.getLogger(__name__)

_presets_adapter = TypeAdapter(List[Preset])


class JsonFilePresetStore:
    """All namespaces in one JSON document: ``{"<ns>FilterPresets": [...]}``."""

    def __init__(self, path: Union[str, Path], key_suffix: str = "FilterPresets"):
        self.path = Path(path)
        self.key_suffix = key_suffix

    def key(self, namespace: str) -> str:
        return f"{namespace}{self.key_suffix}"

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Preset file read error {self.path}: {e}")
            raise StoreError(f"Cannot read preset file {self.path}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Preset file {self.path} does not hold a JSON object")
        return data

    def load(self, namespace: str) -> List[Preset]:
        raw = self._read().get(self.key(namespace), [])
        try:
            return _presets_adapter.validate_python(raw)
        except PydanticValidationError as e:
            raise StoreError(f"Malformed presets under {self.key(namespace)!r}") from e

    def save(self, namespace: str, presets: Sequence[Preset]) -> bool:
        data = self._read()
        data[self.key(namespace)] = _presets_adapter.dump_python(list(presets), mode="json")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error(f"Preset file write error {self.path}: {e}")
            raise StoreError(f"Cannot write preset file {self.path}") from e
        return True
