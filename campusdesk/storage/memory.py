from __future__ import annotations

from typing import Dict, List, Sequence

from campusdesk.core.schema import Preset


class InMemoryPresetStore:
    """Process-local preset store, mostly for tests and previews."""

    def __init__(self, key_suffix: str = "FilterPresets"):
        self.key_suffix = key_suffix
        self._data: Dict[str, List[dict]] = {}

    def key(self, namespace: str) -> str:
        return f"{namespace}{self.key_suffix}"

    def load(self, namespace: str) -> List[Preset]:
        return [Preset.model_validate(item) for item in self._data.get(self.key(namespace), [])]

    def save(self, namespace: str, presets: Sequence[Preset]) -> bool:
        # stored as plain dicts so callers never share objects with the store
        self._data[self.key(namespace)] = [p.model_dump() for p in presets]
        return True
