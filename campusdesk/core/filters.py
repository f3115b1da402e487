from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional

from campusdesk.core.schema import (
    ActiveFilterPayload,
    FieldDescriptor,
    FilterState,
    Preset,
    PresetStore,
    validate_schema,
)
from campusdesk.errors import SchemaError, StoreError, UnknownFieldError, ValidationError
from campusdesk.utils.logger import log_with_context

logger = logging.getLogger(__name__)


def _empty_state(schema: Iterable[FieldDescriptor]) -> FilterState:
    return {field.name: "" for field in schema}


def _intersect(values: FilterState, schema: Iterable[FieldDescriptor]) -> FilterState:
    # keys outside the schema are dropped, missing keys start empty
    return {field.name: values.get(field.name) or "" for field in schema}


class FilterEngine:
    """Live filter values for one filter drawer, plus its named presets.

    The engine treats every value as an opaque string; what control a field is
    edited with is the presentation layer's business. Presets go through the
    injected store under ``namespace`` and are loaded lazily.
    """

    def __init__(
        self,
        schema: Iterable[FieldDescriptor],
        namespace: str,
        store: PresetStore,
        *,
        on_apply: Optional[Callable[[ActiveFilterPayload], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ):
        if not namespace:
            raise SchemaError("Preset namespace must not be empty")

        self._schema: List[FieldDescriptor] = validate_schema(schema)
        self._namespace = namespace
        self._store = store
        self._on_apply = on_apply
        self._on_close = on_close

        self._state: FilterState = _empty_state(self._schema)
        self._presets: Optional[List[Preset]] = None

    @classmethod
    def create(cls, schema: Iterable[FieldDescriptor], namespace: str, store: PresetStore, **callbacks) -> "FilterEngine":
        return cls(schema, namespace, store, **callbacks)

    # --- Read accessors ---
    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def schema(self) -> List[FieldDescriptor]:
        return list(self._schema)

    @property
    def field_names(self) -> List[str]:
        return [field.name for field in self._schema]

    @property
    def state(self) -> FilterState:
        return dict(self._state)

    def get_value(self, name: str) -> str:
        if name not in self._state:
            raise UnknownFieldError(name)
        return self._state[name]

    # --- State transitions ---
    def set_schema(self, schema: Iterable[FieldDescriptor]) -> None:
        """Swap in a new schema, keeping values of fields that survive."""
        fields = validate_schema(schema)
        self._schema = fields
        self._state = _intersect(self._state, fields)
        self._presets = None
        logger.debug("Schema replaced namespace=%s fields=%s", self._namespace, self.field_names)

    def set_value(self, name: str, value: Any) -> None:
        if name not in self._state:
            raise UnknownFieldError(name)
        self._state[name] = "" if value is None else str(value)

    def clear(self) -> None:
        self._state = _empty_state(self._schema)

    def compute_active_payload(self) -> ActiveFilterPayload:
        return {name: value for name, value in self._state.items() if value}

    def apply_and_close(self) -> ActiveFilterPayload:
        """Hand the active payload to the consumer and end the filter session."""
        payload = self.compute_active_payload()
        if self._on_apply is not None:
            self._on_apply(dict(payload))
        if self._on_close is not None:
            self._on_close()
        return payload

    # --- Presets ---
    def _loaded_presets(self) -> List[Preset]:
        if self._presets is None:
            self._presets = list(self._store.load(self._namespace))
            logger.debug("Loaded %d presets namespace=%s", len(self._presets), self._namespace)
        return self._presets

    def _write_presets(self, presets: List[Preset]) -> None:
        try:
            ok = self._store.save(self._namespace, presets)
        except StoreError:
            logger.error("Preset store write failed namespace=%s", self._namespace)
            raise
        except Exception as exc:
            logger.error("Preset store write failed namespace=%s: %s", self._namespace, exc)
            raise StoreError(f"Could not write presets for namespace {self._namespace!r}") from exc
        if ok is False:
            logger.error("Preset store rejected write namespace=%s", self._namespace)
            raise StoreError(f"Preset store rejected write for namespace {self._namespace!r}")
        self._presets = presets

    def list_presets(self) -> List[Preset]:
        return list(self._loaded_presets())

    def get_preset(self, name: str) -> Optional[Preset]:
        for preset in self._loaded_presets():
            if preset.name == name:
                return preset
        return None

    def save_preset(self, name: str) -> Preset:
        """Snapshot the full current state under ``name`` (upsert)."""
        if not name or not name.strip():
            raise ValidationError("Preset name must not be empty")

        preset = Preset(name=name, filters=dict(self._state))
        presets: List[Preset] = []
        replaced = False
        for existing in self._loaded_presets():
            if existing.name != name:
                presets.append(existing)
            elif not replaced:
                # first match keeps its position, later duplicates from old data go
                presets.append(preset)
                replaced = True
        if not replaced:
            presets.append(preset)

        self._write_presets(presets)
        log_with_context(logger, "info", "Saved preset", name=name, namespace=self._namespace, total=len(presets))
        return preset

    def delete_preset(self, name: str) -> None:
        presets = self._loaded_presets()
        remaining = [p for p in presets if p.name != name]
        if len(remaining) == len(presets):
            raise ValidationError(f"No preset named {name!r}")

        self._write_presets(remaining)
        log_with_context(logger, "info", "Deleted preset", name=name, namespace=self._namespace)

    def apply_preset(self, preset: Preset) -> None:
        self._state = _intersect(dict(preset.filters), self._schema)

    def apply_preset_named(self, name: str) -> None:
        preset = self.get_preset(name)
        if preset is None:
            raise ValidationError(f"No preset named {name!r}")
        self.apply_preset(preset)
