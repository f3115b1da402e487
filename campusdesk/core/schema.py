from __future__ import annotations

from datetime import date as date_type, datetime, time as time_type
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from campusdesk.errors import SchemaError

FilterState = Dict[str, str]
ActiveFilterPayload = Dict[str, str]


class FieldKind(str, Enum):
    TEXT = "text"
    SELECT = "select"
    DATE = "date"


class FieldOption(BaseModel):
    value: str
    label: str

    model_config = ConfigDict(frozen=True)


class FieldDescriptor(BaseModel):
    """One filterable attribute of a resource listing."""

    name: str = Field(..., min_length=1)
    label: str = ""
    kind: FieldKind = FieldKind.TEXT
    options: List[FieldOption] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_form_field(cls, field: Mapping[str, Any]) -> "FieldDescriptor":
        """Build a descriptor from a form-builder field definition.

        Field types other than select and date render as plain text inputs.
        """
        try:
            kind = FieldKind(field.get("field_type") or FieldKind.TEXT.value)
        except ValueError:
            kind = FieldKind.TEXT

        name = field.get("field_name") or field.get("name")
        try:
            options: List[FieldOption] = []
            if kind is FieldKind.SELECT:
                raw = sorted(field.get("options") or [], key=lambda o: o.get("order") or 0)
                options = [FieldOption(value=str(o["value"]), label=str(o.get("label", o["value"]))) for o in raw]
            return cls(name=name, label=field.get("label") or name, kind=kind, options=options)
        except (KeyError, PydanticValidationError) as exc:
            raise SchemaError(f"Malformed form field {dict(field)!r}") from exc


def schema_from_form(fields: Iterable[Mapping[str, Any]]) -> List[FieldDescriptor]:
    """Filterable fields of a form schema, in form order."""
    filterable = [f for f in fields if f.get("is_filterable", True)]
    filterable.sort(key=lambda f: f.get("order") or 0)
    return [FieldDescriptor.from_form_field(f) for f in filterable]


def validate_schema(schema: Iterable[FieldDescriptor]) -> List[FieldDescriptor]:
    fields = list(schema)
    seen = set()
    for field in fields:
        if field.name in seen:
            raise SchemaError(f"Duplicate filter field name: {field.name!r}")
        seen.add(field.name)
    return fields


class Preset(BaseModel):
    """Named snapshot of a full filter state."""

    name: str = Field(..., min_length=1)
    filters: FilterState = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("filters", mode="before")
    @classmethod
    def coerce_values(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(k): "" if v is None else str(v) for k, v in value.items()}
        return value


class PresetStore(Protocol):
    def load(self, namespace: str) -> List[Preset]: ...

    def save(self, namespace: str, presets: Sequence[Preset]) -> bool: ...


# --- Events ---
class EventRecord(BaseModel):
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("date", mode="before")
    @classmethod
    def date_to_str(cls, value: Any) -> Any:
        if isinstance(value, (date_type, datetime)):
            return value.isoformat()
        return value

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def time_to_str(cls, value: Any) -> Any:
        if isinstance(value, time_type):
            return value.strftime("%H:%M")
        return value


class EventInstant(BaseModel):
    start: datetime
    end: datetime

    model_config = ConfigDict(frozen=True)
