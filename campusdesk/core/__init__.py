from campusdesk.core.events import localize, normalize, to_form_window
from campusdesk.core.filters import FilterEngine
from campusdesk.core.schema import (
    EventInstant,
    EventRecord,
    FieldDescriptor,
    FieldKind,
    FieldOption,
    Preset,
    PresetStore,
    schema_from_form,
)

__all__ = [
    "EventInstant",
    "EventRecord",
    "FieldDescriptor",
    "FieldKind",
    "FieldOption",
    "FilterEngine",
    "Preset",
    "PresetStore",
    "localize",
    "normalize",
    "schema_from_form",
    "to_form_window",
]
