from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from campusdesk.core.schema import FieldDescriptor, schema_from_form
from campusdesk.errors import SchemaError

# --- Fixed drawer schemas ---
CLASS_FILTERS: List[FieldDescriptor] = [
    FieldDescriptor(name="session", label="Session"),
    FieldDescriptor(name="medium", label="Medium"),
    FieldDescriptor(name="class_teacher_id", label="Class Teacher ID"),
    FieldDescriptor(name="capacity_min", label="Min Capacity"),
    FieldDescriptor(name="capacity_max", label="Max Capacity"),
]

EXAM_FILTERS: List[FieldDescriptor] = [
    FieldDescriptor(name="class_id", label="Class ID"),
    FieldDescriptor(name="subject_id", label="Subject ID"),
    FieldDescriptor(name="status", label="Status"),
]

_FIXED: Dict[str, List[FieldDescriptor]] = {
    "class": CLASS_FILTERS,
    "exam": EXAM_FILTERS,
}


def drawer_schema(resource: str, form_fields: Optional[Iterable[Mapping[str, Any]]] = None) -> List[FieldDescriptor]:
    """Filter schema for a resource drawer.

    Resources with a fixed drawer ignore ``form_fields``; any other resource
    (teachers, students, ...) is described by its form-builder schema.
    """
    if resource in _FIXED:
        return list(_FIXED[resource])
    if form_fields is None:
        raise SchemaError(f"No filter schema for resource {resource!r}")
    return schema_from_form(form_fields)
