import pytest

from campusdesk.core.drawers import CLASS_FILTERS, EXAM_FILTERS, drawer_schema
from campusdesk.core.filters import FilterEngine
from campusdesk.core.schema import FieldDescriptor, FieldKind, schema_from_form
from campusdesk.errors import SchemaError

TEACHER_FORM = [
    {"field_name": "joined_on", "label": "Joined", "field_type": "date", "is_filterable": True, "order": 3},
    {"field_name": "notes", "label": "Notes", "field_type": "textarea", "is_filterable": False, "order": 4},
    {
        "field_name": "department",
        "label": "Department",
        "field_type": "select",
        "is_filterable": True,
        "order": 1,
        "options": [
            {"id": 2, "value": "science", "label": "Science", "order": 2},
            {"id": 1, "value": "arts", "label": "Arts", "order": 1},
        ],
    },
    {"field_name": "phone", "label": "Phone", "field_type": "phone", "is_filterable": True, "order": 2},
]


def test_fixed_drawer_schemas():
    assert [f.name for f in drawer_schema("class")] == [
        "session",
        "medium",
        "class_teacher_id",
        "capacity_min",
        "capacity_max",
    ]
    assert drawer_schema("exam") == EXAM_FILTERS
    assert drawer_schema("class") is not CLASS_FILTERS


def test_form_schema_keeps_filterable_fields_in_order():
    schema = drawer_schema("teacher", TEACHER_FORM)

    assert [f.name for f in schema] == ["department", "phone", "joined_on"]
    assert [f.kind for f in schema] == [FieldKind.SELECT, FieldKind.TEXT, FieldKind.DATE]
    assert [o.value for o in schema[0].options] == ["arts", "science"]


def test_unknown_resource_without_form():
    with pytest.raises(SchemaError):
        drawer_schema("teacher")


def test_from_form_field_defaults():
    field = FieldDescriptor.from_form_field({"field_name": "room", "field_type": None})
    assert field.kind is FieldKind.TEXT
    assert field.label == "room"
    assert field.options == []


def test_teacher_schema_arrives_late(store):
    engine = FilterEngine([], "teacher", store)
    assert engine.compute_active_payload() == {}

    engine.set_schema(schema_from_form(TEACHER_FORM))
    engine.set_value("department", "arts")

    assert engine.compute_active_payload() == {"department": "arts"}
    assert store.key(engine.namespace) == "teacherFilterPresets"


@pytest.mark.parametrize(
    "field",
    [
        {"label": "Nameless", "field_type": "text"},
        {"field_name": "grade", "field_type": "select", "options": [{"label": "No value"}]},
    ],
)
def test_malformed_form_field_is_schema_error(field):
    with pytest.raises(SchemaError):
        FieldDescriptor.from_form_field(field)
    with pytest.raises(SchemaError):
        schema_from_form([field])
