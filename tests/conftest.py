import pytest

from campusdesk.core.drawers import EXAM_FILTERS
from campusdesk.core.filters import FilterEngine
from campusdesk.core.schema import FieldDescriptor, FieldKind, FieldOption
from campusdesk.storage import InMemoryPresetStore


@pytest.fixture
def store():
    return InMemoryPresetStore()


@pytest.fixture
def exam_engine(store):
    return FilterEngine(EXAM_FILTERS, "exam", store)


@pytest.fixture
def status_schema():
    return [
        FieldDescriptor(name="class_id", label="Class", kind=FieldKind.TEXT),
        FieldDescriptor(
            name="status",
            label="Status",
            kind=FieldKind.SELECT,
            options=[FieldOption(value="pending", label="Pending")],
        ),
    ]
