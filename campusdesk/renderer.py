from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import urlencode

from dateutil import parser as dtparser

from campusdesk.core.events import normalize, parse_date
from campusdesk.core.schema import ActiveFilterPayload, FieldDescriptor, FieldKind, FilterState
from campusdesk.errors import MalformedTimeError

_WIDGETS = {
    FieldKind.TEXT: "text_input",
    FieldKind.SELECT: "select",
    FieldKind.DATE: "date_input",
}


# --- Filter drawer ---
def build_controls(schema: Iterable[FieldDescriptor], state: FilterState) -> List[Dict[str, Any]]:
    """
    Control descriptions for a filter drawer, one per field, in schema order.
    """
    controls = []
    for field in schema:
        control: Dict[str, Any] = {
            "name": field.name,
            "label": field.label or field.name,
            "widget": _WIDGETS.get(field.kind, "text_input"),
            "value": state.get(field.name) or "",
        }
        if field.kind is FieldKind.SELECT:
            control["options"] = [{"value": o.value, "label": o.label} for o in field.options]
        controls.append(control)
    return controls


def build_query_params(payload: ActiveFilterPayload) -> str:
    """
    Query string for the listing endpoint (``class_id=7&status=pending``).
    """
    return urlencode(sorted((k, v) for k, v in payload.items() if v))


# --- Calendar ---
def to_calendar_item(event: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Calendar entry with concrete start/end; ``resource`` keeps the original event.
    """
    instant = normalize(event)
    return {
        "id": event.get("id"),
        "title": event.get("title") or "(untitled)",
        "start": instant.start,
        "end": instant.end,
        "resource": event,
    }


def format_event_date(value: str) -> str:
    d = parse_date(value)
    return f"{d:%b} {d.day}, {d.year}"


def format_event_time(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        t = dtparser.parse(f"2000-01-01T{value}").time()
    except (ValueError, OverflowError) as exc:
        raise MalformedTimeError(f"Not a clock time: {value!r}") from exc
    return t.strftime("%I:%M %p")


def render_events(items: List[Dict[str, Any]], title: Optional[str] = None) -> str:
    """
    Agenda for a list of events, HTML-formatted (bold titles) for chat or email bodies.
    """
    if not items:
        return "No events found."

    lines = []
    if title:
        lines.append(f"<b>{title}</b>\n")

    for i, e in enumerate(items, 1):
        date = format_event_date(e["date"]) if e.get("date") else ""
        start = format_event_time(e.get("start_time"))
        end = format_event_time(e.get("end_time"))
        tt = f"{date} {start} - {end}" if start and end else date
        lines.append(f"{i}. <b>{e.get('title') or '(untitled)'}</b>: {tt.strip()}")

    return "\n".join(lines)
