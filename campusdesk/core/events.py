from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional, Union

import pytz
from dateutil import parser as dtparser
from pydantic import ValidationError as PydanticValidationError

from campusdesk.config import get_settings
from campusdesk.core.schema import EventInstant, EventRecord
from campusdesk.errors import MalformedDateError, MalformedTimeError

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")

# parsed twice; any date part dateutil had to borrow from the default differs
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59)

RecordLike = Union[EventRecord, Mapping[str, Any]]


# --- Parsing ---
def _as_record(record: RecordLike) -> EventRecord:
    if isinstance(record, EventRecord):
        return record
    try:
        return EventRecord.model_validate(dict(record))
    except PydanticValidationError as exc:
        bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
        if bad & {"start_time", "end_time"}:
            raise MalformedTimeError(f"Invalid event time in {dict(record)!r}") from exc
        raise MalformedDateError(f"Invalid event date in {dict(record)!r}") from exc


def parse_date(date_str: str) -> date:
    """Calendar day of ``date_str``; year, month and day must all be present."""
    try:
        first, second = (dtparser.parse(date_str, default=d) for d in _FILL_DEFAULTS)
    except (ValueError, OverflowError, TypeError) as exc:
        raise MalformedDateError(f"Not a calendar date: {date_str!r}") from exc
    if first.date() != second.date():
        raise MalformedDateError(f"Incomplete calendar date: {date_str!r}")
    return first.date()


def _parse_time(time_str: Optional[str]) -> Optional[time]:
    if not time_str:
        return None
    match = _HHMM.fullmatch(time_str)
    if match is None:
        raise MalformedTimeError(f"Expected HH:MM (24h), got {time_str!r}")
    return time(int(match.group(1)), int(match.group(2)), 0)


# --- Normalization ---
def normalize(record: RecordLike) -> EventInstant:
    """Turn a date plus optional HH:MM times into concrete start/end instants.

    A missing start means midnight, a missing end means 23:59:59 so that
    date-only events cover the whole day. Inverted ranges are returned as-is.
    """
    rec = _as_record(record)
    day = parse_date(rec.date)
    start_t = _parse_time(rec.start_time)
    end_t = _parse_time(rec.end_time)
    if start_t is None:
        start_t = START_OF_DAY
    if end_t is None:
        end_t = END_OF_DAY
    return EventInstant(start=datetime.combine(day, start_t), end=datetime.combine(day, end_t))


def to_form_window(record: RecordLike) -> Dict[str, str]:
    """Start/end strings for the event edit form (``date`` or ``dateTtime``)."""
    rec = _as_record(record)
    start = f"{rec.date}T{rec.start_time}" if rec.start_time else rec.date
    end = f"{rec.date}T{rec.end_time}" if rec.end_time else rec.date
    return {"start": start, "end": end}


def localize(instant: datetime, tz_name: Optional[str] = None) -> datetime:
    tz_name = tz_name or get_settings().user_timezone
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown timezone %r, falling back to UTC", tz_name)
        tz = pytz.UTC
    return tz.localize(instant)
