class CampusDeskError(Exception):
    """Base class for every error raised by campusdesk."""


# --- Filter engine ---
class SchemaError(CampusDeskError):
    """Malformed field schema (duplicate names) or empty preset namespace."""


class UnknownFieldError(CampusDeskError, KeyError):
    """Operation on a field that is not part of the current schema."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown filter field: {self.name!r}"


class ValidationError(CampusDeskError):
    """Rejected user input, e.g. an empty preset name."""


class StoreError(CampusDeskError):
    """The preset store could not read or write a namespace."""


# --- Event normalizer ---
class MalformedDateError(CampusDeskError, ValueError):
    """Event date is not a parseable calendar date."""


class MalformedTimeError(CampusDeskError, ValueError):
    """Event time is not HH:MM on a 24-hour clock."""
