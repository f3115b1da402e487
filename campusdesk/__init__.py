"""Filter drawers and calendar event helpers for the school admin front end."""

from campusdesk.utils.logger import configure_logging

__version__ = "0.1.0"

__all__ = ["configure_logging"]
