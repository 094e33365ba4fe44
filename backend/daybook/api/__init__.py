"""API routers."""

from daybook.api import (
    custom_events,
    fixed_events,
    routines,
    timeline,
)

__all__ = [
    "timeline",
    "routines",
    "custom_events",
    "fixed_events",
]
