"""Public API surface for logtemplate.rendering."""
from .composite import format_positional
from .datetimes import format_datetime, format_timedelta
from .invariant import format_number, format_value

__all__ = [
    "format_datetime",
    "format_number",
    "format_positional",
    "format_timedelta",
    "format_value",
]
