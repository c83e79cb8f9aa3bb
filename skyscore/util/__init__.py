from .format import (
    format_clock,
    format_duration,
    format_number,
    format_percent,
)

__all__ = [
    "format_clock",
    "format_duration",
    "format_number",
    "format_percent",
]
