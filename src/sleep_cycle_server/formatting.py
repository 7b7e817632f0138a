"""Display formatting for recommendation times and durations."""

from datetime import datetime

PLACEHOLDER_TIME = "--:--"


def format_time(date: datetime | None) -> str:
    """Format a timestamp as 24-hour ``HH:MM`` in its own timezone."""
    if date is None:
        return PLACEHOLDER_TIME
    return date.strftime("%H:%M")


def format_duration(total_minutes: float) -> str:
    """Format minutes as ``"7 h"`` or ``"7 h 30 min"``."""
    hours, minutes = divmod(round(total_minutes), 60)

    if minutes == 0:
        return f"{hours} h"
    return f"{hours} h {minutes} min"


def format_time_range(start: datetime | None, end: datetime | None) -> str:
    """Format a window as ``"HH:MM – HH:MM"``."""
    return f"{format_time(start)} – {format_time(end)}"
