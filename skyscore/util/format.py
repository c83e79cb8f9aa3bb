import datetime
import math


def format_number(value: float, precision: int = 1) -> str:
    if not math.isfinite(value):
        return str(value)
    rounded = round(value, precision)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{precision}f}".rstrip("0").rstrip(".")


def format_percent(value: float) -> str:
    return f"{format_number(value, precision=0)}%"


def format_clock(dt: datetime.datetime, tz: datetime.tzinfo | None = None) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    if tz is not None:
        dt = dt.astimezone(tz)
    return dt.strftime("%H:%M")


def format_duration(minutes: float) -> str:
    total = int(round(minutes))
    if total <= 0:
        return "0m"
    hours, mins = divmod(total, 60)
    if hours and mins:
        return f"{hours}h {mins:02d}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"
