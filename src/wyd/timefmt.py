# src/wyd/timefmt.py

"""Human-friendly durations and local-time rendering."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_DURATION_TOKEN = re.compile(r"(\d+(?:\.\d+)?)\s*([a-zA-Z]+)")

_UNITS: dict[str, float] = {
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}

# Local clock formats: "%r"-style time, and weekday + date + time.
CLOCK_FORMAT = "%I:%M:%S %p"
DATE_FORMAT = "%a %Y-%m-%d %I:%M:%S %p"


def parse_duration(text: str) -> timedelta:
    """
    Parse durations such as "1h 30m", "45min", "90s" or "2 days".

    Raises ValueError on anything that is not a sequence of <number><unit>,
    and on durations too long to be added to the current time.
    """
    raw = (text or "").strip()
    if not raw:
        raise ValueError("empty duration")

    pos = 0
    total = 0.0
    for m in _DURATION_TOKEN.finditer(raw):
        if raw[pos:m.start()].strip():
            raise ValueError(f"invalid duration: {text!r}")
        unit = m.group(2).lower()
        if unit not in _UNITS:
            raise ValueError(f"unknown duration unit {m.group(2)!r} in {text!r}")
        total += float(m.group(1)) * _UNITS[unit]
        pos = m.end()

    if pos == 0 or raw[pos:].strip():
        raise ValueError(f"invalid duration: {text!r}")
    try:
        value = timedelta(seconds=total)
        # Must stay representable once added to the current time.
        datetime.now(timezone.utc) + value + timedelta(days=1)
    except OverflowError as e:
        raise ValueError(f"duration out of range: {text!r}") from e
    return value


def format_duration(value: timedelta) -> str:
    """Render whole seconds as "1d 2h 3m 4s" (zero parts omitted)."""
    seconds = max(0, int(value.total_seconds()))
    if seconds == 0:
        return "0s"

    parts: list[str] = []
    for suffix, size in (("d", 86400), ("h", 3600), ("m", 60), ("s", 1)):
        n, seconds = divmod(seconds, size)
        if n:
            parts.append(f"{n}{suffix}")
    return " ".join(parts)


def format_clock(value: datetime) -> str:
    return value.astimezone().strftime(CLOCK_FORMAT)


def format_date(value: datetime) -> str:
    return value.astimezone().strftime(DATE_FORMAT)
