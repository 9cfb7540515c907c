from __future__ import annotations

from datetime import datetime
from typing import Optional


def parse_hhmm(value: Optional[str]):
    """Parse ``HH:MM`` or ``HH:MM:SS`` into a time, or None."""
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    return None


def format_time12(value: Optional[str]) -> str:
    """``"13:05:00"`` -> ``"01:05 pm"``; unparseable input is returned unchanged."""
    t = parse_hhmm(value)
    if t is None:
        return (value or "").strip()
    return t.strftime("%I:%M %p").lower()
