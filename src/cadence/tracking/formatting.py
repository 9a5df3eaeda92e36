"""Human-readable durations and period labels.

Durations are epoch-millisecond differences.  Negative, missing or
non-finite values (corrupted manual edits) render as zero.
"""

from __future__ import annotations

import math
from datetime import timedelta

from .models import Period
from .periods import Instant, to_datetime, week_start


def _clamp_ms(ms: float | None) -> int:
    if ms is None or isinstance(ms, bool) or not math.isfinite(ms) or ms < 0:
        return 0
    return int(ms)


def format_duration(ms: float | None) -> str:
    """``"2h 5m"``."""
    total_minutes = _clamp_ms(ms) // 60_000
    return f"{total_minutes // 60}h {total_minutes % 60}m"


def format_clock(ms: float | None) -> str:
    """``"02:05:09"``, for a live timer."""
    total_seconds = _clamp_ms(ms) // 1000
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_compact(ms: float | None) -> str:
    """``"2h5m"``, ``"2h"`` or ``"45m"``; for cramped calendar cells."""
    total_minutes = _clamp_ms(ms) // 60_000
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h{minutes}m" if minutes > 0 else f"{hours}h"
    return f"{minutes}m"


def period_label(period: Period | str, reference: Instant | None = None, today: Instant | None = None) -> str:
    """Heading for a progress view, e.g. ``"Today"``, ``"Oct 12 - Oct 18"``, ``"October 2026"``."""
    ref = to_datetime(reference)
    match period:
        case Period.DAY:
            if ref.date() == to_datetime(today).date():
                return "Today"
            return f"{ref:%A}, {ref:%b} {ref.day}"
        case Period.WEEK:
            start = week_start(ref)
            end = start + timedelta(days=6)
            return f"{start:%b} {start.day} - {end:%b} {end.day}"
        case Period.MONTH:
            return f"{ref:%B %Y}"
        case Period.YEAR:
            return str(ref.year)
        case _:
            return ""
