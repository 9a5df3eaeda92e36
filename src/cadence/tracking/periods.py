"""Calendar and period arithmetic.

Everything here works on local naive datetimes: a "day" is the local
calendar day from ``00:00:00.000`` to ``23:59:59.999``.  Weeks start on
Monday.  Stored timestamps are epoch milliseconds; ``to_datetime`` and
``to_ms`` convert between the two.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from loguru import logger

from .models import Period

Instant = datetime | date | int | float

_END_OF_DAY = time(23, 59, 59, 999_000)


@dataclass(frozen=True)
class PeriodRange:
    """Closed ``[start, end]`` interval of local calendar boundaries."""

    start: datetime
    end: datetime

    @property
    def start_ms(self) -> int:
        return to_ms(self.start)

    @property
    def end_ms(self) -> int:
        return to_ms(self.end)

    def days(self) -> list[date]:
        return list(iter_days(self.start, self.end))


def to_datetime(value: Instant | None = None) -> datetime:
    """Coerce a datetime, date, or epoch-millisecond value to a local datetime."""
    if value is None:
        return datetime.now()
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return datetime.fromtimestamp(value / 1000)


def to_ms(value: Instant) -> int:
    """Epoch milliseconds for *value* (naive datetimes are local time)."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return int(value)
    return round(to_datetime(value).timestamp() * 1000)


def day_start(reference: Instant | None = None) -> datetime:
    return datetime.combine(to_datetime(reference).date(), time.min)


def day_end(reference: Instant | None = None) -> datetime:
    return datetime.combine(to_datetime(reference).date(), _END_OF_DAY)


def week_start(reference: Instant | None = None) -> datetime:
    """Monday 00:00 of the reference week; a Sunday belongs to the week before it."""
    start = day_start(reference)
    return start - timedelta(days=start.weekday())


def week_end(reference: Instant | None = None) -> datetime:
    return day_end(week_start(reference) + timedelta(days=6))


def month_start(reference: Instant | None = None) -> datetime:
    return day_start(reference).replace(day=1)


def month_end(reference: Instant | None = None) -> datetime:
    ref = to_datetime(reference)
    last_day = calendar.monthrange(ref.year, ref.month)[1]
    return datetime.combine(date(ref.year, ref.month, last_day), _END_OF_DAY)


def year_start(reference: Instant | None = None) -> datetime:
    return datetime(to_datetime(reference).year, 1, 1)


def year_end(reference: Instant | None = None) -> datetime:
    return datetime.combine(date(to_datetime(reference).year, 12, 31), _END_OF_DAY)


def period_range(period: Period | str | None, reference: Instant | None = None) -> PeriodRange:
    """Calendar boundaries of the day/week/month/year containing *reference*.

    Unrecognised periods fall back to the day range.
    """
    match period:
        case Period.DAY:
            return PeriodRange(day_start(reference), day_end(reference))
        case Period.WEEK:
            return PeriodRange(week_start(reference), week_end(reference))
        case Period.MONTH:
            return PeriodRange(month_start(reference), month_end(reference))
        case Period.YEAR:
            return PeriodRange(year_start(reference), year_end(reference))
        case _:
            logger.debug(f"Unknown period {period!r}, using day range")
            return PeriodRange(day_start(reference), day_end(reference))


def iso_date(when: Instant | None = None) -> str:
    """``YYYY-MM-DD`` of the local calendar day; the key format of check maps."""
    return to_datetime(when).date().isoformat()


def utc_iso_date(when: Instant | None = None) -> str:
    """``YYYY-MM-DD`` of the UTC calendar day.

    Differs from ``iso_date`` near midnight outside UTC.  Not used for
    check keys.
    """
    if isinstance(when, int | float) and not isinstance(when, bool):
        return datetime.fromtimestamp(when / 1000, tz=timezone.utc).date().isoformat()
    return to_datetime(when).astimezone(timezone.utc).date().isoformat()


def iter_days(start: Instant, end: Instant) -> Iterator[date]:
    """Yield each local calendar date from *start* to *end*, inclusive."""
    current = to_datetime(start).date()
    last = to_datetime(end).date()
    while current <= last:
        yield current
        current += timedelta(days=1)


def _add_months(value: datetime, months: int) -> datetime:
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    day = min(value.day, calendar.monthrange(year, month + 1)[1])
    return value.replace(year=year, month=month + 1, day=day)


def shift_period(period: Period | str, reference: Instant | None, direction: int) -> datetime:
    """Move *reference* by *direction* periods (negative goes back).

    Month and year shifts clamp the day to the target month's length, so
    Jan 31 + 1 month is Feb 28/29.  Unknown periods leave the date alone.
    """
    ref = to_datetime(reference)
    match period:
        case Period.DAY:
            return ref + timedelta(days=direction)
        case Period.WEEK:
            return ref + timedelta(days=7 * direction)
        case Period.MONTH:
            return _add_months(ref, direction)
        case Period.YEAR:
            return _add_months(ref, 12 * direction)
        case _:
            return ref
