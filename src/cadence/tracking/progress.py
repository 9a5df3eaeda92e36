"""Per-period progress snapshots across all activities.

Reporting structures for the day/week/month/year views.  They are not
goal-aware; they reuse the same aggregation primitives per activity.
TIME activities report milliseconds, everything else is reported from
its check map.
"""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any

from .aggregate import count_checked, is_running, sum_overlap
from .models import Activity, ActivityType, CheckCount, Period
from .periods import (
    Instant,
    day_end,
    day_start,
    iso_date,
    iter_days,
    month_end,
    month_start,
    period_range,
    to_datetime,
    to_ms,
)


# ── Day ──────────────────────────────────────────────────────────────


@dataclass
class TimeDayProgress:
    id: str
    name: str
    time: int
    running: bool
    type: str = ActivityType.TIME


@dataclass
class CheckDayProgress:
    id: str
    name: str
    checked: bool
    type: str = ActivityType.CHECK


@dataclass
class DailyProgress:
    date: str
    activities: dict[str, TimeDayProgress | CheckDayProgress] = field(default_factory=dict)
    period: str = Period.DAY

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ── Week / month ─────────────────────────────────────────────────────


@dataclass
class TimeRangeProgress:
    """Per-day milliseconds for a TIME activity over a week or month."""

    id: str
    name: str
    daily_totals: dict[str, int]
    total: int
    running: bool
    type: str = ActivityType.TIME


@dataclass
class CheckRangeProgress:
    id: str
    name: str
    daily_checks: dict[str, bool]
    checked_count: int
    total_days: int
    type: str = ActivityType.CHECK


@dataclass
class WeeklyProgress:
    start_date: str
    end_date: str
    days: list[str]
    activities: dict[str, TimeRangeProgress | CheckRangeProgress] = field(default_factory=dict)
    period: str = Period.WEEK

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MonthlyProgress:
    """Month view.

    ``month`` is 1-12 and ``first_weekday`` is the weekday of the 1st with
    Monday = 0, which is all a calendar grid needs for its leading blanks.
    """

    year: int
    month: int
    start_date: str
    end_date: str
    days: list[str]
    first_weekday: int
    activities: dict[str, TimeRangeProgress | CheckRangeProgress] = field(default_factory=dict)
    period: str = Period.MONTH

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ── Year ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MonthLabel:
    month: int
    name: str


@dataclass
class TimeYearProgress:
    id: str
    name: str
    monthly_totals: dict[int, int]
    year_total: int
    running: bool
    type: str = ActivityType.TIME


@dataclass
class CheckYearProgress:
    id: str
    name: str
    monthly_checks: dict[int, CheckCount]
    year_checked_count: int
    year_total_days: int
    type: str = ActivityType.CHECK


@dataclass
class YearlyProgress:
    year: int
    months: list[MonthLabel]
    activities: dict[str, TimeYearProgress | CheckYearProgress] = field(default_factory=dict)
    period: str = Period.YEAR

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


ProgressSnapshot = DailyProgress | WeeklyProgress | MonthlyProgress | YearlyProgress


# ── Builders ─────────────────────────────────────────────────────────


def _day_time(activity: Activity, day: date) -> int:
    return sum_overlap(activity.entries, to_ms(day_start(day)), to_ms(day_end(day)))


def _day_checked(activity: Activity, key: str) -> bool:
    return activity.checks is not None and activity.checks.get(key) is True


def daily_progress(activities: Mapping[str, Activity], reference: Instant | None = None) -> DailyProgress:
    day = to_datetime(reference).date()
    key = iso_date(day)
    progress = DailyProgress(date=key)

    for activity_id, activity in activities.items():
        if activity.is_time:
            progress.activities[activity_id] = TimeDayProgress(
                id=activity_id,
                name=activity.name,
                time=_day_time(activity, day),
                running=is_running(activity),
            )
        else:
            progress.activities[activity_id] = CheckDayProgress(
                id=activity_id, name=activity.name, checked=_day_checked(activity, key)
            )

    return progress


def _range_activities(
    activities: Mapping[str, Activity], days: list[date]
) -> dict[str, TimeRangeProgress | CheckRangeProgress]:
    out: dict[str, TimeRangeProgress | CheckRangeProgress] = {}
    keys = [iso_date(d) for d in days]

    for activity_id, activity in activities.items():
        if activity.is_time:
            daily_totals = {key: _day_time(activity, day) for key, day in zip(keys, days, strict=True)}
            out[activity_id] = TimeRangeProgress(
                id=activity_id,
                name=activity.name,
                daily_totals=daily_totals,
                total=sum(daily_totals.values()),
                running=is_running(activity),
            )
        else:
            daily_checks = {key: _day_checked(activity, key) for key in keys}
            out[activity_id] = CheckRangeProgress(
                id=activity_id,
                name=activity.name,
                daily_checks=daily_checks,
                checked_count=sum(daily_checks.values()),
                total_days=len(keys),
            )

    return out


def weekly_progress(activities: Mapping[str, Activity], reference: Instant | None = None) -> WeeklyProgress:
    rng = period_range(Period.WEEK, reference)
    days = rng.days()
    return WeeklyProgress(
        start_date=iso_date(rng.start),
        end_date=iso_date(rng.end),
        days=[iso_date(d) for d in days],
        activities=_range_activities(activities, days),
    )


def monthly_progress(activities: Mapping[str, Activity], reference: Instant | None = None) -> MonthlyProgress:
    ref = to_datetime(reference)
    rng = period_range(Period.MONTH, ref)
    days = rng.days()
    return MonthlyProgress(
        year=ref.year,
        month=ref.month,
        start_date=iso_date(rng.start),
        end_date=iso_date(rng.end),
        days=[iso_date(d) for d in days],
        first_weekday=rng.start.weekday(),
        activities=_range_activities(activities, days),
    )


def yearly_progress(activities: Mapping[str, Activity], reference: Instant | None = None) -> YearlyProgress:
    year = to_datetime(reference).year
    firsts = [date(year, m, 1) for m in range(1, 13)]
    progress = YearlyProgress(
        year=year,
        months=[MonthLabel(month=d.month, name=calendar.month_abbr[d.month]) for d in firsts],
    )

    for activity_id, activity in activities.items():
        if activity.is_time:
            monthly_totals = {
                d.month: sum_overlap(activity.entries, to_ms(month_start(d)), to_ms(month_end(d))) for d in firsts
            }
            progress.activities[activity_id] = TimeYearProgress(
                id=activity_id,
                name=activity.name,
                monthly_totals=monthly_totals,
                year_total=sum(monthly_totals.values()),
                running=is_running(activity),
            )
        else:
            monthly_checks = {d.month: count_checked(activity.checks, month_start(d), month_end(d)) for d in firsts}
            progress.activities[activity_id] = CheckYearProgress(
                id=activity_id,
                name=activity.name,
                monthly_checks=monthly_checks,
                year_checked_count=sum(c.checked for c in monthly_checks.values()),
                year_total_days=sum(c.total for c in monthly_checks.values()),
            )

    return progress


def build_progress(
    period: Period | str, activities: Mapping[str, Activity], reference: Instant | None = None
) -> ProgressSnapshot:
    """Dispatch to the builder for *period*; unknown periods get the day view."""
    match period:
        case Period.WEEK:
            return weekly_progress(activities, reference)
        case Period.MONTH:
            return monthly_progress(activities, reference)
        case Period.YEAR:
            return yearly_progress(activities, reference)
        case _:
            return daily_progress(activities, reference)
