"""Time-range and check aggregators.

Pure functions over an activity snapshot; nothing here mutates its input.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .models import (
    Activity,
    ActivitySelection,
    ActivitySubset,
    ActivityType,
    AllActivities,
    CheckCount,
    TimeEntry,
)
from .periods import Instant, iso_date, iter_days, to_ms


def selected_activities(
    activities: Mapping[str, Activity],
    selection: ActivitySelection,
    activity_type: ActivityType,
) -> Iterator[Activity]:
    """Yield the activities of *activity_type* picked by *selection*.

    Ids that are missing from the snapshot, or that name an activity of
    another type, are skipped.
    """
    match selection:
        case AllActivities():
            candidates: Iterable[Activity | None] = activities.values()
        case ActivitySubset(ids=ids):
            candidates = (activities.get(activity_id) for activity_id in ids)
        case _:
            raise TypeError(f"Unsupported activity selection: {selection!r}")

    for activity in candidates:
        if activity is not None and activity.type == activity_type:
            yield activity


def sum_overlap(entries: Iterable[TimeEntry] | None, range_start: int, range_end: int) -> int:
    """Milliseconds of closed *entries* falling inside ``[range_start, range_end]``.

    Running entries contribute nothing until stopped.  Entries are summed
    independently, so entries that overlap each other are counted twice.
    """
    if not entries:
        return 0

    total = 0
    for entry in entries:
        if entry.end is None:
            continue
        if entry.end < range_start or entry.start > range_end:
            continue
        # Inverted manual edits (end < start) clip to nothing
        total += max(0, min(entry.end, range_end) - max(entry.start, range_start))
    return total


def time_in_range(
    activities: Mapping[str, Activity],
    selection: ActivitySelection,
    range_start: Instant,
    range_end: Instant,
) -> int:
    """Total milliseconds across the selected TIME activities."""
    start_ms, end_ms = to_ms(range_start), to_ms(range_end)
    return sum(
        sum_overlap(activity.entries, start_ms, end_ms)
        for activity in selected_activities(activities, selection, ActivityType.TIME)
    )


def count_checked(checks: Mapping[str, bool] | None, start: Instant, end: Instant) -> CheckCount:
    """Checked local days in ``[start, end]`` out of the inclusive day count."""
    if checks is None:
        return CheckCount()

    checked = total = 0
    for day in iter_days(start, end):
        total += 1
        if checks.get(iso_date(day)) is True:
            checked += 1
    return CheckCount(checked=checked, total=total)


def count_checks_in_range(
    activities: Mapping[str, Activity],
    selection: ActivitySelection,
    start: Instant,
    end: Instant,
) -> int:
    """Checked days summed across the selected CHECK activities."""
    return sum(
        count_checked(activity.checks, start, end).checked
        for activity in selected_activities(activities, selection, ActivityType.CHECK)
    )


def is_running(activity: Activity | None) -> bool:
    """True when a TIME activity's last entry is still open."""
    if activity is None or activity.type != ActivityType.TIME or not activity.entries:
        return False
    return activity.entries[-1].end is None


def total_time(entries: Iterable[TimeEntry] | None, now: Instant) -> int:
    """All-time milliseconds for *entries*, counting a running entry up to *now*."""
    if not entries:
        return 0
    now_ms = to_ms(now)
    return sum(max(0, (entry.end if entry.end is not None else now_ms) - entry.start) for entry in entries)

