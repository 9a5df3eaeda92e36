"""Current-streak calculation.

A streak is the run of consecutive local calendar days with qualifying
activity that ends today.  Today gets one day of grace: if nothing has
been done yet today but yesterday qualifies, the streak counts from
yesterday instead of dropping to zero.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, timedelta

from .aggregate import selected_activities
from .models import Activity, ActivitySelection, ActivityType
from .periods import Instant, day_end, day_start, iso_date, to_datetime, to_ms

MAX_LOOKBACK_DAYS = 365


def day_has_activity(
    activities: Mapping[str, Activity],
    selection: ActivitySelection,
    day: date,
    streak_type: ActivityType | str,
) -> bool:
    """Whether any selected activity qualifies on *day*.

    TIME streaks need a closed entry overlapping the day; anything else is
    treated as a CHECK streak and needs the day's check set to ``True``.
    """
    if streak_type == ActivityType.TIME:
        start_ms, end_ms = to_ms(day_start(day)), to_ms(day_end(day))
        for activity in selected_activities(activities, selection, ActivityType.TIME):
            for entry in activity.entries or ():
                if entry.end is None:
                    continue
                if entry.end >= start_ms and entry.start <= end_ms:
                    return True
        return False

    key = iso_date(day)
    return any(
        activity.checks is not None and activity.checks.get(key) is True
        for activity in selected_activities(activities, selection, ActivityType.CHECK)
    )


def current_streak(
    activities: Mapping[str, Activity],
    selection: ActivitySelection,
    streak_type: ActivityType | str,
    today: Instant | None = None,
    lookback_days: int = MAX_LOOKBACK_DAYS,
) -> int:
    """Consecutive qualifying days ending today (or yesterday, via grace).

    The backward walk stops once it is more than *lookback_days* days
    before today, whatever the data looks like.
    """
    today_date = to_datetime(today).date()
    current = today_date
    streak = 0

    while True:
        if day_has_activity(activities, selection, current, streak_type):
            streak += 1
            current -= timedelta(days=1)
        elif streak == 0 and current == today_date:
            current -= timedelta(days=1)
            if not day_has_activity(activities, selection, current, streak_type):
                break
            streak += 1
            current -= timedelta(days=1)
        else:
            break

        if (today_date - current).days > lookback_days:
            break

    return streak
