"""Activity tracking: models, period arithmetic, aggregation, streaks, goals and progress.

The aggregation core (``periods``, ``aggregate``, ``streak``, ``goals``,
``progress``) is pure and does no I/O.  ``store`` and ``tracker`` wrap it
with JSON persistence and the mutation operations.
"""

from .aggregate import (
    count_checked,
    count_checks_in_range,
    is_running,
    sum_overlap,
    time_in_range,
    total_time,
)
from .goals import evaluate_all_goals, evaluate_goal, progress_percentage
from .models import (
    ALL_ACTIVITIES,
    Activity,
    ActivitySelection,
    ActivitySubset,
    ActivityType,
    AllActivities,
    CheckCount,
    EvaluationResult,
    Goal,
    GoalConfig,
    GoalType,
    Period,
    TimeEntry,
)
from .periods import PeriodRange, iso_date, period_range, shift_period
from .progress import (
    build_progress,
    daily_progress,
    monthly_progress,
    weekly_progress,
    yearly_progress,
)
from .store import ActivityStore, JsonActivityStore, MemoryActivityStore, TrackerData
from .streak import current_streak
from .tracker import ActivityTracker

__all__ = [
    "ALL_ACTIVITIES",
    "Activity",
    "ActivitySelection",
    "ActivityStore",
    "ActivitySubset",
    "ActivityTracker",
    "ActivityType",
    "AllActivities",
    "CheckCount",
    "EvaluationResult",
    "Goal",
    "GoalConfig",
    "GoalType",
    "JsonActivityStore",
    "MemoryActivityStore",
    "Period",
    "PeriodRange",
    "TimeEntry",
    "TrackerData",
    "build_progress",
    "count_checked",
    "count_checks_in_range",
    "current_streak",
    "daily_progress",
    "evaluate_all_goals",
    "evaluate_goal",
    "is_running",
    "iso_date",
    "monthly_progress",
    "period_range",
    "progress_percentage",
    "shift_period",
    "sum_overlap",
    "time_in_range",
    "total_time",
    "weekly_progress",
    "yearly_progress",
]
