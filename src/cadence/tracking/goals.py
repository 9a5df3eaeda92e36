"""Goal evaluation.

``evaluate_goal`` maps a goal definition and an activity snapshot to an
``EvaluationResult``.  It is stateless: results are recomputed on every
call and never stored.  Corrupt or legacy goals degrade to neutral
results instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime

from loguru import logger

from .aggregate import count_checks_in_range, time_in_range
from .models import Activity, ActivityType, EvaluationResult, Goal, GoalType, select
from .periods import Instant, period_range, to_datetime
from .streak import MAX_LOOKBACK_DAYS, current_streak

MS_PER_MINUTE = 60_000

UNKNOWN_RESULT = EvaluationResult(achieved=False, current=0, target=0, progress_percentage=0, unit="unknown")


def _is_number(value: object) -> bool:
    return not isinstance(value, bool) and isinstance(value, int | float) and math.isfinite(value)


def _number(value: object) -> float:
    """Finite number or 0; targets come from user-edited files."""
    return value if _is_number(value) else 0


def progress_percentage(current: float, target: float) -> int:
    """``current / target`` as a whole percentage clamped to ``[0, 100]``.

    Halves round up.  A non-positive target yields 0.
    """
    if target <= 0:
        return 0
    pct = math.floor(current / target * 100 + 0.5)
    return max(0, min(100, pct))


def _result(current: float, target: object, unit: str) -> EvaluationResult:
    target_value = _number(target)
    return EvaluationResult(
        achieved=_is_number(target) and current >= target_value,
        current=current,
        target=target_value,
        progress_percentage=progress_percentage(current, target_value),
        unit=unit,
    )


def evaluate_time_goal(goal: Goal, activities: Mapping[str, Activity], now: datetime) -> EvaluationResult:
    config = goal.config
    rng = period_range(config.period, now)
    total_ms = time_in_range(activities, select(config.activity_id), rng.start_ms, rng.end_ms)
    minutes = max(0, math.floor(_number(total_ms) / MS_PER_MINUTE))
    return _result(minutes, config.target_minutes, "minutes")


def evaluate_count_goal(goal: Goal, activities: Mapping[str, Activity], now: datetime) -> EvaluationResult:
    config = goal.config
    rng = period_range(config.period, now)
    count = count_checks_in_range(activities, select(config.activity_id), rng.start, rng.end)
    return _result(count, config.target_count, "completions")


def evaluate_streak_goal(
    goal: Goal,
    activities: Mapping[str, Activity],
    now: datetime,
    lookback_days: int = MAX_LOOKBACK_DAYS,
) -> EvaluationResult:
    config = goal.config
    activity = activities.get(config.activity_id) if config.activity_id else None
    if activity is None and config.activity_id:
        logger.debug(f"Goal {goal.id} references missing activity {config.activity_id}")
    # The referenced activity decides the mode; missing or non-TIME means CHECK
    streak_type = ActivityType.TIME if activity is not None and activity.is_time else ActivityType.CHECK
    streak = current_streak(activities, select(config.activity_id), streak_type, now, lookback_days)
    return _result(streak, config.target_days, "days")


def evaluate_goal(
    goal: Goal,
    activities: Mapping[str, Activity],
    now: Instant | None = None,
    lookback_days: int = MAX_LOOKBACK_DAYS,
) -> EvaluationResult:
    """Evaluate one goal against the activity snapshot as of *now*."""
    now_dt = to_datetime(now)
    match goal.type:
        case GoalType.TIME:
            return evaluate_time_goal(goal, activities, now_dt)
        case GoalType.COUNT:
            return evaluate_count_goal(goal, activities, now_dt)
        case GoalType.STREAK:
            return evaluate_streak_goal(goal, activities, now_dt, lookback_days)
        case _:
            logger.warning(f"Unknown goal type {goal.type!r} for goal {goal.id}")
            return UNKNOWN_RESULT


def evaluate_all_goals(
    goals: Mapping[str, Goal],
    activities: Mapping[str, Activity],
    now: Instant | None = None,
    lookback_days: int = MAX_LOOKBACK_DAYS,
) -> dict[str, EvaluationResult]:
    """Evaluate every goal with one shared *now*, keyed by goal id."""
    now_dt = to_datetime(now)
    return {goal_id: evaluate_goal(goal, activities, now_dt, lookback_days) for goal_id, goal in goals.items()}
