"""Activity tracker service.

Every mutation loads a fresh snapshot from the store, changes it, and
saves it back.  Queries (goal evaluation, progress) are handed a snapshot
and delegate to the pure aggregation core.  "Now" is always a parameter
so callers and tests control the clock.
"""

from __future__ import annotations

import math
import time
import uuid
from dataclasses import replace
from datetime import date

from loguru import logger

from ..core.exceptions import (
    ActivityNotFoundError,
    ActivityStateError,
    GoalNotFoundError,
    GoalValidationError,
)
from .aggregate import is_running
from .goals import evaluate_all_goals, evaluate_goal
from .models import (
    Activity,
    ActivityType,
    EvaluationResult,
    Goal,
    GoalConfig,
    GoalType,
    Period,
    TimeEntry,
)
from .periods import Instant, iso_date, to_datetime, to_ms
from .progress import ProgressSnapshot, build_progress
from .store import ActivityStore, TrackerData
from .streak import MAX_LOOKBACK_DAYS

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    digits = []
    while True:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
        if n == 0:
            return "".join(reversed(digits))


def generate_id(prefix: str = "act") -> str:
    """``<prefix>_<base36 ms>_<9 random hex chars>``."""
    return f"{prefix}_{_base36(int(time.time() * 1000))}_{uuid.uuid4().hex[:9]}"


class ActivityTracker:
    """Create and update activities and goals, and report on them."""

    def __init__(self, store: ActivityStore, lookback_days: int = MAX_LOOKBACK_DAYS) -> None:
        self.store = store
        self.lookback_days = lookback_days

    # -- Helpers ------------------------------------------------------------

    @staticmethod
    def _require(data: TrackerData, activity_id: str) -> Activity:
        activity = data.activities.get(activity_id)
        if activity is None:
            raise ActivityNotFoundError(f"Activity not found: {activity_id}")
        return activity

    @staticmethod
    def _require_type(activity: Activity, activity_type: ActivityType) -> None:
        if activity.type != activity_type:
            raise ActivityStateError(f"Not a {activity_type}-based activity: {activity.id}")

    # -- Activities ---------------------------------------------------------

    def list_activities(self) -> list[Activity]:
        return list(self.store.load().activities.values())

    def get_activity(self, activity_id: str) -> Activity:
        return self._require(self.store.load(), activity_id)

    def create_activity(self, name: str, activity_type: ActivityType | str, now: Instant | None = None) -> Activity:
        """Create a TIME or CHECK activity with an empty history."""
        name = name.strip()
        if not name:
            raise ActivityStateError("Activity name must not be empty")
        try:
            kind = ActivityType(activity_type)
        except ValueError as e:
            raise ActivityStateError(f"Unknown activity type: {activity_type!r}") from e

        data = self.store.load()
        activity = Activity(
            id=generate_id("act"),
            name=name,
            type=kind,
            entries=[] if kind == ActivityType.TIME else None,
            checks={} if kind == ActivityType.CHECK else None,
            created_at=to_ms(to_datetime(now)),
        )
        data.activities[activity.id] = activity
        self.store.save(data)
        logger.info(f"Created {kind} activity {activity.id} ({name})")
        return activity

    def start_activity(self, activity_id: str, now: Instant | None = None) -> Activity:
        """Open a new entry; an activity runs at most one timer at a time."""
        data = self.store.load()
        activity = self._require(data, activity_id)
        self._require_type(activity, ActivityType.TIME)
        if is_running(activity):
            raise ActivityStateError(f"Activity already running: {activity_id}")

        activity.entries = [*(activity.entries or []), TimeEntry(start=to_ms(to_datetime(now)))]
        self.store.save(data)
        logger.info(f"Started {activity_id}")
        return activity

    def stop_activity(self, activity_id: str, now: Instant | None = None) -> Activity:
        """Close the running entry."""
        data = self.store.load()
        activity = self._require(data, activity_id)
        self._require_type(activity, ActivityType.TIME)
        if not is_running(activity):
            raise ActivityStateError(f"Activity not running: {activity_id}")

        entries = list(activity.entries or [])
        entries[-1] = replace(entries[-1], end=to_ms(to_datetime(now)))
        activity.entries = entries
        self.store.save(data)
        logger.info(f"Stopped {activity_id}")
        return activity

    def toggle_check(self, activity_id: str, day: date | str | None = None) -> bool:
        """Flip the check for *day* (default today) and return the new state."""
        data = self.store.load()
        activity = self._require(data, activity_id)
        self._require_type(activity, ActivityType.CHECK)

        if isinstance(day, str):
            try:
                day = date.fromisoformat(day)
            except ValueError as e:
                raise ActivityStateError(f"Invalid date {day!r}, expected YYYY-MM-DD") from e
        key = iso_date(day)
        checks = dict(activity.checks or {})
        checks[key] = not checks.get(key, False)
        activity.checks = checks
        self.store.save(data)
        logger.info(f"Check {activity_id} {key} -> {checks[key]}")
        return checks[key]

    def rename_activity(self, activity_id: str, new_name: str) -> Activity:
        new_name = new_name.strip()
        if not new_name:
            raise ActivityStateError("Activity name must not be empty")
        data = self.store.load()
        activity = self._require(data, activity_id)
        activity.name = new_name
        self.store.save(data)
        logger.info(f"Renamed {activity_id} to {new_name}")
        return activity

    def delete_activity(self, activity_id: str) -> None:
        """Remove an activity.  Goals that reference it are left alone and evaluate as "no data"."""
        data = self.store.load()
        self._require(data, activity_id)
        del data.activities[activity_id]
        self.store.save(data)
        logger.info(f"Deleted activity {activity_id}")

    def reset_activity(self, activity_id: str) -> Activity:
        """Clear all history (entries or checks) but keep the activity."""
        data = self.store.load()
        activity = self._require(data, activity_id)
        if activity.is_time:
            activity.entries = []
        else:
            activity.checks = {}
        self.store.save(data)
        logger.info(f"Reset activity {activity_id}")
        return activity

    # -- Goals --------------------------------------------------------------

    def list_goals(self) -> list[Goal]:
        return list(self.store.load().goals.values())

    def add_goal(
        self,
        name: str,
        goal_type: GoalType | str,
        activity_id: str,
        target: float,
        period: Period | str | None = None,
    ) -> Goal:
        """Validate and store a goal.

        Raises:
            GoalValidationError: unknown type or period, a target that is not a
                positive finite number (or not whole for count and streak goals),
                missing activity, or an activity of the wrong kind.
        """
        try:
            kind = GoalType(goal_type)
        except ValueError as e:
            raise GoalValidationError(f"Unknown goal type: {goal_type!r}") from e
        if isinstance(target, bool) or not isinstance(target, int | float) or not math.isfinite(target):
            raise GoalValidationError(f"Goal target must be a finite number, got {target!r}")
        if target <= 0:
            raise GoalValidationError(f"Goal target must be positive, got {target!r}")
        if kind != GoalType.TIME and target != int(target):
            raise GoalValidationError(f"{kind.capitalize()} goals need a whole-number target, got {target!r}")

        data = self.store.load()
        activity = data.activities.get(activity_id)
        if activity is None:
            raise GoalValidationError(f"Goal references unknown activity: {activity_id}")

        config = GoalConfig(activity_id=activity_id)
        if kind != GoalType.STREAK:
            try:
                config.period = Period(period or Period.DAY)
            except ValueError as e:
                raise GoalValidationError(f"Unknown period: {period!r}") from e

        match kind:
            case GoalType.TIME:
                if not activity.is_time:
                    raise GoalValidationError("Time goals need a time-based activity")
                config.target_minutes = target
            case GoalType.COUNT:
                if not activity.is_check:
                    raise GoalValidationError("Count goals need a check-based activity")
                config.target_count = int(target)
            case GoalType.STREAK:
                config.target_days = int(target)

        goal = Goal(id=generate_id("goal"), name=name.strip() or str(kind), type=kind, config=config)
        data.goals[goal.id] = goal
        self.store.save(data)
        logger.info(f"Added {kind} goal {goal.id} for {activity_id}")
        return goal

    def remove_goal(self, goal_id: str) -> None:
        data = self.store.load()
        if goal_id not in data.goals:
            raise GoalNotFoundError(f"Goal not found: {goal_id}")
        del data.goals[goal_id]
        self.store.save(data)

    # -- Reports ------------------------------------------------------------

    def evaluate_goal(self, goal_id: str, now: Instant | None = None) -> EvaluationResult:
        data = self.store.load()
        goal = data.goals.get(goal_id)
        if goal is None:
            raise GoalNotFoundError(f"Goal not found: {goal_id}")
        return evaluate_goal(goal, data.activities, now, self.lookback_days)

    def evaluate_goals(self, now: Instant | None = None) -> dict[str, EvaluationResult]:
        data = self.store.load()
        return evaluate_all_goals(data.goals, data.activities, now, self.lookback_days)

    def progress(self, period: Period | str = Period.DAY, reference: Instant | None = None) -> ProgressSnapshot:
        return build_progress(period, self.store.load().activities, reference)
