"""Tests for cadence.tracking.tracker."""

import math
from datetime import date, datetime

import pytest

from cadence.core.exceptions import (
    ActivityNotFoundError,
    ActivityStateError,
    GoalNotFoundError,
    GoalValidationError,
)
from cadence.tracking.models import ActivityType, GoalType, Period
from cadence.tracking.progress import WeeklyProgress
from cadence.tracking.store import JsonActivityStore, MemoryActivityStore
from cadence.tracking.tracker import ActivityTracker, generate_id

NOW = datetime(2025, 6, 11, 18, 0)


@pytest.fixture
def tracker():
    return ActivityTracker(MemoryActivityStore())


@pytest.fixture
def reading(tracker):
    return tracker.create_activity("Reading", "time", now=NOW)


@pytest.fixture
def walk(tracker):
    return tracker.create_activity("Walk", ActivityType.CHECK, now=NOW)


class TestIds:
    def test_prefix_and_uniqueness(self):
        a, b = generate_id("act"), generate_id("act")
        assert a.startswith("act_")
        assert len(a.split("_")) == 3
        assert a != b


class TestActivities:
    def test_create(self, tracker, reading, walk):
        assert reading.entries == []
        assert reading.checks is None
        assert walk.checks == {}
        assert {a.id for a in tracker.list_activities()} == {reading.id, walk.id}

    def test_create_validates(self, tracker):
        with pytest.raises(ActivityStateError):
            tracker.create_activity("  ", "time")
        with pytest.raises(ActivityStateError):
            tracker.create_activity("Swim", "laps")

    def test_start_and_stop(self, tracker, reading):
        tracker.start_activity(reading.id, now=datetime(2025, 6, 11, 9, 0))
        assert tracker.get_activity(reading.id).entries[-1].running
        stopped = tracker.stop_activity(reading.id, now=datetime(2025, 6, 11, 9, 30))
        entry = stopped.entries[-1]
        assert entry.end - entry.start == 30 * 60_000
        assert tracker.get_activity(reading.id).entries == stopped.entries

    def test_only_one_timer(self, tracker, reading):
        tracker.start_activity(reading.id)
        with pytest.raises(ActivityStateError, match="already running"):
            tracker.start_activity(reading.id)

    def test_stop_when_not_running(self, tracker, reading):
        with pytest.raises(ActivityStateError, match="not running"):
            tracker.stop_activity(reading.id)

    def test_wrong_type(self, tracker, reading, walk):
        with pytest.raises(ActivityStateError):
            tracker.start_activity(walk.id)
        with pytest.raises(ActivityStateError):
            tracker.toggle_check(reading.id)

    def test_missing_activity(self, tracker):
        with pytest.raises(ActivityNotFoundError):
            tracker.start_activity("act_nope")
        with pytest.raises(ActivityNotFoundError):
            tracker.delete_activity("act_nope")

    def test_toggle_check(self, tracker, walk):
        assert tracker.toggle_check(walk.id, date(2025, 6, 11)) is True
        assert tracker.get_activity(walk.id).checks == {"2025-06-11": True}
        assert tracker.toggle_check(walk.id, "2025-06-11") is False
        assert tracker.get_activity(walk.id).checks == {"2025-06-11": False}

    def test_toggle_check_rejects_malformed_date(self, tracker, walk):
        for bad in ("2025-6-1", "June 1st", ""):
            with pytest.raises(ActivityStateError):
                tracker.toggle_check(walk.id, bad)
        assert tracker.get_activity(walk.id).checks == {}

    def test_rename(self, tracker, walk):
        tracker.rename_activity(walk.id, "  Evening walk ")
        assert tracker.get_activity(walk.id).name == "Evening walk"

    def test_rename_rejects_blank_name(self, tracker, walk):
        with pytest.raises(ActivityStateError):
            tracker.rename_activity(walk.id, "   ")
        assert tracker.get_activity(walk.id).name == "Walk"

    def test_delete(self, tracker, walk):
        tracker.delete_activity(walk.id)
        assert tracker.list_activities() == []

    def test_reset(self, tracker, reading, walk):
        tracker.start_activity(reading.id)
        tracker.toggle_check(walk.id)
        assert tracker.reset_activity(reading.id).entries == []
        assert tracker.reset_activity(walk.id).checks == {}


class TestGoals:
    def test_add_and_list(self, tracker, reading):
        goal = tracker.add_goal("Read", "time", reading.id, 30, "week")
        assert goal.type is GoalType.TIME
        assert goal.config.target_minutes == 30
        assert goal.config.period is Period.WEEK
        assert [g.id for g in tracker.list_goals()] == [goal.id]

    def test_streak_goal_has_no_period(self, tracker, walk):
        goal = tracker.add_goal("", "streak", walk.id, 7, "week")
        assert goal.config.period is None
        assert goal.config.target_days == 7
        assert goal.name == "streak"

    def test_validation(self, tracker, reading, walk):
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "bogus", reading.id, 10)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "time", reading.id, 0)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "time", "act_nope", 10)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "time", walk.id, 10)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "count", reading.id, 10)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "count", walk.id, 10, "fortnight")
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "count", walk.id, 0.5)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "streak", walk.id, 2.5)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "time", reading.id, math.nan)
        with pytest.raises(GoalValidationError):
            tracker.add_goal("x", "time", reading.id, math.inf)
        assert tracker.list_goals() == []

    def test_fractional_time_target_allowed(self, tracker, reading):
        goal = tracker.add_goal("Read", "time", reading.id, 22.5)
        assert goal.config.target_minutes == 22.5

    def test_whole_float_count_target_stored_as_int(self, tracker, walk):
        goal = tracker.add_goal("Walk", "count", walk.id, 3.0, "week")
        assert goal.config.target_count == 3
        assert isinstance(goal.config.target_count, int)

    def test_remove(self, tracker, walk):
        goal = tracker.add_goal("Walk", "count", walk.id, 3, "week")
        tracker.remove_goal(goal.id)
        assert tracker.list_goals() == []
        with pytest.raises(GoalNotFoundError):
            tracker.remove_goal(goal.id)

    def test_evaluate(self, tracker, reading, walk):
        tracker.start_activity(reading.id, now=datetime(2025, 6, 11, 9, 0))
        tracker.stop_activity(reading.id, now=datetime(2025, 6, 11, 9, 45))
        tracker.toggle_check(walk.id, date(2025, 6, 10))
        time_goal = tracker.add_goal("Read", "time", reading.id, 60, "day")
        streak_goal = tracker.add_goal("Walk", "streak", walk.id, 2)

        results = tracker.evaluate_goals(now=NOW)
        assert results[time_goal.id].current == 45
        assert results[time_goal.id].progress_percentage == 75
        assert results[streak_goal.id].current == 1
        assert tracker.evaluate_goal(streak_goal.id, now=NOW) == results[streak_goal.id]

    def test_deleted_activity_goal_evaluates_as_no_data(self, tracker, walk):
        goal = tracker.add_goal("Walk", "count", walk.id, 3, "week")
        tracker.delete_activity(walk.id)
        result = tracker.evaluate_goal(goal.id, now=NOW)
        assert result.current == 0
        assert result.achieved is False

    def test_evaluate_missing_goal(self, tracker):
        with pytest.raises(GoalNotFoundError):
            tracker.evaluate_goal("goal_nope")


class TestProgress:
    def test_week(self, tracker, walk):
        tracker.toggle_check(walk.id, date(2025, 6, 9))
        snapshot = tracker.progress(Period.WEEK, NOW)
        assert isinstance(snapshot, WeeklyProgress)
        assert snapshot.activities[walk.id].checked_count == 1


class TestJsonBackedTracker:
    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "data.json"
        first = ActivityTracker(JsonActivityStore(path))
        walk = first.create_activity("Walk", "check")
        first.toggle_check(walk.id, date(2025, 6, 11))

        second = ActivityTracker(JsonActivityStore(path))
        assert second.get_activity(walk.id).checks == {"2025-06-11": True}
