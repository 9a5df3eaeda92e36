"""Tests for cadence.tracking.goals."""

import math
from datetime import datetime, timedelta

import pytest

from cadence.tracking.goals import UNKNOWN_RESULT, evaluate_all_goals, evaluate_goal, progress_percentage
from cadence.tracking.models import (
    Activity,
    ActivityType,
    EvaluationResult,
    Goal,
    GoalConfig,
    GoalType,
    Period,
    TimeEntry,
)
from cadence.tracking.periods import to_ms

NOW = datetime(2025, 6, 11, 18, 0)


def _reading(*minutes: int) -> dict[str, Activity]:
    """A TIME activity with back-to-back entries of the given lengths, starting 08:00 on NOW's day."""
    entries = []
    start = datetime(2025, 6, 11, 8, 0)
    for m in minutes:
        end = start + timedelta(minutes=m)
        entries.append(TimeEntry(to_ms(start), to_ms(end)))
        start = end + timedelta(minutes=5)
    return {"read": Activity("read", "Read", ActivityType.TIME, entries=entries)}


def _time_goal(target: float | None, period: Period | str = Period.DAY, activity_id: str = "read") -> Goal:
    return Goal("g1", "Read daily", GoalType.TIME, GoalConfig(activity_id=activity_id, target_minutes=target, period=period))


class TestProgressPercentage:
    def test_rounds_to_nearest(self):
        assert progress_percentage(59, 60) == 98

    def test_halves_round_up(self):
        assert progress_percentage(1, 8) == 13
        assert progress_percentage(1, 200) == 1

    def test_clamped(self):
        assert progress_percentage(150, 100) == 100
        assert progress_percentage(-5, 100) == 0

    def test_non_positive_target(self):
        assert progress_percentage(10, 0) == 0
        assert progress_percentage(10, -3) == 0


class TestTimeGoal:
    def test_exactly_on_target(self):
        result = evaluate_goal(_time_goal(60), _reading(60), NOW)
        assert result == EvaluationResult(achieved=True, current=60, target=60, progress_percentage=100, unit="minutes")

    def test_just_short(self):
        result = evaluate_goal(_time_goal(60), _reading(59), NOW)
        assert result.achieved is False
        assert result.current == 59
        assert result.progress_percentage == 98

    def test_over_target_is_capped(self):
        result = evaluate_goal(_time_goal(100), _reading(90, 60), NOW)
        assert result.current == 150
        assert result.achieved is True
        assert result.progress_percentage == 100

    def test_partial_minutes_are_floored(self):
        start = datetime(2025, 6, 11, 8, 0)
        acts = {"read": Activity("read", "Read", ActivityType.TIME, entries=[TimeEntry(to_ms(start), to_ms(start) + 119_999)])}
        assert evaluate_goal(_time_goal(10), acts, NOW).current == 1

    def test_running_entry_ignored(self):
        acts = _reading(30)
        acts["read"].entries.append(TimeEntry(to_ms(datetime(2025, 6, 11, 17, 0)), None))
        assert evaluate_goal(_time_goal(60), acts, NOW).current == 30

    def test_week_period_includes_earlier_days(self):
        acts = _reading(30)
        monday = datetime(2025, 6, 9, 8, 0)
        acts["read"].entries.insert(0, TimeEntry(to_ms(monday), to_ms(monday + timedelta(minutes=40))))
        assert evaluate_goal(_time_goal(60, Period.WEEK), acts, NOW).current == 70
        assert evaluate_goal(_time_goal(60, Period.DAY), acts, NOW).current == 30

    def test_unknown_period_uses_day(self):
        assert evaluate_goal(_time_goal(60, "fortnight"), _reading(30), NOW).current == 30

    def test_missing_activity(self):
        result = evaluate_goal(_time_goal(60, activity_id="gone"), _reading(30), NOW)
        assert result.current == 0
        assert result.achieved is False

    def test_zero_target_has_no_division_error(self):
        result = evaluate_goal(_time_goal(0), _reading(30), NOW)
        assert result.progress_percentage == 0
        assert not math.isnan(result.progress_percentage)

    def test_missing_target_is_never_achieved(self):
        result = evaluate_goal(_time_goal(None), _reading(30), NOW)
        assert result.target == 0
        assert result.progress_percentage == 0
        assert result.achieved is False

    @pytest.mark.parametrize("target", [None, "60", math.nan, math.inf, True])
    def test_unusable_target_with_missing_activity(self, target):
        result = evaluate_goal(_time_goal(target, activity_id="gone"), {}, NOW)
        assert result == EvaluationResult(False, 0, 0, 0, "minutes")


class TestCountGoal:
    @pytest.fixture
    def walks(self):
        checks = {"2025-06-09": True, "2025-06-10": True, "2025-06-11": True, "2025-06-08": True}
        return {"walk": Activity("walk", "Walk", ActivityType.CHECK, checks=checks)}

    def test_week(self, walks):
        goal = Goal("g2", "Walk", GoalType.COUNT, GoalConfig(activity_id="walk", target_count=5, period=Period.WEEK))
        result = evaluate_goal(goal, walks, NOW)
        assert result == EvaluationResult(False, 3, 5, 60, "completions")

    def test_month_achieved(self, walks):
        goal = Goal("g2", "Walk", GoalType.COUNT, GoalConfig(activity_id="walk", target_count=4, period="month"))
        result = evaluate_goal(goal, walks, NOW)
        assert result.current == 4
        assert result.achieved is True
        assert result.progress_percentage == 100


class TestStreakGoal:
    def test_check_activity(self):
        checks = {"2025-06-10": True, "2025-06-09": True}
        acts = {"walk": Activity("walk", "Walk", ActivityType.CHECK, checks=checks)}
        goal = Goal("g3", "Streak", GoalType.STREAK, GoalConfig(activity_id="walk", target_days=7))
        result = evaluate_goal(goal, acts, NOW)
        assert result == EvaluationResult(False, 2, 7, 29, "days")

    def test_type_comes_from_activity(self):
        goal = Goal("g3", "Streak", GoalType.STREAK, GoalConfig(activity_id="read", target_days=1))
        result = evaluate_goal(goal, _reading(10), NOW)
        assert result.current == 1
        assert result.achieved is True

    def test_missing_activity_defaults_to_check_mode(self):
        goal = Goal("g3", "Streak", GoalType.STREAK, GoalConfig(activity_id="gone", target_days=3))
        result = evaluate_goal(goal, _reading(10), NOW)
        assert result == EvaluationResult(False, 0, 3, 0, "days")

    def test_lookback_is_passed_through(self):
        checks = {(datetime(2025, 6, 11) - timedelta(days=d)).date().isoformat(): True for d in range(50)}
        acts = {"walk": Activity("walk", "Walk", ActivityType.CHECK, checks=checks)}
        goal = Goal("g3", "Streak", GoalType.STREAK, GoalConfig(activity_id="walk", target_days=100))
        assert evaluate_goal(goal, acts, NOW, lookback_days=5).current == 6


class TestDispatch:
    def test_unknown_type(self):
        goal = Goal("g4", "Bogus", "bogus", GoalConfig(activity_id="read"))
        result = evaluate_goal(goal, _reading(30), NOW)
        assert result == UNKNOWN_RESULT
        assert result.to_dict() == {
            "achieved": False,
            "current": 0,
            "target": 0,
            "progress_percentage": 0,
            "unit": "unknown",
        }

    def test_evaluate_all_goals(self):
        goals = {
            "g1": _time_goal(60),
            "g4": Goal("g4", "Bogus", "bogus", GoalConfig()),
        }
        results = evaluate_all_goals(goals, _reading(60), NOW)
        assert set(results) == {"g1", "g4"}
        assert results["g1"].achieved is True
        assert results["g4"].unit == "unknown"

    def test_evaluation_is_idempotent(self):
        acts = _reading(45)
        goal = _time_goal(60)
        assert evaluate_goal(goal, acts, NOW) == evaluate_goal(goal, acts, NOW)
