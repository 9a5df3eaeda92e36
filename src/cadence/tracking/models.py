"""Activity, goal and result data models.

Plain dataclasses with lenient ``from_dict`` loaders.  Records written by
older versions or by hand are accepted as long as they are well-shaped:
unknown activity/goal types and periods are kept verbatim so that the
aggregation core can apply its fallbacks instead of failing on load.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any, TypeVar

_E = TypeVar("_E", bound=StrEnum)


class ActivityType(StrEnum):
    TIME = "time"
    CHECK = "check"


class GoalType(StrEnum):
    TIME = "time"
    COUNT = "count"
    STREAK = "streak"


class Period(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _coerce(enum_cls: type[_E], value: Any) -> _E | str:
    """Return the enum member for *value*, or the raw string if unrecognised."""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value) if value is not None else ""


def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins; lets loaders accept camelCase and snake_case."""
    for key in keys:
        if key in raw:
            return raw[key]
    return default


# ── Activities ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimeEntry:
    """One start/stop interval in epoch milliseconds. ``end=None`` means running."""

    start: int
    end: int | None = None

    @property
    def running(self) -> bool:
        return self.end is None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> TimeEntry:
        return cls(start=raw.get("start", 0), end=raw.get("end"))

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end}


@dataclass
class Activity:
    """A tracked habit or task.

    Only one of ``entries`` (TIME) and ``checks`` (CHECK) is meaningful for a
    given activity; the other is ``None``.

    Attributes:
        id: Stable identifier (``act_...``).
        name: Display name.
        type: ``ActivityType`` member, or the raw string for legacy records.
        entries: Chronological intervals; at most one open entry, and only last.
        checks: ISO ``YYYY-MM-DD`` local date -> completed flag.
        created_at: Creation time in epoch milliseconds, when known.
    """

    id: str
    name: str
    type: ActivityType | str
    entries: list[TimeEntry] | None = None
    checks: dict[str, bool] | None = None
    created_at: int | None = None

    @property
    def is_time(self) -> bool:
        return self.type == ActivityType.TIME

    @property
    def is_check(self) -> bool:
        return self.type == ActivityType.CHECK

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], activity_id: str | None = None) -> Activity:
        raw_entries = raw.get("entries")
        raw_checks = raw.get("checks")
        return cls(
            id=str(raw.get("id") or activity_id or ""),
            name=str(raw.get("name", "")),
            type=_coerce(ActivityType, raw.get("type")),
            entries=[TimeEntry.from_dict(e) for e in raw_entries if isinstance(e, Mapping)]
            if isinstance(raw_entries, list)
            else None,
            checks=dict(raw_checks) if isinstance(raw_checks, Mapping) else None,
            created_at=_pick(raw, "createdAt", "created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "name": self.name, "type": str(self.type)}
        if self.entries is not None:
            out["entries"] = [e.to_dict() for e in self.entries]
        if self.checks is not None:
            out["checks"] = dict(self.checks)
        if self.created_at is not None:
            out["createdAt"] = self.created_at
        return out


# ── Goals ────────────────────────────────────────────────────────────


@dataclass
class GoalConfig:
    """Type-dependent goal settings.

    TIME uses ``target_minutes`` + ``period``, COUNT uses ``target_count`` +
    ``period``, STREAK uses ``target_days`` only.
    """

    activity_id: str | None = None
    target_minutes: float | None = None
    target_count: int | None = None
    target_days: int | None = None
    period: Period | str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> GoalConfig:
        period = _pick(raw, "period")
        return cls(
            activity_id=_pick(raw, "activityId", "activity_id"),
            target_minutes=_pick(raw, "targetMinutes", "target_minutes"),
            target_count=_pick(raw, "targetCount", "target_count"),
            target_days=_pick(raw, "targetDays", "target_days"),
            period=_coerce(Period, period) if period is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        keys = {
            "activityId": self.activity_id,
            "targetMinutes": self.target_minutes,
            "targetCount": self.target_count,
            "targetDays": self.target_days,
            "period": str(self.period) if self.period is not None else None,
        }
        return {k: v for k, v in keys.items() if v is not None}


@dataclass
class Goal:
    id: str
    name: str
    type: GoalType | str
    config: GoalConfig = field(default_factory=GoalConfig)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], goal_id: str | None = None) -> Goal:
        raw_config = raw.get("config")
        return cls(
            id=str(raw.get("id") or goal_id or ""),
            name=str(raw.get("name", "")),
            type=_coerce(GoalType, raw.get("type")),
            config=GoalConfig.from_dict(raw_config if isinstance(raw_config, Mapping) else {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": str(self.type), "config": self.config.to_dict()}


# ── Activity selection ───────────────────────────────────────────────


@dataclass(frozen=True)
class AllActivities:
    """Select every activity of the type an aggregator works on."""


@dataclass(frozen=True)
class ActivitySubset:
    """Select only the listed activity ids (missing ids contribute nothing)."""

    ids: tuple[str, ...]


ActivitySelection = AllActivities | ActivitySubset

ALL_ACTIVITIES = AllActivities()


def select(activity_id: str | None) -> ActivitySelection:
    """Selection for a goal's ``activity_id``; unset means all activities."""
    return ActivitySubset((activity_id,)) if activity_id else ALL_ACTIVITIES


# ── Results ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CheckCount:
    """Checked days out of the inclusive number of days in a range."""

    checked: int = 0
    total: int = 0


@dataclass(frozen=True)
class EvaluationResult:
    achieved: bool
    current: float
    target: float
    progress_percentage: int
    unit: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_activities(raw: Mapping[str, Any]) -> dict[str, Activity]:
    """Build an activity snapshot from the stored ``{id: record}`` mapping."""
    return {key: Activity.from_dict(value, key) for key, value in raw.items() if isinstance(value, Mapping)}


def load_goals(raw: Mapping[str, Any]) -> dict[str, Goal]:
    """Build a goal snapshot from the stored ``{id: record}`` mapping."""
    return {key: Goal.from_dict(value, key) for key, value in raw.items() if isinstance(value, Mapping)}
