"""Activity store protocol and the JSON-file backend.

The store hands out whole snapshots: ``load()`` returns every activity
and goal, ``save()`` writes them back.  Single process, no concurrent
writers.  The file layout is a single JSON document::

    {
      "activities": {"act_...": {"id": ..., "name": ..., "type": "time", "entries": [...]}},
      "goals": {"goal_...": {"id": ..., "type": "streak", "config": {...}}}
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from ..core.exceptions import DataLoadError
from ..core.types import PathLike
from ..core.utils.file_io import read_json, write_json
from .models import Activity, Goal, load_activities, load_goals


@dataclass
class TrackerData:
    """A full snapshot of stored activities and goals."""

    activities: dict[str, Activity] = field(default_factory=dict)
    goals: dict[str, Goal] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> TrackerData:
        if not isinstance(raw, Mapping):
            raise DataLoadError(f"Expected a JSON object at the top level, got {type(raw).__name__}")
        activities = raw.get("activities") or {}
        goals = raw.get("goals") or {}
        if not isinstance(activities, Mapping):
            raise DataLoadError("'activities' must be an object keyed by activity id")
        if not isinstance(goals, Mapping):
            raise DataLoadError("'goals' must be an object keyed by goal id")
        return cls(activities=load_activities(activities), goals=load_goals(goals))

    def to_dict(self) -> dict[str, Any]:
        return {
            "activities": {key: a.to_dict() for key, a in self.activities.items()},
            "goals": {key: g.to_dict() for key, g in self.goals.items()},
        }


@runtime_checkable
class ActivityStore(Protocol):
    """Protocol for snapshot-based activity storage."""

    def load(self) -> TrackerData:
        """Return the current snapshot (empty if nothing stored yet)."""
        ...

    def save(self, data: TrackerData) -> None:
        """Persist *data*, replacing the previous snapshot."""
        ...


class JsonActivityStore:
    """Activity store backed by a single JSON file."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> TrackerData:
        raw = read_json(self.path)
        if raw is None:
            return TrackerData()
        return TrackerData.from_dict(raw)

    def save(self, data: TrackerData) -> None:
        write_json(self.path, data.to_dict())
        logger.debug(f"Saved {len(data.activities)} activities, {len(data.goals)} goals to {self.path}")


class MemoryActivityStore:
    """In-memory store for tests and embedding.

    Snapshots are copied through ``to_dict``/``from_dict``, so callers never
    share mutable state with the store.
    """

    def __init__(self, data: TrackerData | None = None) -> None:
        self._raw: dict[str, Any] = (data or TrackerData()).to_dict()

    def load(self) -> TrackerData:
        return TrackerData.from_dict(self._raw)

    def save(self, data: TrackerData) -> None:
        self._raw = data.to_dict()
