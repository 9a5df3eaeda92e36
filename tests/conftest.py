"""Shared test fixtures for cadence."""

import os
import tempfile
from datetime import datetime

import pytest

from cadence.core.config import reset_config
from cadence.tracking.models import Activity, ActivityType, TimeEntry
from cadence.tracking.periods import to_ms


def ms(*args: int) -> int:
    """Epoch ms for a local ``datetime(*args)``."""
    return to_ms(datetime(*args))


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "data_file": os.path.join(tmp_dir, "data", "activities.json"),
        },
        "tracking": {"streak_lookback_days": 30},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def activities():
    """One TIME and one CHECK activity with history in the week of Wed 2025-06-11."""
    return {
        "act_read": Activity(
            id="act_read",
            name="Reading",
            type=ActivityType.TIME,
            entries=[
                TimeEntry(ms(2025, 6, 9, 8, 0), ms(2025, 6, 9, 8, 30)),
                TimeEntry(ms(2025, 6, 11, 7, 0), ms(2025, 6, 11, 7, 45)),
                TimeEntry(ms(2025, 6, 11, 17, 0), None),
            ],
        ),
        "act_walk": Activity(
            id="act_walk",
            name="Walk",
            type=ActivityType.CHECK,
            checks={"2025-06-09": True, "2025-06-10": True, "2025-06-11": False, "2025-05-31": True},
        ),
    }
