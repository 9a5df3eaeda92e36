"""Tests for cadence.core.exceptions."""

import pytest

from cadence.core.exceptions import (
    ActivityNotFoundError,
    ActivityStateError,
    CadenceError,
    ConfigurationError,
    DataLoadError,
    FileIOError,
    GoalNotFoundError,
    GoalValidationError,
)


def test_hierarchy():
    """All exceptions should inherit from CadenceError."""
    for exc_cls in [
        ConfigurationError,
        DataLoadError,
        FileIOError,
        ActivityNotFoundError,
        GoalNotFoundError,
        ActivityStateError,
        GoalValidationError,
    ]:
        assert issubclass(exc_cls, CadenceError)


def test_exception_message():
    err = ActivityNotFoundError("Activity not found: act_x")
    assert "act_x" in str(err)


def test_catch_base():
    with pytest.raises(CadenceError):
        raise GoalValidationError("bad target")
