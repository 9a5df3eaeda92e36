"""Shared infrastructure: configuration, exceptions, logging, file I/O."""

from .config import Config, get_config, reset_config
from .exceptions import (
    ActivityNotFoundError,
    ActivityStateError,
    CadenceError,
    ConfigurationError,
    DataLoadError,
    FileIOError,
    GoalNotFoundError,
    GoalValidationError,
)

__all__ = [
    "ActivityNotFoundError",
    "ActivityStateError",
    "CadenceError",
    "Config",
    "ConfigurationError",
    "DataLoadError",
    "FileIOError",
    "GoalNotFoundError",
    "GoalValidationError",
    "get_config",
    "reset_config",
]
