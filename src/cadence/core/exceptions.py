"""
Cadence exception hierarchy.

All cadence exceptions inherit from CadenceError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.

The aggregation core never raises these for semantically incomplete data;
they belong to the store, tracker and configuration layers.
"""


class CadenceError(Exception):
    """Base exception class for all cadence errors."""


class ConfigurationError(CadenceError):
    """Raised for configuration errors (missing keys, invalid values)."""


class DataLoadError(CadenceError):
    """Raised when a data file cannot be read or is not a well-formed snapshot."""


class FileIOError(CadenceError):
    """Raised for file I/O errors."""


class ActivityNotFoundError(CadenceError):
    """Raised when an activity id does not exist in the store."""


class GoalNotFoundError(CadenceError):
    """Raised when a goal id does not exist in the store."""


class ActivityStateError(CadenceError):
    """Raised for invalid activity operations (wrong type, already running, not running)."""


class GoalValidationError(CadenceError):
    """Raised when a new goal definition is rejected by the creation path."""
