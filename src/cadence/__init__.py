"""cadence: personal activity tracking with goals, streaks and period progress."""

__version__ = "0.1.0"
