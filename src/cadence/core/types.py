"""Shared type aliases used across cadence."""

from pathlib import Path

# Path types
PathLike = str | Path
