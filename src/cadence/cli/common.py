"""Shared setup logic for CLI commands."""

from __future__ import annotations

import functools
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from cadence.core.exceptions import CadenceError

CADENCE_DIR = Path.home() / ".cadence"
CONFIG_PATH = CADENCE_DIR / "config.yaml"

F = TypeVar("F", bound=Callable[..., Any])


def load_config(config_file: str | None = None):
    """Load config from *config_file*, falling back to ~/.cadence/config.yaml."""
    from cadence.core.config import Config

    path = config_file or (str(CONFIG_PATH) if CONFIG_PATH.exists() else None)
    return Config(config_file=path, data_dir=str(CADENCE_DIR))


def setup_context(ctx: click.Context, *, config_file: str | None, data_file: str | None, verbose: bool) -> None:
    """Load and validate config, configure logging, and stash the settings on the click context."""
    from cadence.core.utils.logging import setup_logging

    try:
        config = load_config(config_file)
        settings = config.validated()
        level = "DEBUG" if verbose else settings.logging.level
        setup_logging(level=level, log_file=settings.logging.file or None)
    except CadenceError as e:
        raise click.ClickException(str(e)) from e

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["settings"] = settings
    ctx.obj["data_file"] = data_file or str(settings.paths.data_file or config.get_data_file())
    ctx.obj["lookback_days"] = settings.tracking.streak_lookback_days


def get_tracker(ctx: click.Context):
    """Build an ActivityTracker over the JSON data file chosen at startup."""
    from cadence.tracking import ActivityTracker, JsonActivityStore

    obj = ctx.find_root().obj or {}
    return ActivityTracker(JsonActivityStore(obj["data_file"]), lookback_days=obj["lookback_days"])


def handle_errors(func: F) -> F:
    """Turn library errors into a one-line message and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except CadenceError as e:
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore[return-value]
