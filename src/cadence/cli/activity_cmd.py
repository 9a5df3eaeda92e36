"""Activity commands (add, list, start, stop, check, rename, delete, reset)."""

from __future__ import annotations

from datetime import datetime

import click

from .common import get_tracker, handle_errors


@click.command()
@click.argument("name")
@click.option(
    "--type",
    "activity_type",
    type=click.Choice(["time", "check"]),
    default="time",
    show_default=True,
    help="Track durations (time) or daily completions (check).",
)
@click.pass_context
@handle_errors
def add(ctx: click.Context, name: str, activity_type: str) -> None:
    """Create a new activity."""
    activity = get_tracker(ctx).create_activity(name, activity_type)
    click.echo(f"Created {activity.type} activity '{activity.name}' ({activity.id})")


@click.command("list")
@click.pass_context
@handle_errors
def list_activities(ctx: click.Context) -> None:
    """Show all activities with their all-time totals."""
    from cadence.tracking.aggregate import is_running, total_time
    from cadence.tracking.formatting import format_duration
    from cadence.tracking.periods import iso_date

    activities = get_tracker(ctx).list_activities()
    if not activities:
        click.echo("No activities yet. Create one with 'cadence add NAME'.")
        return

    now = datetime.now()
    today = iso_date(now)
    for activity in activities:
        if activity.is_time:
            status = "running" if is_running(activity) else "stopped"
            detail = f"{format_duration(total_time(activity.entries, now))} total, {status}"
        else:
            done = "done today" if (activity.checks or {}).get(today) is True else "not done today"
            detail = f"{sum(1 for v in (activity.checks or {}).values() if v is True)} checks, {done}"
        click.echo(f"  {activity.id}  {activity.name:<24} [{activity.type}] {detail}")


@click.command()
@click.argument("activity_id")
@click.pass_context
@handle_errors
def start(ctx: click.Context, activity_id: str) -> None:
    """Start the timer of a time activity."""
    activity = get_tracker(ctx).start_activity(activity_id)
    click.echo(f"Started '{activity.name}'")


@click.command()
@click.argument("activity_id")
@click.pass_context
@handle_errors
def stop(ctx: click.Context, activity_id: str) -> None:
    """Stop the running timer of a time activity."""
    from cadence.tracking.formatting import format_clock

    activity = get_tracker(ctx).stop_activity(activity_id)
    last = (activity.entries or [])[-1]
    click.echo(f"Stopped '{activity.name}' after {format_clock((last.end or last.start) - last.start)}")


@click.command()
@click.argument("activity_id")
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Day to toggle (default today).")
@click.pass_context
@handle_errors
def check(ctx: click.Context, activity_id: str, day: datetime | None) -> None:
    """Toggle the daily check of a check activity."""
    checked = get_tracker(ctx).toggle_check(activity_id, day.date() if day else None)
    click.echo("Checked" if checked else "Unchecked")


@click.command()
@click.argument("activity_id")
@click.argument("new_name")
@click.pass_context
@handle_errors
def rename(ctx: click.Context, activity_id: str, new_name: str) -> None:
    """Rename an activity."""
    get_tracker(ctx).rename_activity(activity_id, new_name)
    click.echo(f"Renamed to '{new_name}'")


@click.command()
@click.argument("activity_id")
@click.confirmation_option(prompt="Delete this activity and all of its history?")
@click.pass_context
@handle_errors
def delete(ctx: click.Context, activity_id: str) -> None:
    """Delete an activity."""
    get_tracker(ctx).delete_activity(activity_id)
    click.echo(f"Deleted {activity_id}")


@click.command()
@click.argument("activity_id")
@click.confirmation_option(prompt="Clear all recorded time or checks for this activity?")
@click.pass_context
@handle_errors
def reset(ctx: click.Context, activity_id: str) -> None:
    """Clear an activity's history."""
    get_tracker(ctx).reset_activity(activity_id)
    click.echo(f"Reset {activity_id}")
