"""cadence goal: add, list and remove goals."""

from __future__ import annotations

import click

from .common import get_tracker, handle_errors


@click.group()
def goal() -> None:
    """Manage goals and see how they are going."""


@goal.command("add")
@click.argument("activity_id")
@click.option("--type", "goal_type", type=click.Choice(["time", "count", "streak"]), required=True)
@click.option("--target", type=float, required=True, help="Minutes, completions or days.")
@click.option(
    "--period",
    type=click.Choice(["day", "week", "month", "year"]),
    default="day",
    show_default=True,
    help="Ignored for streak goals.",
)
@click.option("--name", default="", help="Display name.")
@click.pass_context
@handle_errors
def add_goal(ctx: click.Context, activity_id: str, goal_type: str, target: float, period: str, name: str) -> None:
    """Add a goal for ACTIVITY_ID."""
    new_goal = get_tracker(ctx).add_goal(name, goal_type, activity_id, target, period)
    click.echo(f"Added {new_goal.type} goal '{new_goal.name}' ({new_goal.id})")


@goal.command("list")
@click.pass_context
@handle_errors
def list_goals(ctx: click.Context) -> None:
    """Evaluate every goal as of now."""
    tracker = get_tracker(ctx)
    goals = {g.id: g for g in tracker.list_goals()}
    if not goals:
        click.echo("No goals yet. Add one with 'cadence goal add'.")
        return

    for goal_id, result in tracker.evaluate_goals().items():
        mark = "x" if result.achieved else " "
        bar = "#" * (result.progress_percentage // 10)
        click.echo(
            f"  [{mark}] {goals[goal_id].name:<24} {bar:<10} {result.progress_percentage:>3}% "
            f"({result.current:g}/{result.target:g} {result.unit})  {goal_id}"
        )


@goal.command("remove")
@click.argument("goal_id")
@click.pass_context
@handle_errors
def remove_goal(ctx: click.Context, goal_id: str) -> None:
    """Remove a goal."""
    get_tracker(ctx).remove_goal(goal_id)
    click.echo(f"Removed {goal_id}")
