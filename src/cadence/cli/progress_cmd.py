"""cadence progress: day, week, month and year summaries."""

from __future__ import annotations

import json
from datetime import datetime

import click

from .common import get_tracker, handle_errors


def _render(snapshot) -> list[str]:
    from cadence.tracking.formatting import format_compact, format_duration
    from cadence.tracking.progress import (
        CheckDayProgress,
        CheckRangeProgress,
        CheckYearProgress,
        TimeDayProgress,
        TimeRangeProgress,
        TimeYearProgress,
    )

    lines = []
    for item in snapshot.activities.values():
        match item:
            case TimeDayProgress():
                running = " (running)" if item.running else ""
                lines.append(f"  {item.name:<24} {format_duration(item.time)}{running}")
            case CheckDayProgress():
                lines.append(f"  {item.name:<24} {'done' if item.checked else 'not done'}")
            case TimeRangeProgress():
                cells = " ".join(f"{format_compact(ms):>6}" for ms in item.daily_totals.values())
                lines.append(f"  {item.name:<24} {format_duration(item.total):>8}  {cells}")
            case CheckRangeProgress():
                cells = "".join("x" if v else "." for v in item.daily_checks.values())
                lines.append(f"  {item.name:<24} {item.checked_count}/{item.total_days}  {cells}")
            case TimeYearProgress():
                cells = " ".join(f"{format_compact(ms):>6}" for ms in item.monthly_totals.values())
                lines.append(f"  {item.name:<24} {format_duration(item.year_total):>8}  {cells}")
            case CheckYearProgress():
                cells = " ".join(f"{c.checked:>3}" for c in item.monthly_checks.values())
                lines.append(f"  {item.name:<24} {item.year_checked_count}/{item.year_total_days}  {cells}")
    return lines


@click.command()
@click.option(
    "--period",
    type=click.Choice(["day", "week", "month", "year"]),
    default="day",
    show_default=True,
)
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Any day inside the period.")
@click.option("--offset", type=int, default=0, help="Shift by N periods (negative goes back).")
@click.option("--json", "as_json", is_flag=True, help="Print the raw snapshot as JSON.")
@click.pass_context
@handle_errors
def progress(ctx: click.Context, period: str, day: datetime | None, offset: int, as_json: bool) -> None:
    """Show progress for the period containing --date (default today)."""
    from cadence.tracking.formatting import period_label
    from cadence.tracking.periods import shift_period

    reference = shift_period(period, day or datetime.now(), offset)
    snapshot = get_tracker(ctx).progress(period, reference)

    if as_json:
        click.echo(json.dumps(snapshot.to_dict(), indent=2))
        return

    click.echo(period_label(period, reference))
    lines = _render(snapshot)
    click.echo("\n".join(lines) if lines else "  No activities yet.")
