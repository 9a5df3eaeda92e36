"""Cadence CLI: entry point for activity, goal and progress commands."""

import click

from cadence import __version__


@click.group(name="cadence")
@click.version_option(version=__version__, package_name="cadence")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="YAML or JSON config file.")
@click.option("--data-file", type=click.Path(dir_okay=False), help="Activity data file (overrides config).")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_file: str | None, verbose: bool) -> None:
    """Cadence: track time and daily habits, set goals and keep streaks."""
    from .common import setup_context

    setup_context(ctx, config_file=config_file, data_file=data_file, verbose=verbose)


# Register subcommands
from .activity_cmd import add, check, delete, list_activities, rename, reset, start, stop
from .goal_cmd import goal
from .progress_cmd import progress

for _command in (add, list_activities, start, stop, check, rename, delete, reset, goal, progress):
    main.add_command(_command)
