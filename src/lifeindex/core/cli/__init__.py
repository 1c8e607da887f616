"""LifeIndex CLI: entry point for the score and recovery commands."""

import click

from lifeindex import __version__


@click.group()
@click.version_option(version=__version__, package_name="lifeindex")
@click.option("--verbose", "-v", is_flag=True, help="Log scoring details at DEBUG level.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """LifeIndex: wellness and recovery scores from your health readings."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register subcommands
from .recovery_cmd import recovery
from .score_cmd import score

main.add_command(score)
main.add_command(recovery)
