"""lifeindex score: compute a day's LifeIndex from a readings file."""

from __future__ import annotations

import json

import click

from lifeindex.core.exceptions import LifeIndexError


@click.command()
@click.argument("readings_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--at", "at_", default=None, help="Instant to score at (ISO-8601). Defaults to now.")
@click.option("--final", is_flag=True, help="Score against full-day targets (past days).")
@click.option("--config", "config_file", default=None, type=click.Path(dir_okay=False), help="YAML/JSON config file.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def score(
    ctx: click.Context,
    readings_file: str,
    at_: str | None,
    final: bool,
    config_file: str | None,
    as_json: bool,
) -> None:
    """Score the readings in READINGS_FILE (a YAML or JSON mapping)."""
    from lifeindex.core.cli.common import load_config, load_readings, parse_instant
    from lifeindex.scoring import LifeIndexScorer, MetricCatalog, explanation_for

    config = load_config(config_file, verbose=(ctx.obj or {}).get("verbose", False))
    readings = load_readings(readings_file)
    at = parse_instant(at_)

    try:
        scorer = LifeIndexScorer(MetricCatalog.from_config(config))
        result = scorer.calculate_final_score(readings) if final else scorer.calculate_score(readings, at=at)
    except LifeIndexError as e:
        raise click.ClickException(str(e)) from e

    if result is None:
        if as_json:
            click.echo(json.dumps({"score": None, "label": "Insufficient data"}))
        else:
            click.echo("Insufficient data: no metrics present.")
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    from rich.console import Console
    from rich.table import Table

    console = Console()
    console.print(f"[bold]LifeIndex:[/bold] {result.value} ({result.label}), {result.mode.value} score")
    if not final:
        console.print(explanation_for(result.value, at))

    table = Table(title="Score Breakdown")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Contribution", justify="right")
    for entry in result.breakdown:
        table.add_row(
            entry.metric.display_name,
            f"{entry.raw_value:g} {entry.metric.unit}",
            f"{entry.normalized_score * 100:.0f}%",
            f"{entry.contribution_pct:.1f}%",
        )
    console.print(table)

    if result.top_contributor:
        console.print(f"Top contributor: {result.top_contributor.metric.display_name}")
    if result.weakest_area:
        console.print(f"Weakest area: {result.weakest_area.metric.display_name}")
