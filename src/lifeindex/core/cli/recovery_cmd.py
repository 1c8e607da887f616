"""lifeindex recovery: compute the recovery score."""

from __future__ import annotations

import json

import click

from lifeindex.core.exceptions import LifeIndexError


@click.command()
@click.option("--hrv", type=float, default=None, help="Heart rate variability (ms).")
@click.option("--rhr", type=float, default=None, help="Resting heart rate (bpm).")
@click.option("--sleep", "sleep_minutes", type=float, default=None, help="Sleep duration (minutes).")
@click.option("--config", "config_file", default=None, type=click.Path(dir_okay=False), help="YAML/JSON config file.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def recovery(
    ctx: click.Context,
    hrv: float | None,
    rhr: float | None,
    sleep_minutes: float | None,
    config_file: str | None,
    as_json: bool,
) -> None:
    """Compute recovery from HRV, resting heart rate and sleep."""
    from lifeindex.core.cli.common import load_config
    from lifeindex.scoring import RecoveryConfig, RecoveryScorer

    config = load_config(config_file, verbose=(ctx.obj or {}).get("verbose", False))

    try:
        scorer = RecoveryScorer(RecoveryConfig.from_config(config))
        result = scorer.calculate_score(hrv=hrv, resting_heart_rate=rhr, sleep_minutes=sleep_minutes)
    except LifeIndexError as e:
        raise click.ClickException(str(e)) from e

    if result is None:
        click.echo(json.dumps({"score": None}) if as_json else "Insufficient data: no recovery inputs given.")
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"Recovery: {result.value} ({result.label}): {result.description}")
    if result.should_rest:
        click.echo("Rest day recommended.")
