"""Click CLI commands for chartcore."""

from __future__ import annotations

from typing import Any, TextIO

import click
import structlog

from chartcore.config import AppConfig
from chartcore.engine.indicators import (
    INDICATOR_REGISTRY,
    IndicatorParams,
    IndicatorType,
    compute_indicator,
)
from chartcore.engine.resampler import resample
from chartcore.errors import CandleFormatError
from chartcore.serialization import dump_candles, dump_points, load_candles
from chartcore.types import Candle, PriceSource, Timeframe
from chartcore.utils.logging import bind_run_context, setup_logging

log = structlog.get_logger()

_TIMEFRAME_CHOICE = click.Choice([tf.value for tf in Timeframe])


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """chartcore: resample 1-minute candles and compute indicators.

    Candle input is a JSON array of {timestamp, open, high, low, close,
    volume} objects with epoch-millisecond timestamps. Pass - to read stdin.
    """
    config = AppConfig()
    setup_logging(level=config.log_level, log_format=config.log_format)
    ctx.obj = config


def _read_candles(source: TextIO) -> list[Candle]:
    try:
        candles = load_candles(source.read())
    except CandleFormatError as e:
        raise click.ClickException(f"Invalid candle input: {e}") from e
    log.info("candles_loaded", count=len(candles), source=source.name)
    return candles


@cli.command(name="resample")
@click.argument("input_file", type=click.File("r"))
@click.option(
    "--timeframe",
    "-t",
    type=_TIMEFRAME_CHOICE,
    default=None,
    help="Target timeframe (default: CHARTCORE_DEFAULT_TIMEFRAME).",
)
@click.pass_obj
def resample_command(
    config: AppConfig,
    input_file: TextIO,
    timeframe: str | None,
) -> None:
    """Resample candles from INPUT_FILE and print them as JSON."""
    bind_run_context("resample")
    tf = Timeframe.parse(timeframe) if timeframe else config.default_timeframe
    result = resample(_read_candles(input_file), tf)
    click.echo(dump_candles(result, indent=config.output.json_indent))


@cli.command()
@click.argument(
    "indicator_type",
    metavar="TYPE",
    type=click.Choice([t.value for t in IndicatorType]),
)
@click.argument("input_file", type=click.File("r"))
@click.option(
    "--timeframe",
    "-t",
    type=_TIMEFRAME_CHOICE,
    default=None,
    help="Resample before computing (default: CHARTCORE_DEFAULT_TIMEFRAME).",
)
@click.option("--length", type=float, default=None, help="Window length.")
@click.option(
    "--source",
    type=click.Choice([s.value for s in PriceSource]),
    default=None,
    help="Price field to read (default: close).",
)
@click.option("--std-dev", type=float, default=None, help="Bollinger band multiplier.")
@click.option("--macd-fast", type=int, default=None, help="MACD fast EMA length.")
@click.option("--macd-slow", type=int, default=None, help="MACD slow EMA length.")
@click.option("--macd-signal", type=int, default=None, help="MACD signal EMA length.")
@click.option(
    "--anchor",
    "anchor_iso",
    default=None,
    help="VWAP anchor, ISO 8601 (e.g. 2024-01-02T14:30:00Z).",
)
@click.pass_obj
def indicator(
    config: AppConfig,
    indicator_type: str,
    input_file: TextIO,
    timeframe: str | None,
    **options: Any,
) -> None:
    """Compute indicator TYPE over candles from INPUT_FILE."""
    bind_run_context("indicator")
    chosen = {name: value for name, value in options.items() if value is not None}
    params = IndicatorParams.model_validate(chosen)

    tf = Timeframe.parse(timeframe) if timeframe else config.default_timeframe
    candles = resample(_read_candles(input_file), tf)
    points = compute_indicator(indicator_type, candles, params)
    log.info(
        "indicator_done",
        indicator=indicator_type,
        timeframe=tf.value,
        points=len(points),
    )
    click.echo(dump_points(points, indent=config.output.json_indent))


@cli.command(name="indicators")
def list_indicators() -> None:
    """List the registered indicators."""
    for definition in INDICATOR_REGISTRY.values():
        label = definition.label(definition.default_params)
        click.echo(
            f"{definition.type.value:<15}{definition.name:<17}"
            f"{definition.pane.value:<10}{label}"
        )


@cli.command()
@click.pass_obj
def config(cfg: AppConfig) -> None:
    """Show current configuration."""
    click.echo("=== chartcore Configuration ===\n")
    click.echo(f"Log Level:          {cfg.log_level}")
    click.echo(f"Log Format:         {cfg.log_format}")
    click.echo(f"Default Timeframe:  {cfg.default_timeframe.value}")
    click.echo(f"JSON Indent:        {cfg.output.indent}")
