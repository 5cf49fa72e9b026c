#!/usr/bin/env python3
"""
Solar Events - Command Line
===========================

Fetch flares, CMEs and sunspots for a date range and rank the interesting
flare/CME associations.

Usage:
    solar-events analyze                          # last 30 days
    solar-events analyze --start yr1 --limit 20   # last year, top 20
    solar-events analyze --start 2024-05-01 --end 2024-05-15 --detail
    solar-events correlate --start today
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from solar_events.analysis import FlareAnalyzer, find_same_time_correlations
from solar_events.config import AnalysisConfig, load_config
from solar_events.data_sources import fetch_cmes, fetch_flares, fetch_sunspots
from solar_events.formatting import EventFormatter
from solar_events.utils.time import format_timestamp, parse_date_range


app = typer.Typer(
    name="solar-events",
    help="☀️ Solar Events - rank anomalous flare/CME associations",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


START_HELP = "Start date (yyyy-MM-dd), 'today' or 'yrN' for the last N years"
END_HELP = "End date (yyyy-MM-dd), defaults to now"


def _load_settings(config_path: Optional[Path]) -> AnalysisConfig:
    try:
        return load_config(config_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Invalid configuration:[/] {e}")
        raise typer.Exit(code=1)


def _resolve_range(start: Optional[str], end: Optional[str]):
    try:
        return parse_date_range(start, end)
    except ValueError as e:
        console.print(f"[red]Invalid date range:[/] {e}")
        raise typer.Exit(code=1)


@app.command()
def analyze(
    start: Optional[str] = typer.Option(None, "--start", "-s", help=START_HELP),
    end: Optional[str] = typer.Option(None, "--end", "-e", help=END_HELP),
    limit: int = typer.Option(0, "--limit", "-n", help="Show only the top N events (0 = all)"),
    detail: bool = typer.Option(False, "--detail", "-d", help="Print a detailed report per event"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON config file"),
):
    """
    🔎 Rank interesting flare/CME associations.
    """
    config = _load_settings(config_path)
    start_dt, end_dt = _resolve_range(start, end)

    console.print(
        f"[bold]Analyzing {format_timestamp(start_dt, 'date')} → "
        f"{format_timestamp(end_dt, 'date')}[/]"
    )

    with console.status("Fetching DONKI and NOAA data..."):
        flares = fetch_flares(start_dt, end_dt, config)
        cmes = fetch_cmes(start_dt, end_dt, config)
        sunspots = fetch_sunspots(config)

    console.print(
        f"[dim]{len(flares)} flares, {len(cmes)} CMEs, "
        f"{len(sunspots)} sunspot observations[/]\n"
    )

    events = FlareAnalyzer(config).analyze(flares, cmes, sunspots)
    if limit > 0:
        events = events[:limit]

    EventFormatter(console).print_events(
        events, detail=detail, descriptions=config.magnetic_class_descriptions,
    )


@app.command()
def correlate(
    start: Optional[str] = typer.Option(None, "--start", "-s", help=START_HELP),
    end: Optional[str] = typer.Option(None, "--end", "-e", help=END_HELP),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON config file"),
):
    """
    🔗 List flares and CMEs that started at nearly the same time.
    """
    config = _load_settings(config_path)
    start_dt, end_dt = _resolve_range(start, end)

    with console.status("Fetching DONKI data..."):
        flares = fetch_flares(start_dt, end_dt, config)
        cmes = fetch_cmes(start_dt, end_dt, config)

    EventFormatter(console).print_correlations(find_same_time_correlations(flares, cmes))


def main():
    app()


if __name__ == "__main__":
    main()
