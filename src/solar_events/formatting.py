"""
Event Formatting with Rich
==========================

Render structured reasons as text and print result tables.

format_reason()         - one-line explanation of a Reason
format_reason_detail()  - multi-line report with CME analyses and sunspot
EventFormatter          - Rich tables for the CLI
"""

import math
from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich import box

from solar_events.analysis.constants import (
    LARGE_SUNSPOT_AREA, MAGNETIC_CLASS_DESCRIPTIONS,
    SurpriseLevel, get_surprise_level,
)
from solar_events.models import InterestingEvent, SunspotObservation
from solar_events.reasons import Reason, ReasonCode
from solar_events.utils.time import format_timestamp


console = Console()


# =============================================================================
# COORDINATES
# =============================================================================

def _dms(value: float) -> tuple[int, int, int]:
    value = abs(value)
    degrees = int(value)
    minutes_decimal = (value - degrees) * 60
    minutes = int(minutes_decimal)
    seconds = int((minutes_decimal - minutes) * 60)
    return degrees, minutes, seconds


def format_lat_long(coordinate: float, is_latitude: bool) -> str:
    """Format a heliographic coordinate as degrees/minutes/seconds: 12° 30' 0" N"""
    if is_latitude:
        direction = 'N' if coordinate >= 0 else 'S'
    else:
        direction = 'E' if coordinate >= 0 else 'W'
    degrees, minutes, seconds = _dms(coordinate)
    return f"{degrees}° {minutes}' {seconds}\" {direction}"


def format_angle(angle: float) -> str:
    """Format an angle as unsigned degrees/minutes/seconds."""
    degrees, minutes, seconds = _dms(angle)
    return f"{degrees}° {minutes}' {seconds}\""


def describe_magnetic_class(mag_class: str, descriptions: Optional[dict] = None) -> str:
    """Human-readable Mount Wilson magnetic classification."""
    if not mag_class:
        return 'Unknown'
    descriptions = descriptions if descriptions is not None else MAGNETIC_CLASS_DESCRIPTIONS
    return descriptions.get(mag_class, 'Unrecognized magnetic classification')


# =============================================================================
# REASONS
# =============================================================================

def _km_s(value) -> str:
    return f"{value:.0f} km/s" if value is not None else '?'


def format_reason(reason: Reason) -> str:
    """
    Render a Reason as a one-line explanation.

    Args:
        reason: Structured reason from the analyzer

    Returns:
        Human-readable text
    """
    code = reason.code
    class_type = reason.get('class_type') or '?'
    speed = reason.get('speed', 0.0)

    if code == ReasonCode.NO_ASSOCIATED_CME:
        return "Flare with no associated CME"
    if code == ReasonCode.QUICK_SUCCESSION:
        return (f"{reason.get('count')} flares in quick succession "
                f"within {reason.get('window_minutes'):g} minutes")
    if code == ReasonCode.SLOW_CME:
        # 0.0 is the resolver's "no credible speed", not a measurement
        measured = f"Speed: {speed:.1f} km/s" if speed else "No speed measured"
        return (f"Unusually slow CME for {class_type} flare class "
                f"({measured}, Expected min: {_km_s(reason.get('adjusted_min'))})")
    if code == ReasonCode.FAST_CME:
        return (f"Unusually fast CME for {class_type} flare class "
                f"(Speed: {speed:.1f} km/s, Expected max: {_km_s(reason.get('adjusted_max'))})")
    if code == ReasonCode.WITHIN_RANGE:
        return (f"Weakly evidenced CME for {class_type} flare class "
                f"(Speed: {speed:.1f} km/s, Expected range: "
                f"{_km_s(reason.get('adjusted_min'))} - {_km_s(reason.get('adjusted_max'))})")
    if code == ReasonCode.UNKNOWN_CLASS:
        return f"Unknown flare class '{class_type}'"
    return code


def _sunspot_lines(sunspot: Optional[SunspotObservation], descriptions: Optional[dict]) -> list[str]:
    if sunspot is None:
        return ["No associated sunspot data found."]

    lines = [
        "Associated Sunspot Data:",
        f"- Time: {format_timestamp(sunspot.time_tag, 'display')}",
        f"- Region: {sunspot.region}",
        f"- Area: {sunspot.area:g} millionths of solar hemisphere",
        f"- Number of Spots: {sunspot.num_spots:g}",
        f"- Spot Class: {sunspot.spot_class or 'Unknown'}",
        f"- Magnetic Class: {describe_magnetic_class(sunspot.mag_class, descriptions)}",
    ]
    if sunspot.latitude is not None:
        lines.append(f"- Latitude: {format_lat_long(sunspot.latitude, True)}")
    if sunspot.longitude is not None:
        lines.append(f"- Longitude: {format_lat_long(sunspot.longitude, False)}")

    if sunspot.area > LARGE_SUNSPOT_AREA:
        lines.append("Observation: Large sunspot area, associated with higher flare probability.")
    elif sunspot.area > 0:
        lines.append("Observation: Small to moderate sunspot area.")
    else:
        lines.append("Observation: No sunspot area data available.")
    return lines


def format_reason_detail(event: InterestingEvent, descriptions: Optional[dict] = None) -> str:
    """
    Render a full multi-line explanation of an interesting event.

    Includes the scores, every CME analysis, the speed used for scoring and
    the matched sunspot region.
    """
    lines = [format_reason(event.reason)]
    level = get_surprise_level(event.surprise_factor)
    lines.append(f"Surprise Factor: {event.surprise_factor:.2f} ({level})")
    lines.append(f"Confidence Level: {event.confidence * 100:.2f}%")

    discounts = event.reason.get('discounts')
    if discounts:
        lines.append(f"Confidence discounts: {', '.join(discounts)}")

    cme = event.cme
    if cme is None:
        return "\n".join(lines)

    lines.append("")
    lines.append("CME Details:")
    lines.append(f"- ID: {cme.activity_id}")
    lines.append(f"- Start Time: {format_timestamp(cme.start_time, 'display')}")

    if cme.analyses:
        lines.append(f"- Number of CME Analyses: {len(cme.analyses)}")
        for i, analysis in enumerate(cme.analyses, 1):
            lines.append("")
            lines.append(f"CME Analysis {i}:")
            lines.append(f"- Type: {analysis.analysis_type or 'Unknown'}")
            lines.append(f"- Is Most Accurate: {analysis.is_most_accurate}")
            lines.append(f"- Time at 21.5 Rs: {format_timestamp(analysis.time21_5, 'display')}")
            if analysis.half_angle is not None:
                lines.append(f"- Half Angle: {analysis.half_angle:.1f}° ({format_angle(analysis.half_angle)})")
            if analysis.speed is not None:
                lines.append(f"- Speed: {analysis.speed:.1f} km/s")
            if analysis.latitude is not None:
                lines.append(f"- Latitude: {format_lat_long(analysis.latitude, True)}")
            if analysis.longitude is not None:
                lines.append(f"- Longitude: {format_lat_long(analysis.longitude, False)}")
            if analysis.tilt is not None:
                lines.append(f"- Tilt: {analysis.tilt:.1f} degrees")
            if analysis.minor_half_width is not None:
                lines.append(f"- Minor Half Width: {analysis.minor_half_width:.1f}")
            if analysis.speed_measured_at_height is not None:
                lines.append(f"- Speed Measured At Height: {analysis.speed_measured_at_height:.1f}")
            lines.append(f"- Feature Code: {analysis.feature_code or 'Unknown'}")
            lines.append(f"- Measurement Technique: {analysis.measurement_technique or 'Unknown'}")
    else:
        lines.append("- No detailed CME analysis available")

    lines.append("")
    speed_note = "" if event.cme_speed else " (no speed measured)"
    lines.append(f"Speed used in calculations: {event.cme_speed:.1f} km/s{speed_note}")

    if event.confidence < 0.5:
        lines.append("Note: Low confidence in this event association.")
    elif event.confidence > 0.8:
        lines.append("Note: High confidence in this event association.")

    lines.extend(_sunspot_lines(event.sunspot, descriptions))
    return "\n".join(lines)


# =============================================================================
# RICH OUTPUT
# =============================================================================

class EventFormatter:
    """
    Print analysis results as Rich tables.
    """

    SURPRISE_STYLES = {
        SurpriseLevel.LOW: Style(color="green"),
        SurpriseLevel.MODERATE: Style(color="yellow"),
        SurpriseLevel.HIGH: Style(color="bright_yellow", bold=True),
        SurpriseLevel.EXTREMELY_HIGH: Style(color="red", bold=True),
    }

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def events_table(self, events: Sequence[InterestingEvent], title: str = "Interesting Events") -> Table:
        """Build a table with one row per interesting event."""
        table = Table(title=title, box=box.ROUNDED)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Flare")
        table.add_column("Class")
        table.add_column("Begin (UTC)")
        table.add_column("CME")
        table.add_column("Speed", justify="right")
        table.add_column("Surprise", justify="right")
        table.add_column("Confidence", justify="right")
        table.add_column("Reason")

        for i, event in enumerate(events, 1):
            level = get_surprise_level(event.surprise_factor)
            speed = event.cme_speed
            table.add_row(
                str(i),
                event.flare.flare_id or '?',
                event.flare.class_type,
                format_timestamp(event.flare.begin_time, 'display'),
                event.cme.activity_id if event.cme else '-',
                '-' if math.isnan(speed) or event.cme is None else f"{speed:.0f}",
                f"[{self.SURPRISE_STYLES[level]}]{event.surprise_factor:.2f}[/]",
                f"{event.confidence:.0%}",
                format_reason(event.reason),
            )
        return table

    def print_events(self, events: Sequence[InterestingEvent], detail: bool = False,
                     descriptions: Optional[dict] = None):
        """Print the ranked events, optionally with a detail panel each."""
        if not events:
            self.console.print("[yellow]No interesting events found.[/]")
            return

        self.console.print(self.events_table(events))

        if detail:
            for i, event in enumerate(events, 1):
                self.console.print(Panel(
                    format_reason_detail(event, descriptions),
                    title=f"[bold]#{i} {event.flare.class_type} {event.flare.flare_id}[/]",
                    border_style="cyan",
                ))

    def print_correlations(self, correlations: Sequence):
        """Print same-time flare/CME correlations."""
        if not correlations:
            self.console.print("[yellow]No correlated flare/CME pairs found.[/]")
            return

        table = Table(title="Same-Time Flare/CME Correlations", box=box.ROUNDED)
        table.add_column("Flare")
        table.add_column("Class")
        table.add_column("Begin (UTC)")
        table.add_column("Rise", justify="right")
        table.add_column("CME")
        table.add_column("Offset", justify="right")
        table.add_column("Speeds (km/s)")

        for c in correlations:
            speeds = ', '.join(f"{s:.0f}" for s in c.cme_speeds if s is not None) or '-'
            table.add_row(
                c.flare_id,
                c.flare_class,
                format_timestamp(c.flare_begin, 'display'),
                f"{c.rise_minutes:.0f} min",
                c.cme_id,
                f"{c.minutes_after_begin:+.0f} min",
                speeds,
            )

        self.console.print(table)
