"""
Temporal Correlation
====================

Time-window joins between flares and CMEs, and between flares.

Association window (scoring):

    flare.begin ─────── flare.peak ──────────── peak + window
         │◄──────────── CME start accepted ───────────►│

CMEs erupt during or after the flare rise, never before onset, so the
window only extends the trailing edge.

Same-time window (report):

    begin - 5 min ◄──── CME start accepted ────► peak + 5 min
    (only flares with a rise phase of at most 2 hours)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from solar_events.models import CMEEvent, FlareEvent
from .constants import (
    CME_ASSOCIATION_WINDOW_HOURS,
    SUCCESSION_WINDOW_MINUTES,
    SAME_TIME_TOLERANCE_MINUTES,
    MAX_FLARE_RISE_HOURS,
)


def find_associated_cmes(
    flare: FlareEvent,
    cmes: Sequence[CMEEvent],
    window_hours: float = CME_ASSOCIATION_WINDOW_HOURS,
) -> list[CMEEvent]:
    """
    CMEs starting within [flare.begin_time, flare.peak_time + window].

    Args:
        flare: Flare to correlate
        cmes: All CMEs of the batch
        window_hours: Trailing association window

    Returns:
        Matching CMEs in input order; empty if the flare lacks begin or
        peak time
    """
    if flare.begin_time is None or flare.peak_time is None:
        return []

    window_end = flare.peak_time + timedelta(hours=window_hours)
    return [
        cme for cme in cmes
        if cme.start_time is not None and flare.begin_time <= cme.start_time <= window_end
    ]


def find_nearby_flares(
    flare: FlareEvent,
    flares: Sequence[FlareEvent],
    window_minutes: float = SUCCESSION_WINDOW_MINUTES,
) -> list[FlareEvent]:
    """
    Other flares beginning within ±window_minutes of this flare's begin time.

    The flare itself is excluded by identity, so distinct records with
    identical content still count as peers.
    """
    if flare.begin_time is None:
        return []

    window = timedelta(minutes=window_minutes)
    return [
        f for f in flares
        if f is not flare
        and f.begin_time is not None
        and abs(f.begin_time - flare.begin_time) <= window
    ]


@dataclass(frozen=True)
class CorrelatedEvent:
    """Flare/CME pair whose timings overlap (same-time report row)."""
    flare_id: str
    flare_class: str
    flare_begin: datetime
    flare_peak: datetime
    rise_minutes: float
    flare_link: str
    cme_id: str
    cme_start: datetime
    minutes_after_begin: float
    cme_speeds: tuple
    most_accurate_speed: Optional[float]


def find_same_time_correlations(
    flares: Sequence[FlareEvent],
    cmes: Sequence[CMEEvent],
    tolerance_minutes: float = SAME_TIME_TOLERANCE_MINUTES,
    max_rise_hours: float = MAX_FLARE_RISE_HOURS,
) -> list[CorrelatedEvent]:
    """
    Find flares and CMEs that happened at nearly the same time.

    A CME correlates with a flare when it starts within the flare's rise
    phase widened by tolerance_minutes on both sides. Flares with a rise
    longer than max_rise_hours are skipped as likely mis-timed.

    Returns:
        One CorrelatedEvent per (flare, CME) pair, flare order first
    """
    tolerance = timedelta(minutes=tolerance_minutes)
    max_rise = timedelta(hours=max_rise_hours)
    results = []

    for flare in flares:
        if flare.begin_time is None or flare.peak_time is None:
            continue

        rise = flare.peak_time - flare.begin_time
        if rise > max_rise:
            continue

        start = flare.begin_time - tolerance
        end = flare.peak_time + tolerance

        for cme in cmes:
            if cme.start_time is None or not start <= cme.start_time <= end:
                continue

            most_accurate = next((a for a in cme.analyses if a.is_most_accurate), None)
            results.append(CorrelatedEvent(
                flare_id=flare.flare_id,
                flare_class=flare.class_type,
                flare_begin=flare.begin_time,
                flare_peak=flare.peak_time,
                rise_minutes=rise.total_seconds() / 60,
                flare_link=flare.link,
                cme_id=cme.activity_id,
                cme_start=cme.start_time,
                minutes_after_begin=(cme.start_time - flare.begin_time).total_seconds() / 60,
                cme_speeds=tuple(a.speed for a in cme.analyses),
                most_accurate_speed=most_accurate.speed if most_accurate else None,
            ))

    return results
