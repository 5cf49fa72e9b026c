"""
Quick Succession Detection
==========================

Flag flares that belong to a burst: at least `threshold` flares (counting
the flare itself) beginning within `window_minutes` of its begin time.

Each member of a burst is flagged on its own, so one burst yields one
event per member.
"""

from typing import Optional, Sequence

from solar_events.models import FlareEvent, InterestingEvent
from solar_events.reasons import Reason, ReasonCode
from .constants import SUCCESSION_WINDOW_MINUTES, SUCCESSION_THRESHOLD, NO_CME_SURPRISE
from .correlation import find_nearby_flares
from .scoring import compute_confidence


def count_flares_in_window(
    flare: FlareEvent,
    flares: Sequence[FlareEvent],
    window_minutes: float = SUCCESSION_WINDOW_MINUTES,
) -> int:
    """Number of flares within the window, including the flare itself."""
    if flare.begin_time is None:
        return 0
    return 1 + len(find_nearby_flares(flare, flares, window_minutes))


def detect_quick_succession(
    flares: Sequence[FlareEvent],
    flare: FlareEvent,
    window_minutes: float = SUCCESSION_WINDOW_MINUTES,
    threshold: int = SUCCESSION_THRESHOLD,
) -> Optional[InterestingEvent]:
    """
    Check whether a flare occurs in quick succession with its peers.

    Args:
        flares: Full set of valid flares
        flare: The flare under test
        window_minutes: Half-width of the window around its begin time
        threshold: Minimum flare count (including itself) to flag

    Returns:
        InterestingEvent tagged QUICK_SUCCESSION, or None
    """
    count = count_flares_in_window(flare, flares, window_minutes)
    if count < threshold or count == 0:
        return None

    return InterestingEvent(
        flare=flare,
        reason=Reason(ReasonCode.QUICK_SUCCESSION, {
            'count': count,
            'window_minutes': window_minutes,
        }),
        cme_speed=0.0,
        surprise_factor=NO_CME_SURPRISE,
        confidence=compute_confidence(flare, None),
    )
