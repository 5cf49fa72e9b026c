"""
CME Speed Resolution
====================

A CME usually carries several independent model fits. Pick one speed to
score against:

1. The analysis flagged most accurate, if it has a speed
2. Otherwise the most recent fit (time at 21.5 Rs) that has a speed
3. Otherwise 0.0, meaning "no credible speed"
"""

from typing import Optional, Sequence

from solar_events.models import CMEAnalysis


def latest_analysis(analyses: Sequence[CMEAnalysis]) -> Optional[CMEAnalysis]:
    """
    Most recent analysis by fit time.

    Analyses without a fit time rank last; ties keep delivered order.
    """
    if not analyses:
        return None
    timed = [a for a in analyses if a.time21_5 is not None]
    if not timed:
        return analyses[0]
    return max(timed, key=lambda a: a.time21_5)


def resolve_cme_speed(analyses: Sequence[CMEAnalysis]) -> float:
    """
    Resolve the representative speed (km/s) of a CME.

    Args:
        analyses: The CME's analyses in delivered order

    Returns:
        Speed in km/s, or 0.0 when no analysis has a speed
    """
    if not analyses:
        return 0.0

    most_accurate = next((a for a in analyses if a.is_most_accurate), None)
    if most_accurate is not None and most_accurate.speed is not None:
        return float(most_accurate.speed)

    latest = latest_analysis([a for a in analyses if a.speed is not None])
    if latest is not None:
        return float(latest.speed)

    return 0.0
