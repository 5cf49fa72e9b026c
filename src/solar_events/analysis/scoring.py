"""
Anomaly Scoring
===============

Two independent scores per flare/CME pairing:

Confidence (0 < c <= 1): how complete the evidence is. Starts at 1.0 and
is multiplied by a discount for each missing piece:

    no CME associated                       x 0.5
    flare lacks begin time or class         x 0.7
    latest CME analysis lacks a speed       x 0.8

Surprise (>= 0): how far the CME speed falls outside the range expected
for the flare class, scaled by sunspot morphology.

    adjusted = bound * (1 + (magnitude - 1) * 0.1)
    below:  (adj_min - speed) / adj_min
    above:  (speed - adj_max) / adj_max
    within: 0

A pairing is interesting if surprise > 0.5 or confidence < 0.7.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Optional

from solar_events.models import CMEEvent, FlareEvent, SunspotObservation
from .constants import (
    EXPECTED_SPEED_RANGES,
    MAGNITUDE_SCALING,
    NO_CME_DISCOUNT,
    INCOMPLETE_FLARE_DISCOUNT,
    NO_SPEED_DISCOUNT,
    SURPRISE_THRESHOLD,
    CONFIDENCE_THRESHOLD,
)
from .speed import latest_analysis
from .sunspots import sunspot_factor


class SpeedDirection:
    """Where the CME speed lies relative to the expected range."""
    BELOW = 'below'
    ABOVE = 'above'
    WITHIN = 'within'
    UNKNOWN_CLASS = 'unknown_class'


# =============================================================================
# CONFIDENCE
# =============================================================================

def _lacks_speed(cme: Optional[CMEEvent]) -> bool:
    if cme is None or not cme.analyses:
        return True
    latest = latest_analysis(cme.analyses)
    return latest is None or not latest.speed


CONFIDENCE_RULES = (
    ('no_cme', NO_CME_DISCOUNT,
     lambda flare, cme: cme is None),
    ('incomplete_flare', INCOMPLETE_FLARE_DISCOUNT,
     lambda flare, cme: flare.begin_time is None or not flare.class_type),
    ('no_speed', NO_SPEED_DISCOUNT,
     lambda flare, cme: _lacks_speed(cme)),
)


def confidence_factors(flare: FlareEvent, cme: Optional[CMEEvent]) -> list[tuple[str, float]]:
    """
    Discounts that apply to a flare/CME pairing.

    Returns:
        Ordered (label, multiplier) pairs; empty when the evidence is complete
    """
    return [
        (label, multiplier)
        for label, multiplier, applies in CONFIDENCE_RULES
        if applies(flare, cme)
    ]


def compute_confidence(flare: FlareEvent, cme: Optional[CMEEvent]) -> float:
    """Product of all applicable discounts, starting at 1.0."""
    return reduce(
        lambda acc, factor: acc * factor[1],
        confidence_factors(flare, cme),
        1.0,
    )


# =============================================================================
# SURPRISE
# =============================================================================

@dataclass(frozen=True)
class SurpriseResult:
    """Surprise factor with the intermediate values that produced it."""
    value: float
    raw: float = 0.0
    sunspot_factor: float = 1.0
    direction: str = SpeedDirection.UNKNOWN_CLASS
    expected_min: Optional[float] = None
    expected_max: Optional[float] = None
    adjusted_min: Optional[float] = None
    adjusted_max: Optional[float] = None


def compute_surprise(
    flare: FlareEvent,
    cme_speed: float,
    sunspot: Optional[SunspotObservation] = None,
    speed_ranges: Optional[dict] = None,
) -> SurpriseResult:
    """
    Compute the surprise factor for a CME speed given the flare class.

    Args:
        flare: Flare with class designation (e.g. 'X2.0')
        cme_speed: Resolved CME speed in km/s (0.0 = no credible speed)
        sunspot: Matched sunspot observation, if any
        speed_ranges: Class letter -> (min, max) km/s

    Returns:
        SurpriseResult; value 0 with direction UNKNOWN_CLASS when the class
        has no range or the magnitude cannot be parsed
    """
    ranges = speed_ranges if speed_ranges is not None else EXPECTED_SPEED_RANGES

    letter = flare.class_letter
    magnitude = flare.class_magnitude
    if letter not in ranges or magnitude is None:
        return SurpriseResult(value=0.0)

    expected_min, expected_max = ranges[letter]
    scale = 1 + (magnitude - 1) * MAGNITUDE_SCALING
    if scale <= 0:
        return SurpriseResult(value=0.0, expected_min=expected_min, expected_max=expected_max)

    adjusted_min = expected_min * scale
    adjusted_max = expected_max * scale

    if cme_speed < adjusted_min:
        raw = (adjusted_min - cme_speed) / adjusted_min
        direction = SpeedDirection.BELOW
    elif cme_speed > adjusted_max:
        raw = (cme_speed - adjusted_max) / adjusted_max
        direction = SpeedDirection.ABOVE
    else:
        raw = 0.0
        direction = SpeedDirection.WITHIN

    factor = sunspot_factor(sunspot)
    return SurpriseResult(
        value=max(raw * factor, 0.0),
        raw=raw,
        sunspot_factor=factor,
        direction=direction,
        expected_min=expected_min,
        expected_max=expected_max,
        adjusted_min=adjusted_min,
        adjusted_max=adjusted_max,
    )


def is_interesting(surprise: float, confidence: float) -> bool:
    """Qualification predicate for a flare/CME pairing."""
    return surprise > SURPRISE_THRESHOLD or confidence < CONFIDENCE_THRESHOLD
