"""
Sunspot Matching
================

Link a flare to the sunspot observation of its active region that is
closest in time, and turn the sunspot morphology into a score multiplier.

Region numbers are matched by substring containment of their string forms:
NOAA and DONKI truncate leading digits differently (e.g. 13664 vs 3664),
so numeric equality misses real matches.
"""

from typing import Optional, Sequence

import numpy as np

from solar_events.models import FlareEvent, SunspotObservation
from .constants import (
    SPOT_CLASS_FACTORS, SPOT_CLASS_DEFAULT,
    MAG_CLASS_FACTORS, MAG_CLASS_DEFAULT,
)


def region_matches(flare_region: int, spot_region: Optional[int]) -> bool:
    """True if the spot's region string is contained in the flare's."""
    if spot_region is None:
        return False
    spot_str = str(spot_region)
    return bool(spot_str) and spot_str in str(flare_region)


def find_relevant_sunspot(
    flare: FlareEvent,
    sunspots: Sequence[SunspotObservation],
) -> Optional[SunspotObservation]:
    """
    Find the sunspot observation most relevant to a flare.

    Args:
        flare: Flare with active region and begin time
        sunspots: Full sunspot catalog

    Returns:
        Closest-in-time observation of a matching region, or None when the
        flare has no region or begin time, or nothing matches
    """
    if flare.active_region_num is None or flare.begin_time is None or not sunspots:
        return None

    candidates = [
        s for s in sunspots
        if s.time_tag is not None and region_matches(flare.active_region_num, s.region)
    ]
    if not candidates:
        return None

    begin = flare.begin_time.timestamp()
    deltas = np.abs(np.array([s.time_tag.timestamp() for s in candidates]) - begin)
    return candidates[int(np.argmin(deltas))]


def sunspot_factor(sunspot: Optional[SunspotObservation]) -> float:
    """
    Multiplier for the surprise factor from sunspot morphology.

    (1 + area/100 + spots/10) * class_factor * mag_factor

    Returns 1.0 when there is no matching observation.
    """
    if sunspot is None:
        return 1.0

    area_factor = sunspot.area / 100.0
    spot_factor = sunspot.num_spots / 10.0

    class_factor = SPOT_CLASS_FACTORS.get(sunspot.spot_class[:1], SPOT_CLASS_DEFAULT)
    mag_factor = MAG_CLASS_FACTORS.get(sunspot.mag_class, MAG_CLASS_DEFAULT)

    return (1 + area_factor + spot_factor) * class_factor * mag_factor
