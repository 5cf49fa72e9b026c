"""
Solar Events Data Sources
=========================

Upstream loaders that turn provider JSON into event models.

- DONKI: flares (FLR) and CMEs for a date range
- NOAA SWPC: full sunspot report catalog

Failures never raise: a network or decoding error is printed and an empty
list is returned, so the analyzer always receives a structurally valid batch.
"""

from .http import fetch_json
from .donki import fetch_flares, fetch_cmes, build_donki_url
from .noaa import fetch_sunspots, SUNSPOT_REPORT_PATH

__all__ = [
    'fetch_json',
    # DONKI
    'fetch_flares',
    'fetch_cmes',
    'build_donki_url',
    # NOAA
    'fetch_sunspots',
    'SUNSPOT_REPORT_PATH',
]
