"""
NOAA SWPC Sunspot Loader
========================

The sunspot report has no date-range parameter; the whole catalog is
fetched once per analysis batch.
"""

from typing import Optional

from solar_events.config import AnalysisConfig
from solar_events.models import SunspotObservation
from .http import fetch_json


SUNSPOT_REPORT_PATH = "json/sunspot_report.json"


def fetch_sunspots(config: Optional[AnalysisConfig] = None) -> list[SunspotObservation]:
    """
    Fetch the full sunspot catalog.

    Returns:
        Parsed observations; empty on upstream failure
    """
    config = config or AnalysisConfig()
    url = f"{config.noaa_base_url.rstrip('/')}/{SUNSPOT_REPORT_PATH}"

    data = fetch_json(url)
    if not isinstance(data, list):
        if data is not None:
            print(f"  Unexpected sunspot response: {type(data).__name__}")
        return []

    return [SunspotObservation.from_noaa(row) for row in data if isinstance(row, dict)]
