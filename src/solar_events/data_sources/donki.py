"""
NASA DONKI Loader
=================

Flares (FLR) and coronal mass ejections (CME) from the Space Weather
Database Of Notifications, Knowledge, Information.

    {base}/FLR?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD&api_key=KEY
    {base}/CME?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD&api_key=KEY
"""

from datetime import datetime
from typing import Callable, Optional
from urllib.parse import urlencode

from solar_events.config import AnalysisConfig
from solar_events.models import CMEEvent, FlareEvent
from solar_events.utils.time import format_timestamp
from .http import fetch_json


def build_donki_url(endpoint: str, start: datetime, end: datetime,
                    config: AnalysisConfig) -> str:
    """Full request URL for a DONKI endpoint and date range."""
    query = urlencode({
        'startDate': format_timestamp(start, 'date'),
        'endDate': format_timestamp(end, 'date'),
        'api_key': config.api_key,
    })
    return f"{config.donki_base_url.rstrip('/')}/{endpoint}?{query}"


def _parse_records(data, parser: Callable, label: str) -> list:
    if data is None:
        return []
    if not isinstance(data, list):
        print(f"  Unexpected DONKI {label} response: {type(data).__name__}")
        return []

    records = []
    skipped = 0
    for item in data:
        if not isinstance(item, dict):
            skipped += 1
            continue
        records.append(parser(item))

    if skipped:
        print(f"  Skipped {skipped} malformed {label} records")
    return records


def fetch_flares(start: datetime, end: datetime,
                 config: Optional[AnalysisConfig] = None) -> list[FlareEvent]:
    """
    Fetch solar flares for a date range.

    Returns:
        Parsed flares; empty on upstream failure
    """
    config = config or AnalysisConfig()
    data = fetch_json(build_donki_url('FLR', start, end, config))
    return _parse_records(data, FlareEvent.from_donki, 'FLR')


def fetch_cmes(start: datetime, end: datetime,
               config: Optional[AnalysisConfig] = None) -> list[CMEEvent]:
    """
    Fetch CMEs (with their analyses) for a date range.

    Returns:
        Parsed CMEs; empty on upstream failure
    """
    config = config or AnalysisConfig()
    data = fetch_json(build_donki_url('CME', start, end, config))
    return _parse_records(data, CMEEvent.from_donki, 'CME')
