"""
Solar Events Utilities
======================

Common utility functions used across the library.
"""

from .time import parse_iso_timestamp, format_timestamp, now_utc, parse_date_range

__all__ = ['parse_iso_timestamp', 'format_timestamp', 'now_utc', 'parse_date_range']
