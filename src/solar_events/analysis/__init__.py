"""
Solar Events Analysis
=====================

Flare/CME correlation and anomaly scoring.

Usage:
    from solar_events.analysis import analyze_events, FlareAnalyzer

    events = analyze_events(flares, cmes, sunspots)
    for event in events:
        print(event.surprise_factor, event.reason_text)
"""

from .analyzer import FlareAnalyzer, analyze_events
from .correlation import (
    CorrelatedEvent,
    find_associated_cmes,
    find_nearby_flares,
    find_same_time_correlations,
)
from .scoring import (
    SpeedDirection,
    SurpriseResult,
    compute_confidence,
    compute_surprise,
    confidence_factors,
    is_interesting,
)
from .speed import latest_analysis, resolve_cme_speed
from .succession import count_flares_in_window, detect_quick_succession
from .sunspots import find_relevant_sunspot, region_matches, sunspot_factor
from .constants import SurpriseLevel, get_surprise_level

__all__ = [
    # Orchestration
    'FlareAnalyzer',
    'analyze_events',
    # Correlation
    'CorrelatedEvent',
    'find_associated_cmes',
    'find_nearby_flares',
    'find_same_time_correlations',
    # Scoring
    'SpeedDirection',
    'SurpriseResult',
    'compute_confidence',
    'compute_surprise',
    'confidence_factors',
    'is_interesting',
    'SurpriseLevel',
    'get_surprise_level',
    # Speed
    'latest_analysis',
    'resolve_cme_speed',
    # Succession
    'count_flares_in_window',
    'detect_quick_succession',
    # Sunspots
    'find_relevant_sunspot',
    'region_matches',
    'sunspot_factor',
]
