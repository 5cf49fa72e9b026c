"""
Solar Events - Flare/CME association ranking
============================================

Correlates DONKI flares with coronal mass ejections, scores each pairing
against class-expected CME speeds and sunspot morphology, and ranks the
associations that are anomalous, weakly evidenced, or part of a burst.
"""

__version__ = "0.1.0"

from solar_events.models import (
    FlareEvent,
    CMEEvent,
    CMEAnalysis,
    SunspotObservation,
    InterestingEvent,
    flare_class_to_flux,
)
from solar_events.reasons import Reason, ReasonCode
from solar_events.analysis import analyze_events, FlareAnalyzer
from solar_events.config import AnalysisConfig, load_config

__all__ = [
    "FlareEvent",
    "CMEEvent",
    "CMEAnalysis",
    "SunspotObservation",
    "InterestingEvent",
    "flare_class_to_flux",
    "Reason",
    "ReasonCode",
    "analyze_events",
    "FlareAnalyzer",
    "AnalysisConfig",
    "load_config",
]
