"""
Event Analysis
==============

Drive correlation, scoring and succession detection over one batch of
flares and CMEs and return the ranked interesting events.

Per valid flare (begin time and class present):
1. find_associated_cmes()      - candidate CMEs in the association window
2. no candidates               - emit "no associated CME" (surprise 1.0)
3. per candidate               - resolve speed, match sunspot, score,
                                 emit if is_interesting()
4. detect_quick_succession()   - emit if the flare is part of a burst

Output is sorted by surprise factor, descending. The sort is stable, so
identical input produces an identical list.
"""

from typing import TYPE_CHECKING, Optional, Sequence

from solar_events.models import (
    CMEEvent, FlareEvent, InterestingEvent, SunspotObservation,
)
from solar_events.reasons import Reason, ReasonCode
from .constants import NO_CME_SURPRISE
from .correlation import find_associated_cmes
from .scoring import (
    SpeedDirection, compute_confidence, compute_surprise,
    confidence_factors, is_interesting,
)
from .speed import resolve_cme_speed
from .succession import detect_quick_succession
from .sunspots import find_relevant_sunspot

if TYPE_CHECKING:
    from solar_events.config import AnalysisConfig


DIRECTION_REASONS = {
    SpeedDirection.BELOW: ReasonCode.SLOW_CME,
    SpeedDirection.ABOVE: ReasonCode.FAST_CME,
    SpeedDirection.WITHIN: ReasonCode.WITHIN_RANGE,
    SpeedDirection.UNKNOWN_CLASS: ReasonCode.UNKNOWN_CLASS,
}


class FlareAnalyzer:
    """Score flare/CME associations for one batch."""

    def __init__(self, config: Optional['AnalysisConfig'] = None):
        if config is None:
            from solar_events.config import AnalysisConfig
            config = AnalysisConfig()
        self.config = config

    def no_cme_event(self, flare: FlareEvent) -> InterestingEvent:
        """Event for a flare with no CME in its association window."""
        confidence = compute_confidence(flare, None)
        return InterestingEvent(
            flare=flare,
            reason=Reason(ReasonCode.NO_ASSOCIATED_CME, {
                'class_type': flare.class_type,
                'window_hours': self.config.cme_association_window_hours,
                'confidence': confidence,
                'discounts': tuple(label for label, _ in confidence_factors(flare, None)),
            }),
            cme_speed=0.0,
            surprise_factor=NO_CME_SURPRISE,
            confidence=confidence,
        )

    def score_pairing(
        self,
        flare: FlareEvent,
        cme: CMEEvent,
        sunspot: Optional[SunspotObservation] = None,
    ) -> Optional[InterestingEvent]:
        """
        Score one flare/CME pairing.

        Returns:
            InterestingEvent if the pairing qualifies, else None
        """
        speed = resolve_cme_speed(cme.analyses)
        surprise = compute_surprise(
            flare, speed, sunspot, self.config.expected_speed_ranges,
        )
        confidence = compute_confidence(flare, cme)

        if not is_interesting(surprise.value, confidence):
            return None

        reason = Reason(DIRECTION_REASONS[surprise.direction], {
            'class_type': flare.class_type,
            'speed': speed,
            'expected_min': surprise.expected_min,
            'expected_max': surprise.expected_max,
            'adjusted_min': surprise.adjusted_min,
            'adjusted_max': surprise.adjusted_max,
            'sunspot_factor': surprise.sunspot_factor,
            'surprise': surprise.value,
            'confidence': confidence,
            'discounts': tuple(label for label, _ in confidence_factors(flare, cme)),
        })

        return InterestingEvent(
            flare=flare,
            reason=reason,
            cme=cme,
            cme_speed=speed,
            surprise_factor=surprise.value,
            confidence=confidence,
            sunspot=sunspot,
        )

    def analyze_flare(
        self,
        flare: FlareEvent,
        valid_flares: Sequence[FlareEvent],
        cmes: Sequence[CMEEvent],
        sunspots: Sequence[SunspotObservation],
    ) -> list[InterestingEvent]:
        """All events emitted for a single valid flare."""
        events = []
        candidates = find_associated_cmes(
            flare, cmes, self.config.cme_association_window_hours,
        )

        if not candidates:
            events.append(self.no_cme_event(flare))
        else:
            sunspot = find_relevant_sunspot(flare, sunspots)
            for cme in candidates:
                event = self.score_pairing(flare, cme, sunspot)
                if event is not None:
                    events.append(event)

        burst = detect_quick_succession(
            valid_flares, flare,
            window_minutes=self.config.succession_window_minutes,
            threshold=self.config.succession_threshold,
        )
        if burst is not None:
            events.append(burst)

        return events

    def analyze(
        self,
        flares: Sequence[FlareEvent],
        cmes: Sequence[CMEEvent],
        sunspots: Sequence[SunspotObservation] = (),
    ) -> list[InterestingEvent]:
        """
        Analyze a batch and rank the interesting events.

        Args:
            flares: Flares of the date range (invalid ones are skipped)
            cmes: CMEs of the date range
            sunspots: Full sunspot catalog

        Returns:
            Interesting events sorted by surprise factor, descending
        """
        valid_flares = [f for f in flares if f.is_valid]

        events = []
        for flare in valid_flares:
            events.extend(self.analyze_flare(flare, valid_flares, cmes, sunspots))

        return sorted(events, key=lambda e: e.surprise_factor, reverse=True)


def analyze_events(
    flares: Sequence[FlareEvent],
    cmes: Sequence[CMEEvent],
    sunspots: Sequence[SunspotObservation] = (),
    config: Optional['AnalysisConfig'] = None,
) -> list[InterestingEvent]:
    """Analyze one batch with the given (or default) configuration."""
    return FlareAnalyzer(config).analyze(flares, cmes, sunspots)
