"""
Tests for Event Formatting
==========================

Reason text, coordinate rendering, detail reports and Rich tables.
"""

import io
from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from solar_events.models import (
    CMEAnalysis, CMEEvent, FlareEvent, InterestingEvent, SunspotObservation,
)
from solar_events.reasons import Reason, ReasonCode
from solar_events.analysis import analyze_events
from solar_events.analysis.correlation import find_same_time_correlations
from solar_events.formatting import (
    EventFormatter,
    describe_magnetic_class,
    format_angle,
    format_lat_long,
    format_reason,
    format_reason_detail,
)


T0 = datetime(2024, 5, 10, 6, 0, tzinfo=timezone.utc)

FLARE = FlareEvent(
    flare_id="FLR-1",
    begin_time=T0,
    peak_time=T0 + timedelta(minutes=30),
    class_type="X2.0",
    active_region_num=13664,
)

CME = CMEEvent(
    activity_id="CME-1",
    start_time=T0 + timedelta(minutes=60),
    analyses=(
        CMEAnalysis(
            time21_5=T0 + timedelta(hours=3),
            speed=4000.0,
            latitude=-14.5,
            longitude=12.0,
            half_angle=55.0,
            is_most_accurate=True,
            analysis_type="O",
        ),
    ),
)


@pytest.fixture
def output():
    return Console(file=io.StringIO(), width=200)


class TestCoordinates:
    """Test degree/minute/second rendering."""

    def test_latitude(self):
        assert format_lat_long(12.5, True) == "12° 30' 0\" N"
        assert format_lat_long(-14.5, True) == "14° 30' 0\" S"

    def test_longitude(self):
        assert format_lat_long(12.0, False) == "12° 0' 0\" E"
        assert format_lat_long(-0.25, False) == "0° 15' 0\" W"

    def test_angle(self):
        assert format_angle(-55.0) == "55° 0' 0\""

    def test_magnetic_class(self):
        assert describe_magnetic_class("") == "Unknown"
        assert describe_magnetic_class("ZZ") == "Unrecognized magnetic classification"
        assert describe_magnetic_class("B", {"B": "Bipolar"}) == "Bipolar"


class TestFormatReason:
    """Test one-line reason text."""

    def test_no_cme(self):
        assert format_reason(Reason(ReasonCode.NO_ASSOCIATED_CME)) == "Flare with no associated CME"

    def test_succession(self):
        reason = Reason(ReasonCode.QUICK_SUCCESSION, {'count': 4, 'window_minutes': 60.0})
        assert format_reason(reason) == "4 flares in quick succession within 60 minutes"

    def test_fast(self):
        reason = Reason(ReasonCode.FAST_CME, {'class_type': "X2.0", 'speed': 4000.0, 'adjusted_max': 2200.0})
        assert format_reason(reason) == (
            "Unusually fast CME for X2.0 flare class (Speed: 4000.0 km/s, Expected max: 2200 km/s)"
        )

    def test_slow(self):
        reason = Reason(ReasonCode.SLOW_CME, {'class_type': "M1.0", 'speed': 150.0, 'adjusted_min': 500.0})
        assert format_reason(reason) == (
            "Unusually slow CME for M1.0 flare class (Speed: 150.0 km/s, Expected min: 500 km/s)"
        )

    def test_slow_without_speed(self):
        """A resolved speed of 0 is reported as unmeasured."""
        reason = Reason(ReasonCode.SLOW_CME, {'class_type': "M1.0", 'speed': 0.0, 'adjusted_min': 500.0})
        text = format_reason(reason)
        assert text == "Unusually slow CME for M1.0 flare class (No speed measured, Expected min: 500 km/s)"
        assert "0.0 km/s" not in text

    def test_within_range(self):
        reason = Reason(ReasonCode.WITHIN_RANGE, {
            'class_type': "C1.0", 'speed': 400.0, 'adjusted_min': 300.0, 'adjusted_max': 800.0,
        })
        assert "Weakly evidenced CME" in format_reason(reason)
        assert "300 km/s - 800 km/s" in format_reason(reason)

    def test_unknown_class(self):
        reason = Reason(ReasonCode.UNKNOWN_CLASS, {'class_type': "Q1.0"})
        assert format_reason(reason) == "Unknown flare class 'Q1.0'"


class TestReasonDetail:
    """Test the multi-line report."""

    def test_cme_event(self):
        event = analyze_events([FLARE], [CME])[0]
        text = format_reason_detail(event)
        assert "Unusually fast CME" in text
        assert "Surprise Factor: 0.82 (Low)" in text
        assert "Confidence Level: 100.00%" in text
        assert "CME Details:" in text
        assert "- ID: CME-1" in text
        assert "CME Analysis 1:" in text
        assert "- Latitude: 14° 30' 0\" S" in text
        assert "Speed used in calculations: 4000.0 km/s" in text
        assert "High confidence" in text
        assert "No associated sunspot data found." in text

    def test_sunspot_section(self):
        spot = SunspotObservation(
            region=3664, time_tag=T0, area=2400, num_spots=87,
            spot_class="Fkc", mag_class="BGD",
        )
        event = analyze_events([FLARE], [CME], [spot])[0]
        text = format_reason_detail(event)
        assert "Associated Sunspot Data:" in text
        assert "- Region: 3664" in text
        assert "Large sunspot area" in text

    def test_cme_without_speed(self):
        """The speed line flags the 0 km/s sentinel."""
        flare = FlareEvent(flare_id="FLR-2", begin_time=T0, peak_time=T0, class_type="M1.0")
        cme = CMEEvent(activity_id="CME-3", start_time=T0)
        event = analyze_events([flare], [cme])[0]
        text = format_reason_detail(event)
        assert "No speed measured" in text
        assert "Speed used in calculations: 0.0 km/s (no speed measured)" in text

    def test_no_cme_event(self):
        """Events without a CME omit the CME section."""
        event = analyze_events([FLARE], [])[0]
        text = format_reason_detail(event)
        assert "CME Details:" not in text
        assert "Confidence discounts: no_cme, no_speed" in text


class TestEventFormatter:
    """Test Rich output."""

    def test_print_events(self, output):
        events = analyze_events([FLARE], [CME])
        EventFormatter(output).print_events(events)
        text = output.file.getvalue()
        assert "FLR-1" in text
        assert "CME-1" in text
        assert "4000" in text

    def test_print_events_detail(self, output):
        events = analyze_events([FLARE], [CME])
        EventFormatter(output).print_events(events, detail=True)
        assert "CME Details:" in output.file.getvalue()

    def test_print_no_events(self, output):
        EventFormatter(output).print_events([])
        assert "No interesting events found." in output.file.getvalue()

    def test_no_cme_row(self, output):
        events = analyze_events([FLARE], [])
        table = EventFormatter(output).events_table(events)
        assert table.row_count == 1

    def test_print_correlations(self, output):
        cme = CMEEvent(
            activity_id="CME-2",
            start_time=T0 + timedelta(minutes=10),
            analyses=(CMEAnalysis(speed=700.0), CMEAnalysis(speed=None)),
        )
        EventFormatter(output).print_correlations(find_same_time_correlations([FLARE], [cme]))
        text = output.file.getvalue()
        assert "CME-2" in text
        assert "+10 min" in text
        assert "700" in text

    def test_print_no_correlations(self, output):
        EventFormatter(output).print_correlations([])
        assert "No correlated flare/CME pairs found." in output.file.getvalue()
