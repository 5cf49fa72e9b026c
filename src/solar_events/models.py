"""
Event Models
============

Request-scoped value types for flares, CMEs, sunspot observations and the
interesting events produced by the analyzer.

Upstream sources:
- FLR / CME: NASA DONKI web service (camelCase JSON)
- Sunspots:  NOAA SWPC sunspot_report.json (keys vary in case)
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from solar_events.reasons import Reason
from solar_events.utils.time import parse_iso_timestamp


# Peak X-ray flux per flare class letter (W/m²)
FLARE_CLASS_FLUX = {
    'A': 1e-8,
    'B': 1e-7,
    'C': 1e-6,
    'M': 1e-5,
    'X': 1e-4,
}


def _optional_float(value) -> Optional[float]:
    if value is None or value == '':
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _optional_int(value) -> Optional[int]:
    number = _optional_float(value)
    return int(number) if number is not None else None


def _text(value) -> str:
    return str(value) if value is not None else ''


def parse_flare_magnitude(class_type: str) -> Optional[float]:
    """
    Parse the decimal multiplier of a class designation ('M1.2' -> 1.2).

    Returns None for designations shorter than two characters or with a
    non-numeric tail.
    """
    if not class_type or len(class_type) < 2:
        return None
    try:
        magnitude = float(class_type[1:])
    except ValueError:
        return None
    return magnitude if math.isfinite(magnitude) else None


def flare_class_to_flux(class_type: str) -> float:
    """
    Convert a flare class designation to peak X-ray flux in W/m².

    'M2.5' -> 2.5e-5. A bare letter uses multiplier 1; unknown classes
    return 0.0.
    """
    if not class_type:
        return 0.0

    class_type = class_type.strip().upper()
    base = FLARE_CLASS_FLUX.get(class_type[:1])
    if base is None:
        return 0.0

    magnitude = parse_flare_magnitude(class_type)
    return base * magnitude if magnitude is not None else base


@dataclass(frozen=True)
class FlareEvent:
    """Solar flare as reported by DONKI."""
    flare_id: str
    begin_time: Optional[datetime] = None
    peak_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    class_type: str = ''
    active_region_num: Optional[int] = None
    source_location: str = ''
    note: str = ''
    link: str = ''
    instruments: tuple = ()

    @property
    def class_letter(self) -> Optional[str]:
        return self.class_type[0].upper() if self.class_type else None

    @property
    def class_magnitude(self) -> Optional[float]:
        return parse_flare_magnitude(self.class_type)

    @property
    def is_valid(self) -> bool:
        """Flares without a begin time or class cannot be analyzed."""
        return self.begin_time is not None and bool(self.class_type)

    @classmethod
    def from_donki(cls, data: dict) -> 'FlareEvent':
        return cls(
            flare_id=_text(data.get('flrID')),
            begin_time=parse_iso_timestamp(data.get('beginTime')),
            peak_time=parse_iso_timestamp(data.get('peakTime')),
            end_time=parse_iso_timestamp(data.get('endTime')),
            class_type=_text(data.get('classType')).strip(),
            active_region_num=_optional_int(data.get('activeRegionNum')),
            source_location=_text(data.get('sourceLocation')),
            note=_text(data.get('note')),
            link=_text(data.get('link')),
            instruments=tuple(
                _text(i.get('displayName')) for i in data.get('instruments') or []
                if isinstance(i, dict)
            ),
        )


@dataclass(frozen=True)
class CMEAnalysis:
    """One model fit of a CME (DONKI cmeAnalyses entry)."""
    time21_5: Optional[datetime] = None
    speed: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    half_angle: Optional[float] = None
    tilt: Optional[float] = None
    minor_half_width: Optional[float] = None
    speed_measured_at_height: Optional[float] = None
    is_most_accurate: bool = False
    analysis_type: str = ''
    feature_code: str = ''
    measurement_technique: str = ''
    note: str = ''
    link: str = ''

    @classmethod
    def from_donki(cls, data: dict) -> 'CMEAnalysis':
        return cls(
            time21_5=parse_iso_timestamp(data.get('time21_5')),
            speed=_optional_float(data.get('speed')),
            latitude=_optional_float(data.get('latitude')),
            longitude=_optional_float(data.get('longitude')),
            half_angle=_optional_float(data.get('halfAngle')),
            tilt=_optional_float(data.get('tilt')),
            minor_half_width=_optional_float(data.get('minorHalfWidth')),
            speed_measured_at_height=_optional_float(data.get('speedMeasuredAtHeight')),
            is_most_accurate=bool(data.get('isMostAccurate')),
            analysis_type=_text(data.get('type')),
            feature_code=_text(data.get('featureCode')),
            measurement_technique=_text(data.get('measurementTechnique')),
            note=_text(data.get('note')),
            link=_text(data.get('link')),
        )


@dataclass(frozen=True)
class CMEEvent:
    """Coronal mass ejection with its analyses in delivered order."""
    activity_id: str
    start_time: Optional[datetime] = None
    active_region_num: Optional[int] = None
    analyses: tuple = ()
    source_location: str = ''
    note: str = ''
    link: str = ''

    @classmethod
    def from_donki(cls, data: dict) -> 'CMEEvent':
        return cls(
            activity_id=_text(data.get('activityID')),
            start_time=parse_iso_timestamp(data.get('startTime')),
            active_region_num=_optional_int(data.get('activeRegionNum')),
            analyses=tuple(
                CMEAnalysis.from_donki(a) for a in data.get('cmeAnalyses') or []
                if isinstance(a, dict)
            ),
            source_location=_text(data.get('sourceLocation')),
            note=_text(data.get('note')),
            link=_text(data.get('link')),
        )


@dataclass(frozen=True)
class SunspotObservation:
    """Sunspot region report from NOAA SWPC."""
    region: Optional[int] = None
    time_tag: Optional[datetime] = None
    area: float = 0.0
    num_spots: float = 0.0
    spot_class: str = ''
    mag_class: str = ''
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_noaa(cls, data: dict) -> 'SunspotObservation':
        row = {str(k).lower(): v for k, v in data.items()}
        return cls(
            region=_optional_int(row.get('region')),
            time_tag=parse_iso_timestamp(row.get('time_tag') or row.get('timetag')),
            area=_optional_float(row.get('area')) or 0.0,
            num_spots=_optional_float(row.get('numspot')) or 0.0,
            spot_class=_text(row.get('spotclass')).strip(),
            mag_class=_text(row.get('magclass')).strip(),
            latitude=_optional_float(row.get('latitude')),
            longitude=_optional_float(row.get('longitude')),
        )


@dataclass(frozen=True)
class InterestingEvent:
    """
    One ranked result of the analyzer.

    cme_speed is NaN unless set: events without a CME (no association,
    quick succession) carry 0.0.
    """
    flare: FlareEvent
    reason: Reason
    cme: Optional[CMEEvent] = None
    cme_speed: float = math.nan
    surprise_factor: float = 0.0
    confidence: float = 1.0
    sunspot: Optional[SunspotObservation] = None

    @property
    def reason_text(self) -> str:
        from solar_events.formatting import format_reason
        return format_reason(self.reason)
