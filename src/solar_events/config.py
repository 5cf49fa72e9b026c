"""
Configuration
=============

Tunable analysis thresholds and upstream endpoints.

Values come from, in order of precedence:
1. A JSON file passed explicitly (or ~/.config/solar-events/config.json)
2. NASA_API_KEY environment variable for the DONKI key
3. Defaults from solar_events.analysis.constants

Example config.json:

    {
        "cme_association_window_hours": 8,
        "expected_speed_ranges": {"X": [900, 2500]},
        "api_key": "..."
    }
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from solar_events.analysis import constants


DEFAULT_CONFIG_PATH = Path.home() / ".config" / "solar-events" / "config.json"
DONKI_BASE_URL = "https://kauai.ccmc.gsfc.nasa.gov/DONKI/WS/get"
NOAA_BASE_URL = "https://services.swpc.noaa.gov"


@dataclass
class AnalysisConfig:
    """Settings for one analysis run."""
    cme_association_window_hours: float = constants.CME_ASSOCIATION_WINDOW_HOURS
    succession_window_minutes: float = constants.SUCCESSION_WINDOW_MINUTES
    succession_threshold: int = constants.SUCCESSION_THRESHOLD
    expected_speed_ranges: dict = field(
        default_factory=lambda: dict(constants.EXPECTED_SPEED_RANGES)
    )
    magnetic_class_descriptions: dict = field(
        default_factory=lambda: dict(constants.MAGNETIC_CLASS_DESCRIPTIONS)
    )
    donki_base_url: str = DONKI_BASE_URL
    noaa_base_url: str = NOAA_BASE_URL
    api_key: str = field(default_factory=lambda: os.environ.get('NASA_API_KEY', 'DEMO_KEY'))


def _parse_speed_ranges(raw) -> dict:
    if not isinstance(raw, dict):
        raise ValueError("expected_speed_ranges must be an object of class -> [min, max]")

    ranges = {}
    for key, bounds in raw.items():
        letter = str(key).strip().upper()[:1]
        if isinstance(bounds, dict):
            bounds = (bounds.get('min'), bounds.get('max'))
        try:
            lo, hi = (float(b) for b in bounds)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid speed range for class '{key}': {bounds!r}") from None
        if not letter or lo <= 0 or hi < lo:
            raise ValueError(f"Invalid speed range for class '{key}': {lo}-{hi}")
        ranges[letter] = (lo, hi)
    return ranges


def _coerce(key: str, value, convert):
    try:
        return convert(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value for {key}: {value!r}") from None


def config_from_dict(data: dict) -> AnalysisConfig:
    """
    Build a config from a mapping, starting from defaults.

    Speed ranges are merged per class letter so a file can override a
    single class.

    Raises:
        ValueError: On unknown keys or malformed values
    """
    known = {f.name for f in fields(AnalysisConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    config = AnalysisConfig()
    for key, value in data.items():
        if key == 'expected_speed_ranges':
            config.expected_speed_ranges.update(_parse_speed_ranges(value))
        elif key == 'magnetic_class_descriptions':
            if not isinstance(value, dict):
                raise ValueError("magnetic_class_descriptions must be an object of class -> description")
            config.magnetic_class_descriptions.update({str(k): str(v) for k, v in value.items()})
        elif key == 'succession_threshold':
            config.succession_threshold = _coerce(key, value, int)
        elif key in ('cme_association_window_hours', 'succession_window_minutes'):
            value = _coerce(key, value, float)
            if not value >= 0:
                raise ValueError(f"{key} must be >= 0, got {value}")
            setattr(config, key, value)
        else:
            if value is None:
                raise ValueError(f"Invalid value for {key}: {value!r}")
            setattr(config, key, str(value))
    return config


def load_config(path: Optional[Path] = None) -> AnalysisConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: Config file. Defaults to ~/.config/solar-events/config.json,
              which may be absent.

    Returns:
        AnalysisConfig
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return AnalysisConfig()

    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    return config_from_dict(data)
