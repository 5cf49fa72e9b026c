"""
Analysis Constants
==================

Default thresholds and lookup tables for flare/CME scoring.
Every value here can be overridden through AnalysisConfig.
"""

# =============================================================================
# ASSOCIATION WINDOWS
# =============================================================================

CME_ASSOCIATION_WINDOW_HOURS = 6      # Trailing edge only: [begin, peak + window]
SUCCESSION_WINDOW_MINUTES = 60        # ± around a flare's begin time
SUCCESSION_THRESHOLD = 3              # Flares (including itself) to flag a burst

# Same-time correlation report
SAME_TIME_TOLERANCE_MINUTES = 5
MAX_FLARE_RISE_HOURS = 2


# =============================================================================
# EXPECTED CME SPEEDS (km/s)
# =============================================================================
# Nominal range per flare class letter, scaled at runtime by the class
# magnitude: bound * (1 + (magnitude - 1) * MAGNITUDE_SCALING)

EXPECTED_SPEED_RANGES = {
    'A': (100.0, 500.0),
    'B': (200.0, 600.0),
    'C': (300.0, 800.0),
    'M': (500.0, 1200.0),
    'X': (800.0, 2000.0),
}

MAGNITUDE_SCALING = 0.1


# =============================================================================
# SCORING
# =============================================================================

# Confidence discounts
NO_CME_DISCOUNT = 0.5
INCOMPLETE_FLARE_DISCOUNT = 0.7
NO_SPEED_DISCOUNT = 0.8

# Qualification predicate: surprise > threshold OR confidence < threshold
SURPRISE_THRESHOLD = 0.5
CONFIDENCE_THRESHOLD = 0.7

# Surprise assigned to flares with no CME and to quick-succession flags
NO_CME_SURPRISE = 1.0

# Sunspot morphology (McIntosh first letter / Mount Wilson magnetic class)
SPOT_CLASS_FACTORS = {'A': 0.5, 'B': 1.0, 'C': 1.5}
SPOT_CLASS_DEFAULT = 2.0
MAG_CLASS_FACTORS = {'A': 0.5, 'B': 1.0}
MAG_CLASS_DEFAULT = 1.5

# Sunspot area above which the region counts as large (millionths)
LARGE_SUNSPOT_AREA = 500


# =============================================================================
# MAGNETIC CLASSIFICATION
# =============================================================================

MAGNETIC_CLASS_DESCRIPTIONS = {
    'A': 'Alpha: unipolar sunspot group',
    'B': 'Beta: bipolar sunspot group with a simple division between polarities',
    'G': 'Gamma: complex region with irregularly distributed polarities',
    'BG': 'Beta-Gamma: bipolar group too complex for a single dividing line',
    'D': 'Delta: opposite-polarity umbrae within one penumbra',
    'BD': 'Beta-Delta: beta group containing a delta configuration',
    'GD': 'Gamma-Delta: gamma group containing a delta configuration',
    'BGD': 'Beta-Gamma-Delta: beta-gamma group containing a delta configuration',
}


# =============================================================================
# SURPRISE LEVEL (presentation)
# =============================================================================

class SurpriseLevel:
    """Qualitative surprise level."""
    LOW = 'Low'                         # < 5
    MODERATE = 'Moderate'               # 5 <= s < 10
    HIGH = 'High'                       # 10 <= s < 20
    EXTREMELY_HIGH = 'Extremely High'   # >= 20


def get_surprise_level(surprise: float) -> str:
    """
    Classify a surprise factor into a qualitative level.

    Args:
        surprise: Surprise factor (>= 0)

    Returns:
        SurpriseLevel constant
    """
    if surprise < 5:
        return SurpriseLevel.LOW
    elif surprise < 10:
        return SurpriseLevel.MODERATE
    elif surprise < 20:
        return SurpriseLevel.HIGH
    else:
        return SurpriseLevel.EXTREMELY_HIGH
