"""
Reason Codes
============

Structured explanation attached to every interesting event. The scorer only
produces a code plus parameters; rendering to text lives in
solar_events.formatting.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


class ReasonCode:
    """Why an event was flagged."""
    NO_ASSOCIATED_CME = 'no_associated_cme'   # Flare with no CME in the window
    SLOW_CME = 'slow_cme'                     # CME slower than class range
    FAST_CME = 'fast_cme'                     # CME faster than class range
    WITHIN_RANGE = 'within_range'             # Speed in range, flagged on confidence
    UNKNOWN_CLASS = 'unknown_class'           # No speed range for flare class
    QUICK_SUCCESSION = 'quick_succession'     # Burst of flares


@dataclass(frozen=True)
class Reason:
    """
    Reason code with the parameters needed to explain it.

    params is stored as a read-only mapping. Parameter values must be
    hashable (use tuples, not lists) so events can live in sets.
    """
    code: str
    params: Mapping = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'params', MappingProxyType(dict(self.params)))

    def __hash__(self):
        return hash((self.code, frozenset(self.params.items())))

    def get(self, key: str, default=None):
        return self.params.get(key, default)
