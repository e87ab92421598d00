"""
Common utilities and infrastructure for the Geolocation Engine.

This package provides foundational components used across all modules:
- Physical and civil-time constants with provenance
- Unit registry for quantity-aware inputs
- The GeoLocation type and its time-zone association
- Logging infrastructure
"""

from common.constants import PhysicalConstants
from common.units import ureg, Q_, as_magnitude
from common.types import (
    DomainError,
    GeoLocation,
    TimeZoneInfo,
    make_location,
)
from common.logging_config import get_logger

__all__ = [
    "PhysicalConstants",
    "ureg",
    "Q_",
    "as_magnitude",
    "DomainError",
    "GeoLocation",
    "TimeZoneInfo",
    "make_location",
    "get_logger",
]
