"""
Validation Framework for the Geolocation Engine.

This module provides consistency checks for the geodesy solvers.
"""

from validation.geodesy_checks import (
    ValidationResult,
    GeodesyConsistencyChecker,
    bearing_difference,
    check_pair,
)

__all__ = [
    "ValidationResult",
    "GeodesyConsistencyChecker",
    "bearing_difference",
    "check_pair",
]
