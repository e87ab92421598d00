"""
Physical and Timekeeping Constants for the Geolocation Engine.

This module provides the constants used by the geodesic, rhumb-line and
time-offset calculations, each with its uncertainty bounds and source.
All constants are defined with SI units (or milliseconds for civil time)
and are traceable to authoritative sources.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- Vincenty, T. (1975). Direct and Inverse Solutions of Geodesics on the
  Ellipsoid with application of nested equations. Survey Review, XXII(176).
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A physical constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class PhysicalConstants:
    """Registry of constants used throughout the engine.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Earth Geometry (WGS84)
    ----------------------
    These constants define the reference ellipsoid used for the
    Vincenty inverse solution and the sphere used by the rhumb-line
    approximation.

    Civil Time
    ----------
    Millisecond constants used to relate longitude to clock time.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.3142,
        uncertainty=0.0001,
        unit="m",
        source="WGS84, NIMA TR8350.2 (rounded as in Vincenty's worked examples)",
        description="Semi-minor axis (polar radius) of WGS84 ellipsoid"
    )

    EARTH_FLATTENING: Final[Constant] = Constant(
        value=1.0 / 298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of WGS84 ellipsoid: f = (a - b) / a"
    )

    RHUMB_SPHERE_RADIUS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,
        unit="m",
        source="WGS84 equatorial radius",
        description="Radius of the sphere used for rhumb-line distances"
    )

    # =========================================================================
    # Civil Time
    # =========================================================================

    MINUTE_MILLIS: Final[int] = 60 * 1000

    HOUR_MILLIS: Final[int] = MINUTE_MILLIS * 60

    MINUTES_PER_DEGREE: Final[Constant] = Constant(
        value=4.0,
        uncertainty=0.0,  # Defined exactly
        unit="min/deg",
        source="360 degrees of rotation per 24 hours",
        description="Minutes of mean solar time per degree of longitude"
    )
