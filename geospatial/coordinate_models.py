"""
Coordinate Models for Ellipsoidal Earth Geometry.

This module holds the reference ellipsoid and the latitude transforms
shared by the geodesic and rhumb-line solvers.

Scientific Context
------------------
Domain: Geodesy, Earth geometry
Model: WGS84 reference ellipsoid

Latitude Transforms
-------------------
1. Reduced (parametric) latitude U: the latitude on the auxiliary sphere
   used by Vincenty's method, tan U = (1 - f) tan φ.

2. Isometric latitude ψ on the sphere: ψ = ln tan(π/4 + φ/2). Rhumb lines
   are straight in (λ, ψ), which is what makes the rhumb solution closed-form.

References
----------
- NIMA TR8350.2: WGS84 parameters
- Vincenty, T. (1975). Survey Review, XXII(176), 88-93.
"""

from dataclasses import dataclass

import numpy as np

from common.constants import PhysicalConstants


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    b : float
        Semi-minor axis (polar radius) in meters. Carried explicitly
        rather than derived from ``a`` and ``f`` so that published
        worked examples reproduce to the millimetre.
    f : float
        Flattening: f = (a - b) / a
    name : str
        Identifier for the ellipsoid.
    """
    a: float
    b: float
    f: float
    name: str


# WGS84 ellipsoid - the only datum supported
WGS84Ellipsoid = EllipsoidParameters(
    a=PhysicalConstants.EARTH_SEMI_MAJOR_AXIS.value,
    b=PhysicalConstants.EARTH_SEMI_MINOR_AXIS.value,
    f=PhysicalConstants.EARTH_FLATTENING.value,
    name="WGS84"
)


def reduced_latitude(
    latitude_rad: float,
    ellipsoid: EllipsoidParameters = WGS84Ellipsoid
) -> float:
    """Compute the reduced latitude U on the auxiliary sphere.

    Parameters
    ----------
    latitude_rad : float
        Geodetic latitude in radians.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        U = atan((1 - f) tan φ), in radians.
    """
    return np.arctan((1 - ellipsoid.f) * np.tan(latitude_rad))


def isometric_latitude_difference(lat1_rad: float, lat2_rad: float) -> float:
    """Compute Δψ, the difference of spherical isometric latitudes.

    Parameters
    ----------
    lat1_rad, lat2_rad : float
        Start and end latitudes in radians.

    Returns
    -------
    float
        ln(tan(φ2/2 + π/4) / tan(φ1/2 + π/4)). Infinite when one end
        is a pole (the ratio is evaluated under IEEE rules).
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.log(
            np.tan(lat2_rad / 2 + np.pi / 4) / np.tan(lat1_rad / 2 + np.pi / 4)
        )
