"""
Geodesic and Rhumb-Line Calculations on the WGS84 Ellipsoid.

This module computes the distance and bearings between two locations
along two kinds of path:

1. Geodesic (shortest path on the ellipsoid), solved iteratively with
   Vincenty's inverse formula.
2. Rhumb line (loxodrome, constant compass bearing), solved in closed
   form on a sphere of radius a.

Scientific Context
------------------
Domain: Geodesy, navigation
Model: WGS84 ellipsoid (geodesic), WGS84-radius sphere (rhumb line)

Failure Modes
-------------
Vincenty's method iterates on the longitude difference on the auxiliary
sphere. It converges for practically all point pairs except nearly
antipodal ones. Failures are not exceptions:

- Coincident points: distance and both bearings are 0.
- Non-convergence within the iteration budget: distance and both
  bearings are NaN. Callers must test with ``math.isnan``.

The rhumb-line solution is total over valid latitudes and longitudes.

References
----------
- Vincenty, T. (1975). Direct and Inverse Solutions of Geodesics on the
  Ellipsoid with application of nested equations. Survey Review,
  XXII(176), 88-93. https://www.ngs.noaa.gov/PUBS_LIB/inverse.pdf
- Bowditch, N. The American Practical Navigator, ch. 24 (Mercator sailing).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from common.constants import PhysicalConstants
from common.logging_config import get_logger
from common.types import GeoLocation
from geospatial.coordinate_models import (
    EllipsoidParameters,
    WGS84Ellipsoid,
    isometric_latitude_difference,
    reduced_latitude,
)

logger = get_logger(__name__)


@dataclass
class GeodesyConfig:
    """Configuration for the geodesic and rhumb-line solvers.

    Attributes
    ----------
    max_iterations : int
        Iteration budget of the Vincenty loop. The budget is decremented
        before each pass, so at most ``max_iterations - 1`` passes run.
    convergence_tolerance : float
        Change in λ (radians) below which the loop has converged.
    rhumb_earth_radius_m : float
        Radius of the sphere used for rhumb-line distances.
    rhumb_east_west_epsilon : float
        |Δψ| below which a rhumb line is treated as running due east or
        west, where Δlat / Δψ is replaced by cos(lat1).
    ellipsoid : EllipsoidParameters
        Reference ellipsoid for the geodesic solution.
    """
    max_iterations: int = 20
    convergence_tolerance: float = 1e-12
    rhumb_earth_radius_m: float = PhysicalConstants.RHUMB_SPHERE_RADIUS.value
    rhumb_east_west_epsilon: float = 1e-12
    ellipsoid: EllipsoidParameters = field(default=WGS84Ellipsoid)


DEFAULT_CONFIG = GeodesyConfig()


class GeodesicQuantity(Enum):
    """Quantity selected from a geodesic solution."""
    DISTANCE = 0
    INITIAL_BEARING = 1
    FINAL_BEARING = 2


@dataclass
class GeodesicResult:
    """Result of a Vincenty inverse calculation.

    Attributes
    ----------
    distance_m : float
        Geodesic distance in meters. 0 for coincident points, NaN when
        the iteration did not converge.
    initial_bearing_deg : float
        Forward azimuth at the origin in degrees, in (-180, 180],
        clockwise from north.
    final_bearing_deg : float
        Forward azimuth at the destination in degrees, in (-180, 180].
    iterations : int
        Number of passes through the λ iteration.
    converged : bool
        False when the iteration budget ran out.
    coincident : bool
        True when the two points are the same point.
    """
    distance_m: float
    initial_bearing_deg: float
    final_bearing_deg: float
    iterations: int = 0
    converged: bool = True
    coincident: bool = False

    def get(self, quantity: GeodesicQuantity) -> float:
        """Return one quantity; NaN for an unrecognized selector."""
        if quantity is GeodesicQuantity.DISTANCE:
            return self.distance_m
        elif quantity is GeodesicQuantity.INITIAL_BEARING:
            return self.initial_bearing_deg
        elif quantity is GeodesicQuantity.FINAL_BEARING:
            return self.final_bearing_deg
        return float('nan')


def vincenty_inverse(
    origin: GeoLocation,
    destination: GeoLocation,
    config: Optional[GeodesyConfig] = None
) -> GeodesicResult:
    """Solve the inverse geodesic problem with Vincenty's formula.

    Given two points, find the distance and the forward azimuths at
    both ends.

    Parameters
    ----------
    origin : GeoLocation
        First point.
    destination : GeoLocation
        Second point.
    config : GeodesyConfig, optional
        Solver settings (default: WGS84, 20 iterations, 1e-12 rad).

    Returns
    -------
    GeodesicResult
        Distance in meters and bearings in degrees, or the sentinels
        described in the module docstring.

    Notes
    -----
    On an equatorial line cos²α is 0 and cos(2σm) evaluates to 0/0; it
    is taken as 0 (Vincenty 1975, §6). All arithmetic runs under IEEE
    rules so this case yields NaN rather than raising.

    Examples
    --------
    >>> # Vincenty's published example: Land's End to John o' Groats
    >>> a = GeoLocation("Land's End", 50.06632, -5.71475)
    >>> b = GeoLocation("John o' Groats", 58.64402, -3.07009)
    >>> result = vincenty_inverse(a, b)
    >>> print(f"{result.distance_m:.3f} m, {result.initial_bearing_deg:.4f}°")
    969954.166 m, 9.1420°
    """
    config = config or DEFAULT_CONFIG
    a = config.ellipsoid.a
    b = config.ellipsoid.b
    f = config.ellipsoid.f

    L = np.radians(destination.longitude - origin.longitude)
    U1 = reduced_latitude(np.radians(origin.latitude), config.ellipsoid)
    U2 = reduced_latitude(np.radians(destination.latitude), config.ellipsoid)
    sin_U1, cos_U1 = np.sin(U1), np.cos(U1)
    sin_U2, cos_U2 = np.sin(U2), np.cos(U2)

    lam = L
    lam_prev = 2 * np.pi
    iter_limit = config.max_iterations
    iterations = 0
    sin_lambda = cos_lambda = 0.0
    sin_sigma = cos_sigma = sigma = 0.0
    sin_alpha = cos_sq_alpha = cos_2sigma_m = 0.0

    with np.errstate(divide='ignore', invalid='ignore'):
        while np.abs(lam - lam_prev) > config.convergence_tolerance:
            iter_limit -= 1
            if iter_limit <= 0:
                break
            iterations += 1

            sin_lambda = np.sin(lam)
            cos_lambda = np.cos(lam)
            sin_sigma = np.sqrt(
                (cos_U2 * sin_lambda) * (cos_U2 * sin_lambda)
                + (cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lambda)
                * (cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lambda)
            )
            if sin_sigma == 0:
                logger.debug(f"Coincident points {origin.name!r} and {destination.name!r}")
                return GeodesicResult(0.0, 0.0, 0.0, iterations=iterations, coincident=True)

            cos_sigma = sin_U1 * sin_U2 + cos_U1 * cos_U2 * cos_lambda
            sigma = np.arctan2(sin_sigma, cos_sigma)
            sin_alpha = cos_U1 * cos_U2 * sin_lambda / sin_sigma
            cos_sq_alpha = 1 - sin_alpha * sin_alpha
            cos_2sigma_m = cos_sigma - 2 * sin_U1 * sin_U2 / cos_sq_alpha
            if np.isnan(cos_2sigma_m):
                cos_2sigma_m = 0.0  # equatorial line

            C = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
            lam_prev = lam
            lam = L + (1 - C) * f * sin_alpha * (
                sigma + C * sin_sigma * (
                    cos_2sigma_m + C * cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
                )
            )

    if iter_limit <= 0:
        logger.debug(
            f"Vincenty formula failed to converge between "
            f"({origin.latitude}, {origin.longitude}) and "
            f"({destination.latitude}, {destination.longitude})"
        )
        nan = float('nan')
        return GeodesicResult(nan, nan, nan, iterations=iterations, converged=False)

    u_sq = cos_sq_alpha * (a * a - b * b) / (b * b)
    A = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    B = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = B * sin_sigma * (
        cos_2sigma_m + B / 4 * (
            cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
            - B / 6 * cos_2sigma_m
            * (-3 + 4 * sin_sigma * sin_sigma)
            * (-3 + 4 * cos_2sigma_m * cos_2sigma_m)
        )
    )
    distance = b * A * (sigma - delta_sigma)

    initial_bearing = np.degrees(np.arctan2(
        cos_U2 * sin_lambda,
        cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lambda
    ))
    final_bearing = np.degrees(np.arctan2(
        cos_U1 * sin_lambda,
        -sin_U1 * cos_U2 + cos_U1 * sin_U2 * cos_lambda
    ))

    return GeodesicResult(
        distance_m=float(distance),
        initial_bearing_deg=float(initial_bearing),
        final_bearing_deg=float(final_bearing),
        iterations=iterations,
    )


def vincenty_formula(
    origin: GeoLocation,
    destination: GeoLocation,
    quantity: GeodesicQuantity,
    config: Optional[GeodesyConfig] = None
) -> float:
    """Compute a single quantity of the geodesic between two points.

    Parameters
    ----------
    origin, destination : GeoLocation
        End points.
    quantity : GeodesicQuantity
        Which quantity to return.
    config : GeodesyConfig, optional
        Solver settings.

    Returns
    -------
    float
        The requested value, 0 for coincident points, NaN on
        non-convergence or for an unrecognized selector.
    """
    return vincenty_inverse(origin, destination, config).get(quantity)


def geodesic_distance(
    origin: GeoLocation,
    destination: GeoLocation,
    config: Optional[GeodesyConfig] = None
) -> float:
    """Geodesic distance in meters (0 if coincident, NaN if not converged)."""
    return vincenty_formula(origin, destination, GeodesicQuantity.DISTANCE, config)


def geodesic_initial_bearing(
    origin: GeoLocation,
    destination: GeoLocation,
    config: Optional[GeodesyConfig] = None
) -> float:
    """Initial geodesic bearing in degrees (NaN if not converged)."""
    return vincenty_formula(origin, destination, GeodesicQuantity.INITIAL_BEARING, config)


def geodesic_final_bearing(
    origin: GeoLocation,
    destination: GeoLocation,
    config: Optional[GeodesyConfig] = None
) -> float:
    """Final geodesic bearing in degrees (NaN if not converged)."""
    return vincenty_formula(origin, destination, GeodesicQuantity.FINAL_BEARING, config)


def rhumb_line_bearing(origin: GeoLocation, destination: GeoLocation) -> float:
    """Compute the constant compass bearing of the rhumb line.

    Parameters
    ----------
    origin : GeoLocation
        Starting point.
    destination : GeoLocation
        End point.

    Returns
    -------
    float
        Bearing in degrees in (-180, 180], clockwise from north.

    Notes
    -----
    When the longitude difference exceeds 180° the shorter rhumb line
    across the 180° meridian is taken.
    """
    d_lon = np.radians(destination.longitude - origin.longitude)
    d_psi = isometric_latitude_difference(
        np.radians(origin.latitude), np.radians(destination.latitude)
    )
    if np.abs(d_lon) > np.pi:
        d_lon = -(2 * np.pi - d_lon) if d_lon > 0 else (2 * np.pi + d_lon)
    return float(np.degrees(np.arctan2(d_lon, d_psi)))


def rhumb_line_distance(
    origin: GeoLocation,
    destination: GeoLocation,
    config: Optional[GeodesyConfig] = None
) -> float:
    """Compute the rhumb-line distance between two points.

    Parameters
    ----------
    origin : GeoLocation
        Starting point.
    destination : GeoLocation
        End point.
    config : GeodesyConfig, optional
        Supplies the sphere radius and the east-west threshold.

    Returns
    -------
    float
        Distance in meters along the rhumb line.

    Notes
    -----
    d = R * sqrt(Δφ² + q²Δλ²) with q = Δφ / Δψ. On an east-west line Δψ
    vanishes and q tends to cos φ1, which is used directly once
    |Δψ| falls below ``config.rhumb_east_west_epsilon``.
    """
    config = config or DEFAULT_CONFIG
    lat1 = np.radians(origin.latitude)
    lat2 = np.radians(destination.latitude)
    d_lat = lat2 - lat1
    d_lon = np.abs(np.radians(destination.longitude) - np.radians(origin.longitude))
    d_psi = isometric_latitude_difference(lat1, lat2)

    if np.abs(d_psi) < config.rhumb_east_west_epsilon:
        q = np.cos(lat1)
    else:
        with np.errstate(divide='ignore', invalid='ignore'):
            q = d_lat / d_psi
        if not np.isfinite(q):
            q = np.cos(lat1)

    # take the shorter rhumb line across the 180° meridian
    if d_lon > np.pi:
        d_lon = 2 * np.pi - d_lon

    d = np.sqrt(d_lat * d_lat + q * q * d_lon * d_lon)
    return float(d * config.rhumb_earth_radius_m)
