"""
Geodesy Consistency Checks for the Geolocation Engine.

This module verifies that solver outputs for a pair of locations obey
known geometric relationships and agree with an independent reference
implementation.

Check Categories
----------------
1. Symmetry (distance A→B equals distance B→A)
2. Reciprocity (initial bearing A→B and final bearing B→A differ by 180°)
3. Path ordering (a rhumb line is never shorter than the geodesic)
4. Reference agreement (Vincenty vs. Karney's algorithm in pyproj)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
from pyproj import Geod

from common.logging_config import get_logger
from common.types import GeoLocation
from geospatial.distance_calculations import (
    GeodesyConfig,
    rhumb_line_distance,
    vincenty_inverse,
)

logger = get_logger(__name__)

# Reference geodesic calculator (Karney's algorithm, converges everywhere)
_wgs84_geod = Geod(ellps='WGS84')


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the test.
    passed : bool
        Whether the test passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


def bearing_difference(bearing1_deg: float, bearing2_deg: float) -> float:
    """Signed difference bearing2 - bearing1 wrapped into [-180, 180)."""
    return (bearing2_deg - bearing1_deg + 180.0) % 360.0 - 180.0


class GeodesyConsistencyChecker:
    """Checker for geometric consistency of solver outputs.

    Parameters
    ----------
    strict_mode : bool
        If True, raise ValueError on the first failed check.
    log_violations : bool
        Whether to log failed checks.
    distance_tolerance_m : float
        Allowed difference for symmetry and reference-agreement checks.
    bearing_tolerance_deg : float
        Allowed deviation for bearing comparisons.
    rhumb_relative_tolerance : float
        Relative slack for the rhumb-versus-geodesic check. The rhumb
        line is computed on a sphere of radius a while the geodesic
        is on the ellipsoid, so along meridians near the poles the
        rhumb figure can fall a few tenths of a percent short.
    config : GeodesyConfig, optional
        Solver settings passed through to the geodesy functions.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        log_violations: bool = True,
        distance_tolerance_m: float = 0.01,
        bearing_tolerance_deg: float = 1e-6,
        rhumb_relative_tolerance: float = 0.005,
        config: Optional[GeodesyConfig] = None
    ):
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self.distance_tolerance_m = distance_tolerance_m
        self.bearing_tolerance_deg = bearing_tolerance_deg
        self.rhumb_relative_tolerance = rhumb_relative_tolerance
        self.config = config
        self._logger = get_logger("GeodesyConsistencyChecker")

    def check_all(
        self,
        origin: GeoLocation,
        destination: GeoLocation
    ) -> List[ValidationResult]:
        """Run all consistency checks on a pair of locations.

        Parameters
        ----------
        origin, destination : GeoLocation
            The pair to check.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        return [
            self.check_distance_symmetry(origin, destination),
            self.check_reciprocal_bearings(origin, destination),
            self.check_rhumb_not_shorter(origin, destination),
            self.check_reference_agreement(origin, destination),
        ]

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                self._logger.warning(f"{result.test_name} FAILED | {result.message}")
            if self.strict_mode:
                raise ValueError(f"{result.test_name}: {result.message}")
        return result

    def _not_converged(self, test_name: str, details: Dict[str, Any]) -> ValidationResult:
        return self._report(ValidationResult(
            test_name=test_name,
            passed=False,
            message="Vincenty formula did not converge",
            details=details,
        ))

    def check_distance_symmetry(
        self,
        origin: GeoLocation,
        destination: GeoLocation
    ) -> ValidationResult:
        """Check that the geodesic distance is the same in both directions."""
        forward = vincenty_inverse(origin, destination, self.config)
        backward = vincenty_inverse(destination, origin, self.config)

        if not (forward.converged and backward.converged):
            return self._not_converged("distance_symmetry", {
                'forward_converged': forward.converged,
                'backward_converged': backward.converged,
            })

        difference = abs(forward.distance_m - backward.distance_m)
        return self._report(ValidationResult(
            test_name="distance_symmetry",
            passed=difference <= self.distance_tolerance_m,
            message=f"Distance symmetry: |Δ| = {difference:.3e} m",
            details={
                'forward_m': forward.distance_m,
                'backward_m': backward.distance_m,
                'difference_m': difference,
            }
        ))

    def check_reciprocal_bearings(
        self,
        origin: GeoLocation,
        destination: GeoLocation
    ) -> ValidationResult:
        """Check that initial(A→B) and final(B→A) point in opposite directions."""
        forward = vincenty_inverse(origin, destination, self.config)
        backward = vincenty_inverse(destination, origin, self.config)

        if not (forward.converged and backward.converged):
            return self._not_converged("reciprocal_bearings", {})

        # -180° and 180° name one point but skip the iteration entirely
        if forward.coincident or forward.distance_m == 0.0:
            return ValidationResult(
                test_name="reciprocal_bearings",
                passed=True,
                message="Coincident points have no bearing",
                details={}
            )

        deviation = abs(bearing_difference(
            forward.initial_bearing_deg + 180.0, backward.final_bearing_deg
        ))
        return self._report(ValidationResult(
            test_name="reciprocal_bearings",
            passed=deviation <= self.bearing_tolerance_deg,
            message=f"Reciprocal bearings: deviation from 180° = {deviation:.3e}°",
            details={
                'initial_bearing_deg': forward.initial_bearing_deg,
                'reverse_final_bearing_deg': backward.final_bearing_deg,
                'deviation_deg': deviation,
            }
        ))

    def check_rhumb_not_shorter(
        self,
        origin: GeoLocation,
        destination: GeoLocation
    ) -> ValidationResult:
        """Check that the rhumb line is not shorter than the geodesic."""
        geodesic = vincenty_inverse(origin, destination, self.config)
        if not geodesic.converged:
            return self._not_converged("rhumb_not_shorter", {})

        rhumb_m = rhumb_line_distance(origin, destination, self.config)
        floor = geodesic.distance_m * (1.0 - self.rhumb_relative_tolerance)

        return self._report(ValidationResult(
            test_name="rhumb_not_shorter",
            passed=rhumb_m >= floor,
            message=f"Rhumb {rhumb_m:.1f} m vs geodesic {geodesic.distance_m:.1f} m",
            details={
                'rhumb_m': rhumb_m,
                'geodesic_m': geodesic.distance_m,
                'excess_m': rhumb_m - geodesic.distance_m,
            }
        ))

    def check_reference_agreement(
        self,
        origin: GeoLocation,
        destination: GeoLocation
    ) -> ValidationResult:
        """Compare the Vincenty solution with pyproj's geodesic."""
        result = vincenty_inverse(origin, destination, self.config)
        if not result.converged:
            return self._not_converged("reference_agreement", {})

        az12, _, reference_m = _wgs84_geod.inv(
            origin.longitude, origin.latitude,
            destination.longitude, destination.latitude
        )

        distance_error = abs(result.distance_m - reference_m)
        passed = bool(distance_error <= self.distance_tolerance_m)
        bearing_error = 0.0
        if not result.coincident and reference_m > self.distance_tolerance_m:
            bearing_error = abs(bearing_difference(az12, result.initial_bearing_deg))
            # bearings are poorly conditioned over very short lines
            passed = passed and bool(bearing_error <= max(self.bearing_tolerance_deg, 1e-5))

        return self._report(ValidationResult(
            test_name="reference_agreement",
            passed=passed,
            message=f"Reference agreement: distance error {distance_error:.3e} m",
            details={
                'vincenty_m': result.distance_m,
                'reference_m': float(reference_m),
                'distance_error_m': float(distance_error),
                'bearing_error_deg': float(bearing_error),
                'iterations': result.iterations,
            }
        ))


def check_pair(
    origin: GeoLocation,
    destination: GeoLocation,
    **checker_options: Any
) -> bool:
    """Run every check on a pair and report whether all of them passed."""
    checker = GeodesyConsistencyChecker(**checker_options)
    results = checker.check_all(origin, destination)
    return bool(np.all([r.passed for r in results]))
