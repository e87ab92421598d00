"""Unit tests for the geodesy consistency checks."""

import pytest

from common.types import GeoLocation
from geospatial.distance_calculations import GeodesyConfig
from validation.geodesy_checks import (
    GeodesyConsistencyChecker,
    bearing_difference,
    check_pair,
)


class TestBearingDifference:
    """Test suite for bearing_difference."""

    @pytest.mark.parametrize("b1,b2,expected", [
        (10.0, 20.0, 10.0),
        (350.0, 10.0, 20.0),
        (10.0, 350.0, -20.0),
        (-170.0, 170.0, -20.0),
        (0.0, 180.0, -180.0),
    ])
    def test_wrapping(self, b1, b2, expected):
        assert bearing_difference(b1, b2) == pytest.approx(expected)


class TestGeodesyConsistencyChecker:
    """Test suite for GeodesyConsistencyChecker."""

    @pytest.fixture
    def checker(self):
        return GeodesyConsistencyChecker(log_violations=False)

    def test_all_checks_pass(self, checker, new_york, london):
        """Test that a well-conditioned pair passes every check."""
        results = checker.check_all(new_york, london)
        assert [r.test_name for r in results] == [
            "distance_symmetry",
            "reciprocal_bearings",
            "rhumb_not_shorter",
            "reference_agreement",
        ]
        assert all(r.passed for r in results), [r.message for r in results]

    def test_reference_agreement(self, checker, lands_end, john_o_groats):
        """Test Vincenty against pyproj on the published example."""
        result = checker.check_reference_agreement(lands_end, john_o_groats)
        assert result.passed
        assert result.details['distance_error_m'] < 1e-3
        assert result.details['reference_m'] == pytest.approx(969954.166, abs=1e-2)

    def test_coincident_pair(self, checker, london):
        results = checker.check_all(london, london.copy())
        assert all(r.passed for r in results)

    def test_antimeridian_same_point(self, checker):
        """Test that -180° and 180° on one parallel pass the bearing check."""
        origin = GeoLocation("a", 10.0, -180.0)
        destination = GeoLocation("b", 10.0, 180.0)
        result = checker.check_reciprocal_bearings(origin, destination)
        assert result.passed
        assert result.details == {}

    def test_non_convergence_fails(self, checker, new_york, london):
        """Test that a solver failure is reported as a failed check."""
        checker.config = GeodesyConfig(max_iterations=2)
        result = checker.check_distance_symmetry(new_york, london)
        assert not result.passed
        assert "did not converge" in result.message

    def test_strict_mode_raises(self, new_york, london):
        """Test that strict mode turns a failure into ValueError."""
        checker = GeodesyConsistencyChecker(
            strict_mode=True,
            log_violations=False,
            config=GeodesyConfig(max_iterations=2),
        )
        with pytest.raises(ValueError, match="reference_agreement"):
            checker.check_reference_agreement(new_york, london)

    def test_violation_is_logged(self, new_york, london, caplog):
        checker = GeodesyConsistencyChecker(config=GeodesyConfig(max_iterations=2))
        checker.check_rhumb_not_shorter(new_york, london)
        assert "rhumb_not_shorter FAILED" in caplog.text

    def test_rhumb_tolerance_near_pole(self, checker):
        """Test that the sphere-versus-ellipsoid gap is tolerated."""
        origin = GeoLocation("a", 80.0, 0.0)
        destination = GeoLocation("b", 89.0, 0.0)
        assert checker.check_rhumb_not_shorter(origin, destination).passed


class TestCheckPair:
    """Test suite for the check_pair convenience function."""

    def test_passing_pair(self, lands_end, john_o_groats):
        assert check_pair(lands_end, john_o_groats, log_violations=False)

    def test_failing_pair(self, lands_end, john_o_groats):
        assert not check_pair(
            lands_end, john_o_groats,
            log_violations=False,
            config=GeodesyConfig(max_iterations=2),
        )
