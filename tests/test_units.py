"""Unit tests for the unit registry helpers."""

import pytest

from common.units import Q_, STANDARD_UNITS, as_magnitude, convert


class TestUnits:
    """Test suite for canonical units and conversions."""

    def test_canonical_units(self):
        """Test the units quantity inputs are converted to."""
        assert STANDARD_UNITS == {"elevation": "meter", "time_offset": "millisecond"}

    def test_as_magnitude_quantity(self):
        assert as_magnitude(Q_(1200, 'ft'), STANDARD_UNITS["elevation"]) == pytest.approx(365.76)
        assert as_magnitude(Q_(-5, 'hour'), STANDARD_UNITS["time_offset"]) == -18_000_000.0

    def test_as_magnitude_bare_number(self):
        """Test that bare numbers pass through as floats."""
        value = as_magnitude(42, "meter")
        assert value == 42.0
        assert isinstance(value, float)

    def test_as_magnitude_wrong_dimension(self):
        with pytest.raises(ValueError, match="Incompatible units"):
            as_magnitude(Q_(3, 'second'), "meter")

    def test_convert(self):
        assert convert(5_400_000, "millisecond", "hour") == pytest.approx(1.5)
