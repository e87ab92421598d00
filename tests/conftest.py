"""Shared fixtures for the geolocation engine tests."""

import pytest

from common.types import GeoLocation, TimeZoneInfo

HOUR_MS = 3_600_000


@pytest.fixture
def lands_end():
    """Start point of Vincenty's published worked example."""
    return GeoLocation("Land's End", 50.06632, -5.71475, 0, TimeZoneInfo.from_offset(0))


@pytest.fixture
def john_o_groats():
    """End point of Vincenty's published worked example."""
    return GeoLocation("John o' Groats", 58.64402, -3.07009, 0, TimeZoneInfo.from_offset(0))


@pytest.fixture
def new_york():
    return GeoLocation("New York, NY", 40.7128, -74.0060, 10, TimeZoneInfo.from_offset(-5 * HOUR_MS))


@pytest.fixture
def london():
    return GeoLocation("London", 51.5074, -0.1278, 11, TimeZoneInfo.from_offset(0))


@pytest.fixture
def lakewood():
    return GeoLocation(
        "Lakewood, NJ", 40.0828, -74.2094, 0,
        TimeZoneInfo("America/New_York", -5 * HOUR_MS, HOUR_MS, "Eastern Standard Time")
    )
