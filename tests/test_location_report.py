"""Unit tests for the declarative location reports."""

import json

import pytest

from common.types import GeoLocation, TimeZoneInfo
from geospatial.location_report import (
    LOCATION_FIELDS,
    ReportField,
    to_dict,
    to_json,
    to_text,
    to_xml,
)


class TestLocationReport:
    """Test suite for report rendering."""

    def test_field_order(self, lakewood):
        """Test that fields come out in declaration order."""
        assert list(to_dict(lakewood)) == [
            "LocationName",
            "Latitude",
            "Longitude",
            "Elevation",
            "TimezoneName",
            "TimeZoneDisplayName",
            "TimezoneGMTOffset",
            "TimezoneDSTOffset",
        ]

    def test_dict_values(self, lakewood):
        report = to_dict(lakewood)
        assert report["LocationName"] == "Lakewood, NJ"
        assert report["Latitude"] == 40.0828
        assert report["Elevation"] == "0.0 Meters"
        assert report["TimezoneName"] == "America/New_York"
        assert report["TimeZoneDisplayName"] == "Eastern Standard Time"
        assert report["TimezoneGMTOffset"] == pytest.approx(-5.0)
        assert report["TimezoneDSTOffset"] == pytest.approx(1.0)

    def test_xml(self):
        """Test the XML layout for the default location."""
        xml = to_xml(GeoLocation.greenwich())
        lines = xml.split("\n")
        assert lines[0] == "<GeoLocation>"
        assert lines[-1] == "</GeoLocation>"
        assert "\t<LocationName>Greenwich, England</LocationName>" in lines
        assert "\t<Latitude>51.4772</Latitude>" in lines
        assert "\t<Elevation>0.0 Meters</Elevation>" in lines
        assert "\t<TimezoneName>GMT</TimezoneName>" in lines
        assert len(lines) == len(LOCATION_FIELDS) + 2

    def test_xml_escapes_text(self):
        loc = GeoLocation("Fish & Chips <Shop>", 51.5, -0.1)
        assert "<LocationName>Fish &amp; Chips &lt;Shop&gt;</LocationName>" in to_xml(loc)

    def test_json_round_trip(self, lakewood):
        """Test that JSON output parses back to the dictionary report."""
        parsed = json.loads(to_json(lakewood))
        assert list(parsed) == ["GeoLocation"]
        assert parsed["GeoLocation"]["LocationName"] == "Lakewood, NJ"
        assert parsed["GeoLocation"]["Longitude"] == -74.2094

    def test_text(self, lakewood):
        text = to_text(lakewood)
        lines = text.split("\n")
        assert len(lines) == len(LOCATION_FIELDS)
        assert lines[0].startswith("LocationName:")
        assert lines[0].endswith("Lakewood, NJ")
        # Values line up after the longest label, "TimeZoneDisplayName:"
        column = len("TimeZoneDisplayName: ")
        assert lines[0][column:] == "Lakewood, NJ"
        assert lines[4][column:] == "America/New_York"

    def test_custom_fields(self):
        """Test a caller-declared report."""
        fields = (
            ReportField("Name", lambda loc: loc.name),
            ReportField("Zone", lambda loc: loc.time_zone.zone_id),
        )
        loc = GeoLocation("Somewhere", 1.0, 2.0, 0, TimeZoneInfo.from_offset(3_600_000))
        assert to_dict(loc, fields) == {"Name": "Somewhere", "Zone": "GMT+01:00"}
        assert to_xml(loc, fields, root="Place") == (
            "<Place>\n\t<Name>Somewhere</Name>\n\t<Zone>GMT+01:00</Zone>\n</Place>"
        )

    def test_empty_fields(self, lakewood):
        assert to_dict(lakewood, ()) == {}
        assert to_text(lakewood, ()) == ""
