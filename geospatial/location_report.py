"""
Declarative Location Reports.

A report is a statically declared tuple of :class:`ReportField` entries,
each pairing an output label with a function that produces the value
from a :class:`GeoLocation`. Renderers walk that tuple in order, so the
set and order of fields is explicit and never discovered by reflection.

Callers wanting a different layout declare their own tuple:

>>> BRIEF = (
...     ReportField("Name", lambda loc: loc.name),
...     ReportField("Latitude", lambda loc: loc.latitude),
... )
>>> to_dict(GeoLocation.greenwich(), BRIEF)
{'Name': 'Greenwich, England', 'Latitude': 51.4772}
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence, Tuple
from xml.sax.saxutils import escape

from common.types import GeoLocation
from common.units import convert


@dataclass(frozen=True)
class ReportField:
    """One labelled value of a report.

    Attributes
    ----------
    label : str
        Output label (XML element name, JSON key, text caption).
    producer : Callable[[GeoLocation], Any]
        Computes the value from the location.
    """
    label: str
    producer: Callable[[GeoLocation], Any]

    def value(self, location: GeoLocation) -> Any:
        return self.producer(location)


def _offset_hours(offset_ms: int) -> float:
    return convert(offset_ms, "millisecond", "hour")


LOCATION_FIELDS: Tuple[ReportField, ...] = (
    ReportField("LocationName", lambda loc: loc.name),
    ReportField("Latitude", lambda loc: loc.latitude),
    ReportField("Longitude", lambda loc: loc.longitude),
    ReportField("Elevation", lambda loc: f"{loc.elevation} Meters"),
    ReportField("TimezoneName", lambda loc: loc.time_zone.zone_id),
    ReportField("TimeZoneDisplayName", lambda loc: loc.time_zone.display_name),
    ReportField("TimezoneGMTOffset", lambda loc: _offset_hours(loc.time_zone.raw_offset_ms)),
    ReportField("TimezoneDSTOffset", lambda loc: _offset_hours(loc.time_zone.dst_savings_ms)),
)


def to_dict(
    location: GeoLocation,
    fields: Sequence[ReportField] = LOCATION_FIELDS
) -> Dict[str, Any]:
    """Evaluate every field, preserving declaration order."""
    return {f.label: f.value(location) for f in fields}


def to_json(
    location: GeoLocation,
    fields: Sequence[ReportField] = LOCATION_FIELDS,
    indent: int = 2
) -> str:
    """Render the report as a JSON object under a ``GeoLocation`` key."""
    return json.dumps({"GeoLocation": to_dict(location, fields)}, indent=indent, default=str)


def to_xml(
    location: GeoLocation,
    fields: Sequence[ReportField] = LOCATION_FIELDS,
    root: str = "GeoLocation"
) -> str:
    """Render the report as XML.

    Parameters
    ----------
    location : GeoLocation
        Location to describe.
    fields : sequence of ReportField
        Fields to emit, in order.
    root : str
        Name of the enclosing element.

    Returns
    -------
    str
        ``<root>`` with one tab-indented child element per field. Text
        content is XML-escaped.

    Examples
    --------
    >>> print(to_xml(GeoLocation.greenwich(), LOCATION_FIELDS[:2]))
    <GeoLocation>
    	<LocationName>Greenwich, England</LocationName>
    	<Latitude>51.4772</Latitude>
    </GeoLocation>
    """
    lines = [f"<{root}>"]
    for f in fields:
        lines.append(f"\t<{f.label}>{escape(str(f.value(location)))}</{f.label}>")
    lines.append(f"</{root}>")
    return "\n".join(lines)


def to_text(
    location: GeoLocation,
    fields: Sequence[ReportField] = LOCATION_FIELDS
) -> str:
    """Render the report as aligned ``label: value`` lines."""
    width = max((len(f.label) for f in fields), default=0)
    return "\n".join(f"{f.label + ':':<{width + 1}} {f.value(location)}" for f in fields)
