"""
Geospatial Module for the Geolocation Engine.

All distance, bearing and longitude-derived time calculations of the
engine originate from this module.

This module provides:
- The WGS84 reference ellipsoid and latitude transforms
- Vincenty inverse geodesic solution (distance, initial/final bearing)
- Closed-form rhumb-line distance and bearing
- Local mean time offset and antimeridian date adjustment
- Declarative location reports (text, XML, JSON)
"""

from geospatial.coordinate_models import (
    EllipsoidParameters,
    WGS84Ellipsoid,
    reduced_latitude,
    isometric_latitude_difference,
)

from geospatial.distance_calculations import (
    GeodesyConfig,
    GeodesicQuantity,
    GeodesicResult,
    vincenty_inverse,
    vincenty_formula,
    geodesic_distance,
    geodesic_initial_bearing,
    geodesic_final_bearing,
    rhumb_line_bearing,
    rhumb_line_distance,
)

from geospatial.time_offsets import (
    TimeOffsetConfig,
    local_mean_time_offset,
    antimeridian_adjustment,
)

from geospatial.location_report import (
    ReportField,
    LOCATION_FIELDS,
    to_dict,
    to_json,
    to_xml,
    to_text,
)

__all__ = [
    # Coordinate models
    "EllipsoidParameters",
    "WGS84Ellipsoid",
    "reduced_latitude",
    "isometric_latitude_difference",
    # Distance calculations
    "GeodesyConfig",
    "GeodesicQuantity",
    "GeodesicResult",
    "vincenty_inverse",
    "vincenty_formula",
    "geodesic_distance",
    "geodesic_initial_bearing",
    "geodesic_final_bearing",
    "rhumb_line_bearing",
    "rhumb_line_distance",
    # Time offsets
    "TimeOffsetConfig",
    "local_mean_time_offset",
    "antimeridian_adjustment",
    # Reports
    "ReportField",
    "LOCATION_FIELDS",
    "to_dict",
    "to_json",
    "to_xml",
    "to_text",
]
