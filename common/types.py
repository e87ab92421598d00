"""
Type Definitions for the Geolocation Engine.

This module defines the location type that every calculation in the
engine consumes, together with the time-zone association it carries
and the error raised when a value falls outside its valid domain.

Design Rationale
----------------
A location is validated on construction AND on every mutation. A
mutation that fails validation raises :class:`DomainError` before any
attribute is touched, so a location can never be observed in a
partially-updated state.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple, Union

import numpy as np
import pint
import pytz

from common.constants import PhysicalConstants
from common.units import STANDARD_UNITS, as_magnitude


class DomainError(ValueError):
    """Raised when an input lies outside its defined valid range.

    Examples are a latitude beyond ±90°, a longitude beyond ±180°, a
    negative or non-finite elevation, or an unknown hemisphere token.
    """


@dataclass(frozen=True)
class TimeZoneInfo:
    """Time zone associated with a location.

    Attributes
    ----------
    zone_id : str
        Identifier such as ``"America/New_York"`` or ``"GMT+14:00"``.
    raw_offset_ms : int
        Standard (non-DST) offset from UTC in MILLISECONDS.
    dst_savings_ms : int
        Amount of time added while daylight saving time is in effect,
        in MILLISECONDS. Zero for zones without DST.
    display_name : str
        Human-readable name. Defaults to ``zone_id``.
    """
    zone_id: str
    raw_offset_ms: int
    dst_savings_ms: int = 0
    display_name: str = ""

    def __post_init__(self):
        if not self.display_name:
            object.__setattr__(self, "display_name", self.zone_id)

    @classmethod
    def utc(cls) -> 'TimeZoneInfo':
        """The UTC zone (offset 0, no DST)."""
        return cls(zone_id="UTC", raw_offset_ms=0)

    @classmethod
    def from_offset(
        cls,
        raw_offset_ms: Union[int, pint.Quantity],
        zone_id: Optional[str] = None
    ) -> 'TimeZoneInfo':
        """Create a fixed-offset zone.

        Parameters
        ----------
        raw_offset_ms : int or pint.Quantity
            Offset from UTC. Bare numbers are milliseconds.
        zone_id : str, optional
            Identifier. Defaults to ``"GMT"`` for a zero offset and to
            ``"GMT+hh:mm"`` / ``"GMT-hh:mm"`` otherwise.

        Returns
        -------
        TimeZoneInfo
            Zone with no daylight saving time.
        """
        offset = int(as_magnitude(raw_offset_ms, STANDARD_UNITS["time_offset"]))
        if zone_id is None:
            zone_id = _gmt_offset_id(offset)
        return cls(zone_id=zone_id, raw_offset_ms=offset)

    @classmethod
    def from_zone_name(
        cls,
        name: str,
        reference: Optional[datetime] = None
    ) -> 'TimeZoneInfo':
        """Resolve an IANA time zone name.

        Parameters
        ----------
        name : str
            IANA zone name such as ``"Pacific/Apia"``.
        reference : datetime, optional
            Instant at which the standard offset is sampled. Zones change
            their standard offset over history, so the result depends on
            this instant. Naive datetimes are taken as UTC. Defaults to now.

        Returns
        -------
        TimeZoneInfo
            Zone whose raw offset is the UTC offset minus any DST delta
            in force at ``reference``.

        Raises
        ------
        DomainError
            If the name is not a known zone.
        """
        try:
            zone = pytz.timezone(name)
        except pytz.UnknownTimeZoneError as e:
            raise DomainError(f"Unknown time zone {name!r}") from e

        if reference is None:
            reference = datetime.now(timezone.utc)
        elif reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)

        local = reference.astimezone(zone)
        dst = local.dst() or timedelta(0)
        raw_offset = local.utcoffset() - dst

        # January and July cover the DST season of both hemispheres
        savings = max(
            (zone.localize(datetime(reference.year, month, 1, 12)).dst() or timedelta(0))
            for month in (1, 7)
        )

        return cls(
            zone_id=name,
            raw_offset_ms=_to_millis(raw_offset),
            dst_savings_ms=_to_millis(savings),
        )


def _to_millis(delta: timedelta) -> int:
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def _gmt_offset_id(offset_ms: int) -> str:
    if offset_ms == 0:
        return "GMT"
    sign = "+" if offset_ms > 0 else "-"
    minutes = abs(offset_ms) // PhysicalConstants.MINUTE_MILLIS
    return f"GMT{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _same_bits(x: float, y: float) -> bool:
    """Bit-exact float comparison (distinguishes 0.0 from -0.0)."""
    return np.float64(x).tobytes() == np.float64(y).tobytes()


class GeoLocation:
    """A named location on Earth's surface with its time zone.

    This is the fundamental spatial type of the engine. Geodesic,
    rhumb-line and time-offset calculations all take GeoLocation
    arguments.

    Attributes
    ----------
    name : str
        Display label such as ``"Lakewood, NJ"``. No semantic constraint.
    latitude : float
        Geodetic latitude in DEGREES. Range: [-90, 90], positive north.
    longitude : float
        Geodetic longitude in DEGREES. Range: [-180, 180], positive east
        of the Prime Meridian.
    elevation : float
        Height above sea level in METERS. Must be >= 0 and finite. Not
        used by the geodesic or rhumb-line calculations.
    time_zone : TimeZoneInfo
        Zone whose raw offset drives the local mean time calculations.

    Notes
    -----
    - Instances are mutable through the property setters and the DMS
      setters; each mutation is validated before it is applied.
    - Equality is structural and bit-exact on the float fields. Since
      instances are mutable they are not hashable.
    - Instances are not internally synchronized; share them between
      threads only as read-only snapshots.

    Examples
    --------
    >>> lakewood = GeoLocation("Lakewood, NJ", 40.0828, -74.2094, 0,
    ...                        TimeZoneInfo.from_offset(-5 * 3_600_000))
    >>> lakewood.set_latitude_dms(40, 5, 45.48, "N")
    >>> round(lakewood.latitude, 6)
    40.095967
    """

    def __init__(
        self,
        name: str,
        latitude: float,
        longitude: float,
        elevation: Union[float, pint.Quantity] = 0.0,
        time_zone: Optional[TimeZoneInfo] = None
    ):
        """Initialize a location, validating every field.

        Parameters
        ----------
        name : str
            Display label.
        latitude : float
            Latitude in degrees, negative south of the equator.
        longitude : float
            Longitude in degrees, negative west of the Prime Meridian.
        elevation : float or pint.Quantity
            Elevation above sea level. Bare numbers are meters.
        time_zone : TimeZoneInfo, optional
            Defaults to UTC.

        Raises
        ------
        DomainError
            If any coordinate or the elevation is out of range.
        """
        self._name = name
        self._latitude = self._validate_latitude(latitude)
        self._longitude = self._validate_longitude(longitude)
        self._elevation = self._validate_elevation(elevation)
        self._time_zone = time_zone if time_zone is not None else TimeZoneInfo.utc()

    @classmethod
    def greenwich(cls) -> 'GeoLocation':
        """The Royal Observatory, Greenwich on GMT with no DST."""
        return cls(
            name="Greenwich, England",
            latitude=51.4772,
            longitude=0.0,
            elevation=0.0,
            time_zone=TimeZoneInfo.from_offset(0),
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_latitude(value: float) -> float:
        value = float(value)
        if not -90.0 <= value <= 90.0:
            raise DomainError(f"Latitude must be between -90 and 90, got {value}")
        return value

    @staticmethod
    def _validate_longitude(value: float) -> float:
        value = float(value)
        if not -180.0 <= value <= 180.0:
            raise DomainError(f"Longitude must be between -180 and 180, got {value}")
        return value

    @staticmethod
    def _validate_elevation(value: Union[float, pint.Quantity]) -> float:
        try:
            value = as_magnitude(value, STANDARD_UNITS["elevation"])
        except ValueError as e:
            raise DomainError(str(e)) from e
        if np.isnan(value) or np.isinf(value):
            raise DomainError("Elevation must not be NaN or infinite")
        if value < 0:
            raise DomainError(f"Elevation cannot be negative, got {value}")
        return value

    @staticmethod
    def _dms_to_decimal(
        degrees: int,
        minutes: int,
        seconds: float,
        limit: float,
        axis: str
    ) -> float:
        if degrees < 0 or minutes < 0 or seconds < 0:
            raise DomainError(
                f"{axis} degrees, minutes and seconds must not be negative; "
                f"use the hemisphere to give the sign"
            )
        decimal = degrees + ((minutes + (seconds / 60.0)) / 60.0)
        if not 0.0 <= decimal <= limit:
            raise DomainError(f"{axis} must be between 0 and {limit:g}, got {decimal}")
        return decimal

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def latitude(self) -> float:
        return self._latitude

    @latitude.setter
    def latitude(self, value: float) -> None:
        self._latitude = self._validate_latitude(value)

    @property
    def longitude(self) -> float:
        return self._longitude

    @longitude.setter
    def longitude(self, value: float) -> None:
        self._longitude = self._validate_longitude(value)

    @property
    def elevation(self) -> float:
        return self._elevation

    @elevation.setter
    def elevation(self, value: Union[float, pint.Quantity]) -> None:
        self._elevation = self._validate_elevation(value)

    @property
    def time_zone(self) -> TimeZoneInfo:
        return self._time_zone

    @time_zone.setter
    def time_zone(self, value: TimeZoneInfo) -> None:
        self._time_zone = value

    def set_latitude(self, latitude: float) -> None:
        """Set the latitude in decimal degrees (see :attr:`latitude`)."""
        self.latitude = latitude

    def set_longitude(self, longitude: float) -> None:
        """Set the longitude in decimal degrees (see :attr:`longitude`)."""
        self.longitude = longitude

    def set_elevation(self, elevation: Union[float, pint.Quantity]) -> None:
        """Set the elevation in meters (see :attr:`elevation`)."""
        self.elevation = elevation

    def set_latitude_dms(
        self,
        degrees: int,
        minutes: int,
        seconds: float,
        hemisphere: str
    ) -> None:
        """Set the latitude from degrees, minutes and seconds of arc.

        Parameters
        ----------
        degrees : int
            Whole degrees between 0 and 90.
        minutes : int
            Minutes of arc.
        seconds : float
            Seconds of arc.
        hemisphere : str
            ``"N"`` for north or ``"S"`` for south.

        Raises
        ------
        DomainError
            If the value exceeds 90° or is NaN, any component is negative, or the
            hemisphere is not N or S.
        """
        latitude = self._dms_to_decimal(degrees, minutes, seconds, 90.0, "Latitude")
        if hemisphere == "S":
            latitude *= -1
        elif hemisphere != "N":
            raise DomainError(f"Latitude direction must be N or S, got {hemisphere!r}")
        self._latitude = self._validate_latitude(latitude)

    def set_longitude_dms(
        self,
        degrees: int,
        minutes: int,
        seconds: float,
        hemisphere: str
    ) -> None:
        """Set the longitude from degrees, minutes and seconds of arc.

        Parameters
        ----------
        degrees : int
            Whole degrees between 0 and 180.
        minutes : int
            Minutes of arc.
        seconds : float
            Seconds of arc.
        hemisphere : str
            ``"E"`` for east of the Prime Meridian or ``"W"`` for west.

        Raises
        ------
        DomainError
            If the value exceeds 180° or is NaN, any component is negative, or the
            hemisphere is not E or W.
        """
        longitude = self._dms_to_decimal(degrees, minutes, seconds, 180.0, "Longitude")
        if hemisphere == "W":
            longitude *= -1
        elif hemisphere != "E":
            raise DomainError(f"Longitude direction must be E or W, got {hemisphere!r}")
        self._longitude = self._validate_longitude(longitude)

    def to_radians(self) -> Tuple[float, float]:
        """Return ``(latitude_rad, longitude_rad)``."""
        return float(np.radians(self._latitude)), float(np.radians(self._longitude))

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def copy(self) -> 'GeoLocation':
        """Deep copy with an independent time-zone association."""
        clone = GeoLocation.__new__(GeoLocation)
        clone._name = self._name
        clone._latitude = self._latitude
        clone._longitude = self._longitude
        clone._elevation = self._elevation
        clone._time_zone = replace(self._time_zone)
        return clone

    def __deepcopy__(self, memo) -> 'GeoLocation':
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, GeoLocation):
            return NotImplemented
        return (
            _same_bits(self._latitude, other._latitude)
            and _same_bits(self._longitude, other._longitude)
            and _same_bits(self._elevation, other._elevation)
            and self._name == other._name
            and self._time_zone == other._time_zone
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"GeoLocation(name={self._name!r}, latitude={self._latitude!r}, "
            f"longitude={self._longitude!r}, elevation={self._elevation!r}, "
            f"time_zone={self._time_zone.zone_id!r})"
        )


def make_location(
    name: str,
    latitude: float,
    longitude: float,
    elevation: Union[float, pint.Quantity] = 0.0,
    time_zone: Union[int, str, pint.Quantity, TimeZoneInfo] = 0
) -> GeoLocation:
    """Build a GeoLocation, resolving the time zone from several forms.

    Parameters
    ----------
    name : str
        Display label.
    latitude, longitude : float
        Position in degrees.
    elevation : float or pint.Quantity
        Elevation above sea level. Bare numbers are meters.
    time_zone : int, str, pint.Quantity or TimeZoneInfo
        A raw UTC offset (int milliseconds or a time quantity), an IANA
        zone name, or a ready-made TimeZoneInfo.

    Returns
    -------
    GeoLocation
        The validated location.

    Raises
    ------
    DomainError
        If a coordinate, the elevation or the zone name is invalid.
    """
    if isinstance(time_zone, TimeZoneInfo):
        zone = time_zone
    elif isinstance(time_zone, str):
        zone = TimeZoneInfo.from_zone_name(time_zone)
    else:
        zone = TimeZoneInfo.from_offset(time_zone)
    return GeoLocation(name, latitude, longitude, elevation, zone)
