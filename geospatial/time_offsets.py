"""
Longitude-Derived Time Offsets.

The globe turns through 360° in 24 hours, so each degree of longitude is
worth 4 minutes of mean solar time. Comparing that with the civil
standard offset of a location's time zone gives its local mean time
offset, and from it the day adjustment needed where a zone sits on the
"wrong" side of the antimeridian.

These are advisory corrections for solar-time calculators, not a
solar-position model. Daylight saving time is ignored throughout since
no date is involved.
"""

from dataclasses import dataclass
from typing import Optional

from common.constants import PhysicalConstants
from common.logging_config import get_logger
from common.types import GeoLocation

logger = get_logger(__name__)


@dataclass
class TimeOffsetConfig:
    """Configuration for the antimeridian heuristic.

    Attributes
    ----------
    antimeridian_threshold_hours : float
        |local mean time offset| at or beyond which the calendar date is
        shifted by one day.
    """
    antimeridian_threshold_hours: float = 20.0


DEFAULT_TIME_OFFSET_CONFIG = TimeOffsetConfig()


def local_mean_time_offset(location: GeoLocation) -> int:
    """Compute the location's local mean time offset from standard time.

    Parameters
    ----------
    location : GeoLocation
        Location whose longitude and raw zone offset are used.

    Returns
    -------
    int
        Offset in milliseconds, truncated toward zero. Positive east of
        the zone's central meridian, negative west of it.

    Notes
    -----
    offset = longitude × 4 min × 60 000 ms/min − raw zone offset

    Lakewood, NJ at -74.2094° on UTC-5 (central meridian -75°) is
    0.7906° east of it, giving +3 min 9.7 s.
    """
    minutes_per_degree = PhysicalConstants.MINUTES_PER_DEGREE.value
    return int(
        location.longitude * minutes_per_degree * PhysicalConstants.MINUTE_MILLIS
        - location.time_zone.raw_offset_ms
    )


def antimeridian_adjustment(
    location: GeoLocation,
    config: Optional[TimeOffsetConfig] = None
) -> int:
    """Number of days to shift the date for antimeridian crossover.

    Solar calculations assume the date only increases east of the Prime
    Meridian and only decreases west of it. A zone that observes the
    date of the far side of the antimeridian breaks this, and the date
    must be adjusted before calculating.

    Parameters
    ----------
    location : GeoLocation
        Location to check.
    config : TimeOffsetConfig, optional
        Threshold settings (default: 20 hours).

    Returns
    -------
    int
        +1 if the local mean time offset is at least the threshold into
        the future, -1 if at least the threshold into the past, else 0.

    Examples
    --------
    >>> # Apia, Samoa lies at -171.75° but keeps UTC+14:00, a local mean
    >>> # time offset of -25.45 h: calculate with the previous day
    >>> apia = GeoLocation("Apia", -13.8333, -171.75, 0,
    ...                    TimeZoneInfo.from_offset(14 * 3_600_000))
    >>> antimeridian_adjustment(apia)
    -1
    """
    config = config or DEFAULT_TIME_OFFSET_CONFIG
    local_hours_offset = local_mean_time_offset(location) / float(PhysicalConstants.HOUR_MILLIS)

    if local_hours_offset >= config.antimeridian_threshold_hours:
        logger.debug(f"{location.name!r}: rolling date forward ({local_hours_offset:.2f} h)")
        return 1
    elif local_hours_offset <= -config.antimeridian_threshold_hours:
        logger.debug(f"{location.name!r}: rolling date back ({local_hours_offset:.2f} h)")
        return -1
    return 0
