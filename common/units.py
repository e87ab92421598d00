"""
Unit Registry for the Geolocation Engine.

Quantities that enter the engine (elevations, time-zone offsets) may be
given either as bare numbers in the engine's canonical units or as
`pint` quantities, which are converted on the way in. Incompatible
dimensions raise at the conversion point instead of silently producing
wrong results.

Example Usage
-------------
>>> from common.units import Q_, as_magnitude
>>> round(as_magnitude(Q_(1200, 'ft'), 'meter'), 2)
365.76
>>> as_magnitude(Q_(-5, 'hour'), 'millisecond')
-18000000.0
"""

from typing import Union

import pint

# Create the global unit registry
ureg = pint.UnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


# Canonical units of the engine
STANDARD_UNITS = {
    "elevation": "meter",
    "time_offset": "millisecond",
}


def as_magnitude(value: Union[float, pint.Quantity], unit: str) -> float:
    """Return the magnitude of ``value`` expressed in ``unit``.

    Parameters
    ----------
    value : float or pint.Quantity
        Bare numbers are assumed to already be in ``unit``.
    unit : str
        Target unit string (e.g., 'meter', 'millisecond').

    Returns
    -------
    float
        The converted magnitude.

    Raises
    ------
    ValueError
        If ``value`` is a quantity whose dimensionality is incompatible
        with ``unit``.
    """
    if isinstance(value, pint.Quantity):
        try:
            return float(value.to(unit).magnitude)
        except pint.DimensionalityError as e:
            raise ValueError(
                f"Incompatible units. Expected {unit}, got {value.units}"
            ) from e
    return float(value)


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a bare magnitude between two units."""
    return float(Q_(value, from_unit).to(to_unit).magnitude)
