"""Fixed-point encoding of geographic coordinates.

Degrees are scaled by 1,000,000 and rounded half away from zero, so a scaled
value of 2.5 becomes 3 and -2.5 becomes -3.
Rounding is applied to the exact binary value of the scaled float, which makes
the result identical to rounding `degrees * 1_000_000` in any language that
rounds halves away from zero.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from geofix.errors import InvalidCoordinatesError
from geofix.models.common import MICRO_DEGREES_PER_DEGREE, Coordinates

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    `decimal.ROUND_HALF_UP` rounds ties away from zero; the built-in `round()`
    rounds ties to even and is not used here.
    """
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _check_degrees(name: str, value: float, limit: float) -> None:
    if math.isnan(value) or math.isinf(value):
        raise InvalidCoordinatesError(f"{name} must be a finite number, got {value!r}")
    if abs(value) > limit:
        raise InvalidCoordinatesError(f"{name} must be within ±{limit:g} degrees, got {value!r}")


def to_micro_degrees(latitude: float, longitude: float) -> Coordinates:
    """Convert a (latitude, longitude) pair in degrees into micro-degrees."""
    _check_degrees("latitude", latitude, MAX_LATITUDE)
    _check_degrees("longitude", longitude, MAX_LONGITUDE)
    return (
        round_half_away_from_zero(latitude * MICRO_DEGREES_PER_DEGREE),
        round_half_away_from_zero(longitude * MICRO_DEGREES_PER_DEGREE),
    )


def from_micro_degrees(coordinates: Coordinates) -> tuple[float, float]:
    """Decode micro-degrees back into float degrees."""
    latitude, longitude = coordinates
    return latitude / MICRO_DEGREES_PER_DEGREE, longitude / MICRO_DEGREES_PER_DEGREE
