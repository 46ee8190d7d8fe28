"""Angle normalization and Decimal degree/radian conversion.

All rotations in panel-pnp are expressed in degrees, anticlockwise positive.
The normalizers accept ``float`` or ``Decimal`` (``int`` is treated as
``Decimal``) and return the same kind of number, with identical semantics for
both:

* :func:`normalize_signed` -- reduce to ``(-180, 180]``
* :func:`normalize_unsigned` -- reduce to ``[0, 360)``

Usage::

    >>> normalize_signed(Decimal("540"))
    Decimal('180')
    >>> normalize_unsigned(-90.0)
    270.0
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import TypeVar, Union

Number = Union[Decimal, float, int]
N = TypeVar("N", Decimal, float)

PI = Decimal("3.1415926535897932384626433832")
"""Decimal approximation of pi (28 significant digits)."""

with localcontext() as _ctx:
    _ctx.prec = 28
    DEGREES_TO_RADIANS = PI / Decimal(180)
    RADIANS_TO_DEGREES = Decimal(180) / PI


def to_decimal(value: Union[Number, str]) -> Decimal:
    """Convert a number to Decimal, using the shortest repr for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _circle(angle: Number) -> tuple:
    if isinstance(angle, float):
        return angle, 360.0, 180.0
    angle = to_decimal(angle)
    return angle, Decimal(360), Decimal(180)


def normalize_signed(angle: Number) -> N:
    """Normalize an angle in degrees to ``(-180, 180]``.

    +180 is the boundary that is kept, so both 180 and -180 map to 180.
    """
    angle, full, half = _circle(angle)

    # Decimal remainder takes the sign of the dividend, float the divisor
    normalized = angle % full
    if normalized > half:
        normalized -= full
    elif normalized <= -half:
        normalized += full

    if normalized == 0:
        return abs(normalized)
    return normalized


def normalize_unsigned(angle: Number) -> N:
    """Normalize an angle in degrees to ``[0, 360)``."""
    angle, full, _half = _circle(angle)

    normalized = angle % full
    if normalized < 0:
        normalized += full
    # tiny negative angles can round up to a full turn
    if normalized >= full:
        normalized -= full

    if normalized == 0:
        return abs(normalized)
    return normalized


def to_radians(degrees: Number) -> Decimal:
    """Convert degrees to radians using the fixed Decimal pi approximation."""
    return to_decimal(degrees) * DEGREES_TO_RADIANS


def to_degrees(radians: Number) -> Decimal:
    """Convert radians to degrees using the fixed Decimal pi approximation."""
    return to_decimal(radians) * RADIANS_TO_DEGREES


__all__ = [
    "PI",
    "to_decimal",
    "DEGREES_TO_RADIANS",
    "RADIANS_TO_DEGREES",
    "normalize_signed",
    "normalize_unsigned",
    "to_radians",
    "to_degrees",
]
