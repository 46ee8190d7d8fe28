"""Exact 2D geometry primitives for panel transforms.

Everything here works on :class:`Vector2` values holding ``Decimal``
coordinates.  Trigonometry is the only place floating point is involved:
:func:`cos_sin` evaluates ``math.cos``/``math.sin`` and converts the results
straight back to ``Decimal``.  Multiples of 90 degrees use exact values so
axis-aligned panels transform without any rounding at all.

The functions are small and composable:

* :func:`translate` -- add an offset
* :func:`rotate_about` -- anticlockwise rotation about a pivot
* :func:`reflect_x` / :func:`reflect_y` -- mirror about a vertical/horizontal line
* :func:`rectangle_corners` -- the four corners of an origin-anchored rectangle
* :func:`reorigin_shift` -- minimum corner of a rectangle after rotation
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Union

from .angle import Number, normalize_unsigned, to_decimal, to_radians

_QUARTER_TURNS = {
    Decimal(0): (Decimal(1), Decimal(0)),
    Decimal(90): (Decimal(0), Decimal(1)),
    Decimal(180): (Decimal(-1), Decimal(0)),
    Decimal(270): (Decimal(0), Decimal(-1)),
}


@dataclass(frozen=True)
class Vector2:
    """An immutable (x, y) pair of Decimals.

    Attributes:
        x: X component, positive to the right.
        y: Y component, positive upwards.
    """

    x: Decimal
    y: Decimal

    @classmethod
    def of(cls, x: Union[Number, str], y: Union[Number, str]) -> "Vector2":
        """Build a vector from any numeric input, converting to Decimal."""
        return cls(to_decimal(x), to_decimal(y))

    @classmethod
    def zero(cls) -> "Vector2":
        return cls(Decimal(0), Decimal(0))

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __mul__(self, scalar: Number) -> "Vector2":
        factor = to_decimal(scalar)
        return Vector2(self.x * factor, self.y * factor)

    def __truediv__(self, scalar: Number) -> "Vector2":
        divisor = to_decimal(scalar)
        return Vector2(self.x / divisor, self.y / divisor)

    def __iter__(self):
        yield self.x
        yield self.y


def cos_sin(degrees: Number) -> tuple[Decimal, Decimal]:
    """Return ``(cos, sin)`` of an angle in degrees as Decimals.

    Quarter turns are exact; other angles go through ``math`` once.
    """
    exact = _QUARTER_TURNS.get(normalize_unsigned(to_decimal(degrees)))
    if exact is not None:
        return exact

    radians = float(to_radians(degrees))
    return Decimal(repr(math.cos(radians))), Decimal(repr(math.sin(radians)))


def translate(point: Vector2, offset: Vector2) -> Vector2:
    """Translate *point* by *offset*."""
    return point + offset


def rotate_about(point: Vector2, pivot: Vector2, degrees: Number) -> Vector2:
    """Rotate *point* anticlockwise by *degrees* about *pivot*."""
    cos_theta, sin_theta = cos_sin(degrees)
    dx = point.x - pivot.x
    dy = point.y - pivot.y
    return Vector2(
        pivot.x + dx * cos_theta - dy * sin_theta,
        pivot.y + dx * sin_theta + dy * cos_theta,
    )


def reflect_x(point: Vector2, center: Vector2) -> Vector2:
    """Mirror the x coordinate about the vertical line through *center*."""
    return Vector2(center.x - (point.x - center.x), point.y)


def reflect_y(point: Vector2, center: Vector2) -> Vector2:
    """Mirror the y coordinate about the horizontal line through *center*."""
    return Vector2(point.x, center.y - (point.y - center.y))


def rectangle_corners(size: Vector2) -> tuple[Vector2, Vector2, Vector2, Vector2]:
    """Corners of the rectangle ``(0, 0)..size``, anticlockwise from the origin."""
    zero = Decimal(0)
    return (
        Vector2(zero, zero),
        Vector2(size.x, zero),
        Vector2(size.x, size.y),
        Vector2(zero, size.y),
    )


def min_corner(points: Iterable[Vector2]) -> Vector2:
    """Component-wise minimum of a non-empty collection of points."""
    points = list(points)
    return Vector2(min(p.x for p in points), min(p.y for p in points))


def reorigin_shift(size: Vector2, pivot: Vector2, degrees: Number) -> Vector2:
    """Minimum corner of the rectangle ``(0, 0)..size`` after rotating it.

    Subtracting the result from a point rotated the same way anchors the
    rotated rectangle at a non-negative origin.
    """
    return min_corner(rotate_about(corner, pivot, degrees) for corner in rectangle_corners(size))


__all__ = [
    "Vector2",
    "cos_sin",
    "translate",
    "rotate_about",
    "reflect_x",
    "reflect_y",
    "rectangle_corners",
    "min_corner",
    "reorigin_shift",
]
