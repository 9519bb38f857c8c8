"""Geometric helpers shared by the layout pipeline.

This module provides:
- Half-up rounding (the rounding used at every mm/pixel boundary)
- Physical to raster unit conversion
- A 2x3 affine transform in SVG matrix convention

All functions are pure and stateless.
"""

import math
from dataclasses import dataclass


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding towards +infinity.

    Python's round() uses banker's rounding; layout math must not depend on
    the parity of a value.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def mm_to_pixels(length_mm: float, pixel_pitch_mm: float) -> int:
    """Convert a physical length to a whole number of panel pixels.

    Args:
        length_mm: Length in millimeters
        pixel_pitch_mm: Size of one pixel in millimeters

    Returns:
        Length in pixels, rounded once

    Examples:
        >>> mm_to_pixels(10.0, 0.05)
        200
    """
    return round_half_up(length_mm / pixel_pitch_mm)


@dataclass(frozen=True)
class Affine2D:
    """A 2D affine transform ``[[a, c, e], [b, d, f]]``.

    Coefficients follow the SVG ``matrix(a b c d e f)`` convention, so a point
    maps as ``x' = a*x + c*y + e`` and ``y' = b*x + d*y + f``. ``A @ B``
    applies B first, matching how nested SVG transforms compose.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def translate(cls, tx: float, ty: float) -> "Affine2D":
        return cls(e=tx, f=ty)

    @classmethod
    def scale(cls, sx: float, sy: float) -> "Affine2D":
        return cls(a=sx, d=sy)

    def __matmul__(self, other: "Affine2D") -> "Affine2D":
        return Affine2D(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def to_svg(self) -> str:
        """Serialize as an SVG ``matrix(...)`` transform attribute."""
        coefficients = (self.a, self.b, self.c, self.d, self.e, self.f)
        return "matrix(" + " ".join(_format_number(v) for v in coefficients) + ")"


def _format_number(value: float) -> str:
    # repr-precision without a trailing ".0" and without "-0"
    if value == 0:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
