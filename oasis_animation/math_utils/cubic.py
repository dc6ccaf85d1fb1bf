################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Hermite cubic segments used to fit and test animation curves."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import field

import numpy as np
from numpy.typing import NDArray


class CubicSegmentError(Exception):
    """Raised when a cubic segment cannot be constructed."""


@dataclass(frozen=True)
class CubicSegment:
    """Cubic through two endpoints with prescribed derivatives.

    The curve is parameterized by the offset x in [0, width] from its start:

        y(x) = c3 x^3 + c2 x^2 + c1 x + c0

    with y(0) = start_value, y'(0) = start_derivative, y(width) = end_value
    and y'(width) = end_derivative. A zero width is the degenerate single
    point case: the segment is the constant start_value with start_derivative.

    Attributes:
        start_value: Value at offset 0
        start_derivative: Slope at offset 0, in value units per tick
        end_value: Value at offset `width`
        end_derivative: Slope at offset `width`, in value units per tick
        width: Length of the segment in ticks
    """

    start_value: float
    start_derivative: float
    end_value: float
    end_derivative: float
    width: float
    _coeffs: NDArray[np.float64] = field(init=False, repr=False, compare=False)
    _derivative_coeffs: NDArray[np.float64] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Validate the endpoints and precompute the polynomial coefficients."""
        for name in (
            "start_value",
            "start_derivative",
            "end_value",
            "end_derivative",
            "width",
        ):
            value: float = float(getattr(self, name))
            if not math.isfinite(value):
                raise CubicSegmentError(f"{name} must be finite")
            object.__setattr__(self, name, value)
        if self.width < 0.0:
            raise CubicSegmentError("width must be non-negative")

        coeffs: NDArray[np.float64]
        if self.width == 0.0:
            coeffs = np.array(
                [0.0, 0.0, self.start_derivative, self.start_value], dtype=np.float64
            )
        else:
            w: float = self.width
            slope: float = (self.end_value - self.start_value) / w
            c2: float = (
                3.0 * slope - 2.0 * self.start_derivative - self.end_derivative
            ) / w
            c3: float = (self.start_derivative + self.end_derivative - 2.0 * slope) / (
                w * w
            )
            coeffs = np.array(
                [c3, c2, self.start_derivative, self.start_value], dtype=np.float64
            )

        # Highest degree first, the order numpy.polyval expects
        object.__setattr__(self, "_coeffs", coeffs)
        object.__setattr__(self, "_derivative_coeffs", np.polyder(coeffs))

    @property
    def coefficients(self) -> NDArray[np.float64]:
        """Return (c3, c2, c1, c0)."""
        coeffs: NDArray[np.float64] = self._coeffs
        return coeffs.copy()

    def evaluate(self, x: float) -> float:
        """Return the value at offset `x` from the segment start."""
        if self.width == 0.0:
            return self.start_value
        return float(np.polyval(self._coeffs, x))

    def derivative(self, x: float) -> float:
        """Return the slope at offset `x` from the segment start."""
        if self.width == 0.0:
            return self.start_derivative
        return float(np.polyval(self._derivative_coeffs, x))

    def evaluate_many(self, xs: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the values at each offset in `xs`."""
        offsets: NDArray[np.float64] = np.asarray(xs, dtype=np.float64)
        if self.width == 0.0:
            return np.full(offsets.shape, self.start_value, dtype=np.float64)
        values: NDArray[np.float64] = np.polyval(self._coeffs, offsets)
        return values


def derivative_angle(derivative: float) -> float:
    """Convert a slope to its angle in x/y space.

    derivative 0 gives angle 0, derivative 1 gives 45 degrees, +inf gives
    90 degrees and -2 gives -63.4 degrees.

    Returns:
        Angle in radians, in [-pi/2, pi/2]
    """
    return math.atan(derivative)


def derivative_angle_between(a: float, b: float) -> float:
    """Return the absolute angle, in radians, of the difference of two slopes.

    The slopes are subtracted before conversion, so two steep slopes that
    differ by 0.5 are as far apart as slopes 0 and 0.5.
    """
    return abs(derivative_angle(a - b))
