################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for Hermite cubic segments."""

from __future__ import annotations

import math

import numpy as np
import pytest

from oasis_animation.math_utils.cubic import CubicSegment
from oasis_animation.math_utils.cubic import CubicSegmentError
from oasis_animation.math_utils.cubic import derivative_angle
from oasis_animation.math_utils.cubic import derivative_angle_between


def test_cubic_matches_endpoints() -> None:
    """Ensure the cubic hits both endpoint values and slopes."""
    cubic: CubicSegment = CubicSegment(1.0, 0.5, 3.0, -0.25, 8.0)
    assert cubic.evaluate(0.0) == pytest.approx(1.0)
    assert cubic.derivative(0.0) == pytest.approx(0.5)
    assert cubic.evaluate(8.0) == pytest.approx(3.0)
    assert cubic.derivative(8.0) == pytest.approx(-0.25)


def test_cubic_coefficients() -> None:
    """Ensure coefficients follow the Hermite formulas."""
    cubic: CubicSegment = CubicSegment(1.0, 0.0, 3.0, 0.2, 10.0)
    slope: float = 0.2
    expected: np.ndarray = np.array(
        [
            (0.0 + 0.2 - 2.0 * slope) / 100.0,
            (3.0 * slope - 0.0 - 0.2) / 10.0,
            0.0,
            1.0,
        ]
    )
    np.testing.assert_allclose(cubic.coefficients, expected)


def test_cubic_reproduces_linear_segment() -> None:
    """Ensure matching slopes on a line give back the line."""
    cubic: CubicSegment = CubicSegment(2.0, 0.5, 7.0, 0.5, 10.0)
    xs: np.ndarray = np.linspace(0.0, 10.0, 11)
    np.testing.assert_allclose(cubic.evaluate_many(xs), 2.0 + 0.5 * xs)


def test_cubic_zero_width_is_constant() -> None:
    """Ensure a zero-width segment holds its start value and slope."""
    cubic: CubicSegment = CubicSegment(4.0, 1.5, 9.0, -3.0, 0.0)
    assert cubic.evaluate(0.0) == 4.0
    assert cubic.derivative(0.0) == 1.5
    np.testing.assert_allclose(cubic.evaluate_many(np.array([0.0, 0.0])), [4.0, 4.0])


def test_cubic_coefficients_are_copied() -> None:
    """Ensure callers cannot mutate the cached coefficients."""
    cubic: CubicSegment = CubicSegment(0.0, 1.0, 1.0, 1.0, 1.0)
    coeffs: np.ndarray = cubic.coefficients
    coeffs[:] = 0.0
    assert cubic.evaluate(1.0) == pytest.approx(1.0)


def test_cubic_rejects_invalid_input() -> None:
    """Ensure negative widths and non-finite values are rejected."""
    with pytest.raises(CubicSegmentError):
        CubicSegment(0.0, 0.0, 1.0, 0.0, -1.0)
    with pytest.raises(CubicSegmentError):
        CubicSegment(math.nan, 0.0, 1.0, 0.0, 1.0)
    with pytest.raises(CubicSegmentError):
        CubicSegment(0.0, math.inf, 1.0, 0.0, 1.0)


def test_derivative_angle() -> None:
    """Ensure slopes map to their angles."""
    assert derivative_angle(0.0) == 0.0
    assert derivative_angle(1.0) == pytest.approx(math.pi / 4.0)
    assert derivative_angle(math.inf) == pytest.approx(math.pi / 2.0)
    assert derivative_angle_between(1.0, -1.0) == pytest.approx(math.atan(2.0))
    assert derivative_angle_between(0.3, 0.3) == 0.0


def test_derivative_angle_between_steep_slopes() -> None:
    """Ensure steep slopes are compared by their difference."""
    assert derivative_angle_between(10.5, 10.0) == pytest.approx(math.atan(0.5))
    assert derivative_angle_between(10.0, 11.0) == pytest.approx(math.pi / 4.0)
