################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for compression tolerances."""

from __future__ import annotations

import math

import pytest

from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.tolerance_set import FALLBACK_TOLERANCE
from oasis_animation.anim_types.tolerance_set import ToleranceSet


def test_tolerance_defaults() -> None:
    """Ensure defaults match the documented thresholds."""
    tolerances: ToleranceSet = ToleranceSet()
    assert tolerances.scale == 0.005
    assert tolerances.rotate == 0.00873
    assert tolerances.translate == 0.01
    assert tolerances.derivative_angle == 0.00873
    assert tolerances.repeat_derivative_angle == 0.1745


def test_tolerance_for_op() -> None:
    """Ensure each op family uses its own threshold."""
    tolerances: ToleranceSet = ToleranceSet(scale=0.1, rotate=0.2, translate=0.3)
    assert tolerances.for_op(MatrixOperationType.SCALE_UNIFORMLY) == 0.1
    assert tolerances.for_op(MatrixOperationType.ROTATE_ABOUT_Z) == 0.2
    assert tolerances.for_op(MatrixOperationType.TRANSLATE_Y) == 0.3
    assert tolerances.for_op(MatrixOperationType.INVALID) == FALLBACK_TOLERANCE


def test_is_default_value() -> None:
    """Ensure identity checks use a strict tolerance bound."""
    tolerances: ToleranceSet = ToleranceSet(translate=0.01, scale=0.005)
    assert tolerances.is_default_value(MatrixOperationType.TRANSLATE_X, 0.009)
    assert not tolerances.is_default_value(MatrixOperationType.TRANSLATE_X, 0.02)
    assert tolerances.is_default_value(MatrixOperationType.SCALE_Z, 1.001)
    assert not tolerances.is_default_value(MatrixOperationType.SCALE_Z, 0.0)


def test_tolerance_rejects_invalid() -> None:
    """Ensure negative, non-finite and non-numeric thresholds are rejected."""
    with pytest.raises(ValueError):
        ToleranceSet(scale=-0.1)
    with pytest.raises(ValueError):
        ToleranceSet(rotate=math.nan)
    with pytest.raises(ValueError):
        ToleranceSet(translate=True)
