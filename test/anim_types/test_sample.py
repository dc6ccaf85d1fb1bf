################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for curve samples."""

from __future__ import annotations

import math

import pytest

from oasis_animation.anim_types.sample import CurveSample
from oasis_animation.anim_types.sample import Sample
from oasis_animation.anim_types.sample import samples_from_interval


def test_samples_from_interval_picks_derivatives() -> None:
    """Ensure the first sample leaves right and later samples arrive left."""
    interval: tuple[CurveSample, ...] = (
        CurveSample(0, 1.0, left_derivative=-1.0, right_derivative=0.5),
        CurveSample(5, 2.0, left_derivative=0.25, right_derivative=9.0),
        CurveSample(10, 3.0, left_derivative=0.75, right_derivative=-9.0),
    )
    samples: list[Sample] = samples_from_interval(interval)
    assert samples == [
        Sample(0, 1.0, 0.5),
        Sample(5, 2.0, 0.25),
        Sample(10, 3.0, 0.75),
    ]


def test_sample_rejects_invalid() -> None:
    """Ensure non-integer times and non-finite values are rejected."""
    with pytest.raises(ValueError):
        Sample(1.5, 0.0, 0.0)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        Sample(0, math.nan, 0.0)
    with pytest.raises(ValueError):
        CurveSample(0, 0.0, math.inf, 0.0)


@pytest.mark.parametrize(
    ("fields", "name"),
    [
        ((0, math.nan, 0.0, 0.0), "value"),
        ((0, 1.0, -math.inf, 0.0), "left_derivative"),
        ((0, 1.0, 0.0, math.nan), "right_derivative"),
    ],
)
def test_curve_sample_rejects_non_finite(
    fields: tuple[int, float, float, float], name: str
) -> None:
    """Ensure source samples reject non-finite values when built."""
    with pytest.raises(ValueError, match=f"^{name} must be finite$"):
        CurveSample(*fields)
