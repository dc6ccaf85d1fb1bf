################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Dense curve samples consumed by the curve fitter."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class CurveSample:
    """Source sample of an animation curve.

    Attributes:
        time: Sample time in integer ticks
        value: Curve value at `time`
        left_derivative: Slope approaching `time` from the left, per tick
        right_derivative: Slope leaving `time` to the right, per tick
    """

    time: int
    value: float
    left_derivative: float
    right_derivative: float

    def __post_init__(self) -> None:
        """Validate sample fields."""
        _require_tick(self.time)
        object.__setattr__(self, "value", _finite(self.value, "value"))
        object.__setattr__(
            self, "left_derivative", _finite(self.left_derivative, "left_derivative")
        )
        object.__setattr__(
            self,
            "right_derivative",
            _finite(self.right_derivative, "right_derivative"),
        )


@dataclass(frozen=True)
class Sample:
    """Single (time, value, derivative) sample of one channel.

    Attributes:
        time: Sample time in integer ticks
        value: Curve value at `time`
        derivative: Curve slope at `time`, per tick
    """

    time: int
    value: float
    derivative: float

    def __post_init__(self) -> None:
        """Validate sample fields."""
        _require_tick(self.time)
        object.__setattr__(self, "value", _finite(self.value, "value"))
        object.__setattr__(self, "derivative", _finite(self.derivative, "derivative"))


def samples_from_interval(interval: tuple[CurveSample, ...]) -> list[Sample]:
    """Collapse one key interval of source samples into fitter samples.

    The first sample starts the interval, so it contributes the slope leaving
    it to the right. Every later sample is reached from the left.
    """
    samples: list[Sample] = []
    for index, source in enumerate(interval):
        derivative: float = (
            source.right_derivative if index == 0 else source.left_derivative
        )
        samples.append(Sample(source.time, source.value, derivative))
    return samples


def _require_tick(time: int) -> None:
    """Require an integer tick."""
    if not isinstance(time, int) or isinstance(time, bool):
        raise ValueError("time must be an int")


def _finite(value: float, name: str) -> float:
    """Return `value` as a float after checking it is finite."""
    result: float = float(value)
    if not math.isfinite(result):
        raise ValueError(f"{name} must be finite")
    return result
