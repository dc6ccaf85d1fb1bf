################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Keyframes retained by fitted and reduced animation curves."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import replace


@dataclass(frozen=True)
class SplineNode:
    """Retained keyframe of a piecewise-cubic channel curve.

    Equality is exact on all three fields.

    Attributes:
        time: Keyframe time in integer ticks
        value: Curve value at `time`
        derivative: Curve slope at `time`, per tick
    """

    time: int
    value: float
    derivative: float

    def __post_init__(self) -> None:
        """Validate node fields."""
        if not isinstance(self.time, int) or isinstance(self.time, bool):
            raise ValueError("time must be an int")
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "derivative", float(self.derivative))

    def shifted(self, time_offset: int) -> SplineNode:
        """Return a copy of the node moved by `time_offset` ticks."""
        return replace(self, time=self.time + time_offset)
