################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Values that can drive an emitted matrix operation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable
from typing import Union

from oasis_animation.anim_types.spline_node import SplineNode


@dataclass(frozen=True)
class ValueRange:
    """Closed interval of values spanned by a curve.

    Attributes:
        start: Smallest value
        end: Largest value
    """

    start: float
    end: float

    def __post_init__(self) -> None:
        """Validate interval bounds."""
        if not math.isfinite(self.start) or not math.isfinite(self.end):
            raise ValueError("range bounds must be finite")
        if self.start > self.end:
            raise ValueError("range start must not exceed range end")

    @classmethod
    def spanning(cls, values: Iterable[float]) -> ValueRange:
        """Return the smallest range that includes every value."""
        items: list[float] = [float(value) for value in values]
        if not items:
            raise ValueError("range requires at least one value")
        return cls(min(items), max(items))

    def length(self) -> float:
        """Return the width of the range."""
        return self.end - self.start


@dataclass(frozen=True)
class ConstantOpValue:
    """Operation held at one value for the whole animation."""

    value: float


@dataclass(frozen=True)
class TargetOpValue:
    """Operation driven towards a single target.

    Attributes:
        value: Target value
        derivative: Slope on arrival at the target, per tick
        time: Ticks until the target is reached
    """

    value: float
    derivative: float
    time: int

    def __post_init__(self) -> None:
        """Validate the target time."""
        if not isinstance(self.time, int) or isinstance(self.time, bool):
            raise ValueError("time must be an int")
        if self.time < 0:
            raise ValueError("time must be non-negative")


@dataclass(frozen=True)
class SplineOpValue:
    """Operation driven by a piecewise-cubic spline.

    Attributes:
        nodes: Keyframes of the spline, at least two, in time order
        value_range: Range of values spanned by the keyframes
    """

    nodes: tuple[SplineNode, ...]
    value_range: ValueRange

    def __post_init__(self) -> None:
        """Validate spline nodes."""
        nodes: tuple[SplineNode, ...] = tuple(self.nodes)
        if len(nodes) < 2:
            raise ValueError("spline requires at least two nodes")
        for prev, cur in zip(nodes, nodes[1:]):
            if cur.time < prev.time:
                raise ValueError("spline nodes must be in time order")
        object.__setattr__(self, "nodes", nodes)

    @classmethod
    def from_nodes(cls, nodes: Iterable[SplineNode]) -> SplineOpValue:
        """Build a spline value and its range from keyframes."""
        items: tuple[SplineNode, ...] = tuple(nodes)
        return cls(items, ValueRange.spanning(node.value for node in items))

    def start_time(self) -> int:
        """Return the time of the first keyframe."""
        return self.nodes[0].time

    def end_time(self) -> int:
        """Return the time of the last keyframe."""
        return self.nodes[-1].time


OpValue = Union[ConstantOpValue, TargetOpValue, SplineOpValue]
