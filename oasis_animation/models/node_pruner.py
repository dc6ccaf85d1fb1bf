################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Removal of keyframes that neighboring cubics already reproduce."""

from __future__ import annotations

import logging
from typing import Sequence

from oasis_animation.anim_types.spline_node import SplineNode
from oasis_animation.math_utils.cubic import CubicSegment
from oasis_animation.math_utils.cubic import derivative_angle
from oasis_animation.math_utils.cubic import derivative_angle_between


_LOG: logging.Logger = logging.getLogger(__name__)


def nodes_equal(
    a: SplineNode, b: SplineNode, tolerance: float, derivative_tolerance: float
) -> bool:
    """Return True if two nodes coincide in time and match within tolerance."""
    return (
        a.time == b.time
        and abs(a.value - b.value) < tolerance
        and derivative_angle_between(a.derivative, b.derivative) < derivative_tolerance
    )


class NodePruner:
    """Prune redundant nodes and collapse constant channels.

    Attributes:
        tolerance: Allowed value deviation for the channel's operation
        derivative_tolerance: Allowed angle between slopes in radians
    """

    def __init__(self, tolerance: float, derivative_tolerance: float) -> None:
        if tolerance < 0.0 or derivative_tolerance < 0.0:
            raise ValueError("tolerances must be non-negative")
        self.tolerance: float = float(tolerance)
        self.derivative_tolerance: float = float(derivative_tolerance)

    def interior_redundant(self, nodes: Sequence[SplineNode]) -> bool:
        """Return True if every node strictly between the ends can be dropped.

        An interior node is redundant when the cubic joining the two end nodes
        passes through its value and matches its slope, within tolerance.
        Equal end nodes make everything between them redundant.
        """
        if len(nodes) < 3:
            return True

        start: SplineNode = nodes[0]
        end: SplineNode = nodes[-1]
        if nodes_equal(start, end, self.tolerance, self.derivative_tolerance):
            return True

        cubic: CubicSegment = CubicSegment(
            start.value,
            start.derivative,
            end.value,
            end.derivative,
            float(end.time - start.time),
        )
        for mid in nodes[1:-1]:
            offset: float = float(mid.time - start.time)
            value_error: float = abs(cubic.evaluate(offset) - mid.value)
            angle_error: float = derivative_angle_between(
                cubic.derivative(offset), mid.derivative
            )
            if value_error >= self.tolerance:
                return False
            if angle_error >= self.derivative_tolerance:
                return False

        return True

    def prune(self, nodes: list[SplineNode]) -> list[SplineNode]:
        """Remove redundant nodes in place and return the node list.

        From each retained node the run is extended right for as long as its
        interior stays redundant; the interior of the longest such run is
        dropped and pruning resumes from the run's last node.
        """
        retained: list[SplineNode] = []
        i: int = 0
        while i < len(nodes):
            retained.append(nodes[i])
            run_end: int = i + 1
            for j in range(i + 2, len(nodes)):
                if not self.interior_redundant(nodes[i : j + 1]):
                    break
                run_end = j
            i = run_end

        if len(retained) < len(nodes):
            _LOG.debug("Pruned %d of %d nodes", len(nodes) - len(retained), len(nodes))
        nodes[:] = retained

        if self.is_constant_pair(nodes):
            del nodes[1:]

        return nodes

    def is_constant_pair(self, nodes: Sequence[SplineNode]) -> bool:
        """Return True if two nodes describe a flat line at one value."""
        return (
            len(nodes) == 2
            and abs(nodes[0].value - nodes[1].value) < self.tolerance
            and abs(derivative_angle(nodes[0].derivative)) < self.derivative_tolerance
            and abs(derivative_angle(nodes[1].derivative)) < self.derivative_tolerance
        )
