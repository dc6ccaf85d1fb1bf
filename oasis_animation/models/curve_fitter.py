################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Adaptive piecewise-cubic fitting of dense channel samples."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from oasis_animation.anim_types.sample import Sample
from oasis_animation.anim_types.spline_node import SplineNode
from oasis_animation.math_utils.cubic import CubicSegment


class CurveFitterError(Exception):
    """Raised when samples cannot be fitted."""


class CurveFitter:
    """Fit dense samples with as few Hermite cubics as the tolerance allows.

    A single cubic is built from the first and last sample of a range. If the
    worst interior sample deviates from it by more than the tolerance, the
    range is split at that sample and both halves are fitted independently.
    Each split strictly reduces the sample count, so fitting terminates at
    two-sample ranges, which are always accepted.
    """

    def __init__(self, tolerance: float) -> None:
        if not np.isfinite(tolerance) or tolerance < 0.0:
            raise CurveFitterError("tolerance must be finite and non-negative")
        self._tolerance: float = float(tolerance)

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def fit(
        self, samples: Sequence[Sample], nodes: list[SplineNode] | None = None
    ) -> list[SplineNode]:
        """Append the nodes fitting `samples` to `nodes` and return them.

        Args:
            samples: Dense samples in non-decreasing time order
            nodes: Nodes already emitted for the channel, extended in place

        Returns:
            The extended node list
        """
        if len(samples) == 0:
            raise CurveFitterError("at least one sample is required")
        for prev, cur in zip(samples, samples[1:]):
            if cur.time < prev.time:
                raise CurveFitterError("sample times must be non-decreasing")

        out: list[SplineNode] = nodes if nodes is not None else []
        if len(samples) == 1:
            only: Sample = samples[0]
            node: SplineNode = SplineNode(only.time, only.value, only.derivative)
            if not out or out[-1] != node:
                out.append(node)
            return out

        times: np.ndarray = np.asarray([s.time for s in samples], dtype=np.int64)
        values: np.ndarray = np.asarray([s.value for s in samples], dtype=np.float64)

        # Explicit stack of inclusive (first, last) index ranges; the left half
        # is pushed last so that nodes come out in time order
        pending: list[tuple[int, int]] = [(0, len(samples) - 1)]
        while pending:
            first, last = pending.pop()
            split: int | None = self._worst_index(samples, times, values, first, last)
            if split is not None:
                pending.append((split, last))
                pending.append((first, split))
                continue
            self._emit(out, samples[first], samples[last])

        return out

    def _worst_index(
        self,
        samples: Sequence[Sample],
        times: np.ndarray,
        values: np.ndarray,
        first: int,
        last: int,
    ) -> int | None:
        """Return the index to split at, or None if one cubic is good enough."""
        if last - first < 2:
            return None

        start: Sample = samples[first]
        end: Sample = samples[last]

        # Shift the cubic to start at 0 to keep floating-point precision
        cubic: CubicSegment = CubicSegment(
            start.value,
            start.derivative,
            end.value,
            end.derivative,
            float(end.time - start.time),
        )
        interior: slice = slice(first + 1, last)
        offsets: np.ndarray = (times[interior] - start.time).astype(np.float64)
        diffs: np.ndarray = np.abs(cubic.evaluate_many(offsets) - values[interior])

        # argmax keeps the earliest index among equal deviations
        worst: int = int(np.argmax(diffs))
        if diffs[worst] > self._tolerance:
            return first + 1 + worst
        return None

    @staticmethod
    def _emit(out: list[SplineNode], start: Sample, end: Sample) -> None:
        """Record an accepted cubic as its start and end nodes."""
        start_node: SplineNode = SplineNode(start.time, start.value, start.derivative)
        end_node: SplineNode = SplineNode(end.time, end.value, end.derivative)

        # Consecutive cubics share their boundary node
        if not out or out[-1] != start_node:
            out.append(start_node)
        out.append(end_node)
