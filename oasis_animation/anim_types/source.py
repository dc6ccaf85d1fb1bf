################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Source skeleton supplied by the animation extraction collaborator."""

from __future__ import annotations

from dataclasses import dataclass

from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.matrix_op import TransformStage
from oasis_animation.anim_types.matrix_op import op_for
from oasis_animation.anim_types.matrix_op import op_id_for
from oasis_animation.anim_types.sample import CurveSample


@dataclass(frozen=True)
class SourceChannel:
    """Raw samples for one transform sub-operation of a source bone.

    Exactly one of `constant` and `intervals` is provided. Each interval holds
    the dense samples between two consecutive source keys, the last sample of
    one interval sharing its time with the first sample of the next.

    Attributes:
        op: Operation driven by the channel
        op_id: Stable operation id, unique within the bone
        constant: Constant value of the channel, if not sampled
        intervals: Dense samples of each key interval, in time order
    """

    op: MatrixOperationType
    op_id: int
    constant: float | None = None
    intervals: tuple[tuple[CurveSample, ...], ...] = ()

    def __post_init__(self) -> None:
        """Normalize intervals into tuples."""
        intervals: tuple[tuple[CurveSample, ...], ...] = tuple(
            tuple(interval) for interval in self.intervals
        )
        object.__setattr__(self, "intervals", intervals)

    @classmethod
    def for_stage(
        cls,
        stage: TransformStage,
        axis: int,
        constant: float | None = None,
        intervals: tuple[tuple[CurveSample, ...], ...] = (),
    ) -> SourceChannel:
        """Create the channel driving one axis of a bone transform stage.

        The op and op id follow from the stage, so channels extracted from
        the same stage of different bones share their ids.

        Args:
            stage: Transform stage the channel belongs to
            axis: Axis of the stage, 0 for x, 1 for y and 2 for z
            constant: Constant value of the channel, if not sampled
            intervals: Dense samples of each key interval, in time order
        """
        return cls(
            op_for(stage, axis),
            op_id_for(stage, axis),
            constant=constant,
            intervals=intervals,
        )

    def is_constant(self) -> bool:
        """Return True if the channel carries a constant instead of samples."""
        return self.constant is not None


@dataclass(frozen=True)
class SourceBone:
    """Node of the source skeleton.

    Attributes:
        name: Bone name, possibly namespaced
        channels: Transform sub-operations affecting the bone
        children: Child bones in source order
    """

    name: str
    channels: tuple[SourceChannel, ...] = ()
    children: tuple[SourceBone, ...] = ()

    def __post_init__(self) -> None:
        """Normalize sequences into tuples."""
        object.__setattr__(self, "channels", tuple(self.channels))
        object.__setattr__(self, "children", tuple(self.children))
