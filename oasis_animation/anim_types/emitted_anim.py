################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Compressed animation tree handed to an external encoder."""

from __future__ import annotations

from dataclasses import dataclass

from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.op_value import ConstantOpValue
from oasis_animation.anim_types.op_value import OpValue
from oasis_animation.anim_types.op_value import SplineOpValue
from oasis_animation.anim_types.op_value import TargetOpValue


@dataclass(frozen=True)
class EmittedChannel:
    """Retained channel of an emitted bone.

    Attributes:
        op: Operation kind
        op_id: Stable operation id
        value: What drives the operation
    """

    op: MatrixOperationType
    op_id: int
    value: OpValue

    def __post_init__(self) -> None:
        """Validate the op value variant."""
        if not isinstance(self.value, (ConstantOpValue, TargetOpValue, SplineOpValue)):
            raise ValueError("value must be a constant, target or spline op value")

    def is_constant(self) -> bool:
        """Return True if the channel holds a single value."""
        return isinstance(self.value, ConstantOpValue)

    def end_time(self) -> int:
        """Return the last tick at which the channel changes."""
        if isinstance(self.value, SplineOpValue):
            return self.value.end_time()
        if isinstance(self.value, TargetOpValue):
            return self.value.time
        return 0


@dataclass(frozen=True)
class EmittedBone:
    """Bone of an emitted animation.

    Attributes:
        name: Bone name without namespace
        parent_index: Parent bone index in the gathered skeleton, or None
        channels: Retained channels in ascending op id order
    """

    name: str
    parent_index: int | None
    channels: tuple[EmittedChannel, ...]


@dataclass(frozen=True)
class EmittedAnim:
    """Compressed animation of one or more bones.

    Attributes:
        name: Animation name
        bones: Bones in skeleton order
        repeat: True if the animation loops back to its start
        start_time: Earliest animated tick
        end_time: Latest animated tick
    """

    name: str
    bones: tuple[EmittedBone, ...]
    repeat: bool
    start_time: int
    end_time: int

    def __post_init__(self) -> None:
        """Validate the animated time span."""
        if self.end_time < self.start_time:
            raise ValueError("end_time must not precede start_time")

    def num_channels(self) -> int:
        """Return the number of channels across all bones."""
        return sum(len(bone.channels) for bone in self.bones)
