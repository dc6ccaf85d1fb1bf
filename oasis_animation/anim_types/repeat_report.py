################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Outcome of deciding whether an animation repeats."""

from __future__ import annotations

from dataclasses import dataclass

from oasis_animation.anim_types.matrix_op import MatrixOperationType


@dataclass(frozen=True)
class RepeatBreak:
    """First channel whose end does not match its start.

    Attributes:
        bone_index: Index of the bone owning the channel
        bone_name: Name of the bone, without namespace
        channel_index: Index of the channel within the bone
        op: Operation driven by the channel
    """

    bone_index: int
    bone_name: str
    channel_index: int
    op: MatrixOperationType


@dataclass(frozen=True)
class RepeatReport:
    """Repeat decision for an animation.

    Attributes:
        repeat: True if the animation is marked as repeating
        checked: True if the channels were inspected for a loop break
        repeat_break: First non-repeating channel, when one was found
    """

    repeat: bool
    checked: bool = True
    repeat_break: RepeatBreak | None = None

    def __post_init__(self) -> None:
        """Validate that a break is only reported after inspection."""
        if not self.checked and self.repeat_break is not None:
            raise ValueError("repeat_break requires checked to be True")

    def repeatable(self) -> bool:
        """Return True if the channels were inspected and all of them loop."""
        return self.checked and self.repeat_break is None
