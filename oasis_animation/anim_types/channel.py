################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Channels and bones of the animation being compressed."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.spline_node import SplineNode


@dataclass
class Channel:
    """Curve driving one scalar transform operation of a bone.

    Nodes are kept in non-decreasing time order. A channel with a single node
    is constant and its derivative is ignored.

    Attributes:
        op: Operation kind driven by the channel
        op_id: Stable operation id, unique within a bone
        nodes: Retained keyframes in time order
    """

    op: MatrixOperationType
    op_id: int
    nodes: list[SplineNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate channel identity."""
        self.op = MatrixOperationType(self.op)
        if self.op == MatrixOperationType.INVALID:
            raise ValueError("op must not be INVALID")
        if not isinstance(self.op_id, int) or isinstance(self.op_id, bool):
            raise ValueError("op_id must be an int")
        if self.op_id < 0:
            raise ValueError("op_id must be non-negative")

    def is_constant(self) -> bool:
        """Return True if the channel holds at most one node."""
        return len(self.nodes) <= 1

    def start_time(self) -> int:
        """Return the time of the first node."""
        if not self.nodes:
            raise ValueError("channel has no nodes")
        return self.nodes[0].time

    def end_time(self) -> int:
        """Return the time of the last node."""
        if not self.nodes:
            raise ValueError("channel has no nodes")
        return self.nodes[-1].time


@dataclass
class Bone:
    """Bone of the skeleton and the channels that animate it.

    Attributes:
        name: Bone name, possibly namespaced as "namespace:name"
        parent_index: Index of the parent bone, or None for a root bone
        channels: Channels of the bone, sorted by op id after reduction
    """

    name: str
    parent_index: int | None
    channels: list[Channel] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate bone fields."""
        if not isinstance(self.name, str):
            raise ValueError("name must be a str")
        if self.parent_index is not None:
            if not isinstance(self.parent_index, int) or isinstance(
                self.parent_index, bool
            ):
                raise ValueError("parent_index must be an int or None")
            if self.parent_index < 0:
                raise ValueError("parent_index must be non-negative")

    def base_name(self) -> str:
        """Return the bone name without its namespace."""
        return self.name.rsplit(":", 1)[-1]

    def sort_channels(self) -> None:
        """Restore ascending op id order of the channels."""
        self.channels.sort(key=lambda channel: channel.op_id)
