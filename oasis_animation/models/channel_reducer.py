################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Algebraic reduction of the channels of one bone."""

from __future__ import annotations

from typing import Sequence

from oasis_animation.anim_types.channel import Bone
from oasis_animation.anim_types.channel import Channel
from oasis_animation.anim_types.matrix_op import SCALE_XYZ_OPS
from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.matrix_op import is_rotate_op
from oasis_animation.anim_types.matrix_op import is_scale_op
from oasis_animation.anim_types.matrix_op import is_translate_op
from oasis_animation.anim_types.matrix_op import op_name
from oasis_animation.anim_types.matrix_op import uniform_scale_op_id
from oasis_animation.anim_types.spline_node import SplineNode
from oasis_animation.anim_types.tolerance_set import ToleranceSet
from oasis_animation.diagnostics.diagnostics_sink import DiagnosticsSink
from oasis_animation.diagnostics.diagnostics_sink import LoggingDiagnosticsSink
from oasis_animation.math_utils.cubic import CubicSegment
from oasis_animation.models.node_pruner import nodes_equal


def evaluate_nodes(nodes: Sequence[SplineNode], time: int) -> tuple[float, float]:
    """Evaluate a node sequence at `time`.

    Outside the sequence the curve holds its boundary value with zero slope.

    Returns:
        The (value, derivative) pair at `time`
    """
    if not nodes:
        raise ValueError("at least one node is required")

    if time < nodes[0].time:
        return nodes[0].value, 0.0
    if time >= nodes[-1].time:
        return nodes[-1].value, 0.0

    # First node at or after `time`
    i: int = 1
    while nodes[i].time < time:
        i += 1
    pre: SplineNode = nodes[i - 1]
    post: SplineNode = nodes[i]

    cubic: CubicSegment = CubicSegment(
        pre.value,
        pre.derivative,
        post.value,
        post.derivative,
        float(post.time - pre.time),
    )
    offset: float = float(time - pre.time)
    return cubic.evaluate(offset), cubic.derivative(offset)


def sum_nodes(
    nodes_a: Sequence[SplineNode], nodes_b: Sequence[SplineNode]
) -> list[SplineNode]:
    """Return the node sequence of the sum of two curves.

    Nodes are merged in time order. Each output node is a node of one operand
    plus the other operand evaluated at its time. Nodes at coinciding times
    are output once. A single-node operand is a constant and contributes only
    its value.
    """
    if not nodes_a or not nodes_b:
        raise ValueError("both operands need at least one node")

    a: int = 0
    b: int = 0
    end_a: int = len(nodes_a)
    end_b: int = len(nodes_b)

    # A constant operand contributes no nodes of its own
    if end_a == 1:
        a = end_a
    elif end_b == 1:
        b = end_b

    out: list[SplineNode] = []
    while a < end_a or b < end_b:
        output_a: bool = a < end_a and (
            b >= end_b or nodes_a[a].time <= nodes_b[b].time
        )
        node: SplineNode = nodes_a[a] if output_a else nodes_b[b]
        other: Sequence[SplineNode] = nodes_b if output_a else nodes_a
        value, derivative = evaluate_nodes(other, node.time)
        out.append(
            SplineNode(node.time, node.value + value, node.derivative + derivative)
        )

        if a < end_a and b < end_b and nodes_a[a].time == nodes_b[b].time:
            a += 1
            b += 1
        elif output_a:
            a += 1
        else:
            b += 1

    return out


class ChannelReducer:
    """Collapse the channels of a bone into fewer equivalent channels.

    Three reductions are applied, scanning channels from last to first:

      1. Identical scale-x, scale-y and scale-z channels become one
         scale-uniformly channel
      2. A channel is summed with a later channel of the same operation when
         the channels between them commute with it
      3. A constant channel holding the operation's identity value is dropped

    Channels are finally restored to ascending op id order.
    """

    def __init__(
        self, tolerances: ToleranceSet, sink: DiagnosticsSink | None = None
    ) -> None:
        self._tolerances: ToleranceSet = tolerances
        self._sink: DiagnosticsSink = (
            sink if sink is not None else LoggingDiagnosticsSink()
        )

    def reduce(self, bone: Bone) -> None:
        """Reduce the channels of `bone` in place."""
        channels: list[Channel] = bone.channels
        for ch in range(len(channels) - 1, -1, -1):
            if self.uniform_scale_channels(channels, ch):
                self._sink.debug(
                    f"  Collapsing scale x, y, z channels {ch}~{ch + 2} into"
                    " one scale-uniformly channel"
                )
                channel: Channel = channels[ch]
                channel.op_id = uniform_scale_op_id(channel.op, channel.op_id)
                channel.op = MatrixOperationType.SCALE_UNIFORMLY
                del channels[ch + 1 : ch + 3]

            summable_ch: int | None = self.summable_channel(channels, ch)
            if summable_ch is not None:
                self._sink.debug(
                    f"  Summing {op_name(channels[ch].op)} channels"
                    f" {ch} and {summable_ch}"
                )
                self.sum_channels(channels, ch, summable_ch)
                del channels[summable_ch]

            only: Channel = channels[ch]
            if len(only.nodes) == 1 and self._tolerances.is_default_value(
                only.op, only.nodes[0].value
            ):
                self._sink.debug(
                    f"  Omitting constant {op_name(only.op)} channel {ch}"
                )
                del channels[ch]

        bone.sort_channels()

    def uniform_scale_channels(self, channels: Sequence[Channel], ch: int) -> bool:
        """Return True if the three channels from `ch` form one uniform scale.

        The channels must be scale-x, scale-y and scale-z in any order, with
        pairwise equal nodes.
        """
        if ch + 2 >= len(channels):
            return False

        group: Sequence[Channel] = channels[ch : ch + 3]
        if {channel.op for channel in group} != SCALE_XYZ_OPS:
            return False

        n0, n1, n2 = (channel.nodes for channel in group)
        if not len(n0) == len(n1) == len(n2):
            return False

        tolerance: float = self._tolerances.scale
        angle: float = self._tolerances.derivative_angle
        for v0, v1, v2 in zip(n0, n1, n2):
            if not (
                nodes_equal(v0, v1, tolerance, angle)
                and nodes_equal(v0, v2, tolerance, angle)
                and nodes_equal(v1, v2, tolerance, angle)
            ):
                return False

        return True

    @staticmethod
    def summable_channel(channels: Sequence[Channel], ch: int) -> int | None:
        """Return the index of a later channel that `ch` can be summed with.

        Rotations only combine with the adjacent channel. Translations may
        skip over other translations, and scales over other scales.
        """
        ch_op: MatrixOperationType = channels[ch].op
        for index in range(ch + 1, len(channels)):
            op: MatrixOperationType = channels[index].op
            if op == ch_op:
                return index
            if is_rotate_op(ch_op):
                return None
            if is_translate_op(ch_op) and not is_translate_op(op):
                return None
            if is_scale_op(ch_op) and not is_scale_op(op):
                return None
        return None

    @staticmethod
    def sum_channels(channels: Sequence[Channel], ch_a: int, ch_b: int) -> None:
        """Replace the nodes of `ch_a` with the sum of `ch_a` and `ch_b`."""
        channels[ch_a].nodes = sum_nodes(channels[ch_a].nodes, channels[ch_b].nodes)
