################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Skeleton-wide assembly of compressed channels into emitted animations."""

from __future__ import annotations

from typing import Sequence

from oasis_animation.anim_types.channel import Bone
from oasis_animation.anim_types.channel import Channel
from oasis_animation.anim_types.emitted_anim import EmittedAnim
from oasis_animation.anim_types.emitted_anim import EmittedBone
from oasis_animation.anim_types.emitted_anim import EmittedChannel
from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.matrix_op import op_name
from oasis_animation.anim_types.op_value import ConstantOpValue
from oasis_animation.anim_types.op_value import OpValue
from oasis_animation.anim_types.op_value import SplineOpValue
from oasis_animation.anim_types.repeat_report import RepeatBreak
from oasis_animation.anim_types.repeat_report import RepeatReport
from oasis_animation.anim_types.sample import Sample
from oasis_animation.anim_types.spline_node import SplineNode
from oasis_animation.anim_types.tolerance_set import ToleranceSet
from oasis_animation.config.anim_params import RepeatPreference
from oasis_animation.diagnostics.channel_table import format_channel_nodes
from oasis_animation.diagnostics.channel_table import format_channel_table
from oasis_animation.diagnostics.diagnostics_sink import DiagnosticsSink
from oasis_animation.diagnostics.diagnostics_sink import LoggingDiagnosticsSink
from oasis_animation.math_utils.cubic import derivative_angle_between
from oasis_animation.models.channel_reducer import ChannelReducer
from oasis_animation.models.curve_fitter import CurveFitter
from oasis_animation.models.node_pruner import NodePruner


class AnimAssemblerError(Exception):
    """Raised when the assembler is driven outside its contract."""


class AnimationAssembler:
    """Arena of bones and channels gathered from one source animation.

    Bones are addressed by index and refer to their parent by index. Each
    channel is fitted, pruned and reduced as it is gathered; the whole
    skeleton is then normalized in time and emitted.
    """

    def __init__(
        self,
        tolerances: ToleranceSet,
        root_bones_only: bool = False,
        sink: DiagnosticsSink | None = None,
    ) -> None:
        self._tolerances: ToleranceSet = tolerances
        self._root_bones_only: bool = root_bones_only
        self._sink: DiagnosticsSink = (
            sink if sink is not None else LoggingDiagnosticsSink()
        )
        self._reducer: ChannelReducer = ChannelReducer(tolerances, self._sink)
        self._bones: list[Bone] = []

    @property
    def tolerances(self) -> ToleranceSet:
        return self._tolerances

    @property
    def bones(self) -> list[Bone]:
        return self._bones

    def alloc_bone(self, name: str, parent_index: int | None) -> int:
        """Append a bone and return its index.

        The parent, if any, must already be allocated.
        """
        if parent_index is not None and not 0 <= parent_index < len(self._bones):
            raise AnimAssemblerError(
                f"parent index {parent_index} does not reference an earlier bone"
            )
        self._bones.append(Bone(name, parent_index))
        return len(self._bones) - 1

    def alloc_channel(
        self, bone_index: int, op: MatrixOperationType, op_id: int
    ) -> int:
        """Append a channel to a bone and return its index within the bone."""
        bone: Bone = self._bone(bone_index)
        bone.channels.append(Channel(op, op_id))
        return len(bone.channels) - 1

    def should_recurse(self, bone_index: int) -> bool:
        """Return True if gathering should continue into the bone's children.

        When gathering root bones only, descent stops at the first bone that
        carries channels.
        """
        return not self._root_bones_only or not self._bone(bone_index).channels

    def add_constant(self, bone_index: int, channel_index: int, value: float) -> None:
        """Set a channel to a single constant node."""
        channel: Channel = self._channel(bone_index, channel_index)
        channel.nodes[:] = [SplineNode(0, float(value), 0.0)]

    def add_curve(
        self, bone_index: int, channel_index: int, samples: Sequence[Sample]
    ) -> None:
        """Fit dense samples of one key interval onto the end of a channel."""
        channel: Channel = self._channel(bone_index, channel_index)
        fitter: CurveFitter = CurveFitter(self._tolerances.for_op(channel.op))
        fitter.fit(samples, channel.nodes)

    def prune_nodes(self, bone_index: int, channel_index: int) -> None:
        """Drop redundant nodes of a channel."""
        channel: Channel = self._channel(bone_index, channel_index)
        pruner: NodePruner = NodePruner(
            self._tolerances.for_op(channel.op), self._tolerances.derivative_angle
        )
        pruner.prune(channel.nodes)

    def prune_channels(self, bone_index: int) -> None:
        """Collapse the channels of a bone into as few as possible."""
        self._reducer.reduce(self._bone(bone_index))

    def shift_time(self, offset: int) -> None:
        """Add `offset` ticks to every node of every channel."""
        if offset == 0:
            return
        self._sink.debug(f"Shifting animation by {offset} ticks.")

        for bone in self._bones:
            for channel in bone.channels:
                channel.nodes[:] = [node.shifted(offset) for node in channel.nodes]

    def extend_channels_to_time(self, end_time: int) -> None:
        """Hold every animated channel that ends early at its last value."""
        for bone in self._bones:
            for channel in bone.channels:
                nodes: list[SplineNode] = channel.nodes
                if len(nodes) <= 1:
                    continue

                back: SplineNode = nodes[-1]
                if back.time >= end_time:
                    continue

                # A zero slope at the old end keeps the extension flat
                if back.derivative != 0.0:
                    nodes.append(SplineNode(back.time, back.value, 0.0))
                nodes.append(SplineNode(end_time, back.value, 0.0))

    def min_animated_time(self) -> int:
        """Return the earliest start of any animated channel, or 0."""
        starts: list[int] = [
            channel.start_time()
            for bone in self._bones
            for channel in bone.channels
            if not channel.is_constant()
        ]
        return min(starts) if starts else 0

    def max_animated_time(self) -> int:
        """Return the latest end of any animated channel, or 0."""
        ends: list[int] = [
            channel.end_time()
            for bone in self._bones
            for channel in bone.channels
            if not channel.is_constant()
        ]
        return max(ends) if ends else 0

    def first_non_repeating_channel(self) -> tuple[int, int] | None:
        """Return the first channel that does not end where it starts.

        Returns:
            (bone index, channel index), or None if every channel loops
        """
        for bone_index, bone in enumerate(self._bones):
            for channel_index, channel in enumerate(bone.channels):
                start: SplineNode = channel.nodes[0]
                end: SplineNode = channel.nodes[-1]
                same: bool = (
                    abs(start.value - end.value) < self._tolerances.for_op(channel.op)
                    and derivative_angle_between(start.derivative, end.derivative)
                    < self._tolerances.repeat_derivative_angle
                )
                if not same:
                    return bone_index, channel_index
        return None

    def decide_repeat(self, preference: RepeatPreference) -> RepeatReport:
        """Decide whether the animation loops back to its start."""
        if preference == RepeatPreference.NEVER:
            return RepeatReport(repeat=False, checked=False)

        repeat_break: RepeatBreak | None = None
        found: tuple[int, int] | None = self.first_non_repeating_channel()
        if found is not None:
            bone_index, channel_index = found
            bone: Bone = self._bones[bone_index]
            repeat_break = RepeatBreak(
                bone_index=bone_index,
                bone_name=bone.base_name(),
                channel_index=channel_index,
                op=bone.channels[channel_index].op,
            )

        repeat: bool
        if preference == RepeatPreference.ALWAYS:
            repeat = True
            if repeat_break is not None:
                self._sink.warning(
                    "Animation marked as repeating (as requested), but it does"
                    f" not repeat on bone {repeat_break.bone_name}'s"
                    f" `{op_name(repeat_break.op)}` channel"
                )
        else:
            repeat = repeat_break is None
            self._sink.debug(
                "Animation repeats." if repeat else "Animation does not repeat."
            )

        return RepeatReport(repeat=repeat, checked=True, repeat_break=repeat_break)

    def log_channel(self, bone_index: int, channel_index: int) -> None:
        """Log the nodes of one channel at debug level."""
        for line in format_channel_nodes(self._channel(bone_index, channel_index)):
            self._sink.debug(line)

    def log_all_channels(self) -> None:
        """Log a table of every gathered channel at info level."""
        for line in format_channel_table(self._bones):
            self._sink.info(line)

    def emit(self, anim_name: str, repeat_report: RepeatReport) -> list[EmittedAnim]:
        """Build the emitted animations.

        When gathering root bones only, every bone with channels becomes its
        own animation named "<anim_name>_<bone index>". Otherwise one
        animation holds the whole skeleton.
        """
        start_time: int = self.min_animated_time()
        end_time: int = self.max_animated_time()

        if not self._root_bones_only:
            bones: tuple[EmittedBone, ...] = tuple(
                self._emit_bone(bone, bone.parent_index) for bone in self._bones
            )
            return [
                EmittedAnim(
                    name=anim_name,
                    bones=bones,
                    repeat=repeat_report.repeat,
                    start_time=start_time,
                    end_time=end_time,
                )
            ]

        anims: list[EmittedAnim] = []
        for bone_index, bone in enumerate(self._bones):
            if not bone.channels:
                continue

            # The animation holds only this bone, so it has no parent in it
            anims.append(
                EmittedAnim(
                    name=f"{anim_name}_{bone_index}",
                    bones=(self._emit_bone(bone, None),),
                    repeat=repeat_report.repeat,
                    start_time=start_time,
                    end_time=end_time,
                )
            )

        if not anims:
            self._sink.warning("No animation found.")
        return anims

    def _emit_bone(self, bone: Bone, parent_index: int | None) -> EmittedBone:
        channels: list[EmittedChannel] = []
        for channel in bone.channels:
            if not channel.nodes:
                raise AnimAssemblerError(
                    f"{bone.base_name()} ({op_name(channel.op)}) has no nodes"
                )

            value: OpValue
            if channel.is_constant():
                value = ConstantOpValue(channel.nodes[0].value)
            else:
                if channel.start_time() < 0:
                    self._sink.warning(
                        f"{bone.base_name()} ({op_name(channel.op)}) starts at"
                        f" negative time {channel.start_time()}"
                    )
                value = SplineOpValue.from_nodes(channel.nodes)
            channels.append(EmittedChannel(channel.op, channel.op_id, value))

        return EmittedBone(bone.base_name(), parent_index, tuple(channels))

    def _bone(self, bone_index: int) -> Bone:
        if not 0 <= bone_index < len(self._bones):
            raise AnimAssemblerError(f"unknown bone index {bone_index}")
        return self._bones[bone_index]

    def _channel(self, bone_index: int, channel_index: int) -> Channel:
        channels: list[Channel] = self._bone(bone_index).channels
        if not 0 <= channel_index < len(channels):
            raise AnimAssemblerError(
                f"unknown channel index {channel_index} of bone {bone_index}"
            )
        return channels[channel_index]
