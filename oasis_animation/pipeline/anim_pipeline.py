################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Animation compression pipeline orchestration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from oasis_animation.anim_types.emitted_anim import EmittedAnim
from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.matrix_op import op_name
from oasis_animation.anim_types.repeat_report import RepeatReport
from oasis_animation.anim_types.sample import samples_from_interval
from oasis_animation.anim_types.source import SourceBone
from oasis_animation.anim_types.source import SourceChannel
from oasis_animation.anim_types.tolerance_set import ToleranceSet
from oasis_animation.config.anim_config import AnimConfig
from oasis_animation.diagnostics.diagnostics_sink import DiagnosticsSink
from oasis_animation.diagnostics.diagnostics_sink import LoggingDiagnosticsSink
from oasis_animation.math_utils.cubic import derivative_angle
from oasis_animation.pipeline.animation_assembler import AnimationAssembler
from oasis_animation.timing.time_base import TimeBaseError
from oasis_animation.timing.time_base import validate_tick_sequence


class AnimPipelineError(Exception):
    """Raised for animation pipeline contract violations."""


class AnimInputError(Exception):
    """Raised when source animation data is malformed."""


@dataclass(frozen=True)
class AnimPipelineResult:
    """Outputs produced by one pipeline run.

    Attributes:
        anims: Emitted animations, possibly empty when gathering root bones only
        repeat_report: Decision on whether the animations loop
        start_time: Earliest animated tick after time normalization
        end_time: Latest animated tick after time normalization
    """

    anims: tuple[EmittedAnim, ...]
    repeat_report: RepeatReport
    start_time: int
    end_time: int


class AnimPipeline:
    """End-to-end coordinator for compressing one source animation.

    Bones are allocated depth-first with parents before children. Every
    gathered channel is fitted, pruned and reduced with the rest of its bone.
    The skeleton is then shifted to start at tick 0 and its channels are held
    to a common end time, unless configured otherwise.
    """

    def __init__(self, config: AnimConfig, sink: DiagnosticsSink | None = None) -> None:
        """Initialize the pipeline with configuration."""
        if not isinstance(config, AnimConfig):
            raise AnimPipelineError("config must be an AnimConfig")
        self._config: AnimConfig = config
        self._sink: DiagnosticsSink = (
            sink if sink is not None else LoggingDiagnosticsSink()
        )

    @property
    def config(self) -> AnimConfig:
        return self._config

    def run(self, roots: Sequence[SourceBone], anim_name: str) -> AnimPipelineResult:
        """Compress the animation of the skeleton under `roots`.

        Raises:
            AnimInputError: If any source channel is malformed
        """
        assembler: AnimationAssembler = self.gather(roots)

        if not self._config.preserve_start_time():
            assembler.shift_time(-assembler.min_animated_time())
        if not self._config.stagger_end_times():
            assembler.extend_channels_to_time(assembler.max_animated_time())

        assembler.log_all_channels()

        repeat_report: RepeatReport = assembler.decide_repeat(
            self._config.repeat_preference()
        )
        anims: list[EmittedAnim] = assembler.emit(anim_name, repeat_report)

        return AnimPipelineResult(
            anims=tuple(anims),
            repeat_report=repeat_report,
            start_time=assembler.min_animated_time(),
            end_time=assembler.max_animated_time(),
        )

    def gather(self, roots: Sequence[SourceBone]) -> AnimationAssembler:
        """Allocate the skeleton and gather its reduced channels."""
        assembler: AnimationAssembler = AnimationAssembler(
            self._config.tolerances(),
            root_bones_only=self._config.root_bones_only(),
            sink=self._sink,
        )

        sources: list[SourceBone] = []
        children: list[list[int]] = []
        root_indices: list[int] = [
            self._alloc_bones(assembler, root, None, sources, children)
            for root in roots
        ]

        for root_index in root_indices:
            self._gather_recursive(assembler, root_index, sources, children)

        return assembler

    def _alloc_bones(
        self,
        assembler: AnimationAssembler,
        source: SourceBone,
        parent_index: int | None,
        sources: list[SourceBone],
        children: list[list[int]],
    ) -> int:
        """Validate and allocate a source bone and its descendants."""
        for channel in source.channels:
            self._validate_channel(source.name, channel)

        bone_index: int = assembler.alloc_bone(source.name, parent_index)
        sources.append(source)
        children.append([])
        if parent_index is not None:
            children[parent_index].append(bone_index)

        for child in source.children:
            self._alloc_bones(assembler, child, bone_index, sources, children)
        return bone_index

    def _gather_recursive(
        self,
        assembler: AnimationAssembler,
        bone_index: int,
        sources: list[SourceBone],
        children: list[list[int]],
    ) -> None:
        self._sink.debug(f"Node: {sources[bone_index].name}")
        self._gather_bone(assembler, bone_index, sources[bone_index])

        if assembler.should_recurse(bone_index):
            for child_index in children[bone_index]:
                self._gather_recursive(assembler, child_index, sources, children)

    def _gather_bone(
        self, assembler: AnimationAssembler, bone_index: int, source: SourceBone
    ) -> None:
        """Fit, prune and reduce every channel of one bone."""
        tolerances: ToleranceSet = self._config.tolerances()
        for source_channel in source.channels:
            op: MatrixOperationType = MatrixOperationType(source_channel.op)
            constant: float | None = self.constant_value(source_channel, tolerances)

            # Constant identity channels never affect the transform
            if constant is not None and tolerances.is_default_value(op, constant):
                continue

            channel_index: int = assembler.alloc_channel(
                bone_index, op, source_channel.op_id
            )
            if constant is not None:
                assembler.add_constant(bone_index, channel_index, constant)
                self._sink.debug(
                    f"  [channel {channel_index}] {op_name(op)}: constant {constant:f}"
                )
                continue

            self._sink.debug(f"  [channel {channel_index}] {op_name(op)}: curve")
            for interval in source_channel.intervals:
                assembler.add_curve(
                    bone_index, channel_index, samples_from_interval(interval)
                )
            assembler.prune_nodes(bone_index, channel_index)
            assembler.log_channel(bone_index, channel_index)

        assembler.prune_channels(bone_index)

    @staticmethod
    def constant_value(
        channel: SourceChannel, tolerances: ToleranceSet
    ) -> float | None:
        """Return the channel's value if it never changes, otherwise None.

        A sampled channel is constant when every sample stays within the op
        tolerance of the first sample and every slope is flat within the
        derivative-angle tolerance.
        """
        if channel.constant is not None:
            return float(channel.constant)

        tolerance: float = tolerances.for_op(MatrixOperationType(channel.op))
        first_value: float = channel.intervals[0][0].value
        angle_tolerance: float = tolerances.derivative_angle
        for interval in channel.intervals:
            for sample in interval:
                if abs(sample.value - first_value) > tolerance:
                    return None
                if abs(derivative_angle(sample.left_derivative)) > angle_tolerance:
                    return None
                if abs(derivative_angle(sample.right_derivative)) > angle_tolerance:
                    return None
        return first_value

    @staticmethod
    def _validate_channel(bone_name: str, channel: SourceChannel) -> None:
        """Check one source channel against the ingest contract."""
        scope: str = f"{bone_name} channel {channel.op_id}"
        try:
            op: MatrixOperationType = MatrixOperationType(channel.op)
        except ValueError as exc:
            raise AnimInputError(f"{scope}: unknown op {channel.op!r}") from exc
        if op == MatrixOperationType.INVALID:
            raise AnimInputError(f"{scope}: op must not be INVALID")
        if not isinstance(channel.op_id, int) or isinstance(channel.op_id, bool):
            raise AnimInputError(f"{scope}: op_id must be an int")
        if channel.op_id < 0:
            raise AnimInputError(f"{scope}: op_id must be non-negative")

        if channel.constant is not None:
            if channel.intervals:
                raise AnimInputError(f"{scope}: both constant and intervals given")
            if not math.isfinite(channel.constant):
                raise AnimInputError(f"{scope}: constant must be finite")
            return

        if not channel.intervals:
            raise AnimInputError(f"{scope}: neither constant nor intervals given")

        t_last_tick: int | None = None
        for interval in channel.intervals:
            if not interval:
                raise AnimInputError(f"{scope}: empty key interval")
            try:
                t_last_tick = validate_tick_sequence(
                    (sample.time for sample in interval), t_last_tick
                )
            except TimeBaseError as exc:
                raise AnimInputError(f"{scope}: {exc}") from exc
