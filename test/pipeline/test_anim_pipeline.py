################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the animation compression pipeline."""

from __future__ import annotations

import math
from typing import Callable

import pytest

from oasis_animation.anim_types.emitted_anim import EmittedAnim
from oasis_animation.anim_types.emitted_anim import EmittedChannel
from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.matrix_op import TransformStage
from oasis_animation.anim_types.op_value import ConstantOpValue
from oasis_animation.anim_types.op_value import SplineOpValue
from oasis_animation.anim_types.sample import CurveSample
from oasis_animation.anim_types.source import SourceBone
from oasis_animation.anim_types.source import SourceChannel
from oasis_animation.anim_types.spline_node import SplineNode
from oasis_animation.config.anim_config import AnimConfig
from oasis_animation.config.anim_params import AnimParams
from oasis_animation.config.anim_params import GatherParams
from oasis_animation.config.anim_params import RepeatParams
from oasis_animation.config.anim_params import RepeatPreference
from oasis_animation.config.anim_params import TimingParams
from oasis_animation.pipeline.anim_pipeline import AnimInputError
from oasis_animation.pipeline.anim_pipeline import AnimPipeline
from oasis_animation.pipeline.anim_pipeline import AnimPipelineError
from oasis_animation.pipeline.anim_pipeline import AnimPipelineResult
from oasis_animation.pipeline.animation_assembler import AnimationAssembler


class _RecordingSink:
    """Diagnostics sink that keeps every message."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def at(self, level: str) -> list[str]:
        return [message for kind, message in self.messages if kind == level]


def _pipeline(
    sink: _RecordingSink | None = None, **namespace_overrides: object
) -> AnimPipeline:
    """Create a pipeline from default parameters with overrides."""
    params: AnimParams = AnimParams.defaults().replace(**namespace_overrides)
    return AnimPipeline(AnimConfig(params), sink or _RecordingSink())


def _sampled(
    stage: TransformStage,
    axis: int,
    keys: list[int],
    value: Callable[[int], float],
    slope: Callable[[int], float],
) -> SourceChannel:
    """Sample a curve once per tick between consecutive keys."""
    intervals: list[tuple[CurveSample, ...]] = [
        tuple(
            CurveSample(t, value(t), slope(t), slope(t))
            for t in range(start, end + 1)
        )
        for start, end in zip(keys, keys[1:])
    ]
    return SourceChannel.for_stage(stage, axis, intervals=tuple(intervals))


def _sine(t: int) -> float:
    return math.sin(0.05 * t)


def _sine_slope(t: int) -> float:
    return 0.05 * math.cos(0.05 * t)


def _ramp(t: int) -> float:
    return 0.02 * t


def _grow(t: int) -> float:
    return 1.0 + 0.01 * t


def _skeleton() -> tuple[SourceBone, ...]:
    """Create hips with a sine and a constant, and a spine with a ramp."""
    spine: SourceBone = SourceBone(
        "rig:spine",
        channels=(
            _sampled(
                TransformStage.TRANSLATION,
                1,
                [10, 110],
                lambda t: 0.01 * t,
                lambda t: 0.01,
            ),
        ),
    )
    hips: SourceBone = SourceBone(
        "rig:hips",
        channels=(
            _sampled(
                TransformStage.TRANSLATION,
                0,
                [10, 60, 110, 160, 210],
                _sine,
                _sine_slope,
            ),
            SourceChannel.for_stage(TransformStage.ROTATION, 1, constant=0.5),
        ),
        children=(spine,),
    )
    return (hips,)


def _as_source(anim: EmittedAnim) -> tuple[SourceBone, ...]:
    """Turn a single-bone emitted animation back into source samples."""
    channels: list[SourceChannel] = []
    for channel in anim.bones[0].channels:
        if isinstance(channel.value, ConstantOpValue):
            channels.append(
                SourceChannel(channel.op, channel.op_id, constant=channel.value.value)
            )
            continue
        assert isinstance(channel.value, SplineOpValue)
        nodes: tuple[SplineNode, ...] = channel.value.nodes
        intervals: tuple[tuple[CurveSample, ...], ...] = tuple(
            tuple(
                CurveSample(n.time, n.value, n.derivative, n.derivative)
                for n in (a, b)
            )
            for a, b in zip(nodes, nodes[1:])
        )
        channels.append(SourceChannel(channel.op, channel.op_id, intervals=intervals))
    return (SourceBone(anim.bones[0].name, channels=tuple(channels)),)


def test_pipeline_requires_config() -> None:
    """Ensure a pipeline needs an AnimConfig."""
    with pytest.raises(AnimPipelineError):
        AnimPipeline(AnimParams.defaults())  # type: ignore[arg-type]


def test_run_normalizes_time_and_emits_skeleton() -> None:
    """Ensure the default run starts at 0 and ends all channels together."""
    result: AnimPipelineResult = _pipeline().run(_skeleton(), "walk")

    assert (result.start_time, result.end_time) == (0, 200)
    assert len(result.anims) == 1
    anim: EmittedAnim = result.anims[0]
    assert anim.name == "walk"
    assert [bone.name for bone in anim.bones] == ["hips", "spine"]
    assert [bone.parent_index for bone in anim.bones] == [None, 0]

    hips_x: EmittedChannel = anim.bones[0].channels[0]
    assert hips_x.op == MatrixOperationType.TRANSLATE_X
    assert isinstance(hips_x.value, SplineOpValue)
    assert hips_x.value.start_time() == 0
    assert hips_x.value.end_time() == 200
    assert anim.bones[0].channels[1].value == ConstantOpValue(0.5)

    spine_y: EmittedChannel = anim.bones[1].channels[0]
    assert isinstance(spine_y.value, SplineOpValue)
    assert [node.time for node in spine_y.value.nodes] == [0, 100, 100, 200]
    assert spine_y.value.nodes[-1].value == pytest.approx(1.1)
    assert spine_y.value.nodes[-1].derivative == 0.0


def test_run_reports_repeat_break() -> None:
    """Ensure a sine that doesn't close its loop is not repeated."""
    result: AnimPipelineResult = _pipeline().run(_skeleton(), "walk")
    assert not result.repeat_report.repeat
    assert result.repeat_report.repeat_break is not None
    assert result.repeat_report.repeat_break.bone_name == "hips"
    assert not result.anims[0].repeat


def test_run_always_repeat_warns() -> None:
    """Ensure a forced repeat is kept and reported."""
    sink: _RecordingSink = _RecordingSink()
    result: AnimPipelineResult = _pipeline(
        sink, repeat=RepeatParams(preference=RepeatPreference.ALWAYS)
    ).run(_skeleton(), "walk")
    assert result.anims[0].repeat
    assert len(sink.at("warning")) == 1
    assert "bone hips's `Translate x` channel" in sink.at("warning")[0]


def test_run_preserves_times_when_configured() -> None:
    """Ensure start times and ragged ends can be kept."""
    timing: TimingParams = TimingParams(
        preserve_start_time=True, stagger_end_times=True
    )
    result: AnimPipelineResult = _pipeline(timing=timing).run(_skeleton(), "walk")
    assert (result.start_time, result.end_time) == (10, 210)
    spine_y: EmittedChannel = result.anims[0].bones[1].channels[0]
    assert isinstance(spine_y.value, SplineOpValue)
    assert [node.time for node in spine_y.value.nodes] == [10, 110]


def test_run_logs_channel_table() -> None:
    """Ensure the channel table is logged once per run."""
    sink: _RecordingSink = _RecordingSink()
    _pipeline(sink).run(_skeleton(), "walk")
    assert len(sink.at("info")) == 4


def test_gather_detects_constant_samples() -> None:
    """Ensure flat samples within tolerance reduce to one node."""
    values: list[float] = [2.0, 2.004, 1.998, 2.002]
    channel: SourceChannel = SourceChannel(
        MatrixOperationType.TRANSLATE_X,
        0,
        intervals=(
            tuple(CurveSample(t * 10, v, 0.0, 0.0) for t, v in enumerate(values)),
        ),
    )
    assembler: AnimationAssembler = _pipeline().gather(
        (SourceBone("root", channels=(channel,)),)
    )
    assert assembler.bones[0].channels[0].nodes == [SplineNode(0, 2.0, 0.0)]


def test_gather_skips_identity_constants() -> None:
    """Ensure constants at the identity value never allocate channels."""
    flat_zero: SourceChannel = _sampled(
        TransformStage.TRANSLATION, 2, [0, 20], lambda t: 0.003, lambda t: 0.0
    )
    unit_scale: SourceChannel = SourceChannel.for_stage(
        TransformStage.SCALING, 0, constant=1.0
    )
    assembler: AnimationAssembler = _pipeline().gather(
        (SourceBone("root", channels=(flat_zero, unit_scale)),)
    )
    assert assembler.bones[0].channels == []


def test_gather_root_bones_only() -> None:
    """Ensure gathering stops below the first animated bone."""
    ramp: SourceChannel = _sampled(
        TransformStage.TRANSLATION, 0, [0, 30], lambda t: 0.1 * t, lambda t: 0.1
    )
    child: SourceBone = SourceBone("child", channels=(ramp,))
    gather: GatherParams = GatherParams(root_bones_only=True)

    animated_root: SourceBone = SourceBone("root", channels=(ramp,), children=(child,))
    result: AnimPipelineResult = _pipeline(gather=gather).run((animated_root,), "run")
    assert [anim.name for anim in result.anims] == ["run_0"]

    still_root: SourceBone = SourceBone("root", children=(child,))
    result = _pipeline(gather=gather).run((still_root,), "run")
    assert [anim.name for anim in result.anims] == ["run_1"]
    assert result.anims[0].bones[0].name == "child"


def test_run_is_idempotent() -> None:
    """Ensure compressing compressed output gives the same animation."""
    root: SourceBone = SourceBone(
        "root",
        channels=(
            _sampled(TransformStage.TRANSLATION, 0, [0, 50], _ramp, lambda t: 0.02),
            SourceChannel.for_stage(
                TransformStage.ROTATION_PIVOT_INVERSE, 0, constant=0.5
            ),
            _sampled(TransformStage.SCALING, 0, [0, 50], _grow, lambda t: 0.01),
            _sampled(TransformStage.SCALING, 1, [0, 50], _grow, lambda t: 0.01),
            _sampled(TransformStage.SCALING, 2, [0, 50], _grow, lambda t: 0.01),
        ),
    )
    pipeline: AnimPipeline = _pipeline()
    first: EmittedAnim = pipeline.run((root,), "grow").anims[0]
    assert [channel.op for channel in first.bones[0].channels] == [
        MatrixOperationType.TRANSLATE_X,
        MatrixOperationType.SCALE_UNIFORMLY,
    ]
    assert [channel.op_id for channel in first.bones[0].channels] == [0, 18]

    second: EmittedAnim = pipeline.run(_as_source(first), "grow").anims[0]
    assert second == first


@pytest.mark.parametrize(
    "channel",
    [
        SourceChannel(MatrixOperationType.TRANSLATE_X, 0),
        SourceChannel(
            MatrixOperationType.TRANSLATE_X,
            0,
            constant=1.0,
            intervals=((CurveSample(0, 1.0, 0.0, 0.0),),),
        ),
        SourceChannel(MatrixOperationType.TRANSLATE_X, 0, intervals=((),)),
        SourceChannel(
            MatrixOperationType.TRANSLATE_X,
            0,
            intervals=(
                (CurveSample(0, 1.0, 0.0, 0.0), CurveSample(10, 2.0, 0.0, 0.0)),
                (CurveSample(5, 2.0, 0.0, 0.0), CurveSample(20, 1.0, 0.0, 0.0)),
            ),
        ),
        SourceChannel(
            MatrixOperationType.TRANSLATE_X,
            0,
            intervals=(
                (CurveSample(-5, 1.0, 0.0, 0.0), CurveSample(5, 2.0, 0.0, 0.0)),
            ),
        ),
        SourceChannel(MatrixOperationType.INVALID, 0, constant=2.0),
        SourceChannel(MatrixOperationType.TRANSLATE_X, 0, constant=math.inf),
    ],
)
def test_run_rejects_malformed_input(channel: SourceChannel) -> None:
    """Ensure malformed source channels raise AnimInputError."""
    child: SourceBone = SourceBone("child", channels=(channel,))
    with pytest.raises(AnimInputError):
        _pipeline().run((SourceBone("root", children=(child,)),), "bad")
