################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Type definitions for animation curve compression."""

from __future__ import annotations

from oasis_animation.anim_types.channel import Bone
from oasis_animation.anim_types.channel import Channel
from oasis_animation.anim_types.emitted_anim import EmittedAnim
from oasis_animation.anim_types.emitted_anim import EmittedBone
from oasis_animation.anim_types.emitted_anim import EmittedChannel
from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.matrix_op import TransformStage
from oasis_animation.anim_types.op_value import ConstantOpValue
from oasis_animation.anim_types.op_value import OpValue
from oasis_animation.anim_types.op_value import SplineOpValue
from oasis_animation.anim_types.op_value import TargetOpValue
from oasis_animation.anim_types.op_value import ValueRange
from oasis_animation.anim_types.repeat_report import RepeatBreak
from oasis_animation.anim_types.repeat_report import RepeatReport
from oasis_animation.anim_types.sample import CurveSample
from oasis_animation.anim_types.sample import Sample
from oasis_animation.anim_types.source import SourceBone
from oasis_animation.anim_types.source import SourceChannel
from oasis_animation.anim_types.spline_node import SplineNode
from oasis_animation.anim_types.tolerance_set import ToleranceSet


__all__ = [
    "Bone",
    "Channel",
    "ConstantOpValue",
    "CurveSample",
    "EmittedAnim",
    "EmittedBone",
    "EmittedChannel",
    "MatrixOperationType",
    "OpValue",
    "RepeatBreak",
    "RepeatReport",
    "Sample",
    "SourceBone",
    "SourceChannel",
    "SplineNode",
    "SplineOpValue",
    "TargetOpValue",
    "ToleranceSet",
    "TransformStage",
    "ValueRange",
]
