################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Per-category deviation thresholds for curve compression."""

from __future__ import annotations

import math
from dataclasses import dataclass

from oasis_animation.anim_types.matrix_op import MatrixOperationType
from oasis_animation.anim_types.matrix_op import is_rotate_op
from oasis_animation.anim_types.matrix_op import is_scale_op
from oasis_animation.anim_types.matrix_op import is_translate_op
from oasis_animation.anim_types.matrix_op import op_default_value


# Scale tolerance, half a percent
DEFAULT_SCALE_TOLERANCE: float = 0.005
# Rotation tolerance in radians, 0.5 degrees
DEFAULT_ROTATE_TOLERANCE: float = 0.00873
# Translation tolerance in scene distance units
DEFAULT_TRANSLATE_TOLERANCE: float = 0.01
# Derivative angle tolerance in radians, 0.5 degrees
DEFAULT_DERIVATIVE_ANGLE_TOLERANCE: float = 0.00873
# Derivative angle tolerance for repeat detection in radians, 10 degrees
DEFAULT_REPEAT_DERIVATIVE_ANGLE_TOLERANCE: float = 0.1745

# Tolerance for operations outside the rotate/translate/scale families
FALLBACK_TOLERANCE: float = 0.1


@dataclass(frozen=True)
class ToleranceSet:
    """Maximum acceptable deviations between source and compressed curves.

    Attributes:
        scale: Allowed deviation of scale values
        rotate: Allowed deviation of rotation values in radians
        translate: Allowed deviation of translation values
        derivative_angle: Allowed angle between slopes in radians
        repeat_derivative_angle: Allowed angle between the start and end
            slopes of a channel for the animation to repeat, in radians
    """

    scale: float = DEFAULT_SCALE_TOLERANCE
    rotate: float = DEFAULT_ROTATE_TOLERANCE
    translate: float = DEFAULT_TRANSLATE_TOLERANCE
    derivative_angle: float = DEFAULT_DERIVATIVE_ANGLE_TOLERANCE
    repeat_derivative_angle: float = DEFAULT_REPEAT_DERIVATIVE_ANGLE_TOLERANCE

    def __post_init__(self) -> None:
        """Validate that every threshold is finite and non-negative."""
        for name in (
            "scale",
            "rotate",
            "translate",
            "derivative_angle",
            "repeat_derivative_angle",
        ):
            raw: object = getattr(self, name)
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError(f"{name} must be a number")
            value: float = float(raw)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite")
            if value < 0.0:
                raise ValueError(f"{name} must be non-negative")
            object.__setattr__(self, name, value)

    def for_op(self, op: MatrixOperationType) -> float:
        """Return the allowed value deviation for an operation kind."""
        if is_rotate_op(op):
            return self.rotate
        if is_translate_op(op):
            return self.translate
        if is_scale_op(op):
            return self.scale
        return FALLBACK_TOLERANCE

    def is_default_value(self, op: MatrixOperationType, value: float) -> bool:
        """Return True if `value` is the operation's identity within tolerance."""
        return abs(value - op_default_value(op)) < self.for_op(op)
