################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Matrix operation kinds and stable operation ids for animated channels."""

from __future__ import annotations

import enum


class MatrixOperationType(enum.IntEnum):
    """
    Scalar transform operations that a channel can drive

    The numeric order is significant: the three per-axis ops of each family
    are consecutive, and SCALE_UNIFORMLY directly follows SCALE_Z.
    """

    INVALID = 0
    ROTATE_ABOUT_X = 1
    ROTATE_ABOUT_Y = 2
    ROTATE_ABOUT_Z = 3
    TRANSLATE_X = 4
    TRANSLATE_Y = 5
    TRANSLATE_Z = 6
    SCALE_X = 7
    SCALE_Y = 8
    SCALE_Z = 9
    SCALE_UNIFORMLY = 10


# Op names used in logs and channel tables
_OP_NAMES: dict[MatrixOperationType, str] = {
    MatrixOperationType.INVALID: "Invalid",
    MatrixOperationType.ROTATE_ABOUT_X: "Rotate about x",
    MatrixOperationType.ROTATE_ABOUT_Y: "Rotate about y",
    MatrixOperationType.ROTATE_ABOUT_Z: "Rotate about z",
    MatrixOperationType.TRANSLATE_X: "Translate x",
    MatrixOperationType.TRANSLATE_Y: "Translate y",
    MatrixOperationType.TRANSLATE_Z: "Translate z",
    MatrixOperationType.SCALE_X: "Scale x",
    MatrixOperationType.SCALE_Y: "Scale y",
    MatrixOperationType.SCALE_Z: "Scale z",
    MatrixOperationType.SCALE_UNIFORMLY: "Scale uniformly",
}

# The per-axis scale ops that fold into SCALE_UNIFORMLY
SCALE_XYZ_OPS: frozenset[MatrixOperationType] = frozenset(
    {
        MatrixOperationType.SCALE_X,
        MatrixOperationType.SCALE_Y,
        MatrixOperationType.SCALE_Z,
    }
)


def is_rotate_op(op: MatrixOperationType) -> bool:
    """Return True if the operation is a rotation."""
    return (
        MatrixOperationType.ROTATE_ABOUT_X <= op <= MatrixOperationType.ROTATE_ABOUT_Z
    )


def is_translate_op(op: MatrixOperationType) -> bool:
    """Return True if the operation is a translation."""
    return MatrixOperationType.TRANSLATE_X <= op <= MatrixOperationType.TRANSLATE_Z


def is_scale_op(op: MatrixOperationType) -> bool:
    """Return True if the operation is a scale, including uniform scale."""
    return MatrixOperationType.SCALE_X <= op <= MatrixOperationType.SCALE_UNIFORMLY


def op_default_value(op: MatrixOperationType) -> float:
    """Return the value for which the operation leaves a transform unchanged."""
    return 1.0 if is_scale_op(op) else 0.0


def op_name(op: MatrixOperationType) -> str:
    """Return a human-readable operation name."""
    return _OP_NAMES[MatrixOperationType(op)]


def uniform_scale_op_id(op: MatrixOperationType, op_id: int) -> int:
    """Return the uniform-scale op id that replaces a per-axis scale op id.

    Op ids of one scale stage are laid out like the op values themselves
    (scale-X, scale-Y, scale-Z, scale-uniformly) but from a different base,
    so the offset between the op values carries over to the ids.
    """
    if op not in SCALE_XYZ_OPS:
        raise ValueError(f"{op_name(op)} is not a per-axis scale op")
    return op_id + int(MatrixOperationType.SCALE_UNIFORMLY) - int(op)


class TransformStage(enum.Enum):
    """
    Transform stages of a bone, listed in application order

    Attributes:
        TRANSLATION: Local translation
        ROTATION_OFFSET: Offset of the rotation pivot
        ROTATION_PIVOT: Move to the rotation pivot
        PRE_ROTATION: Rotation applied before the animated rotation
        ROTATION: Local rotation
        POST_ROTATION: Inverse of the post-rotation
        ROTATION_PIVOT_INVERSE: Move back from the rotation pivot
        SCALING_OFFSET: Offset of the scaling pivot
        SCALING_PIVOT: Move to the scaling pivot
        SCALING: Local scale
        SCALING_PIVOT_INVERSE: Move back from the scaling pivot
    """

    TRANSLATION = "translation"
    ROTATION_OFFSET = "rotation_offset"
    ROTATION_PIVOT = "rotation_pivot"
    PRE_ROTATION = "pre_rotation"
    ROTATION = "rotation"
    POST_ROTATION = "post_rotation"
    ROTATION_PIVOT_INVERSE = "rotation_pivot_inverse"
    SCALING_OFFSET = "scaling_offset"
    SCALING_PIVOT = "scaling_pivot"
    SCALING = "scaling"
    SCALING_PIVOT_INVERSE = "scaling_pivot_inverse"


# Per stage: first op of the family and the base op id
_STAGE_LAYOUT: dict[TransformStage, tuple[MatrixOperationType, int]] = {
    TransformStage.TRANSLATION: (MatrixOperationType.TRANSLATE_X, 0),
    TransformStage.ROTATION_OFFSET: (MatrixOperationType.TRANSLATE_X, 0),
    TransformStage.ROTATION_PIVOT: (MatrixOperationType.TRANSLATE_X, 0),
    TransformStage.PRE_ROTATION: (MatrixOperationType.ROTATE_ABOUT_X, 3),
    TransformStage.ROTATION: (MatrixOperationType.ROTATE_ABOUT_X, 6),
    TransformStage.POST_ROTATION: (MatrixOperationType.ROTATE_ABOUT_X, 9),
    TransformStage.ROTATION_PIVOT_INVERSE: (MatrixOperationType.TRANSLATE_X, 12),
    TransformStage.SCALING_OFFSET: (MatrixOperationType.TRANSLATE_X, 12),
    TransformStage.SCALING_PIVOT: (MatrixOperationType.TRANSLATE_X, 12),
    TransformStage.SCALING: (MatrixOperationType.SCALE_X, 15),
    TransformStage.SCALING_PIVOT_INVERSE: (MatrixOperationType.TRANSLATE_X, 19),
}


def op_for(stage: TransformStage, axis: int) -> MatrixOperationType:
    """Return the operation driven by `axis` (0=x, 1=y, 2=z) of a stage."""
    _require_axis(axis)
    return MatrixOperationType(int(_STAGE_LAYOUT[stage][0]) + axis)


def op_id_for(stage: TransformStage, axis_index: int) -> int:
    """Return the stable op id of the `axis_index`-th channel of a stage."""
    _require_axis(axis_index)
    return _STAGE_LAYOUT[stage][1] + axis_index


def _require_axis(axis: int) -> None:
    """Require an axis index in [0, 2]."""
    if not isinstance(axis, int) or isinstance(axis, bool) or not 0 <= axis <= 2:
        raise ValueError("axis must be 0, 1 or 2")
