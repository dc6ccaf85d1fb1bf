################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Human-readable tables of gathered channels."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from oasis_animation.anim_types.channel import Bone
from oasis_animation.anim_types.channel import Channel
from oasis_animation.anim_types.matrix_op import is_rotate_op
from oasis_animation.anim_types.matrix_op import is_translate_op
from oasis_animation.anim_types.matrix_op import op_name


# Column header of the channel table
TABLE_HEADER: str = f"  {'bone name':>30} {'operation':>16}  {'time range':>9}   values"


def format_channel_row(bone: Bone, channel: Channel) -> str:
    """Return one table row listing the node values of a channel.

    Rotations are listed in whole degrees, translations with one decimal and
    scales with two.
    """
    values: np.ndarray = np.asarray(
        [node.value for node in channel.nodes], dtype=np.float64
    )
    decimals: int
    if is_rotate_op(channel.op):
        values = np.rad2deg(values)
        decimals = 0
    elif is_translate_op(channel.op):
        decimals = 1
    else:
        decimals = 2

    span: str
    if channel.is_constant():
        span = " constant   "
    else:
        span = f"{channel.start_time():4d}~{channel.end_time():4d}   "

    listed: str = " ".join(f"{value:.{decimals}f}" for value in values)
    return f"  {bone.base_name():>30} {op_name(channel.op):>16}   {span}{listed}"


def format_channel_table(bones: Sequence[Bone]) -> list[str]:
    """Return the header and one row per channel of every animated bone."""
    lines: list[str] = [TABLE_HEADER]
    for bone in bones:
        for channel in bone.channels:
            lines.append(format_channel_row(bone, channel))
    return lines


def format_channel_nodes(channel: Channel) -> list[str]:
    """Return one line per node of a channel, for verbose logs."""
    return [
        f"    flat, {index}, {node.time}, {node.value:f}, {node.derivative:f}"
        for index, node in enumerate(channel.nodes)
    ]
