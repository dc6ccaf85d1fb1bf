################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tick validation for animation channels."""

from __future__ import annotations

from typing import Iterable


class TimeBaseError(Exception):
    """Raised when tick validation fails."""


def require_tick(t_tick: int) -> int:
    """Return `t_tick` after checking it is a non-negative integer tick."""
    if not isinstance(t_tick, int) or isinstance(t_tick, bool):
        raise TimeBaseError("Ticks must be an int")
    if t_tick < 0:
        raise TimeBaseError("Ticks must be non-negative")
    return t_tick


def validate_non_decreasing(t_prev_tick: int | None, t_tick: int) -> None:
    """Validate that ticks do not decrease; repeated ticks are allowed."""
    if t_prev_tick is None:
        return
    if t_tick < t_prev_tick:
        raise TimeBaseError(
            f"Tick {t_tick} precedes tick {t_prev_tick} of the previous sample"
        )


def validate_tick_sequence(
    ticks: Iterable[int], t_prev_tick: int | None = None
) -> int | None:
    """Validate a run of ticks and return the last one.

    Args:
        ticks: Ticks in sequence order
        t_prev_tick: Tick preceding the run, if any

    Returns:
        The last validated tick, or `t_prev_tick` when the run is empty
    """
    t_last_tick: int | None = t_prev_tick
    for t_tick in ticks:
        require_tick(t_tick)
        validate_non_decreasing(t_last_tick, t_tick)
        t_last_tick = t_tick
    return t_last_tick
