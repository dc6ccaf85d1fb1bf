################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for animation compression."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any

from oasis_animation.anim_types.tolerance_set import ToleranceSet


class RepeatPreference(enum.Enum):
    """How to decide whether an emitted animation loops.

    Attributes:
        NEVER: Never mark the animation as repeating
        ALWAYS: Always mark it as repeating, warning if the ends don't match
        IF_REPEATABLE: Mark it as repeating only if every channel loops
    """

    NEVER = "never"
    ALWAYS = "always"
    IF_REPEATABLE = "if_repeatable"


# Emit one animation per root bone instead of one for the whole skeleton
GATHER_ROOT_BONES_ONLY: bool = False

# Keep the source start time instead of shifting the animation to tick 0
TIMING_PRESERVE_START_TIME: bool = False
# Let channels end at different times instead of holding them to the end
TIMING_STAGGER_END_TIMES: bool = False

# Policy for marking the animation as repeating
REPEAT_PREFERENCE: RepeatPreference = RepeatPreference.IF_REPEATABLE


class AnimParamsError(Exception):
    """Raised when animation parameter validation fails."""


def _require_bool(value: Any, name: str) -> None:
    """Require a boolean flag."""
    if not isinstance(value, bool):
        raise AnimParamsError(f"{name} must be a bool")


def _require_tolerance(value: Any, name: str) -> None:
    """Require a finite non-negative tolerance."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AnimParamsError(f"{name} must be a number")
    if not math.isfinite(value):
        raise AnimParamsError(f"{name} must be finite")
    if value < 0.0:
        raise AnimParamsError(f"{name} must be non-negative")


@dataclass(frozen=True)
class GatherParams:
    """Bone gathering parameters."""

    # Emit one animation per root bone instead of one for the whole skeleton
    root_bones_only: bool = GATHER_ROOT_BONES_ONLY


@dataclass(frozen=True)
class TimingParams:
    """Time normalization parameters."""

    # Keep the source start time instead of shifting to tick 0
    preserve_start_time: bool = TIMING_PRESERVE_START_TIME
    # Let channels end at different times
    stagger_end_times: bool = TIMING_STAGGER_END_TIMES


@dataclass(frozen=True)
class RepeatParams:
    """Looping parameters."""

    # Policy for marking the animation as repeating
    preference: RepeatPreference = REPEAT_PREFERENCE


@dataclass(frozen=True)
class AnimParams:
    """Complete configuration tree for animation compression."""

    tolerances: ToleranceSet
    gather: GatherParams
    timing: TimingParams
    repeat: RepeatParams

    @classmethod
    def defaults(cls) -> AnimParams:
        """Return the default animation parameter tree."""
        return cls(
            tolerances=ToleranceSet(),
            gather=GatherParams(),
            timing=TimingParams(),
            repeat=RepeatParams(),
        )

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        if not isinstance(self.tolerances, ToleranceSet):
            raise AnimParamsError("tolerances must be a ToleranceSet")
        for tolerance in fields(ToleranceSet):
            _require_tolerance(
                getattr(self.tolerances, tolerance.name),
                f"tolerances.{tolerance.name}",
            )

        _require_bool(self.gather.root_bones_only, "gather.root_bones_only")
        _require_bool(self.timing.preserve_start_time, "timing.preserve_start_time")
        _require_bool(self.timing.stagger_end_times, "timing.stagger_end_times")

        if not isinstance(self.repeat.preference, RepeatPreference):
            raise AnimParamsError(
                "repeat.preference must be never, always or if_repeatable"
            )

    def replace(self, **namespace_overrides: Any) -> AnimParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses and enums into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    if isinstance(value, enum.Enum):
        return value.value
    return value
