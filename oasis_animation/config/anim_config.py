################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper for animation compression."""

from __future__ import annotations

from dataclasses import dataclass

from oasis_animation.anim_types.tolerance_set import ToleranceSet
from oasis_animation.config.anim_params import AnimParams
from oasis_animation.config.anim_params import AnimParamsError
from oasis_animation.config.anim_params import RepeatPreference


class AnimConfigError(Exception):
    """Raised when animation configuration validation fails."""


@dataclass(frozen=True)
class AnimConfig:
    """Convenience wrapper around animation parameters."""

    params: AnimParams

    def __init__(self, params: AnimParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> AnimConfig:
        """Return a configuration holding the default parameters."""
        return cls(AnimParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants."""
        try:
            self.params.validate()
        except AnimParamsError as exc:
            raise AnimConfigError(str(exc)) from exc

    def tolerances(self) -> ToleranceSet:
        """Return the configured compression tolerances."""
        return self.params.tolerances

    def root_bones_only(self) -> bool:
        """Return True if each root bone becomes its own animation."""
        return self.params.gather.root_bones_only

    def preserve_start_time(self) -> bool:
        """Return True if the source start time is kept."""
        return self.params.timing.preserve_start_time

    def stagger_end_times(self) -> bool:
        """Return True if channels may end at different times."""
        return self.params.timing.stagger_end_times

    def repeat_preference(self) -> RepeatPreference:
        """Return the configured repeat policy."""
        return self.params.repeat.preference
