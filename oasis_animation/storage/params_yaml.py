################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML schema and persistence for animation compression parameters."""

from __future__ import annotations

import numbers
import os
from pathlib import Path
from typing import Any
from typing import cast

import yaml

from oasis_animation.anim_types.tolerance_set import ToleranceSet
from oasis_animation.config.anim_params import AnimParams
from oasis_animation.config.anim_params import AnimParamsError
from oasis_animation.config.anim_params import GatherParams
from oasis_animation.config.anim_params import RepeatParams
from oasis_animation.config.anim_params import RepeatPreference
from oasis_animation.config.anim_params import TimingParams


# Version of the parameter file layout
FORMAT_VERSION: int = 1

_TOLERANCE_KEYS: set[str] = {
    "scale",
    "rotate",
    "translate",
    "derivative_angle",
    "repeat_derivative_angle",
}


class AnimYamlError(Exception):
    """Raised when the parameter YAML schema is invalid."""


class AnimPersistenceError(Exception):
    """Raised when loading or saving parameter files fails."""


def params_to_dict(params: AnimParams) -> dict[str, object]:
    """Convert parameters to a YAML-safe dictionary."""
    data: dict[str, object] = {
        "format_version": FORMAT_VERSION,
        "tolerances": {
            "scale": params.tolerances.scale,
            "rotate": params.tolerances.rotate,
            "translate": params.tolerances.translate,
            "derivative_angle": params.tolerances.derivative_angle,
            "repeat_derivative_angle": params.tolerances.repeat_derivative_angle,
        },
        "gather": {
            "root_bones_only": params.gather.root_bones_only,
        },
        "timing": {
            "preserve_start_time": params.timing.preserve_start_time,
            "stagger_end_times": params.timing.stagger_end_times,
        },
        "repeat": {
            "preference": params.repeat.preference.value,
        },
    }
    return data


def params_from_dict(data: dict[str, object]) -> AnimParams:
    """Parse a YAML dictionary into validated parameters."""
    if not isinstance(data, dict):
        raise AnimYamlError("YAML root must be a mapping")
    _require_keys(
        "root", data, {"format_version", "tolerances", "gather", "timing", "repeat"}
    )

    format_version: int = _require_int(data["format_version"], "format_version")
    if format_version != FORMAT_VERSION:
        raise AnimYamlError(f"Unsupported format_version: {format_version}")

    tolerances_data: dict[str, object] = _require_mapping(
        data["tolerances"], "tolerances"
    )
    _require_keys("tolerances", tolerances_data, _TOLERANCE_KEYS)
    tolerance_values: dict[str, float] = {
        key: _require_float(tolerances_data[key], f"tolerances.{key}")
        for key in sorted(_TOLERANCE_KEYS)
    }
    try:
        tolerances: ToleranceSet = ToleranceSet(**tolerance_values)
    except ValueError as exc:
        raise AnimYamlError(f"Invalid tolerances: {exc}") from exc

    gather_data: dict[str, object] = _require_mapping(data["gather"], "gather")
    _require_keys("gather", gather_data, {"root_bones_only"})
    gather: GatherParams = GatherParams(
        root_bones_only=_require_bool(
            gather_data["root_bones_only"], "gather.root_bones_only"
        )
    )

    timing_data: dict[str, object] = _require_mapping(data["timing"], "timing")
    _require_keys("timing", timing_data, {"preserve_start_time", "stagger_end_times"})
    timing: TimingParams = TimingParams(
        preserve_start_time=_require_bool(
            timing_data["preserve_start_time"], "timing.preserve_start_time"
        ),
        stagger_end_times=_require_bool(
            timing_data["stagger_end_times"], "timing.stagger_end_times"
        ),
    )

    repeat_data: dict[str, object] = _require_mapping(data["repeat"], "repeat")
    _require_keys("repeat", repeat_data, {"preference"})
    preference_name: str = _require_str(repeat_data["preference"], "repeat.preference")
    try:
        preference: RepeatPreference = RepeatPreference(preference_name)
    except ValueError as exc:
        raise AnimYamlError(
            f"repeat.preference must be one of: "
            f"{', '.join(item.value for item in RepeatPreference)}"
        ) from exc

    params: AnimParams = AnimParams(
        tolerances=tolerances,
        gather=gather,
        timing=timing,
        repeat=RepeatParams(preference=preference),
    )
    try:
        params.validate()
    except AnimParamsError as exc:
        raise AnimYamlError(str(exc)) from exc
    return params


def dumps_params_yaml(params: AnimParams) -> str:
    """Serialize parameters to deterministic YAML."""
    data: dict[str, object] = params_to_dict(params)
    safe_dump: Any = cast(Any, yaml.safe_dump)
    return safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def loads_params_yaml(text: str) -> AnimParams:
    """Parse parameters from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise AnimYamlError("Malformed YAML") from exc
    if not isinstance(loaded, dict):
        raise AnimYamlError("YAML root must be a mapping")
    return params_from_dict(loaded)


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    suffix: str = Path(os.fspath(path)).suffix.lower()
    return suffix in {".yaml", ".yml"}


def save_params_yaml(
    path: str | os.PathLike[str],
    params: AnimParams,
    *,
    atomic_write: bool = True,
) -> None:
    """Save parameters to disk as YAML."""
    if not is_yaml_path(path):
        raise AnimPersistenceError("Path must end with .yaml or .yml")

    path_obj: Path = Path(os.fspath(path))
    try:
        path_obj.parent.mkdir(parents=True, exist_ok=True)
        text: str = dumps_params_yaml(params)
        if atomic_write:
            tmp_name: str = f".{path_obj.name}.tmp.{os.getpid()}"
            tmp_path: Path = path_obj.with_name(tmp_name)
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path_obj)
        else:
            path_obj.write_text(text, encoding="utf-8")
    except (OSError, AnimYamlError) as exc:
        raise AnimPersistenceError(f"Failed to save parameters to {path_obj}") from exc


def load_params_yaml(path: str | os.PathLike[str]) -> AnimParams:
    """Load parameters from a YAML file."""
    if not is_yaml_path(path):
        raise AnimPersistenceError("Path must end with .yaml or .yml")

    path_obj: Path = Path(os.fspath(path))
    try:
        text: str = path_obj.read_text(encoding="utf-8")
        return loads_params_yaml(text)
    except (OSError, AnimYamlError) as exc:
        raise AnimPersistenceError(
            f"Failed to load parameters from {path_obj}"
        ) from exc


def _require_keys(scope: str, data: dict[str, object], required: set[str]) -> None:
    """Ensure a mapping has exactly the required keys."""
    unknown: set[str] = {key for key in data.keys() if key not in required}
    if unknown:
        raise AnimYamlError(f"Unexpected keys in {scope}: {', '.join(sorted(unknown))}")
    missing: set[str] = {key for key in required if key not in data}
    if missing:
        raise AnimYamlError(f"Missing keys in {scope}: {', '.join(sorted(missing))}")


def _require_mapping(value: object, name: str) -> dict[str, object]:
    """Ensure the value is a dictionary."""
    if not isinstance(value, dict):
        raise AnimYamlError(f"{name} must be a mapping")
    return value


def _require_str(value: object, name: str) -> str:
    """Ensure the value is a string."""
    if not isinstance(value, str):
        raise AnimYamlError(f"{name} must be a string")
    return value


def _require_bool(value: object, name: str) -> bool:
    """Ensure the value is a boolean."""
    if not isinstance(value, bool):
        raise AnimYamlError(f"{name} must be a boolean")
    return value


def _require_int(value: object, name: str) -> int:
    """Ensure the value is an integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise AnimYamlError(f"{name} must be an integer")
    return int(value)


def _require_float(value: object, name: str) -> float:
    """Ensure the value is a float."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise AnimYamlError(f"{name} must be a float")
    return float(value)
