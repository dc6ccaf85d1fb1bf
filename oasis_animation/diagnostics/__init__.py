################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Diagnostics reporting for animation curve compression."""

from __future__ import annotations

from oasis_animation.diagnostics.diagnostics_sink import DiagnosticsSink
from oasis_animation.diagnostics.diagnostics_sink import LoggingDiagnosticsSink


__all__ = [
    "DiagnosticsSink",
    "LoggingDiagnosticsSink",
]
