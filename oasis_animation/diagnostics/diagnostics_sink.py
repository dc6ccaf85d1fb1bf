################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Leveled message sink used by the compression core."""

from __future__ import annotations

import logging
from typing import Protocol


_LOG: logging.Logger = logging.getLogger(__name__)


class DiagnosticsSink(Protocol):
    """Receives preformatted diagnostic messages."""

    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class LoggingDiagnosticsSink:
    """Forward diagnostic messages to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger: logging.Logger = logger if logger is not None else _LOG

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, message: str) -> None:
        self._logger.debug("%s", message)

    def info(self, message: str) -> None:
        self._logger.info("%s", message)

    def warning(self, message: str) -> None:
        self._logger.warning("%s", message)
