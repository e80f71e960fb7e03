"""Report why a decode failed, without affecting what the caller receives."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final, Protocol, runtime_checkable

logger: Final = logging.getLogger("smartcodable")


@runtime_checkable
class DiagnosticSink(Protocol):
    """
    Receives details of decode failures.

    Decode functions return `None` when they fail; a `DiagnosticSink` is the
    only place the reason for a failure is available. Sinks must not raise.
    """

    def log_debug(self, message: str) -> None:
        """Report a problem with the input before decoding began."""

    def log_warning(self, message: str) -> None:
        """Report a field that fell back to its default value."""

    def log_error(self, error: BaseException, type_name: str) -> None:
        """Report a decode failure for a target type."""


@dataclass(frozen=True, slots=True)
class LoggingDiagnosticSink(DiagnosticSink):
    """A `DiagnosticSink` that writes to a standard library `logging.Logger`."""

    logger: logging.Logger = field(default=logger)

    def log_debug(self, message: str) -> None:
        self.logger.debug(message)

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)

    def log_error(self, error: BaseException, type_name: str) -> None:
        self.logger.error("Failed to decode %s: %s", type_name, error)


default_sink: Final = LoggingDiagnosticSink()
