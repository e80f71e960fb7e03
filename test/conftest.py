from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from smartcodable.diagnostics import DiagnosticSink


@dataclass
class RecordingSink(DiagnosticSink):
    """A DiagnosticSink that keeps what it receives, for assertions."""

    debug: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[tuple[BaseException, str]] = field(default_factory=list)

    def log_debug(self, message: str) -> None:
        self.debug.append(message)

    def log_warning(self, message: str) -> None:
        self.warnings.append(message)

    def log_error(self, error: BaseException, type_name: str) -> None:
        self.errors.append((error, type_name))

    @property
    def is_empty(self) -> bool:
        return not (self.debug or self.warnings or self.errors)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
