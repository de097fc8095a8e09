from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from packrender.domain.diagnostics import Diagnostic, Severity

T = TypeVar("T")


def _new_diagnostics() -> list[Diagnostic]:
    return []


@dataclass
class Result(Generic[T]):
    value: T | None = None
    diagnostics: list[Diagnostic] = field(default_factory=_new_diagnostics)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def exit_code(self) -> int:
        return 1 if self.has_errors else 0
