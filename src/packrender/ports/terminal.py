from typing import Protocol

from packrender.domain.error_context import ErrorContext


class TerminalPort(Protocol):
    def output(self, text: str, *, bold: bool = False) -> None: ...

    def error_with_context(
        self, error: BaseException, subject: str, context: ErrorContext | None = None
    ) -> None: ...

    def warning_with_context(
        self, error: BaseException, subject: str, context: ErrorContext | None = None
    ) -> None: ...

    def input(self, prompt: str) -> str: ...

    def is_interactive(self) -> bool: ...
