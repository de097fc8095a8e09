from __future__ import annotations

from packrender.adapters.errors import PackRenderError
from packrender.domain.diagnostics import (
    Diagnostic,
    FileLocation,
    Location,
    Severity,
    ValueLocation,
)
from packrender.domain.error_context import DEST_DIR, DEST_FILE, TEMPLATE_NAME, ErrorContext
from packrender.ports.terminal import TerminalPort


def _code(error: BaseException) -> str:
    if isinstance(error, PackRenderError):
        return f"RENDER_{error.kind.name}"
    return "RENDER_UNEXPECTED"


def _location(context: ErrorContext) -> Location | None:
    """Point at the most specific file or template named in ``context``."""
    details = context.as_details()
    for label in (DEST_FILE, DEST_DIR):
        if label in details:
            return FileLocation(str(details[label]))
    if TEMPLATE_NAME in details:
        return ValueLocation("template", str(details[TEMPLATE_NAME]))
    return None


def report_error(
    terminal: TerminalPort,
    error: BaseException,
    subject: str,
    context: ErrorContext | None = None,
    *,
    severity: Severity = Severity.ERROR,
    rule: str = "render",
) -> Diagnostic:
    """Show ``error`` with its context and return the matching diagnostic."""
    merged = ErrorContext().extend(context)
    if isinstance(error, PackRenderError):
        merged.extend(error.context)
    if severity == Severity.ERROR:
        terminal.error_with_context(error, subject, merged)
    else:
        terminal.warning_with_context(error, subject, merged)
    return Diagnostic(
        code=_code(error),
        rule=rule,
        severity=severity,
        message=f"{subject}: {error}",
        location=_location(merged),
        hint=getattr(error, "hint", None),
        details=merged.as_details() or None,
    )
