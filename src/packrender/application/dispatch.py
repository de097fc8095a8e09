from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from packrender.adapters.errors import OverwriteCancelled, PackRenderError
from packrender.application.confirmation import ConfirmationGate
from packrender.application.materialize import write_render
from packrender.application.presenter import present_render
from packrender.application.reporting import report_error
from packrender.domain.diagnostics import Diagnostic, Severity
from packrender.domain.error_context import ErrorContext
from packrender.domain.naming import format_render_name
from packrender.domain.render import OUTPUT_TEMPLATE_NAME, Render
from packrender.domain.session import SessionState
from packrender.ports.renderer import RenderOutput
from packrender.ports.terminal import TerminalPort

logger = logging.getLogger(__name__)


@dataclass
class DispatchOutcome:
    fatal: bool = False
    written: list[Path] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _sorted_renders(renders: dict[str, str]) -> list[Render]:
    return [
        Render(name=format_render_name(name), content=renders[name])
        for name in sorted(renders)
    ]


def assemble_batch(output: RenderOutput, output_template: str | None = None) -> list[Render]:
    """Order renders as dependents, then parents, then the output template."""
    batch = _sorted_renders(output.dependent_renders)
    batch.extend(_sorted_renders(output.parent_renders))
    if output_template is not None:
        batch.append(Render(name=OUTPUT_TEMPLATE_NAME, content=output_template))
    return batch


def dispatch_renders(
    batch: list[Render],
    to_dir: Path | None,
    session: SessionState,
    interactive: bool,
    *,
    terminal: TerminalPort,
    context: ErrorContext | None = None,
    gate: ConfirmationGate | None = None,
) -> DispatchOutcome:
    """Write each render to ``to_dir`` when set, then show it on the terminal.

    A failed write is reported and the render is still shown. A cancelled
    overwrite prompt stops the whole batch.
    """
    gate = gate or ConfirmationGate(terminal)
    outcome = DispatchOutcome()
    for render in batch:
        if to_dir is not None:
            try:
                outcome.written.append(
                    write_render(render, to_dir, session, interactive, gate=gate)
                )
            except OverwriteCancelled as e:
                outcome.fatal = True
                outcome.diagnostics.append(
                    report_error(terminal, e, "rendering to file cancelled", context)
                )
                return outcome
            except PackRenderError as e:
                logger.debug("skipping file output for %s: %s", render.name, e)
                outcome.diagnostics.append(
                    report_error(
                        terminal,
                        e,
                        "error rendering to file",
                        context,
                        severity=Severity.WARN,
                    )
                )
        present_render(render, terminal)
    return outcome
