from __future__ import annotations

import logging
from pathlib import Path

from packrender.adapters.errors import (
    DestinationNotDirectory,
    InvalidArguments,
    NoTemplatesRendered,
    PackNotFound,
    PackReadError,
    RendererTemplateError,
)
from packrender.application.dispatch import assemble_batch, dispatch_renders
from packrender.application.reporting import report_error
from packrender.domain.diagnostics import Diagnostic, Severity
from packrender.domain.error_context import (
    PACK_NAME,
    PACK_PATH,
    PACK_REF,
    REGISTRY_NAME,
    ErrorContext,
)
from packrender.domain.json_types import JsonDict
from packrender.domain.pack import PackRef, is_path_argument
from packrender.domain.result import Result
from packrender.domain.session import SessionState
from packrender.ports.pack_catalog import PackCatalogPort
from packrender.ports.policy_engine import PolicyEnginePort
from packrender.ports.renderer import RenderRequest, RendererPort
from packrender.ports.terminal import TerminalPort

logger = logging.getLogger(__name__)


def resolve_pack_ref(
    argument: str,
    registry: str | None = None,
    ref: str | None = None,
    *,
    default_registry: str | None = None,
    default_ref: str | None = None,
) -> PackRef:
    if is_path_argument(argument):
        if ref:
            raise InvalidArguments(
                "using ref with a file path is not supported",
                hint="drop --ref or pass a registry pack name",
            )
        return PackRef.local(argument)
    return PackRef.from_registry(
        argument, registry or default_registry, ref or default_ref
    )


def pack_error_context(pack: PackRef) -> ErrorContext:
    context = ErrorContext().add(PACK_NAME, pack.name)
    if pack.source == "local":
        context.add(PACK_PATH, pack.location)
    else:
        context.add(REGISTRY_NAME, pack.registry).add(PACK_REF, pack.ref)
    return context


def render_pack(
    pack: PackRef,
    *,
    catalog: PackCatalogPort,
    renderer: RendererPort,
    policy_engine: PolicyEnginePort,
    terminal: TerminalPort,
    session: SessionState,
    to_dir: Path | None = None,
    render_output_template: bool = False,
    variables: JsonDict | None = None,
    interactive: bool | None = None,
) -> Result[list[Path]]:
    context = pack_error_context(pack)
    diagnostics: list[Diagnostic] = []

    def _fail(error: BaseException, subject: str) -> Result[list[Path]]:
        diagnostics.append(report_error(terminal, error, subject, context))
        return Result(diagnostics=diagnostics)

    try:
        pack_path = catalog.get_pack_path(pack)
    except PackNotFound as e:
        return _fail(e, "failed to find pack")
    logger.debug("resolved pack %s to %s", pack.name, pack_path)

    validation = policy_engine.validate_pack(pack_path)
    if validation.has_errors:
        diagnostics.extend(validation.diagnostics)
        messages = [d.message for d in validation.diagnostics if d.severity == Severity.ERROR]
        return _fail(PackReadError("; ".join(messages)), "invalid pack")

    if to_dir is not None and to_dir.exists() and not to_dir.is_dir():
        return _fail(
            DestinationNotDirectory("output path exists and is not a directory"),
            "failed to create output directory",
        )

    request = RenderRequest(pack=pack, pack_path=pack_path, variables=variables or {})
    try:
        output = renderer.render(request)
    except (RendererTemplateError, PackReadError) as e:
        return _fail(e, "failed to render pack")

    # At least one parent or dependent template has to render.
    if output.len_parent_renders() < 1 and output.len_dependent_renders() < 1:
        return _fail(NoTemplatesRendered("no templates rendered"), "no templates rendered")

    # The output template can fail on template functions; report it and keep
    # going so the job templates are still shown after the error.
    output_template: str | None = None
    if render_output_template:
        try:
            output_template = renderer.render_output_template(request)
        except (RendererTemplateError, PackReadError) as e:
            diagnostics.append(
                report_error(
                    terminal,
                    e,
                    "failed to render output template",
                    context,
                    severity=Severity.WARN,
                )
            )

    batch = assemble_batch(output, output_template)
    if interactive is None:
        interactive = terminal.is_interactive()
    outcome = dispatch_renders(
        batch,
        to_dir,
        session,
        interactive,
        terminal=terminal,
        context=context,
    )
    diagnostics.extend(outcome.diagnostics)
    return Result(value=outcome.written, diagnostics=diagnostics)
