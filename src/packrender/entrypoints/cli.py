import logging
from pathlib import Path

import typer

from packrender.adapters.errors import InvalidArguments
from packrender.adapters.pack_catalog.local import LocalPackCatalog
from packrender.adapters.pack_catalog.registry import RegistryPackCatalog
from packrender.adapters.policy.pack_validator import PackPolicyEngine
from packrender.adapters.renderer.jinja_renderer import JinjaRenderer
from packrender.adapters.terminal.typer_terminal import TyperTerminal
from packrender.application.render_pack import render_pack, resolve_pack_ref
from packrender.application.reporting import report_error
from packrender.application.settings import Settings, load_settings
from packrender.application.variables import collect_variables
from packrender.application.vendor_pack import vendor_pack
from packrender.domain.diagnostics import Diagnostic, Severity
from packrender.domain.session import SessionState

app = typer.Typer(
    add_completion=False,
    help="Render the templates within a pack to the terminal and to disk.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )


def _echo_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for d in diagnostics:
        color = typer.colors.RED if d.severity == Severity.ERROR else typer.colors.YELLOW
        typer.secho(f"! {d.message}", fg=color, err=True)
        if d.location is not None and getattr(d.location, "path", None):
            typer.echo(f"  - File: {getattr(d.location, 'path')}", err=True)


def _load_settings() -> Settings:
    loaded = load_settings()
    if loaded.has_errors or loaded.value is None:
        _echo_diagnostics(loaded.diagnostics)
        raise typer.Exit(1)
    return loaded.value


@app.command()
def render(
    pack: str = typer.Argument(..., help="Pack name, or path to a pack directory."),
    registry: str = typer.Option(
        "",
        "--registry",
        help="Registry containing the pack. Defaults to the configured registry.",
    ),
    ref: str = typer.Option(
        "",
        "--ref",
        help="Ref of the pack to render. Not supported with a file path.",
    ),
    render_output_template: bool = typer.Option(
        False,
        "--render-output-template",
        help="Also render and display the pack's output template.",
    ),
    to_dir: str = typer.Option(
        "",
        "--to-dir",
        "-o",
        help="Directory to write rendered files to, in addition to the terminal.",
    ),
    auto_approve: bool = typer.Option(
        False, "--auto-approve", help="Overwrite existing files without asking."
    ),
    var: list[str] = typer.Option(None, "--var", help="Variable override, key=value."),
    var_file: list[Path] = typer.Option(None, "--var-file", help="YAML variable file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Render the specified pack and view the results."""
    _configure_logging(verbose)
    settings = _load_settings()
    terminal = TyperTerminal()

    try:
        pack_ref = resolve_pack_ref(
            pack,
            registry,
            ref,
            default_registry=settings.default_registry,
            default_ref=settings.default_ref,
        )
    except InvalidArguments as e:
        report_error(terminal, e, "error parsing args or flags")
        raise typer.Exit(1)

    variables = collect_variables(var_file or [], var or [])
    if variables.has_errors:
        _echo_diagnostics(variables.diagnostics)
        raise typer.Exit(1)

    if pack_ref.source == "local":
        catalog = LocalPackCatalog()
    else:
        catalog = RegistryPackCatalog(settings.cache_dir)

    result = render_pack(
        pack_ref,
        catalog=catalog,
        renderer=JinjaRenderer(),
        policy_engine=PackPolicyEngine(),
        terminal=terminal,
        session=SessionState(auto_approve_all=auto_approve),
        to_dir=Path(to_dir) if to_dir else None,
        render_output_template=render_output_template,
        variables=variables.value,
    )
    raise typer.Exit(result.exit_code)


@app.command()
def vendor(
    path: Path = typer.Argument(..., help="Path to a local pack directory."),
    registry: str = typer.Option("", "--registry", help="Registry to vendor into."),
    ref: str = typer.Option("", "--ref", help="Ref to record the pack under."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Copy a local pack into the registry cache."""
    _configure_logging(verbose)
    settings = _load_settings()
    result = vendor_pack(
        path,
        cache_dir=settings.cache_dir,
        registry=registry or settings.default_registry,
        ref=ref or settings.default_ref,
        policy_engine=PackPolicyEngine(),
    )
    _echo_diagnostics(result.diagnostics)
    if result.value is not None:
        typer.echo(f"Vendored pack to {result.value}")
    raise typer.Exit(result.exit_code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
