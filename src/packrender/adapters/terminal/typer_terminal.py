from __future__ import annotations

import sys

import typer

from packrender.adapters.errors import InputCancelled
from packrender.domain.error_context import ErrorContext


class TyperTerminal:
    def __init__(self, interactive: bool | None = None) -> None:
        self._interactive = interactive

    def output(self, text: str, *, bold: bool = False) -> None:
        if bold:
            typer.secho(text, bold=True)
        else:
            typer.echo(text)

    def _emit(
        self,
        error: BaseException,
        subject: str,
        context: ErrorContext | None,
        color: str,
    ) -> None:
        typer.secho(f"! {subject}", fg=color, bold=True, err=True)
        typer.secho(f"  Error: {error}", fg=color, err=True)
        hint = getattr(error, "hint", None)
        if hint:
            typer.echo(f"  Hint: {hint}", err=True)
        if context:
            typer.secho("  Context:", fg=color, err=True)
            for label, value in context:
                typer.echo(f"  - {label}: {value}", err=True)

    def error_with_context(
        self, error: BaseException, subject: str, context: ErrorContext | None = None
    ) -> None:
        self._emit(error, subject, context, typer.colors.RED)

    def warning_with_context(
        self, error: BaseException, subject: str, context: ErrorContext | None = None
    ) -> None:
        self._emit(error, subject, context, typer.colors.YELLOW)

    def input(self, prompt: str) -> str:
        try:
            return typer.prompt(
                typer.style(prompt, fg=typer.colors.YELLOW, bold=True),
                default="",
                show_default=False,
                prompt_suffix="",
            )
        except typer.Abort as e:
            raise InputCancelled("input cancelled", cause=e)

    def is_interactive(self) -> bool:
        if self._interactive is not None:
            return self._interactive
        try:
            return sys.stdin.isatty() and sys.stdout.isatty()
        except (AttributeError, ValueError):
            return False
