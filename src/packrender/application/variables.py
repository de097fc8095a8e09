from __future__ import annotations

from pathlib import Path

import yaml

from packrender.domain.diagnostics import Diagnostic, FileLocation, Severity, ValueLocation
from packrender.domain.json_types import JsonDict, as_json_dict, coerce_json_value
from packrender.domain.naming import validate_variable_name
from packrender.domain.result import Result


def _parse_value(raw: str) -> object:
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return raw if value is None else value


def _load_var_file(path: Path) -> Result[JsonDict]:
    try:
        raw: object = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="VAR_FILE_UNREADABLE",
                    rule="variables.file",
                    severity=Severity.ERROR,
                    message=str(e),
                    location=FileLocation(str(path)),
                )
            ]
        )
    if not isinstance(raw, dict):
        return Result(
            diagnostics=[
                Diagnostic(
                    code="VAR_FILE_NOT_MAPPING",
                    rule="variables.file",
                    severity=Severity.ERROR,
                    message="Variable file must contain a mapping",
                    location=FileLocation(str(path)),
                )
            ]
        )
    return Result(value=as_json_dict(raw))


def collect_variables(var_files: list[Path], var_args: list[str]) -> Result[JsonDict]:
    """Merge variable files and ``key=value`` overrides, later entries winning."""
    diagnostics: list[Diagnostic] = []
    merged: JsonDict = {}

    for path in var_files:
        loaded = _load_var_file(path)
        diagnostics.extend(loaded.diagnostics)
        if loaded.value:
            merged.update(loaded.value)

    for arg in var_args:
        key, sep, raw = arg.partition("=")
        key = key.strip()
        if not sep or not key:
            diagnostics.append(
                Diagnostic(
                    code="VAR_ARG_INVALID",
                    rule="variables.arg",
                    severity=Severity.ERROR,
                    message=f"Expected key=value, got: {arg}",
                    location=ValueLocation("var", arg),
                )
            )
            continue
        merged[key] = coerce_json_value(_parse_value(raw))

    for key in merged:
        diagnostics.extend(validate_variable_name(key, scoped=True))

    return Result(value=merged, diagnostics=diagnostics)
