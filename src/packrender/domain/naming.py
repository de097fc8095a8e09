from __future__ import annotations

import re

from packrender.domain.diagnostics import Diagnostic, Severity, ValueLocation

PACK_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")
VARIABLE_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
SCOPED_VARIABLE_PATTERN = re.compile(r"^([a-z0-9][a-z0-9_-]*\.)?[a-zA-Z_][a-zA-Z0-9_]*$")

TEMPLATES_SEGMENT = "/templates/"
TEMPLATE_SUFFIX = ".tpl"


def format_render_name(name: str) -> str:
    """Trim the low-value parts of a rendered template name.

    ``mypack/templates/job.nomad.tpl`` becomes ``mypack/job.nomad``. Only
    the first ``/templates/`` segment is collapsed and only a literal
    ``.tpl`` suffix is removed, so ``mypack/templates/install.tpl`` keeps
    its full stem.
    """
    out = name.replace(TEMPLATES_SEGMENT, "/", 1)
    if out.endswith(TEMPLATE_SUFFIX):
        out = out[: -len(TEMPLATE_SUFFIX)]
    return out


def validate_pack_name(name: str) -> list[Diagnostic]:
    if PACK_NAME_PATTERN.match(name):
        return []
    return [
        Diagnostic(
            code="PACK_NAME_INVALID",
            rule="naming.pack.name",
            severity=Severity.ERROR,
            message=f"Invalid pack name: {name}",
            location=ValueLocation("pack.name", name),
        )
    ]


def validate_variable_name(name: str, *, scoped: bool = False) -> list[Diagnostic]:
    pattern = SCOPED_VARIABLE_PATTERN if scoped else VARIABLE_PATTERN
    if pattern.match(name):
        return []
    return [
        Diagnostic(
            code="VARIABLE_NAME_INVALID",
            rule="naming.variable.format",
            severity=Severity.ERROR,
            message=f"Invalid variable name: {name}",
            location=ValueLocation("variable", name),
        )
    ]
