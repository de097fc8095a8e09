from __future__ import annotations

from pathlib import Path

import jsonschema
import yaml

from packrender.domain.diagnostics import Diagnostic, FileLocation, Severity, ValueLocation
from packrender.domain.json_types import JsonDict, as_json_dict
from packrender.domain.naming import PACK_NAME_PATTERN, validate_pack_name, validate_variable_name
from packrender.domain.result import Result
from packrender.ports.policy_engine import PolicyEnginePort

Manifest = JsonDict

MANIFEST_FILE = "pack.yaml"
VARIABLES_FILE = "variables.yaml"
DEPS_DIR = "deps"

PACK_SCHEMA: JsonDict = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": ["string", "number"]},
        "description": {"type": "string"},
        "dependencies": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "alias": {"type": "string", "minLength": 1},
                    "enabled": {"type": "boolean"},
                },
                "additionalProperties": False,
            },
        },
    },
}


def _read_yaml(path: Path) -> object:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def load_manifest(pack_dir: Path) -> Manifest:
    return as_json_dict(_read_yaml(pack_dir / MANIFEST_FILE) or {})


def load_variables(pack_dir: Path) -> JsonDict:
    path = pack_dir / VARIABLES_FILE
    if not path.exists():
        return {}
    return as_json_dict(_read_yaml(path) or {})


def dependency_entries(manifest: Manifest) -> list[JsonDict]:
    raw = manifest.get("dependencies")
    if not isinstance(raw, list):
        return []
    return [as_json_dict(item) for item in raw if isinstance(item, dict)]


def validate_manifest_schema(manifest: Manifest) -> list[Diagnostic]:
    try:
        jsonschema.validate(manifest, PACK_SCHEMA)
        return []
    except jsonschema.ValidationError as e:
        return [
            Diagnostic(
                code="PACK_SCHEMA_INVALID",
                rule="pack.schema",
                severity=Severity.ERROR,
                message=e.message,
            )
        ]


def validate_name(manifest: Manifest) -> list[Diagnostic]:
    name = str(manifest.get("name") or "").strip()
    if not name:
        return []
    return validate_pack_name(name)


def validate_variable_names(variables: JsonDict) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for name in variables:
        diagnostics.extend(validate_variable_name(name))
    return diagnostics


def _invalid_dependency_names(name: str, alias: str) -> list[Diagnostic]:
    return [
        Diagnostic(
            code="PACK_DEPENDENCY_NAME_INVALID",
            rule="pack.dependencies.name",
            severity=Severity.ERROR,
            message=f"Invalid dependency {field_name}: {value}",
            location=ValueLocation(f"dependencies.{field_name}", value),
        )
        for field_name, value in (("name", name), ("alias", alias))
        if not PACK_NAME_PATTERN.match(value)
    ]


def validate_dependencies(pack_dir: Path, manifest: Manifest) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    aliases: set[str] = set()
    for entry in dependency_entries(manifest):
        name = str(entry.get("name"))
        alias = str(entry.get("alias") or name)
        # Both end up as path segments below deps/ and in render names.
        invalid = _invalid_dependency_names(name, alias)
        if invalid:
            diagnostics.extend(invalid)
            continue
        if alias in aliases:
            diagnostics.append(
                Diagnostic(
                    code="PACK_DEPENDENCY_DUPLICATE",
                    rule="pack.dependencies.alias",
                    severity=Severity.ERROR,
                    message=f"Duplicate dependency alias: {alias}",
                    location=ValueLocation("dependencies.alias", alias),
                )
            )
        aliases.add(alias)
        if entry.get("enabled") is False:
            continue
        if not (pack_dir / DEPS_DIR / name / MANIFEST_FILE).is_file():
            diagnostics.append(
                Diagnostic(
                    code="PACK_DEPENDENCY_MISSING",
                    rule="pack.dependencies.vendored",
                    severity=Severity.ERROR,
                    message=f"Dependency not vendored under {DEPS_DIR}/: {name}",
                    location=ValueLocation("dependencies.name", name),
                )
            )
    return diagnostics


class PackPolicyEngine(PolicyEnginePort):
    def validate_pack(self, pack_path: Path) -> Result[Manifest]:
        try:
            manifest = load_manifest(pack_path)
            variables = load_variables(pack_path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            return Result(
                diagnostics=[
                    Diagnostic(
                        code="PACK_PARSE_FAILED",
                        rule="pack.parse",
                        severity=Severity.ERROR,
                        message=str(e),
                        location=FileLocation(str(pack_path)),
                    )
                ]
            )
        diagnostics: list[Diagnostic] = []
        diagnostics.extend(validate_manifest_schema(manifest))
        diagnostics.extend(validate_name(manifest))
        diagnostics.extend(validate_variable_names(variables))
        diagnostics.extend(validate_dependencies(pack_path, manifest))
        return Result(value=manifest, diagnostics=diagnostics)
