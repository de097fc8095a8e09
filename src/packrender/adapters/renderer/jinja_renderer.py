from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined
import yaml

from packrender.adapters.errors import PackReadError, RendererTemplateError
from packrender.adapters.policy.pack_validator import (
    DEPS_DIR,
    dependency_entries,
    load_manifest,
    load_variables,
)
from packrender.domain.error_context import PACK_PATH, TEMPLATE_NAME, ErrorContext
from packrender.domain.json_types import JsonDict
from packrender.domain.render import OUTPUT_TEMPLATE_NAME
from packrender.ports.renderer import RenderOutput, RenderRequest

logger = logging.getLogger(__name__)

TEMPLATES_DIR = "templates"


@dataclass
class _PackTree:
    name: str
    path: Path
    manifest: JsonDict
    variables: JsonDict
    deps: dict[str, _PackTree] = field(default_factory=dict)

    def context(self) -> JsonDict:
        return {
            "my": self.variables,
            "pack": {
                "name": self.name,
                "version": str(self.manifest.get("version", "")),
                "description": str(self.manifest.get("description", "")),
            },
            "deps": {alias: dep.variables for alias, dep in self.deps.items()},
        }


def _split_overrides(
    overrides: JsonDict, aliases: set[str]
) -> tuple[JsonDict, dict[str, JsonDict]]:
    own: JsonDict = {}
    scoped: dict[str, JsonDict] = {}
    for key, value in overrides.items():
        scope, sep, name = key.partition(".")
        if sep and scope in aliases:
            scoped.setdefault(scope, {})[name] = value
        elif sep:
            logger.warning("ignoring variable for unknown dependency: %s", key)
        else:
            own[key] = value
    return own, scoped


def _environment(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _template_names(templates_dir: Path) -> list[str]:
    if not templates_dir.is_dir():
        return []
    names: list[str] = []
    for path in templates_dir.rglob("*"):
        if not path.is_file() or path.name.startswith("_"):
            continue
        rel = path.relative_to(templates_dir).as_posix()
        if rel == OUTPUT_TEMPLATE_NAME:
            continue
        names.append(rel)
    return sorted(names)


class JinjaRenderer:
    def _load(self, pack_path: Path, overrides: JsonDict) -> _PackTree:
        try:
            manifest = load_manifest(pack_path)
            variables = load_variables(pack_path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise PackReadError(
                "failed to read pack",
                cause=e,
                context=ErrorContext().add(PACK_PATH, pack_path),
            )
        name = str(manifest.get("name") or pack_path.name)
        entries = [e for e in dependency_entries(manifest) if e.get("enabled") is not False]
        aliases = {str(e.get("alias") or e.get("name")) for e in entries}
        own, scoped = _split_overrides(overrides, aliases)
        tree = _PackTree(
            name=name,
            path=pack_path,
            manifest=manifest,
            variables={**variables, **own},
        )
        for entry in entries:
            dep_name = str(entry.get("name"))
            alias = str(entry.get("alias") or dep_name)
            dep_path = pack_path / DEPS_DIR / dep_name
            tree.deps[alias] = self._load(dep_path, scoped.get(alias, {}))
        return tree

    def _render_file(self, env: Environment, tree: _PackTree, rel: str) -> str:
        logger.debug("rendering template %s/%s", tree.name, rel)
        try:
            return env.get_template(rel).render(**tree.context())
        except Exception as e:
            raise RendererTemplateError(
                "failed to render template",
                cause=e,
                context=ErrorContext()
                .add(TEMPLATE_NAME, f"{tree.name}/{TEMPLATES_DIR}/{rel}")
                .add(PACK_PATH, tree.path),
            )

    def _render_tree(self, tree: _PackTree) -> dict[str, str]:
        templates_dir = tree.path / TEMPLATES_DIR
        env = _environment(templates_dir)
        return {
            rel: self._render_file(env, tree, rel) for rel in _template_names(templates_dir)
        }

    def _render_deps(self, tree: _PackTree, prefix: str, out: dict[str, str]) -> None:
        for alias, dep in tree.deps.items():
            dep_prefix = f"{prefix}/{alias}"
            self._render_deps(dep, dep_prefix, out)
            for rel, content in self._render_tree(dep).items():
                out[f"{dep_prefix}/{TEMPLATES_DIR}/{rel}"] = content

    def render(self, request: RenderRequest) -> RenderOutput:
        tree = self._load(request.pack_path, request.variables)
        dependent: dict[str, str] = {}
        self._render_deps(tree, tree.name, dependent)
        parent = {
            f"{tree.name}/{TEMPLATES_DIR}/{rel}": content
            for rel, content in self._render_tree(tree).items()
        }
        logger.debug(
            "rendered %d parent and %d dependent template(s)", len(parent), len(dependent)
        )
        return RenderOutput(parent_renders=parent, dependent_renders=dependent)

    def render_output_template(self, request: RenderRequest) -> str:
        tree = self._load(request.pack_path, request.variables)
        templates_dir = tree.path / TEMPLATES_DIR
        if not (templates_dir / OUTPUT_TEMPLATE_NAME).is_file():
            raise RendererTemplateError(
                "pack has no output template",
                context=ErrorContext().add(
                    TEMPLATE_NAME, f"{tree.name}/{TEMPLATES_DIR}/{OUTPUT_TEMPLATE_NAME}"
                ),
            )
        return self._render_file(_environment(templates_dir), tree, OUTPUT_TEMPLATE_NAME)
