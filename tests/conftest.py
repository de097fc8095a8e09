from __future__ import annotations

from collections import deque
from pathlib import Path
import textwrap

import pytest

from packrender.domain.error_context import ErrorContext


class FakeTerminal:
    def __init__(self, answers: list[object] | None = None, interactive: bool = False) -> None:
        self.answers = deque(answers or [])
        self.interactive = interactive
        self.lines: list[tuple[str, bool]] = []
        self.errors: list[tuple[str, str, list[tuple[str, str]]]] = []
        self.warnings: list[tuple[str, str, list[tuple[str, str]]]] = []
        self.events: list[tuple[str, str]] = []
        self.prompts: list[str] = []

    def output(self, text: str, *, bold: bool = False) -> None:
        self.lines.append((text, bold))
        self.events.append(("output", text))

    def error_with_context(self, error, subject, context: ErrorContext | None = None) -> None:
        self.errors.append((str(error), subject, context.get_all() if context else []))
        self.events.append(("error", subject))

    def warning_with_context(self, error, subject, context: ErrorContext | None = None) -> None:
        self.warnings.append((str(error), subject, context.get_all() if context else []))
        self.events.append(("warning", subject))

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        answer = self.answers.popleft()
        if isinstance(answer, BaseException):
            raise answer
        return str(answer)

    def is_interactive(self) -> bool:
        return self.interactive

    @property
    def text(self) -> list[str]:
        return [line for line, _ in self.lines]


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def make_terminal():
    return FakeTerminal


def write_pack(
    root: Path,
    name: str,
    templates: dict[str, str],
    *,
    variables: str = "",
    dependencies: list[dict] | None = None,
    extra_manifest: str = "",
) -> Path:
    pack_dir = root / name
    (pack_dir / "templates").mkdir(parents=True, exist_ok=True)
    manifest = [f"name: {name}", 'version: "0.1.0"', f"description: {name} pack"]
    if dependencies:
        manifest.append("dependencies:")
        for dep in dependencies:
            manifest.append(f"  - name: {dep['name']}")
            for key in ("alias", "enabled"):
                if key in dep:
                    value = str(dep[key]).lower() if key == "enabled" else dep[key]
                    manifest.append(f"    {key}: {value}")
    if extra_manifest:
        manifest.append(extra_manifest)
    (pack_dir / "pack.yaml").write_text("\n".join(manifest) + "\n")
    if variables:
        (pack_dir / "variables.yaml").write_text(textwrap.dedent(variables))
    for rel, content in templates.items():
        path = pack_dir / "templates" / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return pack_dir


@pytest.fixture
def pack_factory():
    return write_pack


@pytest.fixture
def simple_pack(tmp_path) -> Path:
    """A pack with one dependency, two job templates and an output template."""
    packs = tmp_path / "packs"
    pack_dir = write_pack(
        packs,
        "hello",
        {
            "hello.nomad.tpl": 'job "{{ my.job_name }}" { count = {{ my.count }} }\n',
            "zeta.nomad.tpl": 'job "zeta" {}\n',
            "_helpers.tpl": "{% macro region() %}global{% endmacro %}\n",
            "outputs.tpl": "deployed {{ pack.name }} {{ pack.version }}\n",
        },
        variables="""
        job_name: hello
        count: 1
        """,
        dependencies=[{"name": "redis"}],
    )
    write_pack(
        pack_dir / "deps",
        "redis",
        {"redis.nomad.tpl": 'job "redis" { image = "{{ my.image }}" }\n'},
        variables="""
        image: redis:7
        """,
    )
    return pack_dir
