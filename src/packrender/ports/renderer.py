from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from packrender.domain.json_types import JsonDict
from packrender.domain.pack import PackRef


@dataclass
class RenderRequest:
    pack: PackRef
    pack_path: Path
    variables: JsonDict = field(default_factory=dict)


@dataclass
class RenderOutput:
    parent_renders: dict[str, str]
    dependent_renders: dict[str, str]

    def len_parent_renders(self) -> int:
        return len(self.parent_renders)

    def len_dependent_renders(self) -> int:
        return len(self.dependent_renders)


class RendererPort(Protocol):
    def render(self, request: RenderRequest) -> RenderOutput: ...

    def render_output_template(self, request: RenderRequest) -> str: ...
