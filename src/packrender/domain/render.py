from __future__ import annotations

from dataclasses import dataclass

OUTPUT_TEMPLATE_NAME = "outputs.tpl"


@dataclass(frozen=True)
class Render:
    name: str
    content: str
