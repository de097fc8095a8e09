from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Literal

PackSource = Literal["local", "registry"]

DEFAULT_REGISTRY = "default"
DEFAULT_REF = "latest"


def is_path_argument(value: str) -> bool:
    if value in (".", ".."):
        return True
    if os.sep in value or (os.altsep is not None and os.altsep in value):
        return True
    return Path(value).is_dir()


@dataclass(frozen=True)
class PackRef:
    name: str
    source: PackSource
    registry: str | None = None
    ref: str | None = None
    location: str | None = None

    @classmethod
    def local(cls, location: str) -> PackRef:
        path = Path(location).resolve()
        return cls(name=path.name, source="local", location=str(path))

    @classmethod
    def from_registry(
        cls, name: str, registry: str | None = None, ref: str | None = None
    ) -> PackRef:
        return cls(
            name=name,
            source="registry",
            registry=registry or DEFAULT_REGISTRY,
            ref=ref or DEFAULT_REF,
        )

    @property
    def cache_key(self) -> str:
        return f"{self.name}@{self.ref or DEFAULT_REF}"
