from __future__ import annotations

from collections.abc import Iterator

from packrender.domain.json_types import JsonDict

PACK_NAME = "Pack Name"
PACK_PATH = "Pack Path"
PACK_REF = "Pack Ref"
REGISTRY_NAME = "Registry Name"
DEST_DIR = "Destination Dir"
DEST_FILE = "Destination File"
SOURCE_PATH = "Source Path"
TEMPLATE_NAME = "Template Name"


class ErrorContext:
    """Ordered label/value pairs shown next to a reported error."""

    def __init__(self, items: list[tuple[str, str]] | None = None) -> None:
        self._items: list[tuple[str, str]] = list(items or [])

    def add(self, label: str, value: object) -> ErrorContext:
        self._items.append((label, str(value)))
        return self

    def extend(self, other: ErrorContext | None) -> ErrorContext:
        if other is not None:
            self._items.extend(other.get_all())
        return self

    def copy(self) -> ErrorContext:
        return ErrorContext(self._items)

    def get_all(self) -> list[tuple[str, str]]:
        return list(self._items)

    def as_details(self) -> JsonDict:
        return {label: value for label, value in self._items}

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ErrorContext({self._items!r})"
