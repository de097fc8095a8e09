from pathlib import Path

from packrender.adapters.errors import PackNotFound
from packrender.adapters.pack_catalog.local import MANIFEST_NAME
from packrender.domain.error_context import PACK_PATH, ErrorContext
from packrender.domain.pack import DEFAULT_REGISTRY, PackRef


class RegistryPackCatalog:
    """Resolves packs from ``<cache_dir>/<registry>/<name>@<ref>``."""

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    def registry_path(self, registry: str | None) -> Path:
        return self.cache_dir / (registry or DEFAULT_REGISTRY)

    def get_pack_path(self, pack: PackRef) -> Path:
        pack_path = self.registry_path(pack.registry) / pack.cache_key
        if not (pack_path / MANIFEST_NAME).is_file():
            raise PackNotFound(
                "failed to find pack in registry cache",
                hint="vendor the pack into the cache or pass a pack directory",
                context=ErrorContext().add(PACK_PATH, pack_path),
            )
        return pack_path
