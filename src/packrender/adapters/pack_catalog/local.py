from pathlib import Path

from packrender.adapters.errors import PackNotFound
from packrender.domain.error_context import PACK_PATH, ErrorContext
from packrender.domain.pack import PackRef

MANIFEST_NAME = "pack.yaml"


class LocalPackCatalog:
    def get_pack_path(self, pack: PackRef) -> Path:
        pack_path = Path(pack.location or pack.name)
        if not (pack_path / MANIFEST_NAME).is_file():
            raise PackNotFound(
                f"no {MANIFEST_NAME} found in pack directory",
                hint="pass the directory that contains the pack manifest",
                context=ErrorContext().add(PACK_PATH, pack_path),
            )
        return pack_path
