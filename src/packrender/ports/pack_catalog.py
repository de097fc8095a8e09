from pathlib import Path
from typing import Protocol

from packrender.domain.pack import PackRef


class PackCatalogPort(Protocol):
    def get_pack_path(self, pack: PackRef) -> Path: ...
