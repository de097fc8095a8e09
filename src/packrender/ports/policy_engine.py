from pathlib import Path
from typing import Protocol

from packrender.domain.json_types import JsonDict
from packrender.domain.result import Result


class PolicyEnginePort(Protocol):
    def validate_pack(self, pack_path: Path) -> Result[JsonDict]: ...
