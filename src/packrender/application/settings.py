from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib

from packrender.domain.diagnostics import Diagnostic, FileLocation, Severity
from packrender.domain.json_types import JsonDict, as_json_dict
from packrender.domain.pack import DEFAULT_REF, DEFAULT_REGISTRY
from packrender.domain.result import Result

CONFIG_ENV = "PACKRENDER_CONFIG"
CACHE_DIR_ENV = "PACKRENDER_CACHE_DIR"
REGISTRY_ENV = "PACKRENDER_REGISTRY"


@dataclass(frozen=True)
class Settings:
    cache_dir: Path
    default_registry: str = DEFAULT_REGISTRY
    default_ref: str = DEFAULT_REF


def default_config_path() -> Path:
    return Path.home() / ".config" / "packrender" / "config.toml"


def default_cache_dir() -> Path:
    return Path.home() / ".packrender" / "cache"


def _read_config(path: Path) -> Result[JsonDict]:
    if not path.exists():
        return Result(value={})
    try:
        raw = as_json_dict(tomllib.loads(path.read_text(encoding="utf-8")))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="CONFIG_PARSE_FAILED",
                    rule="config.parse",
                    severity=Severity.ERROR,
                    message=str(e),
                    location=FileLocation(str(path)),
                )
            ]
        )
    return Result(value=raw)


def _section(raw: JsonDict, name: str) -> JsonDict:
    value = raw.get(name)
    return value if isinstance(value, dict) else {}


def load_settings(
    env: Mapping[str, str] | None = None, config_path: Path | None = None
) -> Result[Settings]:
    env = os.environ if env is None else env
    if config_path is None:
        config_path = Path(env[CONFIG_ENV]) if env.get(CONFIG_ENV) else default_config_path()

    config = _read_config(config_path)
    if config.has_errors:
        return Result(diagnostics=config.diagnostics)
    raw = config.value or {}
    cache = _section(raw, "cache")
    registry = _section(raw, "registry")

    cache_dir = env.get(CACHE_DIR_ENV) or cache.get("dir")
    settings = Settings(
        cache_dir=Path(str(cache_dir)).expanduser() if cache_dir else default_cache_dir(),
        default_registry=str(
            env.get(REGISTRY_ENV) or registry.get("default") or DEFAULT_REGISTRY
        ),
        default_ref=str(registry.get("ref") or DEFAULT_REF),
    )
    return Result(value=settings)
