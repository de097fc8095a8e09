from __future__ import annotations

import logging
from pathlib import Path

from packrender.adapters.errors import CopyError
from packrender.adapters.filesystem.replicator import copy_dir
from packrender.domain.diagnostics import Diagnostic, FileLocation, Severity
from packrender.domain.pack import PackRef
from packrender.domain.result import Result
from packrender.ports.policy_engine import PolicyEnginePort

logger = logging.getLogger(__name__)


def vendor_pack(
    source: Path,
    *,
    cache_dir: Path,
    registry: str,
    ref: str,
    policy_engine: PolicyEnginePort,
) -> Result[Path]:
    """Copy a local pack directory into the registry cache."""
    validation = policy_engine.validate_pack(source)
    if validation.has_errors:
        return Result(diagnostics=validation.diagnostics)

    manifest = validation.value or {}
    name = str(manifest.get("name") or source.name)
    pack = PackRef.from_registry(name, registry, ref)
    dest = cache_dir / registry / pack.cache_key
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        copy_dir(source, dest)
    except (CopyError, OSError) as e:
        details = e.context.as_details() if isinstance(e, CopyError) and e.context else None
        return Result(
            diagnostics=[
                *validation.diagnostics,
                Diagnostic(
                    code="PACK_VENDOR_FAILED",
                    rule="cache.vendor",
                    severity=Severity.ERROR,
                    message=str(e),
                    location=FileLocation(str(dest)),
                    details=details,
                ),
            ]
        )
    logger.info("vendored %s into %s", source, dest)
    return Result(value=dest, diagnostics=validation.diagnostics)
