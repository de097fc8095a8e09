from __future__ import annotations

import logging
from pathlib import Path
import posixpath

from packrender.adapters.errors import DestinationWriteError, OverwriteDeclined
from packrender.application.confirmation import ConfirmationGate
from packrender.domain.error_context import DEST_DIR, DEST_FILE, ErrorContext
from packrender.domain.render import Render
from packrender.domain.session import SessionState

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644


def destination_path(render: Render, to_dir: Path) -> Path:
    directory, filename = posixpath.split(render.name)
    return Path(to_dir, directory, filename)


def write_render(
    render: Render,
    to_dir: Path,
    session: SessionState,
    interactive: bool,
    *,
    gate: ConfirmationGate,
) -> Path:
    """Write one render below ``to_dir`` and return the file path.

    Raises ``OverwriteCancelled`` when the prompt was interrupted,
    ``OverwriteDeclined`` when an existing file was kept, and
    ``DestinationWriteError`` on filesystem failures or when the
    render name points outside ``to_dir``.
    """
    dest = destination_path(render, to_dir)
    if not dest.resolve().is_relative_to(Path(to_dir).resolve()):
        raise DestinationWriteError(
            "destination is outside the output directory",
            context=ErrorContext().add(DEST_DIR, to_dir).add(DEST_FILE, dest),
        )
    try:
        dest.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise DestinationWriteError(
            "failed to create output directory",
            cause=e,
            context=ErrorContext().add(DEST_DIR, dest.parent),
        )

    if not gate.confirm(dest, session, interactive):
        logger.debug("keeping existing file %s", dest)
        raise OverwriteDeclined(
            "destination file already exists",
            hint="re-run with --auto-approve to overwrite existing files",
            context=ErrorContext().add(DEST_FILE, dest),
        )

    context = ErrorContext().add(DEST_FILE, dest)
    if dest.is_dir():
        raise DestinationWriteError("destination is a directory", context=context)
    try:
        dest.touch(mode=FILE_MODE, exist_ok=True)
        dest.write_text(render.content, encoding="utf-8")
    except OSError as e:
        raise DestinationWriteError("failed to write file", cause=e, context=context)
    logger.info("wrote %s", dest)
    return dest
