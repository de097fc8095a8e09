"""Recursive directory replication.

Copies are not atomic: a failure part way through leaves whatever was
already written in place, both for a single file and for a tree.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
import stat

from packrender.adapters.errors import CopyError
from packrender.domain.error_context import DEST_DIR, DEST_FILE, SOURCE_PATH, ErrorContext

logger = logging.getLogger(__name__)


def _copy_context(src: Path, dst: Path, dst_label: str = DEST_FILE) -> ErrorContext:
    return ErrorContext().add(SOURCE_PATH, src).add(dst_label, dst)


def copy_file(src: Path, dst: Path) -> None:
    """Stream ``src`` into ``dst`` and give it the source permission bits."""
    src = Path(src)
    dst = Path(dst)
    try:
        with src.open("rb") as source, dst.open("wb") as destination:
            shutil.copyfileobj(source, destination)
            destination.flush()
            os.fsync(destination.fileno())
        mode = stat.S_IMODE(src.stat().st_mode)
        os.chmod(dst, mode)
    except OSError as e:
        logger.debug("error copying file %s to %s: %s", src, dst, e)
        raise CopyError("error copying file", cause=e, context=_copy_context(src, dst))
    logger.debug("copied %s to %s", src, dst)


def copy_dir(src: Path, dst: Path) -> None:
    """Recursively copy ``src`` to a new directory ``dst``.

    ``dst`` must not exist yet. Symbolic links under ``src`` are skipped.
    """
    src = Path(os.path.normpath(src))
    dst = Path(os.path.normpath(dst))
    context = _copy_context(src, dst, DEST_DIR)

    try:
        src_stat = src.stat()
    except OSError as e:
        logger.debug("error getting source directory info: %s", e)
        raise CopyError("error getting source directory info", cause=e, context=context)
    if not stat.S_ISDIR(src_stat.st_mode):
        logger.debug("source is not a directory: %s", src)
        raise CopyError("source is not a directory", context=context)

    if dst.exists() or dst.is_symlink():
        logger.debug("destination already exists: %s", dst)
        raise CopyError("destination already exists", context=context)

    try:
        dst.mkdir(parents=True)
        os.chmod(dst, stat.S_IMODE(src_stat.st_mode))
        with os.scandir(src) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.debug("error creating destination directory %s: %s", dst, e)
        raise CopyError("error creating destination directory", cause=e, context=context)

    for entry in entries:
        src_path = src / entry.name
        dst_path = dst / entry.name
        if entry.is_symlink():
            logger.debug("skipping symlink %s", src_path)
            continue
        if entry.is_dir():
            copy_dir(src_path, dst_path)
        else:
            copy_file(src_path, dst_path)
