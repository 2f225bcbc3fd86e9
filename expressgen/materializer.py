"""
materializer.py

Responsibility: Copy the template tree into a fresh target directory, and remove
a target directory when the user agreed to overwrite it.

The materializer never merges into an existing directory. Deciding whether an
existing target may be destroyed belongs to the CLI.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class TemplateIOError(RuntimeError):
    pass


def copy_template(source_dir: str | Path, dest_dir: str | Path) -> Path:
    """
    Copy `source_dir` to `dest_dir`, mirroring files and directories.

    File metadata (permissions, timestamps) is copied best-effort via `shutil.copy2`.
    """
    src = Path(source_dir)
    dst = Path(dest_dir)

    if not src.is_dir():
        raise TemplateIOError(f"Template directory not found: {src}")
    if dst.exists():
        raise TemplateIOError(f"Destination already exists: {dst}")

    logger.debug("Copying template %s -> %s", src, dst)
    try:
        shutil.copytree(src, dst, copy_function=shutil.copy2)
    except (shutil.Error, OSError) as e:
        raise TemplateIOError(f"Failed copying template into {dst}: {e}") from e
    return dst


def remove_target(dest_dir: str | Path) -> None:
    dst = Path(dest_dir)
    logger.debug("Removing existing target %s", dst)
    try:
        if dst.is_dir() and not dst.is_symlink():
            shutil.rmtree(dst)
        else:
            dst.unlink()
    except OSError as e:
        raise TemplateIOError(f"Failed removing {dst}: {e}") from e
