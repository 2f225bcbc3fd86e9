"""
renamer.py

Responsibility: Turn placeholder file names shipped in the template into their
real dotfile names (e.g. `_gitignore` -> `.gitignore`).

Dotfiles such as `.gitignore` and `.env` cannot ship literally inside a package:
packaging tools honor or drop them. The template therefore uses a leading
underscore instead of the dot.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from expressgen.materializer import TemplateIOError

logger = logging.getLogger(__name__)


def apply_special_renames(dest_dir: str | Path, table: Iterable[tuple[str, str]]) -> list[tuple[Path, Path]]:
    """
    Rename each placeholder found directly under `dest_dir`, in table order.

    A missing placeholder is the common case and is skipped silently.
    Returns the `(old, new)` paths that were actually renamed.
    """
    root = Path(dest_dir)
    renamed: list[tuple[Path, Path]] = []
    for placeholder, real in table:
        src = root / placeholder
        if not src.exists():
            continue
        dst = root / real
        try:
            src.rename(dst)
        except OSError as e:
            raise TemplateIOError(f"Failed renaming {placeholder} to {real}: {e}") from e
        logger.debug("Renamed %s -> %s", src.name, dst.name)
        renamed.append((src, dst))
    return renamed
