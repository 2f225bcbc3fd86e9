"""
installer.py

Responsibility: Pick a package manager and install the generated project's
dependencies with it.

Unlike git, a failed install is fatal: the user must see it and react.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from expressgen.vcs import Runner

logger = logging.getLogger(__name__)


class InstallError(RuntimeError):
    pass


def detect_package_manager(
    preferred: str = "pnpm",
    default: str = "npm",
    *,
    runner: Runner | None = None,
) -> str:
    """
    Return `preferred` if `<preferred> --version` succeeds, otherwise `default`.
    """
    runner = runner or subprocess.run
    try:
        runner([preferred, "--version"], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug("%s not usable (%s), falling back to %s", preferred, e, default)
        return default
    return preferred


def install_dependencies(target_dir: str | Path, manager: str, *, runner: Runner | None = None) -> None:
    runner = runner or subprocess.run
    cmd = [manager, "install"]
    try:
        runner(cmd, cwd=str(target_dir), check=True)
    except subprocess.CalledProcessError as e:
        raise InstallError(f"Command failed: {' '.join(cmd)} (exit status {e.returncode})") from e
    except OSError as e:
        raise InstallError(f"Could not run {manager}: {e}") from e
