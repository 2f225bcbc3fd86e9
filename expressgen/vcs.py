"""
vcs.py

Responsibility: Initialize a git repository in the generated project and create
the first commit.

This step is best-effort. Failures never raise: each git invocation produces a
`StepResult`, the first failure stops the sequence, and the caller decides how to
show the collected warnings. A half-initialized repository (e.g. `git init`
succeeded but `git commit` failed for lack of a configured identity) is left as-is.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass(frozen=True)
class StepResult:
    command: tuple[str, ...]
    ok: bool
    error: str | None = None


@dataclass(frozen=True)
class VcsResult:
    steps: tuple[StepResult, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return bool(self.steps) and all(s.ok for s in self.steps)

    @property
    def warnings(self) -> list[str]:
        return [f"{' '.join(s.command)}: {s.error}" for s in self.steps if not s.ok]


def git_commands(branch: str, message: str) -> list[list[str]]:
    return [
        ["git", "init", "-b", branch],
        ["git", "add", "."],
        ["git", "commit", "-m", message],
    ]


def _run_step(cmd: list[str], *, cwd: Path, runner: Runner) -> StepResult:
    """
    Run one git command with inherited standard streams.
    """
    try:
        runner(cmd, cwd=str(cwd), check=True)
    except subprocess.CalledProcessError as e:
        return StepResult(tuple(cmd), ok=False, error=f"exited with status {e.returncode}")
    except OSError as e:
        # Typically FileNotFoundError: git is not installed.
        return StepResult(tuple(cmd), ok=False, error=e.strerror or str(e))
    return StepResult(tuple(cmd), ok=True)


def bootstrap_repository(
    workdir: str | Path,
    *,
    branch: str = "main",
    message: str = "Initial commit",
    runner: Runner | None = None,
) -> VcsResult:
    runner = runner or subprocess.run
    cwd = Path(workdir)
    steps: list[StepResult] = []
    for cmd in git_commands(branch, message):
        result = _run_step(cmd, cwd=cwd, runner=runner)
        steps.append(result)
        if not result.ok:
            logger.debug("Git step failed, skipping the rest: %s", result.error)
            break
    return VcsResult(steps=tuple(steps))
