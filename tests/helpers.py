"""Test doubles shared across the suite."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

BINARY_BLOB = b"\x89PNG\r\n\x1a\n<%\xff\xfe\x00"


def relative_files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under ``root`` to its bytes."""
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}


class FakePrompter:
    """Answers prompts from a script and records every question asked."""

    def __init__(self, *, name: str | None = None, overwrite: bool = False, install: bool = False) -> None:
        self.name = name
        self.overwrite = overwrite
        self.install = install
        self.questions: list[str] = []

    def ask_text(self, message: str, default: str) -> str:
        self.questions.append(message)
        return self.name if self.name is not None else default

    def confirm(self, message: str, default: bool = False) -> bool:
        self.questions.append(message)
        if "Overwrite" in message:
            return self.overwrite
        if "Install" in message:
            return self.install
        return default


class RecordingRunner:
    """Stand-in for ``subprocess.run``.

    ``missing`` lists programs that raise ``FileNotFoundError``; ``failing`` lists
    programs or ``"program subcommand"`` strings that exit with status 1.
    """

    def __init__(self, *, missing: set[str] | None = None, failing: set[str] | None = None) -> None:
        self.missing = missing or set()
        self.failing = failing or set()
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append((list(cmd), kwargs))
        program = cmd[0]
        if program in self.missing:
            raise FileNotFoundError(2, "No such file or directory", program)
        if program in self.failing or " ".join(cmd[:2]) in self.failing:
            if kwargs.get("check"):
                raise subprocess.CalledProcessError(1, cmd)
            return subprocess.CompletedProcess(cmd, 1)
        return subprocess.CompletedProcess(cmd, 0)

    @property
    def commands(self) -> list[list[str]]:
        return [cmd for cmd, _ in self.calls]

    def programs(self) -> list[str]:
        return [cmd[0] for cmd in self.commands]
