"""Shared pytest fixtures for the expressgen test suite.

Provides reusable fixtures for:
- A small template tree with templated, plain, binary and placeholder files
- A working directory the generator writes into
- A scripted prompter and a recording subprocess runner
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from expressgen.config import GeneratorConfig
from tests.helpers import BINARY_BLOB, FakePrompter, RecordingRunner


# ---------------------------------------------------------------------------
# Template tree
# ---------------------------------------------------------------------------


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A miniature Express template, shaped like the bundled one."""
    root = tmp_path / "template"
    (root / "src" / "modules" / "sample").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "assets").mkdir()

    (root / "package.json").write_text(
        '{\n  "name": "<%= name %>",\n  "version": "1.0.0"\n}\n', encoding="utf-8"
    )
    (root / "README.md").write_text("# <%= name %>\n\nRun `<%= name %>` locally.\n", encoding="utf-8")
    (root / "_gitignore").write_text("node_modules/\n.env\n", encoding="utf-8")
    (root / "_env").write_text("PORT=5000\n", encoding="utf-8")
    (root / "docs" / "notes.txt").write_bytes(b"No expressions in here.\r\nKeep CRLF.\n")
    (root / "src" / "app.ts").write_text('const title = "<%= name %>";\n', encoding="utf-8")
    (root / "src" / "modules" / "sample" / "sample.routes.js").write_text(
        'module.exports = { service: "<%= name %>-sample" };\n', encoding="utf-8"
    )
    (root / "assets" / "logo.txt").write_bytes(BINARY_BLOB)
    return root


# ---------------------------------------------------------------------------
# Working directory & config
# ---------------------------------------------------------------------------


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty directory set as the process cwd for the duration of the test."""
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def make_config(work_dir: Path, template_dir: Path):
    def _make(name: str = "demo-app", **overrides: Any) -> GeneratorConfig:
        overrides.setdefault("template_dir", template_dir)
        return GeneratorConfig.create(name, cwd=work_dir, **overrides)

    return _make


# ---------------------------------------------------------------------------
# Prompts & subprocesses
# ---------------------------------------------------------------------------


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()
