"""
expressgen package

A CLI-first generator for modular Express + Mongoose projects.

Key responsibilities are split across modules:
- `config.py`: resolve the immutable `GeneratorConfig` (defaults, YAML file, CLI flags)
- `materializer.py`: copy the bundled template tree into the target directory
- `renamer.py`: turn placeholder names (`_gitignore`, `_env`) into dotfiles
- `renderer.py`: render `<%= ... %>` expressions in place with Jinja2
- `vcs.py`: best-effort `git init` / `add` / `commit`
- `installer.py`: package manager detection and `install`
- `console.py`: Rich output and prompts
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
