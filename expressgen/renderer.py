"""
renderer.py

Responsibility: Render template expressions in place inside a generated project.

Rules:
- Walk the tree with an explicit stack of directories (no recursion).
- Only files whose suffix is in the allow-list are considered.
- A considered file is rendered only if it contains the delimiter (`<%` by default).
  This is a cheap heuristic, not a parser: a file that happens to contain the
  delimiter outside a template expression will still be handed to Jinja2.
- Files that cannot be decoded as UTF-8 are treated as binary and left untouched.

Expressions use EJS-style delimiters on top of Jinja2:

    "name": "<%= name %>"              -> output an expression
    "name": "<%- name %>"              -> same as `<%=` (EJS unescaped output)
    <% if name %>...<% endif %>         -> Jinja2 statement
    <%# note for template authors %>    -> comment, dropped from output

This module intentionally does NOT know about copying, git, or CLI parsing.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from jinja2 import Environment, StrictUndefined, TemplateError
from jinja2.ext import Extension

from expressgen.config import DEFAULT_DELIMITER, DEFAULT_RENDER_EXTENSIONS
from expressgen.materializer import TemplateIOError

logger = logging.getLogger(__name__)


class RenderError(TemplateIOError):
    pass


class UnescapedOutputExtension(Extension):
    """
    Read EJS `<%- expr %>` as `<%= expr %>`.

    Output is never escaped here, so both tags mean the same thing. A leading `-`
    therefore cannot be used for Jinja2 whitespace control on statement blocks.
    """

    def preprocess(self, source: str, name: str | None, filename: str | None = None) -> str:
        return source.replace("<%-", "<%=")


@dataclass(frozen=True)
class RenderResult:
    rendered_files: int
    skipped_files: int


def build_environment() -> Environment:
    """
    Jinja2 environment speaking `<%= %>`, `<% %>` and `<%# %>`.

    Jinja2 matches the longest start marker first, so `<%=` and `<%#` win over `<%`.
    EJS `<%-` is rewritten to `<%=` before lexing.
    """
    return Environment(
        block_start_string="<%",
        block_end_string="%>",
        variable_start_string="<%=",
        variable_end_string="%>",
        comment_start_string="<%#",
        comment_end_string="%>",
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        extensions=[UnescapedOutputExtension],
    )


def iter_files(root_dir: str | Path) -> Iterator[Path]:
    """
    Yield every regular file under `root_dir`.

    Symlinked directories are not descended into. Order follows directory-entry
    order and is not guaranteed.
    """
    stack = [Path(root_dir)]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(Path(entry.path))
                    elif entry.is_file():
                        yield Path(entry.path)
        except OSError as e:
            raise RenderError(f"Failed listing directory: {current}") from e


def _read_text(path: Path) -> str | None:
    """Return the file's text, or None when it is not valid UTF-8."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        return None
    except OSError as e:
        raise RenderError(f"Failed reading template file: {path}") from e


def render_string(text: str, context: Mapping[str, Any], *, env: Environment | None = None) -> str:
    env = env or build_environment()
    return env.from_string(text).render(**context)


def render_tree(
    root_dir: str | Path,
    context: Mapping[str, Any],
    *,
    extensions: Iterable[str] = DEFAULT_RENDER_EXTENSIONS,
    delimiter: str = DEFAULT_DELIMITER,
) -> RenderResult:
    """
    Render every templated file under `root_dir` in place.

    Any read, render or write failure raises `RenderError` and aborts; files
    already rendered are not rolled back.
    """
    root = Path(root_dir)
    if not root.is_dir():
        raise RenderError(f"Render root is not a directory: {root}")

    allowed = frozenset(extensions)
    env = build_environment()
    rendered = 0
    skipped = 0

    for path in iter_files(root):
        if path.suffix not in allowed:
            skipped += 1
            continue

        text = _read_text(path)
        if text is None or delimiter not in text:
            skipped += 1
            continue

        rel = path.relative_to(root)
        try:
            out = render_string(text, context, env=env)
        except TemplateError as e:
            raise RenderError(f"Failed rendering template file: {rel}: {e}") from e

        try:
            path.write_text(out, encoding="utf-8", newline="\n")
        except OSError as e:
            raise RenderError(f"Failed writing rendered file: {rel}") from e
        logger.debug("Rendered %s", rel)
        rendered += 1

    return RenderResult(rendered_files=rendered, skipped_files=skipped)
