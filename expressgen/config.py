"""
config.py

Responsibility: Build the single, immutable configuration that flows through
the generator pipeline.

Every stage receives what it needs from `GeneratorConfig`; nothing downstream
reads the process working directory or environment on its own.

Optional overrides can be loaded from a YAML file:

    template_dir: ./my-template
    render_extensions: [".json", ".md", ".js", ".txt", ".ts"]
    special_renames:
      _gitignore: .gitignore
      _env: .env
    default_branch: main
    commit_message: Initial commit
    preferred_manager: pnpm
    default_manager: npm
    init_git: true
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "my-express-app"
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "template"
DEFAULT_RENDER_EXTENSIONS: tuple[str, ...] = (".json", ".md", ".js", ".txt")
DEFAULT_DELIMITER = "<%"
DEFAULT_SPECIAL_RENAMES: tuple[tuple[str, str], ...] = (
    ("_gitignore", ".gitignore"),
    ("_env", ".env"),
)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class GeneratorConfig:
    """Everything one generator run needs, resolved up front."""

    project_name: str
    cwd: Path
    template_dir: Path = DEFAULT_TEMPLATE_DIR
    render_extensions: tuple[str, ...] = DEFAULT_RENDER_EXTENSIONS
    delimiter: str = DEFAULT_DELIMITER
    special_renames: tuple[tuple[str, str], ...] = DEFAULT_SPECIAL_RENAMES
    default_branch: str = "main"
    commit_message: str = "Initial commit"
    preferred_manager: str = "pnpm"
    default_manager: str = "npm"
    init_git: bool = True

    @property
    def target_dir(self) -> Path:
        return self.cwd / self.project_name

    def context(self) -> dict[str, object]:
        # Keys here are the variables templates may reference.
        return {"name": self.project_name}

    @classmethod
    def create(cls, project_name: str, *, cwd: str | Path, **overrides: Any) -> GeneratorConfig:
        """
        Validate the project name and merge `overrides` on top of the defaults.

        `overrides` uses the same keys as the YAML file; values of None are ignored
        so CLI flags that were not given fall through to file values or defaults.
        """
        name = validate_project_name(project_name)
        values = {k: v for k, v in overrides.items() if v is not None}
        unknown = sorted(set(values) - _OVERRIDABLE)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        normalized = _normalize_overrides(values)
        logger.debug("Configuration overrides: %s", normalized)
        return cls(project_name=name, cwd=Path(cwd).resolve(), **normalized)


_OVERRIDABLE = frozenset(f.name for f in dataclasses.fields(GeneratorConfig)) - {"project_name", "cwd"}


def validate_project_name(raw: str) -> str:
    name = (raw or "").strip()
    if not name:
        raise ConfigError("Project name must not be empty.")
    if name in {".", ".."}:
        raise ConfigError(f"Invalid project name: {name!r}")
    if "/" in name or "\\" in name:
        raise ConfigError(f"Project name must not contain path separators: {name!r}")
    return name


def _normalize_overrides(values: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in values.items():
        if key == "template_dir":
            out[key] = Path(value).expanduser().resolve()
        elif key == "render_extensions":
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ConfigError("`render_extensions` must be a list of file extensions.")
            out[key] = tuple(ext if ext.startswith(".") else f".{ext}" for ext in (str(e).strip() for e in value) if ext)
        elif key == "special_renames":
            out[key] = _parse_renames(value)
        elif key == "init_git":
            if not isinstance(value, bool):
                raise ConfigError("`init_git` must be true or false.")
            out[key] = value
        else:
            text = str(value).strip()
            if not text:
                raise ConfigError(f"`{key}` must not be empty.")
            out[key] = text
    return out


def _parse_renames(value: Any) -> tuple[tuple[str, str], ...]:
    """
    Accept either a mapping (placeholder -> real name) or a list of pairs.
    Insertion order is kept.
    """
    if isinstance(value, dict):
        pairs = list(value.items())
    elif isinstance(value, (list, tuple)):
        pairs = []
        for item in value:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise ConfigError("`special_renames` entries must be [placeholder, real_name] pairs.")
            pairs.append((item[0], item[1]))
    else:
        raise ConfigError("`special_renames` must be a mapping or a list of pairs.")

    out = []
    for placeholder, real in pairs:
        placeholder, real = str(placeholder).strip(), str(real).strip()
        if not placeholder or not real:
            raise ConfigError("`special_renames` names must not be empty.")
        out.append((placeholder, real))
    return tuple(out)


def load_config_file(path: str | Path) -> dict[str, Any]:
    """
    Read YAML overrides from `path`.

    Relative `template_dir` values are resolved against the file's directory.
    """
    cfg_path = Path(path)
    if not cfg_path.is_file():
        raise ConfigError(f"Config file does not exist: {cfg_path}")

    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {cfg_path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping/object at the top level.")

    unknown = sorted(str(k) for k in set(data) - _OVERRIDABLE)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s) in {cfg_path}: {', '.join(unknown)}")

    if data.get("template_dir") is not None:
        template_dir = Path(str(data["template_dir"])).expanduser()
        if not template_dir.is_absolute():
            template_dir = cfg_path.resolve().parent / template_dir
        data["template_dir"] = template_dir

    return data
