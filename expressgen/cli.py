"""
cli.py

Responsibility: CLI entrypoint for expressgen.

High-level flow:
1) Validate the working directory, read the project name (argument or prompt)
2) Resolve `GeneratorConfig` (defaults <- YAML file <- CLI flags)
3) Handle an existing target (confirm overwrite or cancel)
4) Copy template -> rename placeholder dotfiles -> render templates
5) Bootstrap git (best-effort, warnings only)
6) Optionally install dependencies (fatal on failure)
7) Print next steps

Each step lives in its own module:
- Copying: `materializer.py`
- Dotfile renames: `renamer.py`
- Rendering: `renderer.py`
- Git: `vcs.py`
- Package manager: `installer.py`
- Output and prompts: `console.py`
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from expressgen import __version__
from expressgen.config import DEFAULT_PROJECT_NAME, GeneratorConfig, load_config_file
from expressgen.console import (
    Prompter,
    configure_logging,
    err_console,
    print_banner,
    print_error,
    print_info,
    print_next_steps,
    print_success,
    print_warning,
)
from expressgen.installer import detect_package_manager, install_dependencies
from expressgen.materializer import copy_template, remove_target
from expressgen.renamer import apply_special_renames
from expressgen.renderer import RenderResult, render_tree
from expressgen.vcs import Runner, VcsResult, bootstrap_repository

logger = logging.getLogger(__name__)


class InvalidWorkingDirectory(RuntimeError):
    pass


class UserCancelled(Exception):
    pass


@dataclass(frozen=True)
class GenerationReport:
    target_dir: Path
    renamed: tuple[tuple[Path, Path], ...]
    render: RenderResult
    vcs: VcsResult | None
    package_manager: str | None

    @property
    def installed(self) -> bool:
        return self.package_manager is not None


def ensure_valid_cwd() -> Path:
    """
    Fail fast when the current directory was deleted or is not readable/writable.
    """
    try:
        cwd = Path.cwd()
    except OSError as e:
        raise InvalidWorkingDirectory(
            "Current directory is invalid or inaccessible. Please navigate to a normal folder and run the CLI again."
        ) from e
    if not os.access(cwd, os.R_OK | os.W_OK):
        raise InvalidWorkingDirectory(f"Current directory is not readable and writable: {cwd}")
    return cwd


def generate(
    config: GeneratorConfig,
    prompter: Prompter,
    *,
    overwrite: bool | None = None,
    install: bool | None = None,
    runner: Runner | None = None,
) -> GenerationReport:
    """
    Run the whole pipeline for `config`.

    `overwrite` and `install` pre-answer the corresponding prompts when not None.
    """
    target = config.target_dir
    name = config.project_name

    if target.exists():
        if overwrite is None:
            overwrite = prompter.confirm(f'Directory "{name}" already exists. Overwrite?', default=False)
        if not overwrite:
            raise UserCancelled(name)
        remove_target(target)

    print_info("Copying project template...")
    copy_template(config.template_dir, target)
    renamed = apply_special_renames(target, config.special_renames)
    render = render_tree(
        target,
        config.context(),
        extensions=config.render_extensions,
        delimiter=config.delimiter,
    )
    logger.debug("Rendered %d file(s), skipped %d", render.rendered_files, render.skipped_files)

    vcs: VcsResult | None = None
    if config.init_git:
        vcs = bootstrap_repository(
            target,
            branch=config.default_branch,
            message=config.commit_message,
            runner=runner,
        )
        if vcs.ok:
            print_success("✔ Git initialized and first commit created.")
        for warning in vcs.warnings:
            print_warning(f"⚠ Git setup skipped: {warning}")

    if install is None:
        install = prompter.confirm("Install dependencies now?", default=False)

    manager: str | None = None
    if install:
        manager = detect_package_manager(config.preferred_manager, config.default_manager, runner=runner)
        print_info(f"Installing dependencies using {manager}...")
        install_dependencies(target, manager, runner=runner)

    print_next_steps(name, installed=manager is not None, manager=manager or config.default_manager)
    print_success("All set! Happy coding!")

    return GenerationReport(
        target_dir=target,
        renamed=tuple(renamed),
        render=render,
        vcs=vcs,
        package_manager=manager,
    )


def _config_from_args(args: argparse.Namespace, *, cwd: Path, prompter: Prompter) -> GeneratorConfig:
    overrides = load_config_file(args.config) if args.config else {}

    # CLI overrides
    if args.template_dir:
        overrides["template_dir"] = args.template_dir
    if args.skip_git:
        overrides["init_git"] = False

    name = args.name if args.name is not None else prompter.ask_text("Project name", default=DEFAULT_PROJECT_NAME)
    return GeneratorConfig.create(name, cwd=cwd, **overrides)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="expressgen", description="Generate a modular Express + Mongoose project")
    p.add_argument("name", nargs="?", default=None, help=f"Project name (prompted if omitted, default: {DEFAULT_PROJECT_NAME})")
    p.add_argument("--template-dir", type=Path, default=None, help="Use another template directory")
    p.add_argument("--config", type=Path, default=None, help="YAML file with generator settings")
    p.add_argument("--overwrite", action="store_true", default=None, help="Replace an existing project directory without asking")
    p.add_argument("--install", dest="install", action="store_true", default=None, help="Install dependencies without asking")
    p.add_argument("--no-install", dest="install", action="store_false", default=None, help="Skip dependency installation")
    p.add_argument("--skip-git", action="store_true", help="Do not initialize a git repository")
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug logs and tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    prompter = Prompter()

    try:
        cwd = ensure_valid_cwd()
        print_banner("🛠️  Modular Express CLI")
        config = _config_from_args(args, cwd=cwd, prompter=prompter)
        generate(config, prompter, overwrite=args.overwrite, install=args.install)
    except UserCancelled:
        print_warning("Cancelled.")
        return 1
    except KeyboardInterrupt:
        print_error("Interrupted.")
        return 1
    except Exception as e:  # noqa: BLE001 - any failure ends the run with status 1
        if args.verbose:
            err_console.print_exception()
        print_error(f"Error: {e}")
        if e.__cause__ is not None and not args.verbose:
            print_error(f"  caused by: {e.__cause__}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
