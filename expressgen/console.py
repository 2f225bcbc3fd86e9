"""
console.py

Responsibility: Everything the user sees or answers: colored output through Rich
and the interactive prompts.

The CLI talks to prompts only through `Prompter`, so the pipeline can be driven
without a terminal.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import Confirm, Prompt

console = Console()
err_console = Console(stderr=True)


def print_banner(title: str) -> None:
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print()


def print_info(message: str) -> None:
    """Print a dimmed progress message."""
    console.print(f"[dim]{escape(message)}[/dim]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]")


def print_next_steps(project_name: str, *, installed: bool, manager: str) -> None:
    console.print()
    console.print("[bold blue]Next steps:[/bold blue]")
    console.print()
    console.print(f"  cd {project_name}", markup=False, highlight=False)
    if installed:
        console.print(f"  {manager} run dev", markup=False, highlight=False)
    else:
        console.print(f"  {manager} install && {manager} run dev", markup=False, highlight=False)
    console.print()


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


class Prompter:
    """Interactive questions, answered on the terminal."""

    def __init__(self, con: Console | None = None) -> None:
        self.console = con or console

    def ask_text(self, message: str, default: str) -> str:
        return Prompt.ask(message, default=default, console=self.console)

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)
