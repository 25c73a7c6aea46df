"""Prompting and reporting, kept apart from the creation logic."""

from abc import ABC, abstractmethod
from typing import Literal

import click
from rich.markup import escape

from platformrocks.console import console

Level = Literal["info", "step", "success", "warning", "error", "plain", "dim"]

_STYLES: dict[str, str] = {
    "info": "[cyan]{}[/cyan]",
    "step": "[cyan]›[/cyan] {}",
    "success": "[green]✓[/green] {}",
    "warning": "[yellow]⚠  {}[/yellow]",
    "error": "[red]✗ {}[/red]",
    "plain": "{}",
    "dim": "[dim]{}[/dim]",
}


class UserInteraction(ABC):
    """How the creator talks to the person running it."""

    @abstractmethod
    def ask_text(self, prompt: str) -> str | None:
        """Ask for a line of text. Returns None if the user cancels."""
        ...

    @abstractmethod
    def report(self, level: Level, message: str) -> None:
        """Show a message at the given level."""
        ...


def _require_text(value: str) -> str:
    if not value.strip():
        raise click.BadParameter("Project name is required")
    return value.strip()


class ConsoleInteraction(UserInteraction):
    """Interaction through click prompts and the shared rich console."""

    def ask_text(self, prompt: str) -> str | None:
        try:
            value: str = click.prompt(prompt, value_proc=_require_text)
        except click.Abort:
            return None
        return value

    def report(self, level: Level, message: str) -> None:
        template = _STYLES.get(level, "{}")
        console.print(template.format(escape(message)))
