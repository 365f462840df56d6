"""Shared console for user-facing progress lines"""

from rich.console import Console
from rich.markup import escape

from ..constants import EMOJI_SUCCESS, EMOJI_WARNING

console = Console()


def step(message: str) -> None:
    console.print(escape(message), highlight=False)


def success(message: str) -> None:
    console.print(f"[green]{EMOJI_SUCCESS}[/green] {escape(message)}", highlight=False)


def warning(message: str) -> None:
    console.print(f"[yellow]{EMOJI_WARNING} {escape(message)}[/yellow]", highlight=False)
