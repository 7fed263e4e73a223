"""Leveled console output shared by the installer and the CLI"""

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False, soft_wrap=True)


def log_info(message: str) -> None:
    console.print(f"[green]\\[INFO][/green] {escape(message)}")


def log_warn(message: str) -> None:
    console.print(f"[bold yellow]\\[WARN][/bold yellow] {escape(message)}")


def log_error(message: str) -> None:
    console.print(f"[red]\\[ERROR][/red] {escape(message)}")


def log_command(cmd: list[str]) -> None:
    """Echo an external command before it runs"""
    console.print(f"[dim]Running: {escape(' '.join(cmd))}[/dim]")
