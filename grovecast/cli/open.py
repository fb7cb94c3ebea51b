"""Open command implementation."""

import subprocess
import sys

import typer
from rich.console import Console

from ..config import Config

console = Console()


def open_command() -> None:
    """Open the episodes folder in Finder."""
    config = Config()

    try:
        episodes_dir = config.episodes_dir
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'grovecast init' first.[/red]")
        raise typer.Exit(1)

    # Open in Finder (macOS)
    if sys.platform == "darwin":
        subprocess.run(["open", str(episodes_dir)])
        console.print(f"Opened: {episodes_dir}")
    else:
        console.print(f"Episodes folder: {episodes_dir}")
        console.print("[yellow]Note: 'open' command only works on macOS[/yellow]")
