"""Generated episode commands."""

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..library import Library

console = Console()
podcasts_app = typer.Typer(help="Manage generated episodes")


@podcasts_app.command("list")
def podcasts_list() -> None:
    """List generated episodes, newest first."""
    config = Config()
    library = Library(config.library_path)
    podcasts = library.podcasts

    if not podcasts:
        console.print("[yellow]No episodes yet. Run 'grovecast generate'.[/yellow]")
        return

    table = Table(title="Episodes")
    table.add_column("#", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Created", style="green")
    table.add_column("Length", style="yellow")
    table.add_column("File", style="blue")

    for position, episode in enumerate(podcasts, start=1):
        table.add_row(
            str(position),
            episode.title,
            episode.created_at.strftime("%Y-%m-%d %H:%M"),
            episode.duration_label,
            episode.filename,
        )

    console.print(table)


@podcasts_app.command("remove")
def podcasts_remove(
    key: str = typer.Argument(..., help="List position or ID prefix"),
    keep_file: bool = typer.Option(False, "--keep-file", help="Keep the audio file on disk"),
) -> None:
    """Remove an episode (and its audio file)."""
    config = Config()
    library = Library(config.library_path)
    episode = library.find_podcast(key)

    if episode is None:
        console.print(f"[red]Episode '{key}' not found.[/red]")
        raise typer.Exit(1)

    library.remove_podcast(episode)

    if not keep_file:
        try:
            audio_path = config.episodes_dir / episode.filename
        except FileNotFoundError:
            console.print("[yellow]Config file not found; audio file left in place.[/yellow]")
        else:
            audio_path.unlink(missing_ok=True)

    console.print(f"[green]✅ Removed episode: {episode.title}[/green]")
