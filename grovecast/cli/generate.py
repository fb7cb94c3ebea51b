"""Generate command implementation."""

from typing import Optional

import pendulum
import typer
from rich.console import Console

from ..config import Config
from ..errors import GrovecastError
from ..library import Library
from ..pipeline import PipelineOrchestrator

console = Console()


def generate_command(
    run_date: Optional[str] = typer.Option(
        None,
        "--date",
        help="Date used in the episode file name (YYYY-MM-DD). Default: today",
    ),
    clear_queue: bool = typer.Option(
        False,
        "--clear-queue/--keep-queue",
        help="Empty the article queue after a successful run",
    ),
) -> None:
    """Generate a podcast episode from the queued articles."""
    config = Config()

    try:
        settings = config.config
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'grovecast init' first.[/red]")
        raise typer.Exit(1)

    library = Library(config.library_path, max_articles=settings.max_queue_articles)
    articles = library.articles

    if not articles:
        console.print("[red]The article queue is empty. Add articles with 'grovecast articles add'.[/red]")
        raise typer.Exit(1)

    if run_date is None:
        run_date = pendulum.now().format("YYYY-MM-DD")

    orchestrator = PipelineOrchestrator(
        config,
        status_callback=lambda message: console.print(f"[bold blue]{message}...[/bold blue]"),
    )

    try:
        episode = orchestrator.run(articles, run_date=run_date)
    except KeyboardInterrupt:
        console.print("\n[yellow]Generation interrupted by user[/yellow]")
        raise typer.Exit(1)
    except GrovecastError as e:
        console.print(f"[red]Generation failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        orchestrator.close()

    library.add_podcast(episode)
    if clear_queue:
        library.clear_queue()

    console.print(f"[green]Saved episode: {config.episodes_dir / episode.filename}[/green]")
