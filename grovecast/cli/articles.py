"""Article queue commands."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..library import Library
from ..models import Article

console = Console()
articles_app = typer.Typer(help="Manage the article queue")


def _open_library() -> Library:
    config = Config()
    try:
        max_articles = config.config.max_queue_articles
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'grovecast init' first.[/red]")
        raise typer.Exit(1)
    return Library(config.library_path, max_articles=max_articles)


def _read_content(text: Optional[str], file: Optional[Path]) -> str:
    if text is not None:
        return text
    if file is not None:
        if not file.exists():
            console.print(f"[red]File not found: {file}[/red]")
            raise typer.Exit(1)
        return file.read_text(encoding="utf-8")
    return sys.stdin.read()


@articles_app.command("list")
def articles_list() -> None:
    """List queued articles."""
    library = _open_library()
    articles = library.articles

    if not articles:
        console.print("[yellow]The article queue is empty.[/yellow]")
        return

    table = Table(title=f"Article Queue ({len(articles)}/{library.max_articles})")
    table.add_column("#", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Added", style="green")
    table.add_column("Preview", style="dim")

    for position, article in enumerate(articles, start=1):
        table.add_row(
            str(position),
            str(article.id)[:8],
            article.title,
            article.created_at.strftime("%Y-%m-%d %H:%M"),
            article.preview.replace("\n", " "),
        )

    console.print(table)


@articles_app.command("add")
def articles_add(
    title: str = typer.Option("", "--title", "-t", help="Article title (default: timestamp)"),
    text: Optional[str] = typer.Option(None, "--text", help="Article text"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read article text from a file"),
) -> None:
    """Queue an article (text from --text, --file or stdin)."""
    library = _open_library()

    if library.is_full:
        console.print(f"[red]The queue already holds {library.max_articles} articles.[/red]")
        raise typer.Exit(1)

    content = _read_content(text, file)
    if not content.strip():
        console.print("[red]Article text is empty.[/red]")
        raise typer.Exit(1)

    article = Article(title=title, content=content)
    library.add_article(article)
    console.print(f"[green]✅ Queued article: {article.title}[/green]")


@articles_app.command("edit")
def articles_edit(
    key: str = typer.Argument(..., help="Queue position or ID prefix"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    text: Optional[str] = typer.Option(None, "--text", help="New article text"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read new text from a file"),
) -> None:
    """Replace the title and/or text of a queued article."""
    library = _open_library()
    article = library.find_article(key)

    if article is None:
        console.print(f"[red]Article '{key}' not found.[/red]")
        raise typer.Exit(1)

    content = _read_content(text, file) if (text is not None or file is not None) else None
    library.update_article(article.edit(title=title, content=content))
    console.print(f"[green]✅ Updated article: {title or article.title}[/green]")


@articles_app.command("remove")
def articles_remove(
    key: str = typer.Argument(..., help="Queue position or ID prefix"),
) -> None:
    """Remove an article from the queue."""
    library = _open_library()
    article = library.find_article(key)

    if article is None:
        console.print(f"[red]Article '{key}' not found.[/red]")
        raise typer.Exit(1)

    library.remove_article(article)
    console.print(f"[green]✅ Removed article: {article.title}[/green]")


@articles_app.command("clear")
def articles_clear() -> None:
    """Empty the article queue."""
    library = _open_library()
    library.clear_queue()
    console.print("[green]✅ Article queue cleared[/green]")
