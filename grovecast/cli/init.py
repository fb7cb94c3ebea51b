"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, save_config
from ..library import Library

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "grovecast",
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    workspace: Path = typer.Option(
        Path.home() / "Documents",
        "--workspace",
        "-w",
        help="Workspace root directory (episodes go in its Podcasts folder)",
    ),
    export_format: str = typer.Option("mp3", "--format", help="Episode audio format (mp3, m4a, wav)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Initialize Grovecast configuration."""
    console.print(Panel.fit("🎙️ Grovecast - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path} (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    try:
        config = ConfigModel(workspace_root=str(workspace), audio={"export_format": export_format})
    except ValueError as e:
        console.print(f"[red]❌ Invalid option: {e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    library = Library(config_dir / "library.json", max_articles=config.max_queue_articles)
    if not library.path.exists():
        library.save()
        console.print(f"✅ Created library: {library.path}")

    episodes_dir = workspace.expanduser() / config.episodes_subdir
    episodes_dir.mkdir(parents=True, exist_ok=True)
    console.print(f"✅ Created episodes folder: {episodes_dir}")

    console.print(
        Panel(
            f"[green]✅ Grovecast initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Episodes: {episodes_dir}\n\n"
            f"Next steps:\n"
            f"1. Set LLM API key: [bold]export {config.llm.api_key_env}=your_key[/bold]\n"
            f"2. Set TTS API key: [bold]export {config.tts.api_key_env}=your_key[/bold]\n"
            f"3. Queue articles: [bold]grovecast articles add --file article.txt[/bold]\n"
            f"4. Run: [bold]grovecast generate[/bold]",
            style="green",
        )
    )
