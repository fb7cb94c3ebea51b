"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .articles import articles_app
from .generate import generate_command
from .init import init_command
from .open import open_command
from .podcasts import podcasts_app

app = typer.Typer(
    name="grovecast",
    help="Grovecast - turn queued articles into a narrated podcast episode",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("generate")(generate_command)
app.command("open")(open_command)
app.add_typer(articles_app, name="articles", help="Manage the article queue")
app.add_typer(podcasts_app, name="podcasts", help="Manage generated episodes")


if __name__ == "__main__":
    app()
