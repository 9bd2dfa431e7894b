"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .dialects import dialects_command
from .import_cmd import import_command
from .init import init_command
from .platforms import platforms_app

app = typer.Typer(
    name="crawlimport",
    help="Import crawled news-article CSV files into Postgres",
    no_args_is_help=True,
)

# Register commands
app.command("import")(import_command)
app.command("init")(init_command)
app.command("dialects")(dialects_command)
app.add_typer(platforms_app, name="platforms", help="Manage platforms")


if __name__ == "__main__":
    app()
