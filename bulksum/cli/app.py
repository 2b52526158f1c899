"""Main CLI application."""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .. import __version__
from ..config import DEFAULT_CONFIG_PATH, Config
from .combine import combine_command
from .init import init_command
from .run import drain_command, reconcile_command
from .sources import list_command, reset_command, status_command

app = typer.Typer(
    name="bulk-summarize",
    help="Bulk summarizer - scan sources for items and summarize them resumably",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Config file",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Output directory (overrides config)",
    ),
) -> None:
    """Global options shared by every command."""
    ctx.obj = Config(config_path=config, output_dir=output_dir)


def version_command() -> None:
    """Show the version."""
    typer.echo(f"bulk-summarize v{__version__}")


# Register commands
app.command("init")(init_command)
app.command("reconcile-all")(reconcile_command)
app.command("scan", hidden=True)(reconcile_command)
app.command("drain")(drain_command)
app.command("summarize", hidden=True)(drain_command)
app.command("combine")(combine_command)
app.command("status")(status_command)
app.command("list")(list_command)
app.command("reset")(reset_command)
app.command("version")(version_command)


if __name__ == "__main__":
    app()
