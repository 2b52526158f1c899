"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ProjectConfig, save_config

console = Console()

DEFAULT_PROMPT = (
    "Create a comprehensive summary of this video. Extract key insights, "
    "practical tips, and important information. Ignore ads, sponsors, and "
    "promotional content.\n\nTitle: {title}\nSource: {source}"
)


def create_starter_config() -> ProjectConfig:
    """Starter project with a single example source."""
    return ProjectConfig(
        name="My Research Project",
        description="Video summaries for research",
        keywords=[],
        sources=[
            {
                "id": "example-channel",
                "name": "Example Channel",
                "url": "https://www.youtube.com/@ExampleChannel",
                "enabled": True,
                "tags": ["example"],
            }
        ],
        settings={
            "max_items_per_source": 50,
            "summary_length": "xl",
            "summary_prompt": DEFAULT_PROMPT,
            "output_dir": "summaries",
        },
    )


def init_command(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(
        None,
        help="Config file to create (default: the --config path)",
    ),
) -> None:
    """Create a starter config file."""
    config_path = path or ctx.obj.config_path

    if config_path.exists():
        console.print(f"[red]❌ Config already exists: {config_path}[/red]")
        raise typer.Exit(1)

    save_config(create_starter_config(), config_path)
    console.print(f"✅ Created config: {config_path}")

    console.print(
        Panel(
            f"Next steps:\n"
            f"1. Edit {config_path} to add your sources and keywords\n"
            f"2. Run: [bold]bulk-summarize -c {config_path} scan[/bold]\n"
            f"3. Run: [bold]bulk-summarize -c {config_path} drain[/bold]",
            style="green",
        )
    )
