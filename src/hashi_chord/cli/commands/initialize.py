"""
Init Command - Write a starter configuration file.

The file lives at .hashi-chord/config.yaml and is read by every command
(environment variables and CLI options still take precedence).
"""

from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.panel import Panel

from ...config import CONFIG_PATH, ChartSettings

console = Console()


def default_config() -> dict:
    return ChartSettings().model_dump()


def write_config(root_dir: Path) -> Path:
    config_file = root_dir / CONFIG_PATH
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w") as f:
        yaml.dump(default_config(), f, sort_keys=False, default_flow_style=False)
    return config_file


@click.command()
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(force: bool):
    """
    Create .hashi-chord/config.yaml in the current directory.
    """
    console.print(Panel.fit("[bold blue]hashi-chord setup[/bold blue]", border_style="blue"))

    root_dir = Path.cwd()
    config_file = root_dir / CONFIG_PATH

    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
        console.print("Use --force to overwrite it.")
        return

    written = write_config(root_dir)
    console.print("\n✨ [bold green]Initialized successfully![/bold green]")
    console.print(f"   Config created at: [dim]{written}[/dim]")
