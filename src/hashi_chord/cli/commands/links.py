"""
Links Command - List the propagation links of one view in the terminal.
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...config import load_settings
from ...graph.chord import ChordView
from ..utils import apply_overrides, configure_logging, echo_error, load_app

console = Console()


def build_table(view: ChordView) -> Table:
    """One row per ribbon, in matrix order."""
    table = Table(title=f"{str(view.network_type).capitalize()} links")
    table.add_column("Source", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("Last propagated")
    table.add_column("Links", justify="right")
    table.add_column("Opacity", justify="right", style="dim")

    for ribbon in view.ribbons.values():
        table.add_row(
            ribbon.source,
            ribbon.target,
            ribbon.age_text,
            str(ribbon.weight),
            f"{ribbon.opacity:.2f}",
        )
    return table


@click.command()
@click.option("--data", "data_param", default=None, help="Inline JSON array of edge records (skips the fetch)")
@click.option("--query", default=None, help="URL query string carrying a 'data' parameter")
@click.option("--api-url", default=None, help="Query endpoint to fetch edge records from")
@click.option("--timeout", type=float, default=None, help="Fetch timeout in seconds")
@click.option("--testnet", is_flag=True, help="Show the testnet view")
@click.option("-v", "--verbose", is_flag=True, help="Show diagnostic logging")
def links(
    data_param: Optional[str],
    query: Optional[str],
    api_url: Optional[str],
    timeout: Optional[float],
    testnet: bool,
    verbose: bool,
):
    """
    Print the recent links of the mainnet (or testnet) view as a table.
    """
    configure_logging(verbose)
    settings = apply_overrides(load_settings(), api_url, timeout)

    result = load_app(settings, data_param, query, testnet)
    if result.is_err():
        echo_error(result.error.message)
        sys.exit(1)

    view = result.unwrap().render()
    if view.is_empty:
        console.print(f"[yellow]{view.empty}[/yellow]")
        return

    console.print(build_table(view))
