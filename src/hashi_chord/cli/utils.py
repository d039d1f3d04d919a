"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing, logging setup and the common
"resolve records and build the app" step used by the commands.
"""

import logging
from typing import Optional

import click

from ..app import ChordApp
from ..config import ChartSettings
from ..core.result import Result, map_ok
from ..core.source import SourceError, data_param_from_query, resolve_records
from ..core.types import NetworkType


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True))


def configure_logging(verbose: bool) -> None:
    """Send debug diagnostics to stderr when --verbose is given."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="[%X]",
        )


def apply_overrides(settings: ChartSettings, api_url: Optional[str], timeout: Optional[float]) -> ChartSettings:
    """CLI options win over config file and environment."""
    updates = {}
    if api_url:
        updates["api_url"] = api_url
    if timeout is not None:
        updates["timeout"] = timeout
    return settings.model_copy(update=updates)


def load_app(
    settings: ChartSettings,
    data_param: Optional[str] = None,
    query: Optional[str] = None,
    testnet: bool = False,
) -> Result[ChordApp, SourceError]:
    """
    Resolve records (inline or fetched) and wrap them in a ChordApp.

    ``--data`` takes precedence over ``--query``; either one suppresses the
    network fetch.

    Args:
        settings: Effective settings (endpoint and timeout are used).
        data_param: Raw inline JSON.
        query: A URL query string that may carry a ``data`` parameter.
        testnet: Start on the testnet view.
    """
    inline = data_param or data_param_from_query(query)
    records = resolve_records(inline, settings.api_url, settings.timeout)
    network_type = NetworkType.from_switch(testnet)
    return map_ok(records, lambda r: ChordApp.from_records(r, network_type=network_type))
