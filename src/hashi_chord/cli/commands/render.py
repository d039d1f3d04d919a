"""
Render Command - Generate the interactive chord diagram.

Writes an HTML page (both network views embedded, switchable in the
browser) or prints the active view as JSON for other tooling.
"""

import json
import sys
from typing import Optional

import click

from ...config import load_settings
from ...graph.visualize import generate_error_html, generate_html, open_visualization, write_page
from ..utils import apply_overrides, configure_logging, echo_error, echo_info, echo_success, load_app


@click.command()
@click.option("-o", "--output", default=None, help="Output HTML file (default: chord.html)")
@click.option("--data", "data_param", default=None, help="Inline JSON array of edge records (skips the fetch)")
@click.option("--query", default=None, help="URL query string carrying a 'data' parameter")
@click.option("--api-url", default=None, help="Query endpoint to fetch edge records from")
@click.option("--timeout", type=float, default=None, help="Fetch timeout in seconds")
@click.option("--testnet", is_flag=True, help="Start on the testnet view")
@click.option("--open", "open_browser", is_flag=True, help="Open the page in a browser")
@click.option("--json", "json_mode", is_flag=True, help="Print the active view as JSON instead of writing HTML")
@click.option("-v", "--verbose", is_flag=True, help="Show diagnostic logging")
def render(
    output: Optional[str],
    data_param: Optional[str],
    query: Optional[str],
    api_url: Optional[str],
    timeout: Optional[float],
    testnet: bool,
    open_browser: bool,
    json_mode: bool,
    verbose: bool,
):
    """
    Render the cross-chain propagation chord diagram.

    Inline data (--data or --query) is used verbatim when given; otherwise
    the records are fetched once from the query endpoint.
    """
    configure_logging(verbose)
    settings = apply_overrides(load_settings(), api_url, timeout)
    output_path = output or settings.output

    result = load_app(settings, data_param, query, testnet)

    if result.is_err():
        err = result.error
        if json_mode:
            click.echo(json.dumps({
                "meta": {"status": "error"},
                "error": {"message": err.message, "detail": err.detail},
            }))
            sys.exit(1)

        # The error replaces the chart, just like a successful render would
        page = write_page(generate_error_html(err.message, settings), output_path)
        echo_error(err.message)
        echo_info(f"Error page: {page}")
        sys.exit(1)

    app = result.unwrap()

    if json_mode:
        click.echo(json.dumps({
            "meta": {"status": "success"},
            "data": app.render().model_dump(mode="json"),
        }))
        return

    html_content = generate_html(app.all_views(), app.state.current_type, settings)

    if open_browser:
        path = open_visualization(html_content, output_path)
    else:
        path = str(write_page(html_content, output_path))

    echo_success(f"Generated: {path}")
    view = app.render()
    if view.is_empty:
        echo_info(view.empty)
    else:
        echo_info(f"{len(view.names)} chains, {len(view.ribbons)} links ({view.network_type})")
