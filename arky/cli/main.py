"""
arky CLI - control the Arky platform from your terminal.

Designed for AI agents and humans. Outputs JSON by default.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    arky --help
    arky config set business_id YOUR_BUSINESS_ID
    arky auth login you@example.com
    arky auth verify you@example.com CODE
    arky node list --limit 5
"""

from typing import Optional

import typer

from arky import __version__
from arky.cli.commands import (
    account_app,
    agent_app,
    audience_app,
    auth_app,
    booking_app,
    business_app,
    config_app,
    db_app,
    event_app,
    media_app,
    network_app,
    node_app,
    notification_app,
    order_app,
    platform_app,
    product_app,
    promo_code_app,
    provider_app,
    service_app,
    shipping_app,
    workflow_app,
)
from arky.cli.output import OutputFormat
from arky.cli.runner import CliState
from arky.core.config import resolve_settings
from arky.core.logging import get_logger, log_with_source, setup_logging

logger = get_logger(__name__)

app = typer.Typer(
    name="arky",
    help="Arky CLI - control the Arky platform from your terminal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(auth_app, name="auth")
app.add_typer(config_app, name="config")
app.add_typer(business_app, name="business")
app.add_typer(node_app, name="node")
app.add_typer(product_app, name="product")
app.add_typer(order_app, name="order")
app.add_typer(workflow_app, name="workflow")
app.add_typer(service_app, name="service")
app.add_typer(provider_app, name="provider")
app.add_typer(booking_app, name="booking")
app.add_typer(db_app, name="db")
app.add_typer(media_app, name="media")
app.add_typer(audience_app, name="audience")
app.add_typer(promo_code_app, name="promo-code")
app.add_typer(shipping_app, name="shipping")
app.add_typer(event_app, name="event")
app.add_typer(account_app, name="account")
app.add_typer(platform_app, name="platform")
app.add_typer(network_app, name="network")
app.add_typer(notification_app, name="notification")
app.add_typer(agent_app, name="agent")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"arky {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Server base URL (env: ARKY_BASE_URL)"),
    business_id: Optional[str] = typer.Option(None, "--business-id", help="Business ID (env: ARKY_BUSINESS_ID)"),
    token: Optional[str] = typer.Option(None, "--token", help="Auth token (env: ARKY_TOKEN)"),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        help="Output format: json (default), table, plain (env: ARKY_FORMAT)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output (INFO level logging)"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug mode (DEBUG level logging)"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    Arky CLI - control the Arky platform from your terminal.

    Designed for AI agents and humans. Outputs JSON by default.
    Every subcommand has detailed --help with JSON examples.

    \b
    Setup:
      arky config set base_url http://localhost:8000
      arky config set business_id YOUR_BUSINESS_ID
      arky auth login your@email.com
      arky auth verify your@email.com CODE
      arky node list --limit 5

    \b
    Settings precedence: flag > ARKY_* environment variable > config file > default.

    \b
    Data input (--data):
      Inline JSON:  --data '{"key": "value"}'
      From file:    --data @content.json
      From stdin:   echo '{}' | arky <cmd> --data -

    \b
    Block system:
      Content entities (nodes, products, services, providers) use blocks.
      A block is: {"key": "title", "type": "localized_text", "value": {"en": "Hello"}}
      Block types: text, localized_text, markdown, number, boolean, list, map,
      relationship_entry, relationship_media, geo_location
    """
    if debug:
        setup_logging(level="DEBUG")
    elif verbose:
        setup_logging(level="INFO")
    else:
        setup_logging()

    settings = resolve_settings(
        base_url=base_url,
        business_id=business_id,
        token=token,
        format=output_format,
    )
    ctx.obj = CliState(settings=settings, output_format=OutputFormat.from_str(settings.format))

    log_with_source(
        logger, "cli", "debug", "CLI invoked",
        command=ctx.invoked_subcommand, base_url=settings.base_url,
    )


if __name__ == "__main__":
    app()
