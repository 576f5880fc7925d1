"""
Platform Commands.

Read-only reference data shared by every business.
"""

import typer

from arky.cli.runner import run_request

app = typer.Typer(help="Platform reference data (currencies, countries, integrations)")


@app.command()
def currencies(ctx: typer.Context) -> None:
    """List supported currencies."""
    run_request(ctx, lambda api: api.get("/v1/platform/currencies"))


@app.command()
def integrations(ctx: typer.Context) -> None:
    """List available integration services."""
    run_request(ctx, lambda api: api.get("/v1/platform/integration-services"))


@app.command()
def countries(ctx: typer.Context) -> None:
    """List countries."""
    run_request(ctx, lambda api: api.get("/v1/platform/countries"))


@app.command()
def country(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="ISO country code (e.g., US, BA)"),
) -> None:
    """Get one country with its states and settings."""
    run_request(ctx, lambda api: api.get(f"/v1/platform/countries/{code}"))


@app.command("webhook-events")
def webhook_events(ctx: typer.Context) -> None:
    """List event types that webhooks can subscribe to."""
    run_request(ctx, lambda api: api.get("/v1/platform/events"))
