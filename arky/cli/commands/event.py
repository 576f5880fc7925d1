"""
Event Commands.

Change history recorded against orders, bookings and other entities.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Entity event history")


@app.command("list")
def list_events(
    ctx: typer.Context,
    entity: str = typer.Argument(..., help="Entity identifier (e.g., order ID, booking ID)"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """
    List event history for an entity.

    \b
    Examples:
      arky event list ORDER_ID
      arky event list BOOKING_ID --limit 50
    """
    params = query_params(("entity", entity), ("limit", limit), ("cursor", cursor))
    run_request(ctx, lambda api: api.get(f"/v1/businesses/{api.require_business_id()}/events", params))


@app.command()
def update(
    ctx: typer.Context,
    event_id: str = typer.Argument(..., metavar="ID", help="Event ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Update an event.

    \b
    Example:
      arky event update EVENT_ID --data '{"event": {"action": "note", "note": "Called customer"}}'
    """

    async def _update(api: ArkyClient) -> Any:
        api.require_business_id()
        return await api.put(f"/v1/events/{event_id}", parse_data(data))

    run_request(ctx, _update)
