"""
Booking Commands.

Reservations of a service with a provider. Create, quote and checkout send
market "default" unless --data names one.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params, set_default
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage bookings (reservations)")

DEFAULT_MARKET = "default"


def _bookings(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/bookings"


def _post_with_market(ctx: typer.Context, suffix: str, data: str | None) -> None:
    async def _post(api: ArkyClient) -> Any:
        path = _bookings(api) + suffix
        body = set_default(parse_data(data), "market", DEFAULT_MARKET)
        return await api.post(path, body)

    run_request(ctx, _post)


@app.command()
def get(
    ctx: typer.Context,
    booking_id: str = typer.Argument(..., metavar="ID", help="Booking ID"),
) -> None:
    """Get a booking by ID."""
    run_request(ctx, lambda api: api.get(f"{_bookings(api)}/{booking_id}"))


@app.command("list")
def list_bookings(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    service_id: Optional[str] = typer.Option(None, "--service-id", help="Comma-separated service IDs"),
    provider_id: Optional[str] = typer.Option(None, "--provider-id", help="Comma-separated provider IDs"),
    account_id: Optional[str] = typer.Option(None, "--account-id", help="Filter by customer account ID"),
    from_: Optional[str] = typer.Option(None, "--from", help="Start of range (epoch ms)"),
    to: Optional[str] = typer.Option(None, "--to", help="End of range (epoch ms)"),
    status: Optional[str] = typer.Option(None, "--status", help="Filter by booking status"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """
    List bookings.

    \b
    Example:
      arky booking list --provider-id PROV_ID --from 1735689600000 --to 1735776000000
    """
    params = query_params(
        ("limit", limit),
        ("query", query),
        ("serviceIds", service_id),
        ("providerIds", provider_id),
        ("accountId", account_id),
        ("from", from_),
        ("to", to),
        ("status", status),
        ("cursor", cursor),
    )
    run_request(ctx, lambda api: api.get(_bookings(api), params))


@app.command()
def create(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a booking.

    \b
    Example:
      arky booking create --data '{"items": [
        {"serviceId": "svc_1", "providerId": "prov_1", "from": 1735689600000, "to": 1735693200000}
      ]}'
    """
    _post_with_market(ctx, "", data)


@app.command()
def update(
    ctx: typer.Context,
    booking_id: str = typer.Argument(..., metavar="ID", help="Booking ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Update a booking."""

    async def _update(api: ArkyClient) -> Any:
        path = f"{_bookings(api)}/{booking_id}"
        body = merge_data({}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def quote(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Price a booking without creating it."""
    _post_with_market(ctx, "/quote", data)


@app.command()
def checkout(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Check out a booking and create a payment."""
    _post_with_market(ctx, "/checkout", data)
