"""
Service Commands.

Bookable services (appointments, classes, rentals) offered by a business.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage bookable services")


def _services(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/services"


@app.command()
def get(
    ctx: typer.Context,
    service_id: str = typer.Argument(..., metavar="ID", help="Service ID"),
) -> None:
    """Get a service by ID."""
    run_request(ctx, lambda api: api.get(f"{_services(api)}/{service_id}"))


@app.command("list")
def list_services(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help="Comma-separated statuses"),
) -> None:
    """List services."""
    params = query_params(("limit", limit), ("query", query), ("cursor", cursor), ("statuses", statuses))
    run_request(ctx, lambda api: api.get(_services(api), params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Service key"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a service.

    \b
    Example:
      arky service create haircut --data '{"blocks": [
        {"key": "title", "type": "localized_text", "value": {"en": "Haircut"}}
      ]}'
    """

    async def _create(api: ArkyClient) -> Any:
        path = _services(api)
        body = merge_data({"key": key}, parse_data(data))
        return await api.post(path, body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    service_id: str = typer.Argument(..., metavar="ID", help="Service ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Update a service."""

    async def _update(api: ArkyClient) -> Any:
        path = f"{_services(api)}/{service_id}"
        body = merge_data({"id": service_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    service_id: str = typer.Argument(..., metavar="ID", help="Service ID"),
) -> None:
    """Delete a service."""
    run_request(ctx, lambda api: api.delete(f"{_services(api)}/{service_id}"), success="Service deleted")
