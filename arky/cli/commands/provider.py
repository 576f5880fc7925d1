"""
Provider Commands.

People or resources that deliver services (staff, rooms, equipment) and
their working time.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage service providers")


def _providers(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/providers"


@app.command()
def get(
    ctx: typer.Context,
    provider_id: str = typer.Argument(..., metavar="ID", help="Provider ID"),
) -> None:
    """Get a provider by ID."""
    run_request(ctx, lambda api: api.get(f"{_providers(api)}/{provider_id}"))


@app.command("list")
def list_providers(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    service_id: Optional[str] = typer.Option(None, "--service-id", help="Only providers offering this service"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help="Comma-separated statuses"),
) -> None:
    """List providers."""
    params = query_params(
        ("limit", limit),
        ("query", query),
        ("serviceId", service_id),
        ("cursor", cursor),
        ("statuses", statuses),
    )
    run_request(ctx, lambda api: api.get(_providers(api), params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Provider key"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Create a provider."""

    async def _create(api: ArkyClient) -> Any:
        path = _providers(api)
        body = merge_data({"key": key}, parse_data(data))
        return await api.post(path, body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    provider_id: str = typer.Argument(..., metavar="ID", help="Provider ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Update a provider."""

    async def _update(api: ArkyClient) -> Any:
        path = f"{_providers(api)}/{provider_id}"
        body = merge_data({"id": provider_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    provider_id: str = typer.Argument(..., metavar="ID", help="Provider ID"),
) -> None:
    """Delete a provider."""
    run_request(ctx, lambda api: api.delete(f"{_providers(api)}/{provider_id}"), success="Provider deleted")


@app.command("working-time")
def working_time(
    ctx: typer.Context,
    provider_id: str = typer.Argument(..., help="Provider ID"),
    service_id: Optional[str] = typer.Option(None, "--service-id", help="Restrict to one service"),
) -> None:
    """
    Show a provider's working time.

    \b
    Example:
      arky provider working-time PROVIDER_ID --service-id SERVICE_ID
    """
    params = query_params(("serviceId", service_id))
    run_request(ctx, lambda api: api.get(f"{_providers(api)}/{provider_id}/working-time", params))
