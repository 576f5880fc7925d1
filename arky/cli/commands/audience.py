"""
Audience Commands.

Subscriber lists used for newsletters and gated content.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage audiences (subscriber lists)")


def _audiences(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/audiences"


@app.command()
def get(
    ctx: typer.Context,
    audience_id: str = typer.Argument(..., metavar="ID", help="Audience ID"),
) -> None:
    """Get an audience by ID."""
    run_request(ctx, lambda api: api.get(f"{_audiences(api)}/{audience_id}"))


@app.command("list")
def list_audiences(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """List audiences."""
    params = query_params(("limit", limit), ("query", query), ("cursor", cursor))
    run_request(ctx, lambda api: api.get(_audiences(api), params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Audience key"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Create an audience."""

    async def _create(api: ArkyClient) -> Any:
        path = _audiences(api)
        body = merge_data({"key": key}, parse_data(data))
        return await api.post(path, body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    audience_id: str = typer.Argument(..., metavar="ID", help="Audience ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Update an audience."""

    async def _update(api: ArkyClient) -> Any:
        path = f"{_audiences(api)}/{audience_id}"
        body = merge_data({"id": audience_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    audience_id: str = typer.Argument(..., metavar="ID", help="Audience ID"),
) -> None:
    """Delete an audience."""
    run_request(ctx, lambda api: api.delete(f"{_audiences(api)}/{audience_id}"), success="Audience deleted")


@app.command()
def subscribers(
    ctx: typer.Context,
    audience_id: str = typer.Argument(..., metavar="ID", help="Audience ID"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """List subscribers of an audience."""
    params = query_params(("limit", limit), ("cursor", cursor))
    run_request(ctx, lambda api: api.get(f"{_audiences(api)}/{audience_id}/subscribers", params))
