"""
Promo Code Commands.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage promo codes (discounts)")


def _promo_codes(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/promo-codes"


@app.command()
def get(
    ctx: typer.Context,
    promo_code_id: str = typer.Argument(..., metavar="ID", help="Promo code ID"),
) -> None:
    """Get a promo code by ID."""
    run_request(ctx, lambda api: api.get(f"{_promo_codes(api)}/{promo_code_id}"))


@app.command("list")
def list_promo_codes(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help="Comma-separated: active,expired,disabled"),
) -> None:
    """List promo codes."""
    params = query_params(("limit", limit), ("query", query), ("cursor", cursor), ("statuses", statuses))
    run_request(ctx, lambda api: api.get(_promo_codes(api), params))


@app.command()
def create(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a promo code.

    \b
    Example:
      arky promo-code create --data '{"code": "SUMMER20", "discounts": [
        {"type": "items_percentage", "marketId": "us", "bps": 2000}
      ]}'
    """

    async def _create(api: ArkyClient) -> Any:
        business_id = api.require_business_id()
        body = merge_data({"businessId": business_id}, parse_data(data))
        return await api.post(f"/v1/businesses/{business_id}/promo-codes", body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    promo_code_id: str = typer.Argument(..., metavar="ID", help="Promo code ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Update a promo code."""

    async def _update(api: ArkyClient) -> Any:
        path = f"{_promo_codes(api)}/{promo_code_id}"
        body = merge_data({"id": promo_code_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    promo_code_id: str = typer.Argument(..., metavar="ID", help="Promo code ID"),
) -> None:
    """Delete a promo code."""
    run_request(
        ctx,
        lambda api: api.delete(f"{_promo_codes(api)}/{promo_code_id}"),
        success="Promo code deleted",
    )
