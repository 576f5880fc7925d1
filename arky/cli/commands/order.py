"""
Order Commands.

Orders placed against a business: listing, manual creation, quotes and
checkout.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params, set_default
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage orders (quote, checkout, status)")


def _orders(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/orders"


@app.command()
def get(
    ctx: typer.Context,
    order_id: str = typer.Argument(..., metavar="ID", help="Order ID"),
) -> None:
    """Get an order by ID."""
    run_request(ctx, lambda api: api.get(f"{_orders(api)}/{order_id}"))


@app.command("list")
def list_orders(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", help="Comma-separated order statuses"),
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    account_id: Optional[str] = typer.Option(None, "--account-id", help="Filter by customer account ID"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    sort_field: Optional[str] = typer.Option(None, "--sort-field", help="Field to sort by"),
    sort_direction: Optional[str] = typer.Option(None, "--sort-direction", help="asc or desc"),
) -> None:
    """
    List orders.

    \b
    Examples:
      arky order list --status paid,shipped
      arky order list --account-id ACC_ID --limit 5
    """
    params = query_params(
        ("limit", limit),
        ("statuses", status),
        ("query", query),
        ("accountId", account_id),
        ("cursor", cursor),
        ("sortField", sort_field),
        ("sortDirection", sort_direction),
    )
    run_request(ctx, lambda api: api.get(_orders(api), params))


@app.command()
def create(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create an order manually.

    \b
    Example:
      arky order create --data '{"items": [{"productId": "prod_1", "variantId": "var_1", "quantity": 2}]}'
    """

    async def _create(api: ArkyClient) -> Any:
        path = _orders(api)
        return await api.post(path, parse_data(data))

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    order_id: str = typer.Argument(..., metavar="ID", help="Order ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Update an order.

    \b
    Example:
      arky order update ORDER_ID --data '{"status": "shipped"}'
    """

    async def _update(api: ArkyClient) -> Any:
        path = f"{_orders(api)}/{order_id}"
        body = merge_data({"id": order_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def quote(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Price a cart without placing the order.

    \b
    Example:
      arky order quote --data '{"items": [...], "market": "us", "currency": "usd"}'
    """

    async def _quote(api: ArkyClient) -> Any:
        path = f"{_orders(api)}/quote"
        return await api.post(path, parse_data(data))

    run_request(ctx, _quote)


@app.command()
def checkout(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Check out a cart and create a payment.

    businessId defaults to the configured business when omitted from --data.

    \b
    Example:
      arky order checkout --data @checkout.json
    """

    async def _checkout(api: ArkyClient) -> Any:
        business_id = api.require_business_id()
        body = set_default(parse_data(data), "businessId", business_id)
        return await api.post(f"/v1/businesses/{business_id}/orders/checkout", body)

    run_request(ctx, _checkout)
