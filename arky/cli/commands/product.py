"""
Product Commands.

E-commerce catalog entries. Products carry blocks like nodes, plus variants
with prices and inventory.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage products (e-commerce catalog)")


def _products(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/products"


@app.command()
def get(
    ctx: typer.Context,
    product_id: str = typer.Argument(..., metavar="ID", help="Product ID"),
) -> None:
    """Get a product by ID."""
    run_request(ctx, lambda api: api.get(f"{_products(api)}/{product_id}"))


@app.command("list")
def list_products(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    status: Optional[str] = typer.Option(None, "--status", help="Filter by status (draft, active, archived)"),
    sort_field: Optional[str] = typer.Option(None, "--sort-field", help="Field to sort by"),
    sort_direction: Optional[str] = typer.Option(None, "--sort-direction", help="asc or desc"),
) -> None:
    """
    List products.

    \b
    Examples:
      arky product list --limit 10
      arky product list --query "shirt" --status active
    """
    params = query_params(
        ("limit", limit),
        ("query", query),
        ("cursor", cursor),
        ("status", status),
        ("sortField", sort_field),
        ("sortDirection", sort_direction),
    )
    run_request(ctx, lambda api: api.get(_products(api), params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Product key (unique within business)"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a product.

    \b
    Common --data fields:
      blocks     content blocks (title, description, images)
      variants   [{"key": "default", "prices": [{"currency": "usd", "market": "us", "amount": 2999}]}]
      status     "draft" or "active"

    \b
    Example:
      arky product create t-shirt --data @product.json
    """

    async def _create(api: ArkyClient) -> Any:
        path = _products(api)
        body = merge_data({"key": key}, parse_data(data))
        return await api.post(path, body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    product_id: str = typer.Argument(..., metavar="ID", help="Product ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Update a product.

    \b
    Example:
      arky product update PRODUCT_ID --data '{"status": "active"}'
    """

    async def _update(api: ArkyClient) -> Any:
        path = f"{_products(api)}/{product_id}"
        body = merge_data({"id": product_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    product_id: str = typer.Argument(..., metavar="ID", help="Product ID"),
) -> None:
    """Delete a product."""
    run_request(ctx, lambda api: api.delete(f"{_products(api)}/{product_id}"), success="Product deleted")
