"""
Network Commands.

Cross-business search inside a network. Networks are addressed by key and
need no business id.
"""

from typing import Optional

import typer

from arky.cli.data import query_params
from arky.cli.runner import run_request

app = typer.Typer(help="Search services, products and providers across a network")

QUERY_HELP = "Search text"
STATUSES_HELP = "Comma-separated statuses"


def _search(
    ctx: typer.Context,
    network_key: str,
    resource: str,
    *pairs: tuple[str, object],
) -> None:
    params = query_params(*pairs)
    run_request(ctx, lambda api: api.get(f"/v1/networks/{network_key}/{resource}", params))


@app.command("search-services")
def search_services(
    ctx: typer.Context,
    network_key: str = typer.Argument(..., help="Network key"),
    query: Optional[str] = typer.Option(None, "--query", help=QUERY_HELP),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help=STATUSES_HELP),
    sort_field: Optional[str] = typer.Option(None, "--sort-field", help="Field to sort by"),
    sort_direction: Optional[str] = typer.Option(None, "--sort-direction", help="asc or desc"),
) -> None:
    """
    Search services across a network.

    \b
    Example:
      arky network search-services my-network --query "yoga"
    """
    _search(
        ctx, network_key, "services",
        ("limit", limit),
        ("query", query),
        ("cursor", cursor),
        ("statuses", statuses),
        ("sortField", sort_field),
        ("sortDirection", sort_direction),
    )


@app.command("search-products")
def search_products(
    ctx: typer.Context,
    network_key: str = typer.Argument(..., help="Network key"),
    query: Optional[str] = typer.Option(None, "--query", help=QUERY_HELP),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help=STATUSES_HELP),
    sort_field: Optional[str] = typer.Option(None, "--sort-field", help="Field to sort by"),
    sort_direction: Optional[str] = typer.Option(None, "--sort-direction", help="asc or desc"),
    price_from: Optional[int] = typer.Option(None, "--price-from", min=0, help="Minimum price in cents"),
    price_to: Optional[int] = typer.Option(None, "--price-to", min=0, help="Maximum price in cents"),
) -> None:
    """
    Search products across a network.

    \b
    Example:
      arky network search-products my-network --price-from 1000 --price-to 5000
    """
    _search(
        ctx, network_key, "products",
        ("limit", limit),
        ("query", query),
        ("cursor", cursor),
        ("statuses", statuses),
        ("sortField", sort_field),
        ("sortDirection", sort_direction),
        ("priceFrom", price_from),
        ("priceTo", price_to),
    )


@app.command("search-providers")
def search_providers(
    ctx: typer.Context,
    network_key: str = typer.Argument(..., help="Network key"),
    query: Optional[str] = typer.Option(None, "--query", help=QUERY_HELP),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help=STATUSES_HELP),
    sort_field: Optional[str] = typer.Option(None, "--sort-field", help="Field to sort by"),
    sort_direction: Optional[str] = typer.Option(None, "--sort-direction", help="asc or desc"),
) -> None:
    """Search providers across a network."""
    _search(
        ctx, network_key, "providers",
        ("limit", limit),
        ("query", query),
        ("cursor", cursor),
        ("statuses", statuses),
        ("sortField", sort_field),
        ("sortDirection", sort_direction),
    )
