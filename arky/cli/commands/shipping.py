"""
Shipping Commands.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import parse_data
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Shipping rates and fulfillment for orders")


def _order(api: ArkyClient, order_id: str) -> str:
    return f"/v1/businesses/{api.require_business_id()}/orders/{order_id}"


@app.command()
def rates(
    ctx: typer.Context,
    order_id: str = typer.Argument(..., help="Order ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Get shipping rates for an order.

    \b
    Example:
      arky shipping rates ORDER_ID --data '{"locationId": "loc_1"}'
    """

    async def _rates(api: ArkyClient) -> Any:
        path = f"{_order(api, order_id)}/shipping/rates"
        return await api.post(path, parse_data(data))

    run_request(ctx, _rates)


@app.command()
def ship(
    ctx: typer.Context,
    order_id: str = typer.Argument(..., help="Order ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a shipment for an order.

    \b
    Example:
      arky shipping ship ORDER_ID --data '{"rateId": "rate_1", "items": [...]}'
    """

    async def _ship(api: ArkyClient) -> Any:
        path = f"{_order(api, order_id)}/ship"
        return await api.post(path, parse_data(data))

    run_request(ctx, _ship)
