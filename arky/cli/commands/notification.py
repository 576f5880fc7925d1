"""
Notification Commands.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import parse_data, set_default
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Send notifications (email, SMS)")


@app.command()
def trigger(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Trigger a notification.

    businessId defaults to the configured business when omitted from --data.

    \b
    Example:
      arky notification trigger --data '{"channel": "email", "audienceId": "aud_1", "nodeId": "node_1"}'
    """

    async def _trigger(api: ArkyClient) -> Any:
        business_id = api.require_business_id()
        body = set_default(parse_data(data), "businessId", business_id)
        return await api.post("/v1/notifications/trigger", body)

    run_request(ctx, _trigger)
