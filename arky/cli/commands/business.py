"""
Business Commands.

Businesses are the tenant boundary of the platform: almost every other
resource lives under one. Besides CRUD this group covers billing,
membership, webhooks and OAuth connections.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage businesses, billing and members")


def _business(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}"


def _post_data(ctx: typer.Context, suffix: str, data: str | None) -> None:
    async def _post(api: ArkyClient) -> Any:
        path = _business(api) + suffix
        return await api.post(path, parse_data(data))

    run_request(ctx, _post)


@app.command()
def get(ctx: typer.Context) -> None:
    """
    Get the business selected by --business-id or ARKY_BUSINESS_ID.

    \b
    Example:
      arky business get
    """
    run_request(ctx, lambda api: api.get(_business(api)))


@app.command("list")
def list_businesses(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """
    List businesses accessible to the current account.

    \b
    Examples:
      arky business list --limit 5
      arky business list --query "shop"
    """
    params = query_params(("limit", limit), ("query", query), ("cursor", cursor))
    run_request(ctx, lambda api: api.get("/v1/businesses", params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Business key (unique, URL-safe)"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a business.

    \b
    Required --data fields:
      status     "active", "draft" or "archived"
      timezone   IANA timezone (e.g., "UTC", "America/New_York")
      configs    currencies, markets, locations, paymentProviders,
                 shippingProviders, emails

    \b
    Example:
      arky business create my-shop --data @business.json
    """

    async def _create(api: ArkyClient) -> Any:
        body = merge_data({"key": key}, parse_data(data))
        return await api.post("/v1/businesses", body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    business_id: str = typer.Argument(..., metavar="ID", help="Business ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Update a business by ID.

    \b
    Example:
      arky business update BIZ_ID --data '{"timezone": "Europe/Sarajevo"}'
    """

    async def _update(api: ArkyClient) -> Any:
        body = merge_data({"id": business_id}, parse_data(data))
        return await api.put(f"/v1/businesses/{business_id}", body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    business_id: str = typer.Argument(..., metavar="ID", help="Business ID"),
) -> None:
    """Delete a business by ID."""
    run_request(
        ctx,
        lambda api: api.delete(f"/v1/businesses/{business_id}"),
        success="Business deleted",
        show_result=False,
    )


@app.command()
def parents(ctx: typer.Context) -> None:
    """List parent businesses in the hierarchy."""
    run_request(ctx, lambda api: api.get(f"{_business(api)}/parents"))


@app.command("trigger-builds")
def trigger_builds(ctx: typer.Context) -> None:
    """Trigger a rebuild and deploy of the business sites."""
    run_request(
        ctx,
        lambda api: api.post(f"{_business(api)}/trigger-builds", {}),
        success="Build triggered",
        show_result=False,
    )


@app.command()
def plans(ctx: typer.Context) -> None:
    """List available subscription plans."""
    run_request(ctx, lambda api: api.get("/v1/businesses/plans"))


@app.command()
def subscription(ctx: typer.Context) -> None:
    """Show the business subscription."""
    run_request(ctx, lambda api: api.get(f"{_business(api)}/subscription"))


@app.command()
def subscribe(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Subscribe the business to a plan.

    \b
    Required --data fields: planId, successUrl, cancelUrl

    \b
    Example:
      arky business subscribe --data '{"planId": "plan_123", "successUrl": "https://...", "cancelUrl": "https://..."}'
    """

    async def _subscribe(api: ArkyClient) -> Any:
        path = f"{_business(api)}/subscribe"
        return await api.put(path, parse_data(data))

    run_request(ctx, _subscribe)


@app.command()
def portal(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Open a billing portal session.

    \b
    Example:
      arky business portal --data '{"returnUrl": "https://..."}'
    """
    _post_data(ctx, "/subscription/portal", data)


@app.command()
def invite(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", help="Email address to invite"),
    role: Optional[str] = typer.Option(None, "--role", help="Role to assign (server default: member)"),
) -> None:
    """
    Invite someone to join the business.

    \b
    Example:
      arky business invite --email user@example.com --role admin
    """
    body: dict[str, Any] = {"email": email}
    if role is not None:
        body["role"] = role
    run_request(
        ctx,
        lambda api: api.post(f"{_business(api)}/invitation", body),
        success=f"Invitation sent to {email}",
        show_result=False,
    )


@app.command("remove-member")
def remove_member(
    ctx: typer.Context,
    account_id: str = typer.Option(..., "--account-id", help="Account ID of the member"),
) -> None:
    """Remove a member from the business."""
    run_request(
        ctx,
        lambda api: api.delete(f"{_business(api)}/members/{account_id}"),
        success="Member removed",
        show_result=False,
    )


@app.command("handle-invitation")
def handle_invitation(
    ctx: typer.Context,
    token: str = typer.Option(..., "--token", help="Invitation token"),
    action: str = typer.Option(..., "--action", help='"accept" or "reject"'),
) -> None:
    """
    Accept or reject an invitation to the business.

    \b
    Example:
      arky business handle-invitation --token INV_TOKEN --action accept
    """
    run_request(
        ctx,
        lambda api: api.put(f"{_business(api)}/invitation", {"token": token, "action": action}),
    )


@app.command("test-webhook")
def test_webhook(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Send a test event to a webhook URL.

    \b
    Example:
      arky business test-webhook --data '{"url": "https://...", "events": ["order.paid"]}'
    """
    _post_data(ctx, "/webhooks/test", data)


@app.command()
def refund(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Refund an order or booking.

    \b
    Example:
      arky business refund --data '{"entity": "order_123", "amount": 2999}'
    """
    _post_data(ctx, "/refund", data)


@app.command("oauth-connect")
def oauth_connect(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Connect an OAuth provider.

    \b
    Example:
      arky business oauth-connect --data '{"provider": "google", "code": "AUTH_CODE", "redirectUri": "https://..."}'
    """
    _post_data(ctx, "/oauth/connect", data)


@app.command("oauth-disconnect")
def oauth_disconnect(
    ctx: typer.Context,
    provider: str = typer.Option(..., "--provider", help="OAuth provider to disconnect"),
) -> None:
    """Disconnect an OAuth provider."""
    run_request(ctx, lambda api: api.post(f"{_business(api)}/oauth/disconnect", {"provider": provider}))
