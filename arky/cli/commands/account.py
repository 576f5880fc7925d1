"""
Account Commands.

The signed-in account and customer account search within a business.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage the current account and search customers")


@app.command()
def search(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text (email, name)"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """
    Search accounts that belong to the business.

    \b
    Example:
      arky account search --query "john@" --limit 5
    """

    async def _search(api: ArkyClient) -> Any:
        params = query_params(
            ("limit", limit),
            ("businessId", api.require_business_id()),
            ("query", query),
            ("cursor", cursor),
        )
        return await api.get("/v1/accounts/search", params)

    run_request(ctx, _search)


@app.command()
def update(
    ctx: typer.Context,
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Update the current account.

    \b
    Example:
      arky account update --data '{"name": "Jane Doe"}'
    """

    async def _update(api: ArkyClient) -> Any:
        return await api.put("/v1/accounts", parse_data(data))

    run_request(ctx, _update)


@app.command()
def delete(ctx: typer.Context) -> None:
    """Delete the current account."""
    run_request(ctx, lambda api: api.delete("/v1/accounts"), success="Account deleted", show_result=False)


@app.command("add-phone")
def add_phone(
    ctx: typer.Context,
    phone: str = typer.Option(..., "--phone", help="Phone number in E.164 format (e.g., +38761123456)"),
) -> None:
    """Add a phone number and send a verification code to it."""
    run_request(
        ctx,
        lambda api: api.post("/v1/accounts/phone-number", {"phoneNumber": phone}),
        success=f"Verification code sent to {phone}",
        show_result=False,
    )


@app.command("confirm-phone")
def confirm_phone(
    ctx: typer.Context,
    phone: str = typer.Option(..., "--phone", help="Phone number being confirmed"),
    code: str = typer.Option(..., "--code", help="Verification code received by SMS"),
) -> None:
    """Confirm a phone number with the code received."""
    run_request(
        ctx,
        lambda api: api.post("/v1/accounts/phone-number/confirm", {"phoneNumber": phone, "code": code}),
        success="Phone number confirmed",
        show_result=False,
    )
