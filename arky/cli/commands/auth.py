"""
Auth Commands.

Email magic-code login and anonymous sessions. Successful verify and session
calls store the returned access token in ~/.arky/config.json.
"""

from typing import Any

import typer

from arky.cli.output import print_success
from arky.cli.runner import handle_errors, run_request
from arky.core.config import save_token
from arky.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

app = typer.Typer(help="Authenticate (login, verify, session, whoami)")


def _store_token(result: Any, message: str) -> None:
    token = result.get("accessToken") if isinstance(result, dict) else None
    if not isinstance(token, str):
        return

    with handle_errors():
        path = save_token(token)
    log_with_source(logger, "config", "info", "Access token stored", path=str(path))
    print_success(message)


@app.command()
def login(
    ctx: typer.Context,
    email: str = typer.Argument(..., help="Account email address"),
) -> None:
    """
    Request a verification code by email.

    Step 1 of authentication. A 6-digit code is sent to EMAIL; complete the
    login with `arky auth verify`.

    \b
    Example:
      arky auth login user@example.com
    """
    run_request(
        ctx,
        lambda api: api.post("/v1/auth/code", {"email": email}),
        success=f"Code sent to {email}",
    )


@app.command()
def verify(
    ctx: typer.Context,
    email: str = typer.Argument(..., help="Account email address"),
    code: str = typer.Argument(..., help="Code received by email"),
) -> None:
    """
    Verify the emailed code and store the access token.

    Step 2 of authentication. The token is saved to ~/.arky/config.json and
    used by every later command.

    \b
    Example:
      arky auth verify user@example.com 123456

    Response: {"accessToken": "eyJ...", "refreshToken": "...", "accountId": "..."}
    """
    result = run_request(ctx, lambda api: api.post("/v1/auth/verify", {"email": email, "code": code}))
    _store_token(result, "Token saved to ~/.arky/config.json")


@app.command()
def session(ctx: typer.Context) -> None:
    """
    Create an anonymous session token and store it.

    \b
    Example:
      arky auth session
    """
    result = run_request(ctx, lambda api: api.post("/v1/auth/session", {}))
    _store_token(result, "Session token saved to ~/.arky/config.json")


@app.command()
def whoami(ctx: typer.Context) -> None:
    """Show the account behind the current token."""
    run_request(ctx, lambda api: api.get("/v1/accounts/me"))
