"""
Database Commands.

Platform key-value store and named server-side scripts. These endpoints are
not scoped to a business.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import parse_data, query_params
from arky.cli.runner import run_request

app = typer.Typer(help="Platform key-value database and scripts")

DATA_PATH = "/v1/platform/data"


@app.command()
def scan(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key prefix to scan"),
    limit: int = typer.Option(200, "--limit", min=0, help="Maximum entries to return"),
) -> None:
    """
    Scan the key-value database by key prefix.

    \b
    Examples:
      arky db scan users/
      arky db scan config/ --limit 50
      arky db scan "" --limit 10

    Response shape: [{"key": "users/123", "value": {"name": "John"}}, ...]
    """
    params = query_params(("key", key), ("limit", limit))
    run_request(ctx, lambda api: api.get(DATA_PATH, params))


@app.command()
def put(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to store under"),
    value: str = typer.Option(..., "--value", help="JSON value: inline, @file, or - for stdin"),
    old_key: Optional[str] = typer.Option(None, "--old-key", help="Old key to replace (for renames)"),
) -> None:
    """
    Store a key-value entry.

    \b
    Examples:
      arky db put users/123 --value '{"name": "John"}'
      arky db put config/theme --value '"dark"'
      arky db put users/new-key --value @user.json --old-key users/old-key
    """

    async def _put(api: ArkyClient) -> Any:
        body: dict[str, Any] = {"key": key, "value": parse_data(value)}
        if old_key is not None:
            body["oldKey"] = old_key
        return await api.post(DATA_PATH, body)

    run_request(ctx, _put, success=f"Stored key: {key}")


@app.command()
def delete(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to delete"),
) -> None:
    """Delete a key-value entry."""
    params = query_params(("key", key))
    run_request(ctx, lambda api: api.delete_with_params(DATA_PATH, params), success=f"Deleted key: {key}")


@app.command("run-script")
def run_script(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Script name"),
    value: Optional[str] = typer.Option(None, "--value", help="Value passed to the script as a string"),
) -> None:
    """
    Execute a named server-side script.

    \b
    Examples:
      arky db run-script cleanup
      arky db run-script migrate --value '{"version": 2}'
    """
    body: dict[str, Any] = {"name": name}
    if value is not None:
        body["value"] = value
    run_request(ctx, lambda api: api.post("/v1/platform/scripts", body))
