"""
Workflow Commands.

Automation graphs owned by a business, plus their executions and the
public secret-based trigger endpoint.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage workflows (automation) and their executions")


def _workflows(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/workflows"


@app.command()
def get(
    ctx: typer.Context,
    workflow_id: str = typer.Argument(..., metavar="ID", help="Workflow ID"),
) -> None:
    """Get a workflow by ID."""
    run_request(ctx, lambda api: api.get(f"{_workflows(api)}/{workflow_id}"))


@app.command("list")
def list_workflows(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help="Comma-separated statuses"),
) -> None:
    """List workflows."""
    params = query_params(("limit", limit), ("query", query), ("cursor", cursor), ("statuses", statuses))
    run_request(ctx, lambda api: api.get(_workflows(api), params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Workflow key"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a workflow.

    The body starts as {"key": KEY, "businessId": <business>} and --data is
    merged on top.

    \b
    Example:
      arky workflow create order-paid-email --data @workflow.json
    """

    async def _create(api: ArkyClient) -> Any:
        business_id = api.require_business_id()
        body = merge_data({"key": key, "businessId": business_id}, parse_data(data))
        return await api.post(f"/v1/businesses/{business_id}/workflows", body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    workflow_id: str = typer.Argument(..., metavar="ID", help="Workflow ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Update a workflow."""

    async def _update(api: ArkyClient) -> Any:
        path = f"{_workflows(api)}/{workflow_id}"
        body = merge_data({"id": workflow_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    workflow_id: str = typer.Argument(..., metavar="ID", help="Workflow ID"),
) -> None:
    """Delete a workflow."""
    run_request(
        ctx,
        lambda api: api.delete(f"{_workflows(api)}/{workflow_id}"),
        success="Workflow deleted",
        show_result=False,
    )


@app.command()
def trigger(
    ctx: typer.Context,
    secret: str = typer.Argument(..., help="Workflow trigger secret"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Trigger a workflow through its secret webhook URL.

    \b
    Example:
      arky workflow trigger SECRET --data '{"orderId": "order_123"}'
    """

    async def _trigger(api: ArkyClient) -> Any:
        api.require_business_id()
        return await api.post(f"/v1/workflows/trigger/{secret}", parse_data(data))

    run_request(ctx, _trigger)


@app.command()
def executions(
    ctx: typer.Context,
    workflow_id: str = typer.Argument(..., help="Workflow ID"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    status: Optional[str] = typer.Option(None, "--status", help="Filter by execution status"),
) -> None:
    """List executions of a workflow."""
    params = query_params(("limit", limit), ("cursor", cursor), ("status", status))
    run_request(ctx, lambda api: api.get(f"{_workflows(api)}/{workflow_id}/executions", params))


@app.command()
def execution(
    ctx: typer.Context,
    workflow_id: str = typer.Argument(..., help="Workflow ID"),
    execution_id: str = typer.Argument(..., help="Execution ID"),
) -> None:
    """Get one execution of a workflow."""
    run_request(
        ctx,
        lambda api: api.get(f"{_workflows(api)}/{workflow_id}/executions/{execution_id}"),
    )
