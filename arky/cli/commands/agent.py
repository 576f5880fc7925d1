"""
Agent Commands.

AI agents owned by a business: configuration, runs and the memories they
accumulate.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage AI agents, runs and memories")


def _agents(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/agents"


@app.command()
def get(
    ctx: typer.Context,
    agent_id: str = typer.Argument(..., metavar="ID", help="Agent ID"),
) -> None:
    """Get an agent by ID."""
    run_request(ctx, lambda api: api.get(f"{_agents(api)}/{agent_id}"))


@app.command("list")
def list_agents(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """List agents."""
    params = query_params(("limit", limit), ("cursor", cursor))
    run_request(ctx, lambda api: api.get(_agents(api), params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Agent key"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create an agent.

    \b
    Example:
      arky agent create support-bot --data '{"model": "default", "prompt": "You are a helpful assistant."}'
    """

    async def _create(api: ArkyClient) -> Any:
        business_id = api.require_business_id()
        body = merge_data({"key": key, "businessId": business_id}, parse_data(data))
        return await api.post(f"/v1/businesses/{business_id}/agents", body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    agent_id: str = typer.Argument(..., metavar="ID", help="Agent ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """Update an agent."""

    async def _update(api: ArkyClient) -> Any:
        path = f"{_agents(api)}/{agent_id}"
        body = merge_data({"id": agent_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    agent_id: str = typer.Argument(..., metavar="ID", help="Agent ID"),
) -> None:
    """Delete an agent."""
    run_request(
        ctx,
        lambda api: api.delete(f"{_agents(api)}/{agent_id}"),
        success="Agent deleted",
        show_result=False,
    )


@app.command()
def run(
    ctx: typer.Context,
    agent_id: str = typer.Argument(..., metavar="ID", help="Agent ID"),
    data: Optional[str] = typer.Option(
        None, "--data", help="JSON data with a 'message' field: inline, @file, or - for stdin"
    ),
) -> None:
    """
    Send a message to an agent and return its reply.

    \b
    Example:
      arky agent run AGENT_ID --data '{"message": "Summarize open orders"}'
    """

    async def _run(api: ArkyClient) -> Any:
        path = f"{_agents(api)}/{agent_id}/run"
        return await api.post(path, parse_data(data))

    run_request(ctx, _run)


@app.command()
def memories(
    ctx: typer.Context,
    agent_id: str = typer.Argument(..., metavar="ID", help="Agent ID"),
    category: Optional[str] = typer.Option(None, "--category", help="Filter: soul, message, fact"),
    limit: int = typer.Option(100, "--limit", min=0, help="Maximum memories to return"),
) -> None:
    """List an agent's memories."""
    params = query_params(("limit", limit), ("category", category))
    run_request(ctx, lambda api: api.get(f"{_agents(api)}/{agent_id}/memories", params))


@app.command("delete-memory")
def delete_memory(
    ctx: typer.Context,
    agent_id: str = typer.Argument(..., metavar="ID", help="Agent ID"),
    memory_id: str = typer.Argument(..., help="Memory ID"),
) -> None:
    """Delete one memory of an agent."""
    run_request(
        ctx,
        lambda api: api.delete(f"{_agents(api)}/{agent_id}/memories/{memory_id}"),
        success="Memory deleted",
        show_result=False,
    )
