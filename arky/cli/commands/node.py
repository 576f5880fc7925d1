"""
Content Node Commands.

CMS building blocks: pages, blog posts, newsletters. Each node has a type,
key, status and an array of blocks holding its content.
"""

from typing import Any, Optional

import typer

from arky.cli.client import ArkyClient
from arky.cli.data import merge_data, parse_data, query_params
from arky.cli.runner import DATA_HELP, run_request

app = typer.Typer(help="Manage content nodes (CMS: pages, blog posts, newsletters)")


def _nodes(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/nodes"


@app.command()
def get(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., metavar="ID", help="Node ID, slug, or key"),
) -> None:
    """
    Get a content node by ID, slug, or key.

    \b
    Examples:
      arky node get NODE_ID
      arky node get my-blog-post
    """
    run_request(ctx, lambda api: api.get(f"{_nodes(api)}/{node_id}"))


@app.command("list")
def list_nodes(
    ctx: typer.Context,
    node_type: Optional[str] = typer.Option(None, "--type", help="Filter by node type (e.g., blog, page, newsletter)"),
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    key: Optional[str] = typer.Option(None, "--key", help="Filter by node key"),
    parent_id: Optional[str] = typer.Option(None, "--parent-id", help="Filter by parent node ID"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    statuses: Optional[str] = typer.Option(None, "--statuses", help="Comma-separated: draft,active,archived"),
    sort_field: Optional[str] = typer.Option(None, "--sort-field", help="Field to sort by (e.g., createdAt)"),
    sort_direction: Optional[str] = typer.Option(None, "--sort-direction", help="asc or desc"),
) -> None:
    """
    List content nodes with optional filters.

    \b
    Examples:
      arky node list --type blog --limit 10
      arky node list --query "hello" --statuses active
      arky node list --sort-field createdAt --sort-direction desc

    Response shape: {"data": [...], "cursor": "next_page_cursor"}
    """
    params = query_params(
        ("limit", limit),
        ("type", node_type),
        ("query", query),
        ("key", key),
        ("parentId", parent_id),
        ("cursor", cursor),
        ("statuses", statuses),
        ("sortField", sort_field),
        ("sortDirection", sort_direction),
    )
    run_request(ctx, lambda api: api.get(_nodes(api), params))


@app.command()
def create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Node key (unique within business, URL-safe)"),
    parent_id: Optional[str] = typer.Option(None, "--parent-id", help="Parent node ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Create a content node with blocks.

    Blocks are the core content model. Each block has a key (unique within
    the node), a type, a value, and optional properties.

    \b
    Block types:
      text               simple string: "Hello world"
      localized_text     per-locale: {"en": "Hello", "bs": "Zdravo"}
      markdown           localized markdown: {"en": "# Title"}
      number             numeric, also epoch ms for dates: 42
      boolean            true or false
      list               array of sub-block objects
      map                key-value sub-blocks
      relationship_entry reference to another entity: {"id": "node_123"}
      relationship_media media reference: {"id": "media_123"}
      geo_location       {"coordinates": {"lat": 43.85, "lon": 18.41}}

    \b
    Examples:
      arky node create blog-post --data '{"blocks": [
        {"key": "title", "type": "localized_text", "value": {"en": "My Post"}},
        {"key": "image", "type": "relationship_media", "value": {"id": "media_abc"}}
      ]}'
      arky node create my-page --data @content.json
      cat content.json | arky node create my-page --data -
    """

    async def _create(api: ArkyClient) -> Any:
        path = _nodes(api)
        body: dict[str, Any] = {"key": key}
        if parent_id is not None:
            body["parentId"] = parent_id
        merge_data(body, parse_data(data))
        return await api.post(path, body)

    run_request(ctx, _create)


@app.command()
def update(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., metavar="ID", help="Node ID"),
    data: Optional[str] = typer.Option(None, "--data", help=DATA_HELP),
) -> None:
    """
    Update a content node.

    Blocks passed via --data replace the entire blocks array. Include every
    block you want to keep, not just the changed ones.

    \b
    Block types: text, localized_text, markdown, number, boolean, list, map,
    relationship_entry, relationship_media, geo_location

    \b
    Examples:
      arky node update NODE_ID --data '{"status": "active"}'
      arky node update NODE_ID --data @blocks.json
    """

    async def _update(api: ArkyClient) -> Any:
        path = f"{_nodes(api)}/{node_id}"
        body = merge_data({"id": node_id}, parse_data(data))
        return await api.put(path, body)

    run_request(ctx, _update)


@app.command()
def delete(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., metavar="ID", help="Node ID"),
) -> None:
    """Delete a content node."""
    run_request(ctx, lambda api: api.delete(f"{_nodes(api)}/{node_id}"), success="Node deleted")


@app.command()
def children(
    ctx: typer.Context,
    node_id: str = typer.Argument(..., metavar="ID", help="Parent node ID"),
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
) -> None:
    """
    List child nodes of a parent node.

    \b
    Example:
      arky node children PARENT_NODE_ID --limit 10
    """
    params = query_params(("limit", limit), ("cursor", cursor))
    run_request(ctx, lambda api: api.get(f"{_nodes(api)}/{node_id}/children", params))
