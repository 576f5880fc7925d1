"""
Media Commands.

Upload, list and delete media files of a business. Uploads are sent as one
multipart request with parts named files[0], files[1], ...
"""

from pathlib import Path
from typing import Any, List, Optional

import typer

from arky.cli.client import ArkyClient, UploadPart
from arky.cli.data import query_params
from arky.cli.runner import run_request
from arky.core.exceptions import FileAccessError, InvalidInputError

app = typer.Typer(help="Upload and manage media files")

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "avif": "image/avif",
    "ico": "image/x-icon",
    "mp4": "video/mp4",
    "webm": "video/webm",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "pdf": "application/pdf",
    "json": "application/json",
    "js": "application/javascript",
    "zip": "application/zip",
    "csv": "text/csv",
    "txt": "text/plain",
    "html": "text/html",
    "css": "text/css",
}


def mime_from_path(path: Path) -> str:
    """Guess a MIME type from the file extension (case-insensitive)."""
    return MIME_TYPES.get(path.suffix.lstrip(".").lower(), DEFAULT_MIME_TYPE)


def read_upload(path_str: str) -> UploadPart:
    """Load one local file as an upload part."""
    path = Path(path_str)
    if not path.exists():
        raise InvalidInputError(f"File not found: {path_str}")

    try:
        content = path.read_bytes()
    except OSError as e:
        raise FileAccessError(f"Failed to read {path_str}: {e}") from e

    return UploadPart(filename=path.name or "file", content=content, mime_type=mime_from_path(path))


def _media(api: ArkyClient) -> str:
    return f"/v1/businesses/{api.require_business_id()}/media"


@app.command()
def upload(
    ctx: typer.Context,
    files: List[str] = typer.Argument(..., metavar="FILE...", help="Files to upload"),
) -> None:
    """
    Upload one or more files.

    The MIME type of each file is derived from its extension.

    \b
    Examples:
      arky media upload photo.jpg
      arky media upload a.png b.png doc.pdf

    Response shape: [{"id": "media_123", "mimeType": "image/png", "resolutions": {...}}]
    """

    async def _upload(api: ArkyClient) -> Any:
        path = _media(api)
        parts = [read_upload(f) for f in files]
        return await api.upload(path, parts)

    run_request(ctx, _upload)


@app.command("list")
def list_media(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", min=0, help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor from a previous page"),
    query: Optional[str] = typer.Option(None, "--query", help="Search text"),
    mime_type: Optional[str] = typer.Option(None, "--mime-type", help="Filter by MIME type (e.g., image/png, video/mp4)"),
    sort_field: Optional[str] = typer.Option(None, "--sort-field", help="Field to sort by"),
    sort_direction: Optional[str] = typer.Option(None, "--sort-direction", help="asc or desc"),
) -> None:
    """List media files."""
    params = query_params(
        ("limit", limit),
        ("cursor", cursor),
        ("query", query),
        ("mimeType", mime_type),
        ("sortField", sort_field),
        ("sortDirection", sort_direction),
    )
    run_request(ctx, lambda api: api.get(_media(api), params))


@app.command()
def delete(
    ctx: typer.Context,
    media_id: str = typer.Argument(..., metavar="ID", help="Media ID"),
) -> None:
    """Delete a media file."""
    run_request(ctx, lambda api: api.delete(f"{_media(api)}/{media_id}"), success="Media deleted")
