"""
Command runner.

Shared glue for every command: builds the API client from the settings
resolved in the root callback, runs one request, prints the result, and turns
any CliError into an ERROR line on stderr plus exit code 1.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import typer

from arky.cli import client as client_module
from arky.cli.client import ArkyClient
from arky.cli.output import OutputFormat, print_error, print_output, print_success
from arky.core.config import Settings
from arky.core.exceptions import CliError
from arky.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DATA_HELP = "JSON data: inline, @file, or - for stdin"

Request = Callable[[ArkyClient], Awaitable[Any]]


@dataclass(frozen=True)
class CliState:
    """Per-invocation state stored on typer.Context.obj."""

    settings: Settings
    output_format: OutputFormat


def get_state(ctx: typer.Context) -> CliState:
    return ctx.find_root().obj


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print any CliError raised in the block and exit with status 1."""
    try:
        yield
    except CliError as e:
        log_with_source(logger, "cli", "debug", "Command failed", code=e.code)
        print_error(str(e))
        raise typer.Exit(1) from e


async def _execute(settings: Settings, request: Request) -> Any:
    api_client = client_module.get_api_client(settings)
    try:
        return await request(api_client)
    finally:
        await api_client.close()


def run_request(
    ctx: typer.Context,
    request: Request,
    *,
    success: str | None = None,
    show_result: bool = True,
) -> Any:
    """
    Run one API request and print its result.

    Args:
        ctx: Typer context carrying the CliState.
        request: Coroutine function taking the ArkyClient.
        success: Confirmation printed to stderr after the result.
        show_result: Whether to print the response value.

    Returns:
        The response value.
    """
    state = get_state(ctx)

    with handle_errors():
        result = asyncio.run(_execute(state.settings, request))

    if show_result:
        print_output(result, state.output_format)
    if success:
        print_success(success)
    return result
