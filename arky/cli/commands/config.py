"""
Config Commands.

Inspect and persist CLI settings. These commands never contact the server.
"""

import typer

from arky.cli.output import print_output, print_success
from arky.cli.runner import get_state, handle_errors
from arky.core.config import config_path, load_config_file, save_config_file
from arky.core.exceptions import InvalidInputError
from arky.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

app = typer.Typer(help="Show and change CLI configuration")

# Accepted spellings -> ConfigFile field
CONFIG_KEYS = {
    "base_url": "base_url",
    "base-url": "base_url",
    "business_id": "business_id",
    "business-id": "business_id",
    "token": "token",
    "format": "format",
}

TOKEN_MASK_THRESHOLD = 20


def mask_token(token: str | None) -> str | None:
    """Shorten a long token to its first 10 and last 6 characters."""
    if token is None or len(token) <= TOKEN_MASK_THRESHOLD:
        return token
    return f"{token[:10]}...{token[-6:]}"


@app.command()
def show(ctx: typer.Context) -> None:
    """
    Show the resolved configuration.

    Values come from flags, ARKY_* environment variables and the config
    file, in that order. The token is partially masked.
    """
    state = get_state(ctx)
    settings = state.settings
    print_output(
        {
            "base_url": settings.base_url,
            "business_id": settings.business_id,
            "token": mask_token(settings.token),
            "format": settings.format,
            "config_file": str(config_path()),
        },
        state.output_format,
    )


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="base_url, business_id, token or format"),
    value: str = typer.Argument(..., help="Value to store"),
) -> None:
    """
    Persist a configuration value to ~/.arky/config.json.

    \b
    Valid keys:
      base_url      Server URL (e.g., http://localhost:8000)
      business_id   Default business ID for all commands
      token         Auth token (usually set via `arky auth verify`)
      format        Default output format: json, table, plain

    \b
    Examples:
      arky config set base_url http://localhost:8000
      arky config set format table
    """
    with handle_errors():
        field = CONFIG_KEYS.get(key)
        if field is None:
            raise InvalidInputError(
                f"Unknown config key: {key}. Valid keys: base_url, business_id, token, format"
            )

        cfg = load_config_file()
        setattr(cfg, field, value)
        path = save_config_file(cfg)

    log_with_source(logger, "config", "info", "Config value saved", key=field, path=str(path))
    print_success(f"Config '{key}' saved")


@app.command()
def path() -> None:
    """Print the path of the config file."""
    typer.echo(str(config_path()))
