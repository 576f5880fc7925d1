"""
Request body helpers.

The --data convention accepted by every write command:
    --data '{"key": "value"}'   Inline JSON
    --data @content.json        JSON read from a file
    --data -                    JSON read from stdin

Bodies are built by merging the parsed --data object onto command defaults
(usually {"key": ...} or {"id": ...}). The merge is shallow: the overlay
always wins, and nested values replace nested values wholesale.
"""

import json
import sys
from pathlib import Path
from typing import Any

from arky.core.exceptions import InvalidInputError

STDIN_SENTINEL = "-"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def loads_json(text: str) -> Any:
    """Parse standard JSON. NaN, Infinity and -Infinity are rejected."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_data(value: str | None) -> Any:
    """
    Parse a --data value into a JSON value.

    Args:
        value: None, "-" for stdin, "@path" for a file, or inline JSON.

    Returns:
        The parsed JSON value. None yields an empty object.

    Raises:
        InvalidInputError: If the source cannot be read or is not valid JSON.
    """
    if value is None:
        return {}

    if value == STDIN_SENTINEL:
        try:
            text = sys.stdin.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInputError(f"Failed to read stdin: {e}") from e
        try:
            return loads_json(text)
        except ValueError as e:
            raise InvalidInputError(f"Invalid JSON from stdin: {e}") from e

    if value.startswith("@"):
        path = value[1:]
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInputError(f"Failed to read file {path}: {e}") from e
        try:
            return loads_json(text)
        except ValueError as e:
            raise InvalidInputError(f"Invalid JSON in {path}: {e}") from e

    try:
        return loads_json(value)
    except ValueError as e:
        raise InvalidInputError(f"Invalid JSON: {e}") from e


def merge_data(base: dict[str, Any], overlay: Any) -> dict[str, Any]:
    """
    Shallow-merge `overlay` onto `base` in place and return `base`.

    Raises:
        InvalidInputError: If either side is not a JSON object.
    """
    if not isinstance(base, dict):
        raise InvalidInputError(f"Cannot merge into a JSON {_json_type(base)}")
    if not isinstance(overlay, dict):
        raise InvalidInputError(f"--data must be a JSON object, got {_json_type(overlay)}")

    for key, value in overlay.items():
        base[key] = value
    return base


def set_default(body: Any, key: str, value: Any) -> dict[str, Any]:
    """Set `key` on a JSON object body unless the caller already supplied it."""
    if not isinstance(body, dict):
        raise InvalidInputError(f"--data must be a JSON object, got {_json_type(body)}")
    body.setdefault(key, value)
    return body


def query_params(*pairs: tuple[str, Any]) -> list[tuple[str, str]]:
    """Build ordered query pairs, dropping those whose value is None."""
    return [(key, str(value)) for key, value in pairs if value is not None]


def _json_type(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if value is None:
        return "null"
    return "number"
