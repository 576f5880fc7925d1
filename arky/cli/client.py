"""
HTTP Client for CLI.

Async transport for the platform REST API. Every call performs exactly one
round trip and yields either the parsed JSON body (None for empty bodies and
204 responses) or a typed CliError. No retries, no caching.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from arky.cli.data import loads_json
from arky.core.config import Settings
from arky.core.exceptions import (
    ApiError,
    ConfigError,
    FieldError,
    InvalidInputError,
    JsonError,
    TransportError,
)
from arky.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

QueryParams = Sequence[tuple[str, str]]

_MIME_PATTERN = re.compile(r"^[\w.+-]+/[\w.+-]+(\s*;.*)?$")


@dataclass
class UploadPart:
    """One file of a multipart upload."""

    filename: str
    content: bytes
    mime_type: str


class FieldErrorBody(BaseModel):
    field: str
    error: str


class ParsedApiError(BaseModel):
    """Structured error body returned by the platform on failure."""

    message: str | None = None
    error: str | None = None
    status_code: int | None = Field(default=None, alias="statusCode")
    validation_errors: list[FieldErrorBody] | None = Field(default=None, alias="validationErrors")

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class RawTextFallback:
    """Error body that did not match the structured shape."""

    text: str


def parse_error_body(body: str) -> ParsedApiError | RawTextFallback:
    """Classify an error response body as structured or raw text."""
    try:
        return ParsedApiError.model_validate_json(body)
    except ValidationError:
        return RawTextFallback(body)


def build_api_error(status: int, body: str) -> ApiError:
    """Build the ApiError for a response with status >= 400."""
    parsed = parse_error_body(body)

    if isinstance(parsed, RawTextFallback):
        return ApiError(status=status, message=parsed.text)

    return ApiError(
        status=status,
        message=parsed.message if parsed.message is not None else "Request failed",
        error=parsed.error,
        validation_errors=[FieldError(e.field, e.error) for e in parsed.validation_errors or []],
    )


async def handle_response(response: httpx.Response) -> Any:
    """
    Turn a streamed response into a JSON value or a typed error.

    Args:
        response: Response opened with stream=True. Its body is read here,
            except for 204 where it is never touched.

    Returns:
        Parsed JSON, or None for 204 and empty success bodies.

    Raises:
        ApiError: Status >= 400.
        JsonError: Success body is not valid JSON.
        TransportError: Reading the body failed.
    """
    status = response.status_code

    if status == 204:
        return None

    try:
        await response.aread()
    except httpx.HTTPError as e:
        raise TransportError(str(e) or type(e).__name__) from e
    body = response.text

    if status >= 400:
        raise build_api_error(status, body)

    if body == "":
        return None

    try:
        return loads_json(body)
    except ValueError as e:
        raise JsonError(str(e)) from e


class ArkyClient:
    """
    HTTP client for the platform API.

    Features:
    - Bearer token auth when a token is configured
    - JSON headers for JSON calls, reduced headers for multipart uploads
    - Structured logging of requests/responses
    - Uniform response classification (see handle_response)

    Usage:
        client = ArkyClient("http://localhost:3000", business_id="biz_1")
        nodes = await client.get("/v1/businesses/biz_1/nodes", [("limit", "20")])
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        business_id: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Platform API base URL.
            business_id: Business scope for business-level commands.
            token: Bearer token, attached to every request when set.
            transport: Optional httpx transport, used by tests.
        """
        self.base_url = base_url.rstrip("/")
        self.business_id = business_id
        self._token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ArkyClient":
        return cls(settings.base_url, settings.business_id, settings.token)

    def require_business_id(self) -> str:
        """Return the business id or fail before any network call."""
        if self.business_id is None:
            raise ConfigError(
                "business_id required. Set via --business-id, ARKY_BUSINESS_ID, "
                "or `arky config set business_id <id>`"
            )
        return self.business_id

    def _auth_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _json_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", **self._auth_headers()}

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str],
        **kwargs: Any,
    ) -> Any:
        """
        Make one HTTP request and classify the response.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path with path parameters already substituted
            headers: Request headers
            **kwargs: Additional arguments for httpx.AsyncClient.build_request

        Returns:
            Parsed JSON value, or None when there is no content.

        Raises:
            TransportError: On network failure
            ApiError: On status >= 400
            JsonError: On a malformed success body
        """
        client = self._get_client()

        log_with_source(logger, "cli", "debug", "API request", method=method, path=path)

        try:
            request = client.build_request(method, path, headers=headers, **kwargs)
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            log_with_source(
                logger, "cli", "debug", "API request failed",
                method=method, path=path, error=str(e),
            )
            raise TransportError(str(e) or type(e).__name__) from e

        try:
            log_with_source(
                logger, "cli", "debug", "API response",
                method=method, path=path, status_code=response.status_code,
            )
            return await handle_response(response)
        finally:
            await response.aclose()

    async def get(self, path: str, params: QueryParams = ()) -> Any:
        """Make a GET request with ordered query parameters."""
        return await self.request("GET", path, headers=self._json_headers(), params=list(params))

    async def post(self, path: str, body: Any) -> Any:
        """Make a POST request with a JSON body."""
        return await self.request("POST", path, headers=self._json_headers(), json=body)

    async def put(self, path: str, body: Any) -> Any:
        """Make a PUT request with a JSON body."""
        return await self.request("PUT", path, headers=self._json_headers(), json=body)

    async def delete(self, path: str) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path, headers=self._json_headers())

    async def delete_with_params(self, path: str, params: QueryParams) -> Any:
        """Make a DELETE request carrying filter criteria as query parameters."""
        return await self.request("DELETE", path, headers=self._json_headers(), params=list(params))

    async def upload(self, path: str, files: Sequence[UploadPart]) -> Any:
        """
        Upload files as multipart/form-data.

        Part i is named files[i], where i is the position in `files`.
        Content-Type is left to the multipart encoder.

        Raises:
            InvalidInputError: If `files` is empty or a MIME type is malformed.
        """
        if not files:
            raise InvalidInputError("At least one file is required for upload")

        form = []
        for index, part in enumerate(files):
            if not _MIME_PATTERN.match(part.mime_type):
                raise InvalidInputError(f"Invalid MIME type: {part.mime_type!r}")
            form.append((f"files[{index}]", (part.filename, part.content, part.mime_type)))

        return await self.request("POST", path, headers=self._auth_headers(), files=form)


def get_api_client(settings: Settings) -> ArkyClient:
    """Create the API client for one CLI invocation."""
    return ArkyClient.from_settings(settings)
