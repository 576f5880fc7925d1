"""Unit tests for CLI HTTP client."""

from unittest.mock import patch

import httpx
import pytest

from arky.cli.client import (
    ArkyClient,
    ParsedApiError,
    RawTextFallback,
    UploadPart,
    build_api_error,
    get_api_client,
    parse_error_body,
)
from arky.core.config import Settings
from arky.core.exceptions import (
    ApiError,
    ConfigError,
    InvalidInputError,
    JsonError,
    TransportError,
)


class ExplodingStream(httpx.AsyncByteStream):
    """Response body that fails the test if anything reads it."""

    async def __aiter__(self):
        raise AssertionError("response body was read")
        yield b""  # pragma: no cover


def _client_for(handler) -> ArkyClient:
    return ArkyClient("http://api.test", business_id="biz_1", transport=httpx.MockTransport(handler))


class TestArkyClient:
    """Tests for ArkyClient construction and scoping."""

    def test_client_strips_trailing_slash(self) -> None:
        """Test client strips trailing slash from base URL."""
        client = ArkyClient(base_url="http://test:8000/")
        assert client.base_url == "http://test:8000"

    def test_require_business_id_returns_id(self) -> None:
        client = ArkyClient("http://test", business_id="biz_1")
        assert client.require_business_id() == "biz_1"

    def test_require_business_id_raises_config_error(self) -> None:
        client = ArkyClient("http://test")
        with pytest.raises(ConfigError, match="business_id required"):
            client.require_business_id()

    def test_get_api_client_uses_settings(self) -> None:
        """Test factory copies base_url, business_id and token from settings."""
        settings = Settings(base_url="http://x.test", business_id="b", token="t")
        client = get_api_client(settings)
        assert client.base_url == "http://x.test"
        assert client.business_id == "b"
        assert client._token == "t"

    @pytest.mark.asyncio
    async def test_close_client(self) -> None:
        """Test client closes properly."""
        client = ArkyClient("http://test")
        client._get_client()
        assert client._client is not None

        await client.close()
        assert client._client is None


class TestResponseHandling:
    """Tests for response classification."""

    @pytest.mark.asyncio
    async def test_200_returns_parsed_json(self, mock_api) -> None:
        mock_api.body = {"id": "n1", "blocks": []}
        client = mock_api.client()

        assert await client.get("/v1/x") == {"id": "n1", "blocks": []}
        await client.close()

    @pytest.mark.asyncio
    async def test_204_returns_none_without_reading_body(self) -> None:
        """Test 204 short-circuits before the body stream is touched."""
        client = _client_for(lambda request: httpx.Response(204, stream=ExplodingStream()))

        assert await client.delete("/v1/x") is None
        await client.close()

    @pytest.mark.asyncio
    async def test_200_empty_body_returns_none(self) -> None:
        client = _client_for(lambda request: httpx.Response(200, content=b""))

        assert await client.post("/v1/x", {}) is None
        await client.close()

    @pytest.mark.asyncio
    async def test_404_structured_error(self, mock_api) -> None:
        mock_api.status_code = 404
        mock_api.body = {"message": "not found"}
        client = mock_api.client()

        with pytest.raises(ApiError) as exc_info:
            await client.get("/v1/missing")

        assert exc_info.value.status == 404
        assert exc_info.value.message == "not found"
        assert exc_info.value.validation_errors == []
        await client.close()

    @pytest.mark.asyncio
    async def test_422_validation_errors(self, mock_api) -> None:
        """Test validation errors are kept and the default message is used."""
        mock_api.status_code = 422
        mock_api.body = {"validationErrors": [{"field": "key", "error": "is required"}]}
        client = mock_api.client()

        with pytest.raises(ApiError) as exc_info:
            await client.post("/v1/x", {})

        error = exc_info.value
        assert error.message == "Request failed"
        assert len(error.validation_errors) == 1
        assert error.validation_errors[0].field == "key"
        assert error.validation_errors[0].error == "is required"
        assert str(error) == "API error (422): Request failed\n  - key: is required"
        await client.close()

    @pytest.mark.asyncio
    async def test_500_raw_body_becomes_message(self, mock_api) -> None:
        mock_api.status_code = 500
        mock_api.body = "Internal Server Error"
        client = mock_api.client()

        with pytest.raises(ApiError) as exc_info:
            await client.get("/v1/x")

        assert exc_info.value.status == 500
        assert exc_info.value.message == "Internal Server Error"
        assert exc_info.value.error is None
        await client.close()

    @pytest.mark.asyncio
    async def test_malformed_success_body_raises_json_error(self, mock_api) -> None:
        mock_api.body = "{not json"
        client = mock_api.client()

        with pytest.raises(JsonError):
            await client.get("/v1/x")
        await client.close()

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client_for(refuse)

        with pytest.raises(TransportError, match="connection refused"):
            await client.get("/v1/x")
        await client.close()

    @pytest.mark.asyncio
    async def test_connection_failure_is_logged_at_debug(self) -> None:
        """Test a transport failure is left to the ERROR line, not a console log."""
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client_for(refuse)

        with patch("arky.cli.client.log_with_source") as log:
            with pytest.raises(TransportError):
                await client.get("/v1/x")

        levels = {c.args[3]: c.args[2] for c in log.call_args_list}
        assert levels["API request failed"] == "debug"
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    async def test_non_standard_constant_in_success_body_raises_json_error(self, mock_api, constant) -> None:
        mock_api.body = f'{{"price": {constant}}}'
        client = mock_api.client()

        with pytest.raises(JsonError, match="is not valid JSON"):
            await client.get("/v1/x")
        await client.close()


class TestRequests:
    """Tests for the wire format of outgoing requests."""

    @pytest.mark.asyncio
    async def test_json_headers_with_token(self, mock_api) -> None:
        client = mock_api.client(token="tok_1")

        await client.post("/v1/x", {"a": 1})

        headers = mock_api.last.headers
        assert headers["content-type"] == "application/json"
        assert headers["accept"] == "application/json"
        assert headers["authorization"] == "Bearer tok_1"
        assert mock_api.last_json() == {"a": 1}
        await client.close()

    @pytest.mark.asyncio
    async def test_no_authorization_without_token(self, mock_api) -> None:
        client = mock_api.client()

        await client.get("/v1/x")

        assert "authorization" not in mock_api.last.headers
        await client.close()

    @pytest.mark.asyncio
    async def test_query_parameters_keep_order(self, mock_api) -> None:
        client = mock_api.client()

        await client.get("/v1/x", [("limit", "20"), ("type", "blog"), ("cursor", "c1")])

        assert mock_api.last.url.params.multi_items() == [("limit", "20"), ("type", "blog"), ("cursor", "c1")]
        await client.close()

    @pytest.mark.asyncio
    async def test_delete_with_params(self, mock_api) -> None:
        client = mock_api.client()

        await client.delete_with_params("/v1/platform/data", [("key", "users/1")])

        assert mock_api.last.method == "DELETE"
        assert mock_api.last.url.path == "/v1/platform/data"
        assert mock_api.last.url.params["key"] == "users/1"
        await client.close()

    @pytest.mark.asyncio
    async def test_put_sends_body(self, mock_api) -> None:
        client = mock_api.client()

        await client.put("/v1/x/1", {"id": "1", "status": "active"})

        assert mock_api.last.method == "PUT"
        assert mock_api.last_json() == {"id": "1", "status": "active"}
        await client.close()


class TestUpload:
    """Tests for multipart uploads."""

    @pytest.mark.asyncio
    async def test_parts_named_by_position(self, mock_api) -> None:
        """Test part i is named files[i] in input order."""
        mock_api.body = [{"id": "m1"}, {"id": "m2"}, {"id": "m3"}]
        client = mock_api.client(token="tok_1")

        await client.upload("/v1/media", [
            UploadPart("c.png", b"\x89PNG", "image/png"),
            UploadPart("a.pdf", b"%PDF", "application/pdf"),
            UploadPart("b.txt", b"notes", "text/plain"),
        ])

        content = mock_api.last.content
        first = content.index(b'name="files[0]"; filename="c.png"')
        second = content.index(b'name="files[1]"; filename="a.pdf"')
        third = content.index(b'name="files[2]"; filename="b.txt"')
        assert first < second < third
        assert b"files[3]" not in content
        assert b"Content-Type: application/pdf" in content
        await client.close()

    @pytest.mark.asyncio
    async def test_upload_headers(self, mock_api) -> None:
        """Test uploads carry auth headers and a multipart content type."""
        client = mock_api.client(token="tok_1")

        await client.upload("/v1/media", [UploadPart("a.txt", b"hi", "text/plain")])

        headers = mock_api.last.headers
        assert headers["content-type"].startswith("multipart/form-data; boundary=")
        assert headers["accept"] == "application/json"
        assert headers["authorization"] == "Bearer tok_1"
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_upload_is_rejected(self, mock_api) -> None:
        client = mock_api.client()

        with pytest.raises(InvalidInputError):
            await client.upload("/v1/media", [])
        assert mock_api.requests == []

    @pytest.mark.asyncio
    async def test_malformed_mime_type_is_rejected(self, mock_api) -> None:
        client = mock_api.client()

        with pytest.raises(InvalidInputError, match="Invalid MIME type"):
            await client.upload("/v1/media", [UploadPart("a.bin", b"x", "not a mime")])
        assert mock_api.requests == []


class TestErrorBodyParsing:
    """Tests for the structured-or-raw error body parse."""

    def test_structured_body(self) -> None:
        parsed = parse_error_body('{"message": "nope", "error": "NOT_FOUND", "statusCode": 404}')

        assert isinstance(parsed, ParsedApiError)
        assert parsed.message == "nope"
        assert parsed.error == "NOT_FOUND"
        assert parsed.status_code == 404

    def test_non_json_body_falls_back_to_text(self) -> None:
        assert parse_error_body("Bad Gateway") == RawTextFallback("Bad Gateway")

    def test_json_array_falls_back_to_text(self) -> None:
        assert parse_error_body("[1, 2]") == RawTextFallback("[1, 2]")

    def test_build_api_error_includes_error_code(self) -> None:
        error = build_api_error(409, '{"message": "Key taken", "error": "CONFLICT"}')

        assert str(error) == "API error (409): Key taken [CONFLICT]"
