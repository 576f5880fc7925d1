"""
Unit Test Fixtures.

Fixtures for unit tests - the platform API is never contacted. HTTP traffic
goes through httpx.MockTransport and is recorded for assertions.
"""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from arky.cli.client import ArkyClient
from arky.core.config import Settings


# =============================================================================
# Mock API Fixtures
# =============================================================================


@dataclass
class MockApi:
    """
    Canned platform API.

    Every request is recorded. The response is taken from `status_code`
    and `body`; a str body is sent verbatim, anything else as JSON.
    """

    status_code: int = 200
    body: Any = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    def client(self, **kwargs: Any) -> ArkyClient:
        kwargs.setdefault("base_url", "http://api.test")
        return ArkyClient(transport=httpx.MockTransport(self.handler), **kwargs)


@pytest.fixture
def mock_api(monkeypatch: pytest.MonkeyPatch) -> MockApi:
    """
    Route every CLI command through a MockApi.

    Usage:
        def test_node_get(mock_api: MockApi):
            mock_api.body = {"id": "n1"}
            runner.invoke(app, ["--business-id", "biz_1", "node", "get", "n1"])
            assert mock_api.last.url.path == "/v1/businesses/biz_1/nodes/n1"
    """
    api = MockApi()

    def factory(settings: Settings) -> ArkyClient:
        return api.client(
            base_url=settings.base_url,
            business_id=settings.business_id,
            token=settings.token,
        )

    monkeypatch.setattr("arky.cli.client.get_api_client", factory)
    return api
