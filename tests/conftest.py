"""Fixtures — settings, stub AgentQL transport, test client."""

import json
import os

# src.main builds the module-level app at import time
os.environ.setdefault("AGENTQL_API_KEY", "test-agentql-key")

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from src.api.routes import get_client
from src.config import Settings
from src.main import create_app
from src.scrape import AgentQLClient

API_URL = "https://agentql.test/v1/query-data"


class StubAgentQL:
    """Serves canned AgentQL answers keyed by the requested page URL."""

    def __init__(self) -> None:
        self.responses: dict[str, httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []
        self.client = AgentQLClient(
            api_key="test-agentql-key",
            api_url=API_URL,
            transport=httpx.MockTransport(self.handler),
        )

    def add(self, url: str, body: object = None, status_code: int = 200) -> None:
        self.responses[url] = httpx.Response(status_code, json=body)

    def fail(self, url: str, exc: Exception) -> None:
        self.responses[url] = exc

    @property
    def requested_urls(self) -> list[str]:
        return [json.loads(r.content)["url"] for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = json.loads(request.content)["url"]
        answer = self.responses.get(url)
        if answer is None:
            return httpx.Response(404, json={"message": "no stub"})
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def aclose(self) -> None:
        await self.client.aclose()


@pytest.fixture
def settings() -> Settings:
    return Settings(agentql_api_key="test-agentql-key", agentql_api_url=API_URL)  # type: ignore[call-arg]


@pytest_asyncio.fixture
async def stub():
    """Stub AgentQL sharing one client, closed after the test."""
    agentql = StubAgentQL()
    yield agentql
    await agentql.aclose()


@pytest.fixture
def client(settings: Settings, stub: StubAgentQL):
    app = create_app(settings)
    app.dependency_overrides[get_client] = lambda: stub.client
    with TestClient(app) as test_client:
        yield test_client
