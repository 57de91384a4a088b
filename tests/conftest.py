"""Shared fixtures: a scripted Open Food Facts stand-in built on httpx.MockTransport."""
from typing import List, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from upstream import OpenFoodFactsClient, get_upstream

BASE_URL = "https://off.test"
USER_AGENT = "FoodProductExplorer/test"

Scripted = Union[httpx.Response, Exception]


class ScriptedUpstream:
    """Replays responses (or raises exceptions) in order and records every request."""

    def __init__(self) -> None:
        self.script: List[Scripted] = []
        self.requests: List[httpx.Request] = []
        self.sleeps: List[float] = []

    def queue(self, *items: Scripted) -> None:
        self.script.extend(items)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.script:
            raise AssertionError(f"unexpected upstream request: {request.url}")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)

    def client(self, http: httpx.AsyncClient) -> OpenFoodFactsClient:
        return OpenFoodFactsClient(
            http,
            base_url=BASE_URL,
            user_agent=USER_AGENT,
            retries=3,
            delay_ms=1000,
            sleep=self.sleep,
        )


@pytest.fixture
def scripted():
    return ScriptedUpstream()


@pytest.fixture
async def http_client(scripted):
    async with httpx.AsyncClient(transport=httpx.MockTransport(scripted.handler)) as http:
        yield http


@pytest.fixture
async def off_client(scripted, http_client):
    return scripted.client(http_client)


@pytest.fixture
def api(scripted):
    """TestClient whose upstream dependency talks to the scripted transport."""

    async def override():
        async with httpx.AsyncClient(transport=httpx.MockTransport(scripted.handler)) as http:
            yield scripted.client(http)

    app.dependency_overrides[get_upstream] = override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def bad_gzip_response() -> httpx.Response:
    """200 whose body claims gzip encoding but is not; reading it raises httpx.DecodingError."""
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip at all"))
