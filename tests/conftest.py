"""
Shared fixtures: fixture settings, a recording fake upstream and an app client.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings, get_settings
from app.main import app
from app.services.gemini_service import GeminiService, get_gemini_service


def make_settings(**overrides) -> Settings:
    values = {
        "GEMINI_API_KEY": "test-key",
        "CF_ACCOUNT_ID": "acct",
        "CF_GATEWAY_ID": "gw",
        "API_BASE_URL": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeUpstream:
    """httpx transport that records requests and answers with a canned response."""

    def __init__(self, status_code=200, body=None, text=None, exc=None):
        self.status_code = status_code
        self.body = body if body is not None else {
            "candidates": [{"content": {"parts": [{"text": "<div>ok</div>"}]}}]
        }
        self.text = text
        self.exc = exc
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_payload(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def service(upstream) -> GeminiService:
    return GeminiService(transport=upstream.transport)


@pytest.fixture
def valid_request() -> dict:
    return {"imageBase64": "aGVsbG8=", "mimeType": "image/png", "pageRange": "15-17"}


@pytest.fixture
def client(settings, service):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_gemini_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
