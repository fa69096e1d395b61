"""Shared fixtures for proxy tests."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, CorsSettings, UpstreamSettings

PRODUCTION_ORIGIN = "https://runllm.pages.dev"
PREVIEW_ORIGIN = "https://feature-x.runllm.pages.dev"
EVIL_ORIGIN = "https://evil.example.com"


class RecordingLogger:
    """RequestLogger that keeps everything in memory."""

    def __init__(self):
        self.requests: list[tuple[str, str, str | None]] = []
        self.responses: list[tuple[str, str | None, int]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_request(self, method, path, origin, headers):
        self.requests.append((method, path, origin))

    def log_response(self, method, origin, status):
        self.responses.append((method, origin, status))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


@pytest.fixture
def config() -> Config:
    return Config(
        upstream=UpstreamSettings(pod_id="abc123", api_key="rp-secret-key-0001", timeout=5.0),
        cors=CorsSettings(mode="pattern"),
    )


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def upstream_calls() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(logger, upstream_calls):
    """Build a TestClient whose upstream answers via the given handler."""
    clients = []

    def factory(config: Config, handler=None) -> TestClient:
        def record(request: httpx.Request) -> httpx.Response:
            upstream_calls.append(request)
            if handler is None:
                return httpx.Response(200, text='{"message":"hi"}')
            return handler(request)

        app = create_app(config, logger, transport=httpx.MockTransport(record))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)
