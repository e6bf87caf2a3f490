"""Shared fixtures for DualText Translator tests."""

import json
from typing import Any, Callable, List

import httpx
import pytest

from dualtext.config import AppConfig


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def json_response(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Handler answering every request with the given JSON payload."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"),
                              headers={"Content-Type": "application/json"})
    return handler


@pytest.fixture
def bonjour_transport():
    """Transport answering with a well-formed translation."""
    return RecordingTransport(json_response({"translations": [{"text": "Bonjour"}]}))


@pytest.fixture
def app_config(tmp_path):
    """Application config writing settings under a temporary directory."""
    return AppConfig(settings_file=str(tmp_path / "settings.yaml"))
