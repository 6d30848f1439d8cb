# ABOUTME: Global pytest configuration for all tests
# ABOUTME: Isolates tests from CHESS_CLIENT_* environment variables and provides a fake chess server

import os
import pytest
import httpx

from chess_client import GameClient


class FakeChessServer:
    """Scripted responses per path, served through httpx.MockTransport."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def respond(self, path, json_data=None, status_code=200, content=None, raises=None):
        self.routes[path] = (json_data, status_code, content, raises)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        json_data, status_code, content, raises = self.routes[request.url.path]
        if raises is not None:
            raise raises
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=json_data)


@pytest.fixture(autouse=True)
def isolate_client_environment(monkeypatch):
    """
    Remove CHESS_CLIENT_* variables so a developer's shell or .env file
    cannot leak into configuration tests. Tests that need a variable set
    it explicitly with monkeypatch.setenv.
    """
    for name in list(os.environ):
        if name.upper().startswith("CHESS_CLIENT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("chess_client.configuration.load_dotenv", lambda: False)


@pytest.fixture
def server():
    return FakeChessServer()


@pytest.fixture
def client(server):
    """GameClient pointed at the fake server."""
    return GameClient(
        base_url="http://chess.test:3030",
        timeout=5.0,
        transport=httpx.MockTransport(server.handler),
    )
