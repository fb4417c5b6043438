"""Pytest configuration and shared fixtures."""

import json
from typing import Any

import httpx
import pytest

from mcp_portainer.config import Config, PortainerConfig, ServerConfig
from mcp_portainer.portainer.client import PortainerClient
from mcp_portainer.server import PortainerMCPServer
from mcp_portainer.version import __version__

PORTAINER_URL = "http://portainer.test:9000"
TEST_TOKEN = "ptr_test_token"
DOCKER_PREFIX = "/api/endpoints/1/docker"


class FakePortainer:
    """In-memory Portainer API served through ``httpx.MockTransport``.

    Routes are keyed by method and path. Every request is recorded so tests
    can assert on the number, order and content of remote calls.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response | Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status_code: int = 200,
        text: str | None = None,
    ) -> None:
        """Register the response for a route."""
        if text is not None:
            response = httpx.Response(status_code, text=text)
        elif json_body is not None:
            response = httpx.Response(status_code, json=json_body)
        else:
            response = httpx.Response(status_code)
        self.routes[(method, path)] = response

    def fail(self, method: str, path: str, error: Exception) -> None:
        """Make a route raise a transport error."""
        self.routes[(method, path)] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.url.path}"})
        if isinstance(route, Exception):
            raise route
        return route

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def calls(self) -> list[tuple[str, str]]:
        """Method and path of every recorded request, in order."""
        return [(request.method, request.url.path) for request in self.requests]

    def body(self, index: int) -> Any:
        """Decoded JSON body of the request at ``index``."""
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_portainer() -> FakePortainer:
    """Create an empty fake Portainer API."""
    return FakePortainer()


@pytest.fixture
def portainer_config() -> PortainerConfig:
    """Create test Portainer configuration."""
    return PortainerConfig(url=PORTAINER_URL, token=TEST_TOKEN, endpoint_id=1)


@pytest.fixture
def server_config() -> ServerConfig:
    """Create test server configuration."""
    return ServerConfig(
        server_name="mcp-portainer-test",
        server_version=__version__,
        log_level="DEBUG",
    )


def make_config(portainer_config: PortainerConfig, server_config: ServerConfig) -> Config:
    """Assemble a Config without reading the environment."""
    test_config = Config.__new__(Config)
    test_config.portainer = portainer_config
    test_config.server = server_config
    return test_config


@pytest.fixture
def config(portainer_config: PortainerConfig, server_config: ServerConfig) -> Config:
    """Create complete test configuration."""
    return make_config(portainer_config, server_config)


@pytest.fixture
def unconfigured_config(server_config: ServerConfig) -> Config:
    """Configuration without an API key."""
    return make_config(PortainerConfig(url=PORTAINER_URL, token=None), server_config)


@pytest.fixture
def client(portainer_config: PortainerConfig, fake_portainer: FakePortainer) -> PortainerClient:
    """Portainer client wired to the fake API."""
    return PortainerClient(portainer_config, transport=fake_portainer.transport)


@pytest.fixture
def server(config: Config, client: PortainerClient) -> PortainerMCPServer:
    """Dispatcher wired to the fake API."""
    return PortainerMCPServer(config, client=client)


@pytest.fixture
def unconfigured_server(
    unconfigured_config: Config, fake_portainer: FakePortainer
) -> PortainerMCPServer:
    """Dispatcher without an API key, still wired to the fake API."""
    unconfigured_client = PortainerClient(
        unconfigured_config.portainer, transport=fake_portainer.transport
    )
    return PortainerMCPServer(unconfigured_config, client=unconfigured_client)
