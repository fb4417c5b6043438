"""Portainer API client.

A thin wrapper around ``httpx.AsyncClient`` preconfigured with the Portainer
base URL and API key. Requests never raise for HTTP or transport failures:
every call returns an ``ApiResponse`` that callers branch on explicitly.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from mcp_portainer.config import PortainerConfig
from mcp_portainer.utils.errors import (
    PortainerAPIError,
    PortainerBridgeError,
    PortainerConnectionError,
)
from mcp_portainer.utils.logger import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "X-API-Key"


class ApiResponse(BaseModel):
    """Outcome of a single Portainer request."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool = Field(description="Whether the request succeeded")
    data: Any = Field(default=None, description="Decoded JSON body, or text for raw requests")
    status_code: int | None = Field(default=None, description="HTTP status, if one was received")
    error: PortainerBridgeError | None = Field(
        default=None, description="Error describing the failure"
    )

    @classmethod
    def success(cls, data: Any, status_code: int) -> "ApiResponse":
        """Create a successful response."""
        return cls(ok=True, data=data, status_code=status_code)

    @classmethod
    def failure(cls, error: PortainerBridgeError, status_code: int | None = None) -> "ApiResponse":
        """Create a failed response."""
        return cls(ok=False, error=error, status_code=status_code)


def _decode(response: httpx.Response, raw: bool) -> Any:
    if raw:
        return response.text
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_body(response: httpx.Response) -> str:
    """Portainer error bodies are usually JSON; keep them verbatim."""
    return response.text or "<empty response>"


class PortainerClient:
    """Async HTTP client for one Portainer server and endpoint."""

    def __init__(
        self,
        config: PortainerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Portainer connection settings
            transport: Optional httpx transport (tests inject ``httpx.MockTransport``)

        """
        self.config = config
        headers = {}
        if config.token is not None:
            headers[API_KEY_HEADER] = config.token.get_secret_value()
        self._http = httpx.AsyncClient(
            base_url=config.url,
            headers=headers,
            timeout=config.timeout,
            verify=config.verify_tls,
            transport=transport,
        )
        logger.debug(
            f"Initialized PortainerClient for {config.url} (endpoint {config.endpoint_id})"
        )

    @property
    def endpoint_id(self) -> int:
        """Portainer endpoint the Docker requests are scoped to."""
        return self.config.endpoint_id

    def docker_path(self, path: str, endpoint_id: int | None = None) -> str:
        """Build the Docker proxy path for an endpoint.

        Example:
            >>> client.docker_path("containers/json")
            '/api/endpoints/1/docker/containers/json'
        """
        endpoint = self.endpoint_id if endpoint_id is None else endpoint_id
        return f"/api/endpoints/{endpoint}/docker/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        raw: bool = False,
    ) -> ApiResponse:
        """Send one request to Portainer.

        Args:
            method: HTTP method
            path: Path relative to the Portainer base URL
            params: Query parameters
            json: JSON request body
            raw: Return the body as text instead of decoding JSON

        Returns:
            ApiResponse describing the outcome

        """
        logger.debug(f"Portainer request: {method} {path} params={params}")
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Portainer request {method} {path} failed: {e}")
            return ApiResponse.failure(PortainerConnectionError(f"Portainer request failed: {e}"))

        if response.is_success:
            return ApiResponse.success(_decode(response, raw), response.status_code)

        body = _error_body(response)
        logger.error(f"Portainer returned {response.status_code} for {method} {path}: {body}")
        return ApiResponse.failure(
            PortainerAPIError(response.status_code, body), response.status_code
        )

    async def get(
        self, path: str, params: dict[str, Any] | None = None, raw: bool = False
    ) -> ApiResponse:
        """Send a GET request."""
        return await self.request("GET", path, params=params, raw=raw)

    async def post(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> ApiResponse:
        """Send a POST request."""
        return await self.request("POST", path, params=params, json=json)

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()
        logger.debug("Closed Portainer client")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"PortainerClient(url={self.config.url}, endpoint_id={self.endpoint_id})"
