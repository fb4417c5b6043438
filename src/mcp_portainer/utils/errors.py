"""Custom exceptions for the MCP Portainer bridge.

Every exception carries the JSON-RPC error code it is reported with, so the
transport layer can turn it into an MCP error without inspecting its type.
"""

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class PortainerBridgeError(Exception):
    """Base exception for all bridge errors."""

    code: int = INTERNAL_ERROR

    def to_error_data(self) -> ErrorData:
        """Build the MCP error payload for this exception."""
        return ErrorData(code=self.code, message=str(self))


class MisconfigurationError(PortainerBridgeError):
    """Raised when the bridge is missing required configuration (the API key)."""


class ToolNotFoundError(PortainerBridgeError):
    """Raised when a tool name is not in the registry."""

    code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ValidationError(PortainerBridgeError):
    """Raised when tool arguments fail validation."""

    code = INVALID_PARAMS


class PortainerAPIError(PortainerBridgeError):
    """Raised when Portainer answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Portainer API error: {status_code} - {body}")


class PortainerConnectionError(PortainerBridgeError):
    """Raised when Portainer cannot be reached at all."""
