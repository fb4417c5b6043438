"""Utility modules for the MCP Portainer bridge."""

from mcp_portainer.utils.errors import (
    MisconfigurationError,
    PortainerAPIError,
    PortainerBridgeError,
    PortainerConnectionError,
    ToolNotFoundError,
    ValidationError,
)
from mcp_portainer.utils.logger import get_logger, setup_logger
from mcp_portainer.utils.safety import OperationSafety, requires_confirmation

__all__ = [
    "MisconfigurationError",
    "OperationSafety",
    "PortainerAPIError",
    "PortainerBridgeError",
    "PortainerConnectionError",
    "ToolNotFoundError",
    "ValidationError",
    "get_logger",
    "requires_confirmation",
    "setup_logger",
]
