"""Portainer HTTP API access."""

from mcp_portainer.portainer.client import ApiResponse, PortainerClient

__all__ = ["ApiResponse", "PortainerClient"]
