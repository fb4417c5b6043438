"""MCP server exposing Docker management on a Portainer host as tools."""

from mcp_portainer.version import __version__

__all__ = ["__version__"]
