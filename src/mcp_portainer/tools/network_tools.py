"""Network tools."""

from typing import Any

from mcp_portainer.tools.base import BaseTool, ToolInput, ToolResult
from mcp_portainer.utils.formatting import render_list, short_id
from mcp_portainer.utils.safety import OperationSafety


class ListNetworksInput(ToolInput):
    """Input for listing networks (no parameters)."""


def _summarize_network(network: dict[str, Any]) -> str:
    return (
        f"🌐 {network.get('Name', 'unknown')} ({short_id(network.get('Id'))})\n"
        f"   Driver: {network.get('Driver', 'unknown')}\n"
        f"   Scope: {network.get('Scope', 'unknown')}\n"
    )


class ListNetworksTool(BaseTool):
    """List networks on the Portainer endpoint."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "list_networks"

    @property
    def description(self) -> str:
        """Tool description."""
        return "List all Docker networks on the Docker host"

    @property
    def input_schema(self) -> type[ListNetworksInput]:
        """Input schema."""
        return ListNetworksInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.SAFE

    async def execute(self, input_data: ListNetworksInput) -> ToolResult:
        networks = self.check(await self.client.get(self.client.docker_path("networks"))) or []
        blocks = [_summarize_network(network) for network in networks]
        return ToolResult.text(render_list(len(networks), "networks", blocks))
