"""Volume tools."""

from typing import Any

from mcp_portainer.tools.base import BaseTool, ToolInput, ToolResult
from mcp_portainer.utils.formatting import render_list
from mcp_portainer.utils.safety import OperationSafety


class ListVolumesInput(ToolInput):
    """Input for listing volumes (no parameters)."""


def _summarize_volume(volume: dict[str, Any]) -> str:
    return (
        f"💾 {volume.get('Name', 'unknown')}\n"
        f"   Driver: {volume.get('Driver', 'unknown')}\n"
        f"   Mountpoint: {volume.get('Mountpoint', 'unknown')}\n"
    )


class ListVolumesTool(BaseTool):
    """List volumes on the Portainer endpoint."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "list_volumes"

    @property
    def description(self) -> str:
        """Tool description."""
        return "List all Docker volumes on the Docker host"

    @property
    def input_schema(self) -> type[ListVolumesInput]:
        """Input schema."""
        return ListVolumesInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.SAFE

    async def execute(self, input_data: ListVolumesInput) -> ToolResult:
        """List volumes; Docker wraps them in a ``Volumes`` key that may be null."""
        payload = self.check(await self.client.get(self.client.docker_path("volumes"))) or {}
        volumes = payload.get("Volumes") or []
        blocks = [_summarize_volume(volume) for volume in volumes]
        return ToolResult.text(render_list(len(volumes), "volumes", blocks))
