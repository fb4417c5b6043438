"""Image tools."""

from typing import Any

from mcp_portainer.tools.base import BaseTool, ToolInput, ToolResult
from mcp_portainer.utils.formatting import bytes_to_mb, format_epoch_date, render_list, short_id
from mcp_portainer.utils.safety import OperationSafety


class ListImagesInput(ToolInput):
    """Input for listing images (no parameters)."""


def _summarize_image(image: dict[str, Any]) -> str:
    tags = image.get("RepoTags") or ["<none>"]
    return (
        f"🖼️  {', '.join(tags)}\n"
        f"   ID: {short_id(image.get('Id'))}\n"
        f"   Size: {bytes_to_mb(image.get('Size'))}\n"
        f"   Created: {format_epoch_date(image.get('Created'))}\n"
    )


class ListImagesTool(BaseTool):
    """List images on the Portainer endpoint."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "list_images"

    @property
    def description(self) -> str:
        """Tool description."""
        return "List all Docker images on the Docker host"

    @property
    def input_schema(self) -> type[ListImagesInput]:
        """Input schema."""
        return ListImagesInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.SAFE

    async def execute(self, input_data: ListImagesInput) -> ToolResult:
        """List images with size in MB and creation date."""
        images = self.check(await self.client.get(self.client.docker_path("images/json"))) or []
        blocks = [_summarize_image(image) for image in images]
        return ToolResult.text(render_list(len(images), "images", blocks))
