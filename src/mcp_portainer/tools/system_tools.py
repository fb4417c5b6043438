"""System tools."""

from mcp_portainer.tools.base import BaseTool, ToolInput, ToolResult
from mcp_portainer.utils.formatting import bytes_to_gb
from mcp_portainer.utils.safety import OperationSafety


class SystemInfoInput(ToolInput):
    """Input for system info (no parameters)."""


class SystemInfoTool(BaseTool):
    """Summarize the Docker engine behind the Portainer endpoint."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "system_info"

    @property
    def description(self) -> str:
        """Tool description."""
        return "Get Docker system information"

    @property
    def input_schema(self) -> type[SystemInfoInput]:
        """Input schema."""
        return SystemInfoInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.SAFE

    async def execute(self, input_data: SystemInfoInput) -> ToolResult:
        """Render version, platform, resources and object counts."""
        info = self.check(await self.client.get(self.client.docker_path("info"))) or {}
        text = (
            "Docker System Information:\n\n"
            f"🖥️  Server Version: {info.get('ServerVersion', 'unknown')}\n"
            f"🐧 OS: {info.get('OperatingSystem', 'unknown')}\n"
            f"🏗️  Architecture: {info.get('Architecture', 'unknown')}\n"
            f"💾 Total Memory: {bytes_to_gb(info.get('MemTotal'))}\n"
            f"🧮 CPUs: {info.get('NCPU', 'unknown')}\n"
            f"📦 Containers: {info.get('Containers', 0)} "
            f"(Running: {info.get('ContainersRunning', 0)})\n"
            f"🖼️  Images: {info.get('Images', 0)}\n"
            f"💿 Storage Driver: {info.get('Driver', 'unknown')}\n"
            f"📂 Docker Root: {info.get('DockerRootDir', 'unknown')}"
        )
        return ToolResult.text(text)
