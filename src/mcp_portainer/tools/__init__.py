"""Tool implementations for the MCP Portainer bridge.

Organization:
- container_tools.py: container listing, inspection, logs, actions, creation
- image_tools.py, volume_tools.py, network_tools.py: read-only listings
- system_tools.py: Docker engine information
- stack_tools.py: compose stack deployment
"""

from mcp_portainer.tools.base import BaseTool, ToolResult
from mcp_portainer.tools.container_tools import (
    ContainerActionTool,
    ContainerInfoTool,
    ContainerLogsTool,
    CreateContainerTool,
    ListContainersTool,
)
from mcp_portainer.tools.image_tools import ListImagesTool
from mcp_portainer.tools.network_tools import ListNetworksTool
from mcp_portainer.tools.stack_tools import DeployStackTool
from mcp_portainer.tools.system_tools import SystemInfoTool
from mcp_portainer.tools.volume_tools import ListVolumesTool

# Registration order is the order tools are listed to clients
ALL_TOOLS: tuple[type[BaseTool], ...] = (
    ListContainersTool,
    ContainerInfoTool,
    ContainerLogsTool,
    ContainerActionTool,
    CreateContainerTool,
    ListImagesTool,
    ListVolumesTool,
    ListNetworksTool,
    SystemInfoTool,
    DeployStackTool,
)

__all__ = ["ALL_TOOLS", "BaseTool", "ToolResult"]
