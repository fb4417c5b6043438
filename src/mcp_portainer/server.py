"""MCP Portainer server implementation.

``PortainerMCPServer`` is the dispatcher: it owns the tool registry and routes
each call to its tool. ``create_mcp_app`` binds it to the low-level MCP SDK
server that speaks the protocol.
"""

from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError

from mcp_portainer.config import Config
from mcp_portainer.portainer.client import PortainerClient
from mcp_portainer.tools import ALL_TOOLS, BaseTool, ToolResult
from mcp_portainer.utils.errors import (
    MisconfigurationError,
    PortainerBridgeError,
    ToolNotFoundError,
)
from mcp_portainer.utils.logger import get_logger

logger = get_logger(__name__)

MISSING_TOKEN_MESSAGE = "PORTAINER_TOKEN not configured"


class PortainerMCPServer:
    """Dispatcher for Portainer tools.

    Holds no state between calls apart from the static tool registry and the
    configured HTTP client.
    """

    def __init__(self, config: Config, client: PortainerClient | None = None) -> None:
        """Initialize the server.

        Args:
            config: Bridge configuration
            client: Portainer client; built from ``config.portainer`` when omitted

        """
        self.config = config
        self.client = client or PortainerClient(config.portainer)
        self.tools: dict[str, BaseTool] = {}

        logger.info("Initializing MCP Portainer server")
        self._register_tools()
        logger.info(f"Registered {len(self.tools)} tools")

        if not config.portainer.has_token:
            logger.warning(
                f"{MISSING_TOKEN_MESSAGE}: every tool call will fail until PORTAINER_TOKEN is set"
            )

    def _register_tools(self) -> None:
        for tool_class in ALL_TOOLS:
            tool = tool_class(self.client)
            if tool.name in self.tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self.tools[tool.name] = tool
            logger.debug(f"Registered tool: {tool.name}")

    def list_tools(self) -> list[dict[str, Any]]:
        """List all tool descriptors.

        Returns:
            Tool definitions with name, description, inputSchema and annotations
        """
        return [tool.descriptor() for tool in self.tools.values()]

    async def call_tool(self, tool_name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Call a tool by name.

        Args:
            tool_name: Exact tool name
            arguments: Tool arguments

        Returns:
            Tool result

        Raises:
            MisconfigurationError: If the Portainer API key is not configured
            ToolNotFoundError: If no tool has this name
            PortainerBridgeError: Validation and remote failures from the tool
        """
        # Checked on every call; the server starts even without a token
        if not self.config.portainer.has_token:
            logger.error(f"Rejected call to '{tool_name}': {MISSING_TOKEN_MESSAGE}")
            raise MisconfigurationError(MISSING_TOKEN_MESSAGE)

        tool = self.tools.get(tool_name)
        if tool is None:
            logger.error(f"Tool not found: {tool_name}")
            raise ToolNotFoundError(tool_name)

        logger.info(f"Calling tool: {tool_name}")
        try:
            return await tool.run(arguments or {})
        except PortainerBridgeError as e:
            logger.error(f"Tool {tool_name} failed: {e}")
            raise

    async def check_connection(self) -> dict[str, Any]:
        """Verify that Portainer is reachable and the Docker API answers.

        Lists the Portainer endpoints, then reads Docker info from the
        configured endpoint, or the first listed one if the configured ID
        is not among them.

        Returns:
            Summary with the endpoints and the Docker info of the checked endpoint

        Raises:
            MisconfigurationError: If the API key is not configured
            PortainerBridgeError: If either request fails
        """
        if not self.config.portainer.has_token:
            raise MisconfigurationError(MISSING_TOKEN_MESSAGE)

        endpoints = BaseTool.check(await self.client.get("/api/endpoints")) or []
        endpoint_ids = [endpoint.get("Id") for endpoint in endpoints]
        endpoint_id = self.client.endpoint_id
        if endpoint_ids and endpoint_id not in endpoint_ids:
            logger.warning(
                f"Endpoint {endpoint_id} not found in Portainer, checking {endpoint_ids[0]}"
            )
            endpoint_id = endpoint_ids[0]

        info = BaseTool.check(
            await self.client.get(self.client.docker_path("info", endpoint_id=endpoint_id))
        )
        return {"endpoints": endpoints, "endpoint_id": endpoint_id, "docker_info": info or {}}

    async def start(self) -> None:
        """Start the server."""
        logger.info(
            f"Starting MCP Portainer server for {self.config.portainer.url} "
            f"(endpoint {self.config.portainer.endpoint_id})"
        )

    async def stop(self) -> None:
        """Stop the server and close the HTTP client."""
        logger.info("Stopping MCP Portainer server")
        await self.client.close()
        logger.info("MCP Portainer server stopped")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"PortainerMCPServer(tools={len(self.tools)}, client={self.client!r})"


def create_mcp_app(portainer_server: PortainerMCPServer) -> Server:
    """Create the MCP protocol server backed by a dispatcher.

    Args:
        portainer_server: Dispatcher handling the tool calls

    Returns:
        Low-level MCP server with ``tools/list`` and ``tools/call`` handlers
    """
    server_config = portainer_server.config.server
    app: Server = Server(server_config.server_name, version=server_config.server_version)

    @app.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=descriptor["name"],
                description=descriptor["description"],
                inputSchema=descriptor["inputSchema"],
                annotations=types.ToolAnnotations(**descriptor["annotations"]),
            )
            for descriptor in portainer_server.list_tools()
        ]

    # Registered without the call_tool decorator so McpError reaches the session
    # and the caller gets a JSON-RPC error carrying its code.
    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        try:
            result = await portainer_server.call_tool(
                request.params.name, request.params.arguments
            )
        except PortainerBridgeError as e:
            raise McpError(e.to_error_data()) from e
        content = [types.TextContent(type="text", text=block.text) for block in result.content]
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    app.request_handlers[types.CallToolRequest] = handle_call_tool

    return app
