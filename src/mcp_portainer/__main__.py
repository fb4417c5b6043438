"""MCP Portainer bridge entry point.

Serves the Portainer tools over MCP stdio, or checks the Portainer connection
with ``--check``.
"""

import asyncio
import os
from pathlib import Path
from typing import Any

import typer
from mcp.server.stdio import stdio_server

from mcp_portainer.config import Config
from mcp_portainer.server import PortainerMCPServer, create_mcp_app
from mcp_portainer.utils.errors import PortainerBridgeError
from mcp_portainer.utils.logger import get_logger, setup_logger
from mcp_portainer.version import __version__

SHUTDOWN_COMPLETE_MSG = "MCP server shutdown complete"


async def run_stdio(portainer_server: PortainerMCPServer) -> None:
    """Serve MCP over stdio until the client disconnects."""
    logger = get_logger(__name__)
    mcp_app = create_mcp_app(portainer_server)

    await portainer_server.start()
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP Portainer bridge running on stdio")
            await mcp_app.run(
                read_stream,
                write_stream,
                mcp_app.create_initialization_options(),
            )
    finally:
        await portainer_server.stop()
        logger.info(SHUTDOWN_COMPLETE_MSG)


async def run_check(portainer_server: PortainerMCPServer) -> dict[str, Any]:
    """Run the connection check and always close the client."""
    try:
        return await portainer_server.check_connection()
    finally:
        await portainer_server.stop()


def print_check_report(config: Config, report: dict[str, Any]) -> None:
    """Print a connection check summary to stdout."""
    typer.echo("✅ Connected successfully!")
    typer.echo(f"Found {len(report['endpoints'])} endpoint(s)")
    for endpoint in report["endpoints"]:
        typer.echo(
            f"   - ID: {endpoint.get('Id')}, Name: {endpoint.get('Name')}, "
            f"Type: {endpoint.get('Type')}"
        )
    info = report["docker_info"]
    typer.echo(f"Docker API on endpoint {report['endpoint_id']}:")
    typer.echo(f"   Docker version: {info.get('ServerVersion', 'unknown')}")
    typer.echo(f"   Containers: {info.get('Containers', 0)}")
    typer.echo(f"   Images: {info.get('Images', 0)}")
    if report["endpoint_id"] != config.portainer.endpoint_id:
        typer.echo(
            f"⚠️ PORTAINER_ENDPOINT_ID={config.portainer.endpoint_id} was not found; "
            f"set it to {report['endpoint_id']}"
        )


app = typer.Typer(
    name="mcp-portainer",
    help="MCP server for Docker management through Portainer",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mcp-portainer {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(  # noqa: B008
    check: bool = typer.Option(
        False,
        "--check",
        help="Test the Portainer connection and exit",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file (defaults to $MCP_PORTAINER_LOG_PATH)",
    ),
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Run the MCP Portainer bridge."""
    config = Config()

    if log_file is None and os.getenv("MCP_PORTAINER_LOG_PATH"):
        log_file = Path(os.environ["MCP_PORTAINER_LOG_PATH"])
    setup_logger(config.server, log_file)

    logger = get_logger(__name__)
    logger.info(f"MCP Portainer bridge v{__version__}")
    logger.info(f"Configuration: {config}")

    portainer_server = PortainerMCPServer(config)

    if check:
        typer.echo(f"Testing Portainer connection at {config.portainer.url}...")
        typer.echo(f"Token: {'✓ Set' if config.portainer.has_token else '✗ Not set'}")
        try:
            report = asyncio.run(run_check(portainer_server))
        except PortainerBridgeError as e:
            typer.echo(f"❌ Connection test failed: {e}", err=True)
            raise typer.Exit(code=1) from e
        print_check_report(config, report)
        return

    try:
        asyncio.run(run_stdio(portainer_server))
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        raise


if __name__ == "__main__":
    app()
