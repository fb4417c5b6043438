"""Logging configuration using loguru."""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from mcp_portainer.config import ServerConfig


def _sink_options(config: ServerConfig) -> dict[str, Any]:
    """Options shared by the stderr and file sinks."""
    if config.json_logging:
        # Tracebacks keep their frames but not local variables (may hold the API key)
        return {"level": config.log_level, "serialize": True, "backtrace": True, "diagnose": False}
    return {
        "level": config.log_level,
        "format": config.log_format,
        "backtrace": True,
        "diagnose": True,
    }


def setup_logger(config: ServerConfig, log_file: Path | None = None) -> None:
    """Configure loguru for the bridge.

    Logs always go to stderr because stdout carries the MCP stdio transport.
    Human-readable output is the default; ``MCP_JSON_LOGGING=true`` switches
    both sinks to JSON lines.

    Args:
        config: Server configuration
        log_file: Optional path to a rotating log file

    """
    logger.remove()

    options = _sink_options(config)
    logger.add(sys.stderr, colorize=not config.json_logging, **options)

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            **options,
        )

    logger.info(f"Logger initialized with level: {config.log_level}")
    logger.info(f"JSON logging: {'enabled' if config.json_logging else 'disabled'}")
    if log_file:
        logger.info(f"Logging to file: {log_file}")


def get_logger(name: str | None = None) -> Any:  # noqa: ARG001
    """Get a logger instance.

    Args:
        name: Optional module name (kept for call-site symmetry, loguru ignores it)

    Returns:
        Loguru logger instance

    """
    return logger
