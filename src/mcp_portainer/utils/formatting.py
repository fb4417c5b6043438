"""Helpers for turning Docker API payloads into display text."""

from datetime import datetime
from typing import Any

SHORT_ID_LENGTH = 12
BYTES_PER_MB = 1024 * 1024
BYTES_PER_GB = 1024 * 1024 * 1024

PLACEHOLDER = "none"
UNKNOWN = "unknown"


def short_id(full_id: str | None) -> str:
    """Return the 12 character short form of a Docker ID.

    A ``sha256:`` style digest prefix is dropped first, so image IDs shorten
    the same way the Docker CLI shows them.
    """
    if not full_id:
        return UNKNOWN
    _, _, digest = full_id.rpartition(":")
    return digest[:SHORT_ID_LENGTH]


def strip_slash(name: str | None) -> str:
    """Remove the leading ``/`` Docker puts in front of container names."""
    if not name:
        return UNKNOWN
    return name[1:] if name.startswith("/") else name


def format_port(port: dict[str, Any]) -> str:
    """Format one port entry as ``public:private`` or bare ``private``."""
    private = port.get("PrivatePort", "?")
    public = port.get("PublicPort")
    return f"{public}:{private}" if public else f"{private}"


def format_ports(ports: list[dict[str, Any]] | None) -> str:
    """Join a container's port entries, or return an empty string."""
    return ", ".join(format_port(port) for port in ports or [])


def bytes_to_mb(size: float | None) -> str:
    """Format a byte count in MB with two decimals."""
    return f"{(size or 0) / BYTES_PER_MB:.2f} MB"


def bytes_to_gb(size: float | None) -> str:
    """Format a byte count in GB with two decimals."""
    return f"{(size or 0) / BYTES_PER_GB:.2f} GB"


def format_epoch_date(timestamp: float | None) -> str:
    """Format epoch seconds as a date in the current locale."""
    if timestamp is None:
        return UNKNOWN
    return datetime.fromtimestamp(timestamp).strftime("%x")


def bullet_lines(items: list[str] | None, placeholder: str = PLACEHOLDER) -> str:
    """Render items one per line as ``  - item``, or an indented placeholder."""
    if not items:
        return f"  {placeholder}"
    return "\n".join(f"  - {item}" for item in items)


def render_list(count: int, noun: str, blocks: list[str]) -> str:
    """Render ``Found N <noun>:`` followed by one block per item."""
    header = f"Found {count} {noun}:"
    if not blocks:
        return header
    return f"{header}\n\n" + "\n".join(blocks)
