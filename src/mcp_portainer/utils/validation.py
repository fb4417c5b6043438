"""Input validation utilities for tool arguments."""

import re

from mcp_portainer.utils.errors import ValidationError

# Docker naming pattern; IDs are hex so they match it as well
CONTAINER_REF_PATTERN = re.compile(r"^/?[a-zA-Z0-9][a-zA-Z0-9_.-]*\Z")
ENV_KEY_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_.-]*\Z")

MAX_CONTAINER_NAME_LENGTH = 255
MAX_STACK_NAME_LENGTH = 255

MIN_PORT = 1
MAX_PORT = 65535


def validate_container_ref(ref: str, label: str = "Container ID or name") -> str:
    """Validate a container ID or name before it is placed in a URL path.

    Args:
        ref: Container ID or name
        label: Human-readable name of the argument for error messages

    Returns:
        The reference with any leading slash removed

    Raises:
        ValidationError: If the reference is empty or malformed

    """
    if not ref:
        raise ValidationError(f"{label} cannot be empty")

    if len(ref) > MAX_CONTAINER_NAME_LENGTH:
        raise ValidationError(f"{label} cannot exceed {MAX_CONTAINER_NAME_LENGTH} characters")

    if not CONTAINER_REF_PATTERN.match(ref):
        raise ValidationError(
            f"Invalid {label.lower()}: {ref}. "
            "Must contain only alphanumeric characters, underscores, periods, and hyphens. "
            "Cannot start with a hyphen or period."
        )

    return ref.lstrip("/")


def validate_port(port: int) -> int:
    """Validate a TCP port number."""
    if not MIN_PORT <= port <= MAX_PORT:
        raise ValidationError(f"Port must be between {MIN_PORT} and {MAX_PORT}, got {port}")
    return port


def validate_env_entry(entry: str) -> str:
    """Validate a ``KEY=VALUE`` environment entry.

    Raises:
        ValidationError: If the entry has no ``=`` or an invalid key

    """
    key, sep, _ = entry.partition("=")
    if not sep:
        raise ValidationError(f"Environment variable must use KEY=VALUE format: {entry}")
    if not ENV_KEY_PATTERN.match(key):
        raise ValidationError(f"Invalid environment variable name: {key!r}")
    return entry


def validate_stack_name(name: str) -> str:
    """Validate a stack name."""
    name = name.strip()
    if not name:
        raise ValidationError("Stack name cannot be empty")
    if len(name) > MAX_STACK_NAME_LENGTH:
        raise ValidationError(f"Stack name cannot exceed {MAX_STACK_NAME_LENGTH} characters")
    return name
