"""Safety classification and the destructive-action confirmation gate."""

from enum import Enum
from typing import Any

# Substrings that mark an action as destructive
DESTRUCTIVE_MARKERS = ("remove", "delete", "stop", "restart", "kill", "prune")


class OperationSafety(str, Enum):
    """Classification of operation safety levels."""

    SAFE = "safe"  # Read-only operations (list, inspect, logs)
    MODERATE = "moderate"  # State-changing but reversible (start, pause)
    DESTRUCTIVE = "destructive"  # Can take workloads down (stop, create, deploy)


class ConfirmationPolicy(str, Enum):
    """When a tool must be called with ``confirm=true`` before it runs."""

    NEVER = "never"
    BY_ACTION = "by_action"  # Gated when the requested action looks destructive
    ALWAYS = "always"


def requires_confirmation(action: str) -> bool:
    """Check whether an action name is destructive.

    This is a case-insensitive substring test, so ``force-stop`` matches
    ``stop`` while ``unpause`` matches nothing.

    Args:
        action: Action name, e.g. ``restart``

    Returns:
        True if the action contains one of DESTRUCTIVE_MARKERS

    """
    lowered = action.lower()
    return any(marker in lowered for marker in DESTRUCTIVE_MARKERS)


def get_tool_annotations(safety_level: OperationSafety, idempotent: bool) -> dict[str, Any]:
    """Get MCP tool annotations for a safety level.

    Args:
        safety_level: The safety level of the operation
        idempotent: Whether repeating the call leaves the host in the same state

    Returns:
        Dictionary of MCP annotation hints

    Example:
        >>> get_tool_annotations(OperationSafety.SAFE, True)
        {'readOnlyHint': True, 'destructiveHint': False, 'idempotentHint': True}
    """
    return {
        "readOnlyHint": safety_level == OperationSafety.SAFE,
        "destructiveHint": safety_level == OperationSafety.DESTRUCTIVE,
        "idempotentHint": idempotent,
    }
