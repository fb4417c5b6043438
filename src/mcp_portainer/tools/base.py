"""Base tool class and abstractions for Portainer tools."""

from abc import ABC, abstractmethod
from typing import Any, Literal

import pydantic
from loguru import logger
from pydantic import BaseModel, Field

from mcp_portainer.portainer.client import ApiResponse, PortainerClient
from mcp_portainer.utils.errors import ValidationError
from mcp_portainer.utils.safety import (
    ConfirmationPolicy,
    OperationSafety,
    get_tool_annotations,
    requires_confirmation,
)

DESC_CONTAINER_ID = "Container ID or name"


class ToolInput(BaseModel):
    """Base input model for tools."""

    model_config = {"extra": "forbid"}


class TextContent(BaseModel):
    """A single block of text returned to the caller."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result of a tool call: an ordered sequence of text blocks."""

    content: list[TextContent] = Field(default_factory=list)

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        """Create a result holding one text block."""
        return cls(content=[TextContent(text=text)])

    @property
    def full_text(self) -> str:
        """All text blocks joined, mainly useful in logs and tests."""
        return "\n".join(block.text for block in self.content)


class BaseTool(ABC):
    """Base class for all Portainer tools.

    Subclasses declare their metadata and input model and implement
    ``execute``. ``run`` validates the arguments and applies the confirmation
    gate before ``execute`` is reached.
    """

    confirmation_policy: ConfirmationPolicy = ConfirmationPolicy.NEVER
    idempotent: bool = True

    def __init__(self, client: PortainerClient) -> None:
        """Initialize the tool.

        Args:
            client: Portainer API client

        """
        self.client = client
        logger.debug(f"Initialized tool: {self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name used in MCP protocol."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description for MCP protocol."""

    @property
    @abstractmethod
    def input_schema(self) -> type[ToolInput]:
        """Pydantic model for input validation."""

    @property
    @abstractmethod
    def safety_level(self) -> OperationSafety:
        """Safety classification of this tool."""

    def descriptor(self) -> dict[str, Any]:
        """Tool definition for the MCP ``tools/list`` response."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema.model_json_schema(),
            "annotations": get_tool_annotations(self.safety_level, self.idempotent),
        }

    def confirmation_subject(self, input_data: Any) -> str:
        """Name of the action being confirmed, used in the warning text."""
        return getattr(input_data, "action", self.name)

    def needs_confirmation(self, input_data: Any) -> bool:
        """Check whether this call must carry ``confirm=true`` to proceed."""
        if self.confirmation_policy == ConfirmationPolicy.ALWAYS:
            return True
        if self.confirmation_policy == ConfirmationPolicy.BY_ACTION:
            return requires_confirmation(self.confirmation_subject(input_data))
        return False

    def confirmation_warning(self, input_data: Any) -> str:
        """Text returned instead of running an unconfirmed destructive call."""
        return (
            f"⚠️ This action ({self.confirmation_subject(input_data)}) requires confirmation. "
            "Please set confirm=true to proceed."
        )

    def validate_arguments(self, arguments: dict[str, Any]) -> Any:
        """Validate raw arguments against the input model.

        Raises:
            ValidationError: If the arguments do not match the schema

        """
        try:
            return self.input_schema.model_validate(arguments)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid arguments for '{self.name}': {e}") from e

    @staticmethod
    def check(response: ApiResponse) -> Any:
        """Return the payload of a successful response.

        Raises:
            PortainerBridgeError: The error carried by a failed response

        """
        if not response.ok:
            assert response.error is not None  # failure() always sets the error
            raise response.error
        return response.data

    @abstractmethod
    async def execute(self, input_data: Any) -> ToolResult:
        """Execute the tool with validated arguments.

        Args:
            input_data: Validated input data (instance of ``input_schema``)

        Returns:
            Tool result rendered as text

        """

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Validate, apply the confirmation gate, then execute.

        Args:
            arguments: Raw tool arguments

        Returns:
            Tool result; a warning result when confirmation is withheld

        Raises:
            PortainerBridgeError: Validation or remote failures

        """
        input_data = self.validate_arguments(arguments)

        if self.needs_confirmation(input_data) and not getattr(input_data, "confirm", False):
            logger.warning(f"Tool '{self.name}' called without confirmation, nothing was done")
            return ToolResult.text(self.confirmation_warning(input_data))

        logger.info(f"Executing tool '{self.name}' with safety level: {self.safety_level.value}")
        result = await self.execute(input_data)
        logger.success(f"Tool '{self.name}' completed successfully")
        return result

    def __repr__(self) -> str:
        """Return string representation."""
        return f"{self.__class__.__name__}(name={self.name}, safety={self.safety_level.value})"
