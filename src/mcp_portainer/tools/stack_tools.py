"""Stack tools: deploy a docker-compose stack through Portainer."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from mcp_portainer.tools.base import BaseTool, ToolInput, ToolResult
from mcp_portainer.utils.logger import get_logger
from mcp_portainer.utils.safety import ConfirmationPolicy, OperationSafety
from mcp_portainer.utils.validation import validate_stack_name

logger = get_logger(__name__)

STACKS_PATH = "/api/stacks"
# Portainer stack type 2 is a docker-compose (standalone) stack
COMPOSE_STACK_TYPE = 2


class StackEnvVar(BaseModel):
    """One stack environment variable."""

    name: str = Field(description="Variable name")
    value: str = Field(description="Variable value")


class DeployStackInput(ToolInput):
    """Input for deploying a stack."""

    name: str = Field(description="Stack name")
    compose_content: str = Field(description="Docker compose file content (YAML)")
    env: list[StackEnvVar] = Field(
        default_factory=list, description="Environment variables for the stack"
    )
    confirm: bool = Field(description="Confirmation to deploy stack")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        """Stack names cannot be blank."""
        return validate_stack_name(value)


def build_stack_payload(input_data: DeployStackInput) -> dict[str, Any]:
    """Build the Portainer stack-creation request body."""
    return {
        "Name": input_data.name,
        "StackFileContent": input_data.compose_content,
        "Env": [var.model_dump() for var in input_data.env],
    }


class DeployStackTool(BaseTool):
    """Deploy a compose stack on the Portainer endpoint."""

    confirmation_policy = ConfirmationPolicy.ALWAYS
    idempotent = False

    @property
    def name(self) -> str:
        """Tool name."""
        return "deploy_stack"

    @property
    def description(self) -> str:
        """Tool description."""
        return "Deploy a docker-compose stack (requires confirm=true)"

    @property
    def input_schema(self) -> type[DeployStackInput]:
        """Input schema."""
        return DeployStackInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.DESTRUCTIVE

    def confirmation_warning(self, input_data: Any) -> str:
        """Warning returned when confirm is not set."""
        return "⚠️ Deploying a stack requires confirmation. Please set confirm=true to proceed."

    async def execute(self, input_data: DeployStackInput) -> ToolResult:
        """Create the stack from the compose text in one request."""
        logger.info(f"Deploying stack '{input_data.name}' to endpoint {self.client.endpoint_id}")
        response = await self.client.post(
            STACKS_PATH,
            json=build_stack_payload(input_data),
            params={
                "endpointId": self.client.endpoint_id,
                "method": "string",
                "type": COMPOSE_STACK_TYPE,
            },
        )
        stack = self.check(response) or {}
        return ToolResult.text(
            f"✅ Stack '{input_data.name}' deployed successfully!\n"
            f"Stack ID: {stack.get('Id', 'unknown')}"
        )
