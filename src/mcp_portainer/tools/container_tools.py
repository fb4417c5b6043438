"""Container tools: listing, inspection, logs, lifecycle actions and creation."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from mcp_portainer.tools.base import DESC_CONTAINER_ID, BaseTool, ToolInput, ToolResult
from mcp_portainer.utils.errors import PortainerBridgeError
from mcp_portainer.utils.formatting import (
    PLACEHOLDER,
    bullet_lines,
    format_ports,
    render_list,
    short_id,
    strip_slash,
)
from mcp_portainer.utils.logger import get_logger
from mcp_portainer.utils.safety import ConfirmationPolicy, OperationSafety
from mcp_portainer.utils.validation import (
    validate_container_ref,
    validate_env_entry,
    validate_port,
)

logger = get_logger(__name__)

ContainerAction = Literal["start", "stop", "restart", "pause", "unpause"]
RestartPolicy = Literal["no", "always", "unless-stopped", "on-failure"]


class ContainerRefInput(ToolInput):
    """Input naming a single container."""

    container_id: str = Field(description=DESC_CONTAINER_ID)

    @field_validator("container_id")
    @classmethod
    def check_container_id(cls, value: str) -> str:
        """Reject references that are not Docker IDs or names."""
        return validate_container_ref(value)


class ListContainersInput(ToolInput):
    """Input for listing containers."""

    all: bool = Field(default=True, description="Show all containers (including stopped)")


class ContainerLogsInput(ContainerRefInput):
    """Input for fetching container logs."""

    tail: int = Field(default=100, description="Number of lines to show from the end", gt=0)


class ContainerActionInput(ContainerRefInput):
    """Input for a container lifecycle action."""

    action: ContainerAction = Field(description="Action to perform")
    confirm: bool = Field(default=False, description="Confirmation for destructive actions")


class PortMapping(BaseModel):
    """Publish a container port on the host."""

    host: int = Field(description="Host port")
    container: int = Field(description="Container port")

    @field_validator("host", "container")
    @classmethod
    def check_port(cls, value: int) -> int:
        """Ports must be valid TCP ports."""
        return validate_port(value)


class VolumeMapping(BaseModel):
    """Bind-mount a host path into the container."""

    host: str = Field(description="Host path or volume name")
    container: str = Field(description="Path inside the container")


class CreateContainerInput(ToolInput):
    """Input for creating a container."""

    name: str = Field(description="Container name")
    image: str = Field(description="Docker image to use")
    env: list[str] = Field(
        default_factory=list, description="Environment variables (KEY=VALUE format)"
    )
    ports: list[PortMapping] = Field(default_factory=list, description="Port mappings")
    volumes: list[VolumeMapping] = Field(default_factory=list, description="Volume mappings")
    restart_policy: RestartPolicy = Field(default="unless-stopped", description="Restart policy")
    confirm: bool = Field(description="Confirmation to create container")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        """Container names follow Docker naming rules."""
        return validate_container_ref(value, label="Container name")

    @field_validator("env")
    @classmethod
    def check_env(cls, value: list[str]) -> list[str]:
        """Every entry must be KEY=VALUE."""
        return [validate_env_entry(entry) for entry in value]


def build_create_payload(input_data: CreateContainerInput) -> dict[str, Any]:
    """Build the Docker ``containers/create`` request body.

    Each port mapping declares an exposed ``<port>/tcp`` entry and a host
    binding for it; volume mappings become ``host:container`` bind strings.
    """
    exposed_ports: dict[str, dict[str, Any]] = {}
    port_bindings: dict[str, list[dict[str, str]]] = {}
    for mapping in input_data.ports:
        key = f"{mapping.container}/tcp"
        exposed_ports[key] = {}
        port_bindings[key] = [{"HostPort": str(mapping.host)}]

    return {
        "Image": input_data.image,
        "Env": list(input_data.env),
        "ExposedPorts": exposed_ports,
        "HostConfig": {
            "RestartPolicy": {"Name": input_data.restart_policy},
            "PortBindings": port_bindings,
            "Binds": [f"{volume.host}:{volume.container}" for volume in input_data.volumes],
        },
    }


def _summarize_container(container: dict[str, Any]) -> str:
    names = container.get("Names") or []
    container_id = short_id(container.get("Id"))
    name = strip_slash(names[0]) if names else container_id
    ports = format_ports(container.get("Ports"))
    return (
        f"📦 {name} ({container_id})\n"
        f"   Image: {container.get('Image', 'unknown')}\n"
        f"   Status: {container.get('Status', 'unknown')}\n"
        f"   State: {container.get('State', 'unknown')}\n"
        f"   Ports: {ports or PLACEHOLDER}\n"
    )


class ListContainersTool(BaseTool):
    """List containers on the Portainer endpoint."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "list_containers"

    @property
    def description(self) -> str:
        """Tool description."""
        return "List all containers on the Docker host"

    @property
    def input_schema(self) -> type[ListContainersInput]:
        """Input schema."""
        return ListContainersInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.SAFE

    async def execute(self, input_data: ListContainersInput) -> ToolResult:
        """List containers, including stopped ones unless ``all`` is false."""
        response = await self.client.get(
            self.client.docker_path("containers/json"), params={"all": input_data.all}
        )
        containers = self.check(response) or []

        logger.debug(f"Found {len(containers)} containers")
        blocks = [_summarize_container(container) for container in containers]
        return ToolResult.text(render_list(len(containers), "containers", blocks))


class ContainerInfoTool(BaseTool):
    """Show details of one container."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "container_info"

    @property
    def description(self) -> str:
        """Tool description."""
        return "Get detailed info about a specific container"

    @property
    def input_schema(self) -> type[ContainerRefInput]:
        """Input schema."""
        return ContainerRefInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.SAFE

    async def execute(self, input_data: ContainerRefInput) -> ToolResult:
        """Inspect the container and render its key settings."""
        response = await self.client.get(
            self.client.docker_path(f"containers/{input_data.container_id}/json")
        )
        info = self.check(response) or {}

        state = info.get("State") or {}
        config = info.get("Config") or {}
        host_config = info.get("HostConfig") or {}
        restart_policy = (host_config.get("RestartPolicy") or {}).get("Name") or PLACEHOLDER
        mounts = [
            f"{mount.get('Source', '?')} -> {mount.get('Destination', '?')}"
            for mount in info.get("Mounts") or []
        ]
        networks = list(((info.get("NetworkSettings") or {}).get("Networks") or {}).keys())

        text = (
            f"Container: {strip_slash(info.get('Name'))} ({short_id(info.get('Id'))})\n"
            f"State: {state.get('Status', 'unknown')}\n"
            f"Started: {state.get('StartedAt', 'unknown')}\n"
            f"Image: {config.get('Image', 'unknown')}\n"
            f"Restart Policy: {restart_policy}\n"
            f"Environment:\n{bullet_lines(config.get('Env'))}\n"
            f"Mounts:\n{bullet_lines(mounts)}\n"
            f"Networks: {', '.join(networks) or PLACEHOLDER}"
        )
        return ToolResult.text(text)


class ContainerLogsTool(BaseTool):
    """Fetch the tail of a container's logs."""

    @property
    def name(self) -> str:
        """Tool name."""
        return "container_logs"

    @property
    def description(self) -> str:
        """Tool description."""
        return "Get logs from a container"

    @property
    def input_schema(self) -> type[ContainerLogsInput]:
        """Input schema."""
        return ContainerLogsInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.SAFE

    async def execute(self, input_data: ContainerLogsInput) -> ToolResult:
        """Return combined stdout and stderr, unparsed."""
        response = await self.client.get(
            self.client.docker_path(f"containers/{input_data.container_id}/logs"),
            params={"stdout": True, "stderr": True, "tail": input_data.tail},
            raw=True,
        )
        logs = self.check(response) or ""
        return ToolResult.text(
            f"Logs for container {input_data.container_id} "
            f"(last {input_data.tail} lines):\n\n{logs}"
        )


class ContainerActionTool(BaseTool):
    """Run a lifecycle action (start, stop, restart, pause, unpause)."""

    confirmation_policy = ConfirmationPolicy.BY_ACTION

    @property
    def name(self) -> str:
        """Tool name."""
        return "container_action"

    @property
    def description(self) -> str:
        """Tool description."""
        return (
            "Perform action on container (start/stop/restart/pause/unpause). "
            "Stop and restart require confirm=true."
        )

    @property
    def input_schema(self) -> type[ContainerActionInput]:
        """Input schema."""
        return ContainerActionInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.DESTRUCTIVE

    async def execute(self, input_data: ContainerActionInput) -> ToolResult:
        """Send the action; success means Portainer accepted the request."""
        logger.info(f"Container {input_data.container_id}: {input_data.action}")
        response = await self.client.post(
            self.client.docker_path(f"containers/{input_data.container_id}/{input_data.action}")
        )
        self.check(response)
        return ToolResult.text(
            f"✅ Successfully performed '{input_data.action}' "
            f"on container {input_data.container_id}"
        )


class CreateContainerTool(BaseTool):
    """Create a container from an image and start it."""

    confirmation_policy = ConfirmationPolicy.ALWAYS
    idempotent = False

    @property
    def name(self) -> str:
        """Tool name."""
        return "create_container"

    @property
    def description(self) -> str:
        """Tool description."""
        return "Create a new container from an image and start it (requires confirm=true)"

    @property
    def input_schema(self) -> type[CreateContainerInput]:
        """Input schema."""
        return CreateContainerInput

    @property
    def safety_level(self) -> OperationSafety:
        """Safety level."""
        return OperationSafety.DESTRUCTIVE

    def confirmation_warning(self, input_data: Any) -> str:
        """Warning returned when confirm is not set."""
        return "⚠️ Creating a container requires confirmation. Please set confirm=true to proceed."

    async def execute(self, input_data: CreateContainerInput) -> ToolResult:
        """Create the container, then start it.

        A failed start is reported as an error and the created container is
        left in place (state ``created``); nothing is rolled back.
        """
        payload = build_create_payload(input_data)
        logger.info(f"Creating container '{input_data.name}' from image: {input_data.image}")

        created = self.check(
            await self.client.post(
                self.client.docker_path("containers/create"),
                json=payload,
                params={"name": input_data.name},
            )
        )
        container_id = (created or {}).get("Id")
        if not container_id:
            raise PortainerBridgeError(
                f"Portainer created container '{input_data.name}' but returned no container ID"
            )
        for warning in (created or {}).get("Warnings") or []:
            logger.warning(f"Docker warning for '{input_data.name}': {warning}")

        start_response = await self.client.post(
            self.client.docker_path(f"containers/{container_id}/start")
        )
        if not start_response.ok:
            logger.error(
                f"Container {short_id(container_id)} was created but failed to start; "
                "it is left in the 'created' state"
            )
        self.check(start_response)

        logger.info(f"Successfully created and started container: {container_id}")
        return ToolResult.text(
            f"✅ Container '{input_data.name}' created and started successfully!\n"
            f"ID: {short_id(container_id)}"
        )
