"""Configuration management for the MCP Portainer bridge."""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mcp_portainer.version import __version__


class PortainerConfig(BaseSettings):
    """Portainer API connection settings.

    Read from PORTAINER_URL, PORTAINER_TOKEN, PORTAINER_ENDPOINT_ID and friends,
    or from a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PORTAINER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:9000",
        description="Base URL of the Portainer server",
    )
    token: SecretStr | None = Field(
        default=None,
        description="Portainer API key, sent as the X-API-Key header",
    )
    endpoint_id: int = Field(
        default=1,
        description="Portainer environment (endpoint) ID that Docker requests are scoped to",
        gt=0,
    )
    timeout: float = Field(
        default=30.0,
        description="Timeout for Portainer API requests in seconds",
        gt=0,
    )
    verify_tls: bool = Field(
        default=True,
        description="Verify the TLS certificate of an https Portainer URL",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, url: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        url = url.strip()
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Portainer URL must start with http:// or https://, got: {url}")
        return url.rstrip("/")

    @field_validator("token", mode="before")
    @classmethod
    def blank_token_is_missing(cls, token: str | SecretStr | None) -> str | SecretStr | None:
        """Treat an empty PORTAINER_TOKEN the same as an unset one."""
        if isinstance(token, str) and not token.strip():
            return None
        return token

    @property
    def has_token(self) -> bool:
        """Whether an API key is configured."""
        return self.token is not None and bool(self.token.get_secret_value())


class ServerConfig(BaseSettings):
    """MCP server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = Field(
        default="mcp-portainer-bridge",
        description="MCP server name",
    )
    server_version: str = Field(
        default=__version__,
        description="MCP server version",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        description="Log format string for loguru",
    )
    json_logging: bool = Field(
        default=False,
        description="Enable JSON structured logging",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level_upper = level.upper()
        if level_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {level}. Must be one of {valid_levels}")
        return level_upper


class Config:
    """Main configuration container."""

    def __init__(self) -> None:
        """Initialize configuration from environment and .env file."""
        self.portainer = PortainerConfig()
        self.server = ServerConfig()

    def __repr__(self) -> str:
        """Return string representation of config (the token stays masked)."""
        return f"Config(portainer={self.portainer!r}, server={self.server!r})"
