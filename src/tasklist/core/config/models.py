"""
Configuration data models for tasklist.

These models define the structure of .tasklist.json and
~/.config/tasklist/config.json files, with validation via Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerConfig(BaseModel):
    """HTTP server settings used by `tasklist serve`."""
    host: str = Field(
        default="127.0.0.1",
        description="Interface to bind the server to"
    )
    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port to listen on"
    )
    cors_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the API from a browser"
    )


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class LoggingConfig(BaseModel):
    """
    Logging settings.

    The level is a standard logging level name (DEBUG, INFO, ...).
    """
    level: str = Field(
        default="INFO",
        description="Root log level"
    )
    log_requests: bool = Field(
        default=True,
        description="Log one line per /api request with status and duration"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


class StorageConfig(BaseModel):
    """Which storage backend the API uses."""
    backend: str = Field(
        default="memory",
        description="Registered storage backend name"
    )


class TasklistConfig(BaseModel):
    """
    Top-level tasklist configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = TasklistConfig(server=ServerConfig(port=8080))
        >>> config.server.port
        8080
    """
    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="HTTP server settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Storage backend settings"
    )

    model_config = ConfigDict(
        extra="ignore",
    )
