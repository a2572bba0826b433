"""Configuration management for dockhand.

Settings are read from the environment (and an optional ``.env`` file).
Fields are declared flat on ``Settings`` and also exposed as groups:

Usage:
    from dockhand.config import settings

    # Grouped access
    settings.docker.timeout
    settings.logging.level

    # Flat access
    settings.docker_timeout
    settings.log_level
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .docker import DockerConfig
from .logging import LoggingConfig


class Settings(BaseSettings):
    """Library settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Docker engine connection
    docker_base_url: str | None = Field(
        default=None,
        description="Engine URL (unix://, tcp://, ssh://). Unset means use DOCKER_HOST",
    )
    docker_timeout: int = Field(default=60, ge=1, description="API call timeout in seconds")
    docker_api_version: str = Field(default="auto")

    # Container lifecycle
    docker_stop_timeout: int | None = Field(
        default=None,
        ge=0,
        description="Seconds to wait before killing on stop (unset = engine default)",
    )
    docker_remove_on_start_failure: bool = Field(
        default=True,
        description="Remove a created container when starting it fails",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")
    log_file: str | None = Field(default=None)
    log_max_size_mb: int = Field(default=100, ge=1)
    log_backup_count: int = Field(default=5, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("docker_base_url")
    @classmethod
    def validate_docker_base_url(cls, v):
        """Reject engine URLs with an unsupported scheme."""
        if v and not v.startswith(("unix://", "tcp://", "http://", "https://", "ssh://", "npipe://")):
            raise ValueError(f"Unsupported Docker base URL scheme: {v}")
        return v

    # ========================================================================
    # GROUPED CONFIG ACCESS
    # ========================================================================

    @property
    def docker(self) -> DockerConfig:
        """Access Docker configuration group."""
        return DockerConfig(
            docker_base_url=self.docker_base_url,
            docker_timeout=self.docker_timeout,
            docker_api_version=self.docker_api_version,
            docker_stop_timeout=self.docker_stop_timeout,
            docker_remove_on_start_failure=self.docker_remove_on_start_failure,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration group."""
        return LoggingConfig(
            log_level=self.log_level,
            log_format=self.log_format,
            log_file=self.log_file,
            log_max_size_mb=self.log_max_size_mb,
            log_backup_count=self.log_backup_count,
        )


# Global settings instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "DockerConfig",
    "LoggingConfig",
]
