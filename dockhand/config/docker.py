"""Docker configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings


class DockerConfig(BaseSettings):
    """Docker engine connection and lifecycle settings."""

    base_url: str | None = Field(default=None, alias="docker_base_url")
    timeout: int = Field(default=60, ge=1, alias="docker_timeout")
    api_version: str = Field(default="auto", alias="docker_api_version")

    # Container lifecycle
    stop_timeout: int | None = Field(default=None, ge=0, alias="docker_stop_timeout")
    remove_on_start_failure: bool = Field(
        default=True, alias="docker_remove_on_start_failure"
    )

    class Config:
        env_prefix = ""
        extra = "ignore"
