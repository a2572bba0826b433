"""Data models for dockhand."""

from .container import (
    ContainerConfig,
    ContainerInfo,
    CreatedContainer,
    HostConfig,
    ImageSummary,
    NetworkingConfig,
    NetworkSettings,
    RemoveOptions,
    StartOptions,
)
from .errors import (
    ContainerRemovedError,
    DockhandError,
    ImagePullError,
    InvalidPortSpecError,
    OperationCancelledError,
)

__all__ = [
    # Container models
    "ContainerConfig",
    "ContainerInfo",
    "CreatedContainer",
    "HostConfig",
    "ImageSummary",
    "NetworkingConfig",
    "NetworkSettings",
    "RemoveOptions",
    "StartOptions",
    # Errors
    "DockhandError",
    "ImagePullError",
    "InvalidPortSpecError",
    "ContainerRemovedError",
    "OperationCancelledError",
]
