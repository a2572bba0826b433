"""Data models for container engine calls.

These records are what the Engine Client accepts and returns. They carry
only the fields the lifecycle needs; everything else the engine reports
is dropped at the client boundary.
"""

from dataclasses import dataclass, field


@dataclass
class ImageSummary:
    """A locally present image as reported by an image list query."""

    id: str
    repo_tags: list[str] = field(default_factory=list)
    repo_digests: list[str] = field(default_factory=list)


@dataclass
class ContainerConfig:
    """Container creation settings derived from a run request.

    ``env`` holds ``KEY=VALUE`` strings in caller order. ``exposed_ports``
    maps each port string to an empty placeholder, matching the engine's
    ``ExposedPorts`` shape.
    """

    image: str
    env: list[str] = field(default_factory=list)
    exposed_ports: dict[str, dict] = field(default_factory=dict)


@dataclass
class HostConfig:
    """Host-side container settings.

    Left at defaults: no port bindings, volumes or resource limits.
    """

    port_bindings: dict[str, list] = field(default_factory=dict)
    binds: list[str] = field(default_factory=list)


@dataclass
class NetworkingConfig:
    """Per-network endpoint settings. Empty means the engine default network."""

    endpoints: dict[str, dict] = field(default_factory=dict)


@dataclass
class StartOptions:
    """Options for starting a container. The defaults apply no options."""


@dataclass
class RemoveOptions:
    """Options for removing a container."""

    force: bool = False
    volumes: bool = False


@dataclass
class CreatedContainer:
    """Result of a container create call."""

    id: str
    warnings: list[str] = field(default_factory=list)


@dataclass
class NetworkSettings:
    """Network attachment of a container on the default network."""

    ip_address: str = ""


@dataclass
class ContainerInfo:
    """Subset of a container inspect result.

    ``network_settings`` is ``None`` when the container has no network
    attachment yet (or any more).
    """

    id: str
    status: str = ""
    network_settings: NetworkSettings | None = None
