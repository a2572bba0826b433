"""Engine client interface and its Docker implementation."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional

import docker
import structlog
from docker import auth, utils
from docker.errors import DockerException

from ...config import Settings, settings as default_settings
from ...models.container import (
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
from .context import ExecutionContext

logger = structlog.get_logger(__name__)


class PullStream:
    """Progress records of an image pull.

    Iterating yields decoded progress dicts as the engine sends them.
    The stream must be closed by whoever requested the pull; closing also
    closes the HTTP response so an unread body does not hold the connection.
    """

    def __init__(self, records: Iterator[Dict[str, Any]], response: Any = None):
        self._records = records
        self._response = response
        self._closed = False

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._records)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            close = getattr(self._records, "close", None)
            if close is not None:
                close()
        finally:
            if self._response is not None:
                self._response.close()


class EngineClient(ABC):
    """Interface to the container engine primitives used by a session."""

    @abstractmethod
    def list_images(self, ctx: ExecutionContext, reference: str) -> List[ImageSummary]:
        """List local images whose reference matches exactly."""
        pass

    @abstractmethod
    def pull_image(self, ctx: ExecutionContext, reference: str) -> PullStream:
        """Start pulling an image. The caller must close the returned stream."""
        pass

    @abstractmethod
    def create_container(
        self,
        ctx: ExecutionContext,
        config: ContainerConfig,
        host_config: HostConfig,
        networking_config: NetworkingConfig,
        name: str,
    ) -> CreatedContainer:
        """Create (but do not start) a container."""
        pass

    @abstractmethod
    def start_container(
        self, ctx: ExecutionContext, container_id: str, options: StartOptions
    ) -> None:
        """Start a created container."""
        pass

    @abstractmethod
    def inspect_container(self, ctx: ExecutionContext, container_id: str) -> ContainerInfo:
        """Return the current state of a container."""
        pass

    @abstractmethod
    def stop_container(
        self, ctx: ExecutionContext, container_id: str, timeout: Optional[int] = None
    ) -> None:
        """Stop a container. ``None`` timeout uses the engine's grace period."""
        pass

    @abstractmethod
    def remove_container(
        self, ctx: ExecutionContext, container_id: str, options: RemoveOptions
    ) -> None:
        """Remove a container."""
        pass

    def close(self) -> None:
        """Release the engine connection."""
        pass


class DockerEngineClient(EngineClient):
    """EngineClient backed by the low-level ``docker.APIClient``.

    Errors raised by the Docker SDK are not caught or wrapped.
    """

    def __init__(self, api: docker.APIClient):
        self.api = api

    def list_images(self, ctx: ExecutionContext, reference: str) -> List[ImageSummary]:
        ctx.raise_if_cancelled("list_images")
        images = self.api.images(filters={"reference": reference})
        return [
            ImageSummary(
                id=image.get("Id", ""),
                repo_tags=image.get("RepoTags") or [],
                repo_digests=image.get("RepoDigests") or [],
            )
            for image in images
        ]

    def pull_image(self, ctx: ExecutionContext, reference: str) -> PullStream:
        ctx.raise_if_cancelled("pull_image")
        # Same request APIClient.pull makes, but the response is kept so the
        # stream can close it when the caller stops reading early.
        repository, tag = utils.parse_repository_tag(reference)
        registry, _ = auth.resolve_repository_name(repository)
        headers = {}
        header = auth.get_config_header(self.api, registry)
        if header:
            headers["X-Registry-Auth"] = header

        response = self.api._post(
            self.api._url("/images/create"),
            params={"fromImage": repository, "tag": tag or "latest"},
            headers=headers,
            stream=True,
            timeout=None,
        )
        try:
            self.api._raise_for_status(response)
        except Exception:
            response.close()
            raise
        return PullStream(self.api._stream_helper(response, decode=True), response)

    def create_container(
        self,
        ctx: ExecutionContext,
        config: ContainerConfig,
        host_config: HostConfig,
        networking_config: NetworkingConfig,
        name: str,
    ) -> CreatedContainer:
        ctx.raise_if_cancelled("create_container")
        engine_host_config = self.api.create_host_config(
            port_bindings=host_config.port_bindings or None,
            binds=host_config.binds or None,
        )
        engine_networking_config = None
        if networking_config.endpoints:
            engine_networking_config = self.api.create_networking_config(
                networking_config.endpoints
            )

        # A dict is handed to the engine as ExposedPorts verbatim; a list
        # would get "/tcp" appended to every entry by the SDK.
        result = self.api.create_container(
            image=config.image,
            environment=list(config.env),
            ports=dict(config.exposed_ports),
            host_config=engine_host_config,
            networking_config=engine_networking_config,
            name=name,
        )
        return CreatedContainer(id=result["Id"], warnings=result.get("Warnings") or [])

    def start_container(
        self, ctx: ExecutionContext, container_id: str, options: StartOptions
    ) -> None:
        ctx.raise_if_cancelled("start_container")
        self.api.start(container_id)

    def inspect_container(self, ctx: ExecutionContext, container_id: str) -> ContainerInfo:
        ctx.raise_if_cancelled("inspect_container")
        attrs = self.api.inspect_container(container_id)

        network_settings = None
        raw_settings = attrs.get("NetworkSettings")
        if raw_settings is not None:
            # Newer engines leave the top-level field empty and only report
            # the address under the default bridge network.
            ip_address = raw_settings.get("IPAddress") or (
                ((raw_settings.get("Networks") or {}).get("bridge") or {}).get("IPAddress")
            )
            network_settings = NetworkSettings(ip_address=ip_address or "")

        return ContainerInfo(
            id=attrs.get("Id", container_id),
            status=(attrs.get("State") or {}).get("Status", ""),
            network_settings=network_settings,
        )

    def stop_container(
        self, ctx: ExecutionContext, container_id: str, timeout: Optional[int] = None
    ) -> None:
        ctx.raise_if_cancelled("stop_container")
        if timeout is None:
            self.api.stop(container_id)
        else:
            self.api.stop(container_id, timeout=timeout)

    def remove_container(
        self, ctx: ExecutionContext, container_id: str, options: RemoveOptions
    ) -> None:
        ctx.raise_if_cancelled("remove_container")
        self.api.remove_container(container_id, v=options.volumes, force=options.force)

    def close(self) -> None:
        """Close Docker client connection."""
        try:
            self.api.close()
        except Exception as e:
            logger.error("Error closing Docker client", error=str(e))


class DockerClientFactory:
    """Factory for creating connected Docker engine clients."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def _client_kwargs(self) -> Dict[str, Any]:
        config = self.settings.docker
        if config.base_url:
            kwargs: Dict[str, Any] = {"base_url": config.base_url}
        else:
            kwargs = docker.utils.kwargs_from_env()
        kwargs["timeout"] = config.timeout
        kwargs["version"] = config.api_version
        return kwargs

    def create(self) -> DockerEngineClient:
        """Create a Docker client and verify the engine answers.

        Raises:
            DockerException: if no connection to the engine can be made.
        """
        kwargs = self._client_kwargs()
        logger.info(
            "Connecting to Docker engine",
            base_url=kwargs.get("base_url", "default"),
            api_version=kwargs["version"],
        )

        api = None
        try:
            api = docker.APIClient(**kwargs)
            api.ping()
        except DockerException as e:
            logger.error("Failed to create Docker client", error=str(e))
            if api is not None:
                api.close()
            raise
        except Exception as e:
            logger.error("Failed to create Docker client", error=str(e))
            if api is not None:
                api.close()
            raise DockerException(f"Docker engine is not reachable: {e}") from e

        logger.info("Docker client initialized", base_url=api.base_url)
        return DockerEngineClient(api)
