"""Session: runs containers through an engine client."""

from contextlib import closing
from typing import Callable, Iterable, Optional

import structlog

from ...config import Settings, settings as default_settings
from ...models.container import HostConfig, NetworkingConfig, RemoveOptions, StartOptions
from ...models.errors import ImagePullError
from .client import DockerClientFactory, EngineClient, PullStream
from .context import ExecutionContext
from .handle import Handle
from .ports import build_container_config

logger = structlog.get_logger(__name__)


class Session:
    """Orchestrates the image, create and start steps of running a container.

    Every call is synchronous. The engine client is shared and is only
    closed by the session when the session created it (see ``new_session``).
    """

    def __init__(
        self,
        engine_client: EngineClient,
        settings: Optional[Settings] = None,
        owns_client: bool = False,
    ):
        self._engine_client = engine_client
        self._settings = settings or default_settings
        self._owns_client = owns_client
        self._context = ExecutionContext()

    @property
    def engine_client(self) -> EngineClient:
        return self._engine_client

    @property
    def context(self) -> ExecutionContext:
        return self._context

    def run(
        self,
        name: str,
        image_reference: str,
        env_vars: Optional[Iterable[str]] = None,
        exposed_ports: Optional[Iterable[str]] = None,
    ) -> Handle:
        """Ensure the image is present, then create and start a container.

        Args:
            name: Container name
            image_reference: Image to run; pulled when not present locally
            env_vars: ``KEY=VALUE`` strings, order preserved
            exposed_ports: Port specs such as ``"8080/tcp"`` or ``"27017:27017"``

        Returns:
            Handle for the started container

        Raises:
            The engine client's exception from whichever step failed first
            (image list, pull, create, start), unwrapped.
            InvalidPortSpecError: before any engine call, for a bad port spec.
        """
        config = build_container_config(image_reference, env_vars, exposed_ports)
        self._ensure_image(image_reference)

        created = self._engine_client.create_container(
            self._context, config, HostConfig(), NetworkingConfig(), name
        )
        for warning in created.warnings:
            logger.warning("Engine warning on create", container_name=name, warning=warning)
        logger.info(
            f"Created container {created.id[:12]}",
            container_name=name,
            image=image_reference,
        )

        try:
            self._engine_client.start_container(self._context, created.id, StartOptions())
        except Exception:
            if self._settings.docker.remove_on_start_failure:
                self._discard_unstarted(created.id)
            raise

        logger.info(f"Started container {created.id[:12]}", container_name=name)
        return Handle(created.id, self._engine_client, self._context, self._settings)

    def _ensure_image(self, image_reference: str) -> None:
        """Pull the image unless a local image matches the reference exactly."""
        images = self._engine_client.list_images(self._context, image_reference)
        if images:
            logger.debug("Image present locally", image=image_reference)
            return

        logger.info(f"Pulling Docker image: {image_reference}")
        try:
            with closing(self._engine_client.pull_image(self._context, image_reference)) as stream:
                self._drain_pull_stream(image_reference, stream)
        except Exception as e:
            logger.error("Failed to pull image", image=image_reference, error=str(e))
            raise
        logger.info(f"Successfully pulled image: {image_reference}")

    @staticmethod
    def _drain_pull_stream(image_reference: str, stream: PullStream) -> None:
        for record in stream:
            if record.get("error"):
                detail = record.get("errorDetail") or {}
                raise ImagePullError(image_reference, detail.get("message") or record["error"])
            if record.get("status"):
                logger.debug(
                    "Pull progress",
                    image=image_reference,
                    status=record["status"],
                    layer=record.get("id"),
                )

    def _discard_unstarted(self, container_id: str) -> None:
        """Best-effort removal of a container that failed to start."""
        try:
            self._engine_client.remove_container(
                self._context, container_id, RemoveOptions(force=True)
            )
            logger.info(f"Removed container {container_id[:12]} after failed start")
        except Exception as e:
            logger.warning(
                "Failed to remove container after failed start",
                container_id=container_id[:12],
                error=str(e),
            )

    def close(self) -> None:
        """Cancel the session's context and release an owned engine client.

        Handles created by this session stop working once it is closed.
        """
        if self._context.cancelled:
            return
        self._context.cancel()
        if self._owns_client:
            self._engine_client.close()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def new_session(
    settings: Optional[Settings] = None,
    client_factory: Optional[Callable[[], EngineClient]] = None,
) -> Session:
    """Create a session bound to the default Docker engine connection.

    Args:
        settings: Settings to use instead of the global instance
        client_factory: Callable returning an EngineClient; defaults to
            ``DockerClientFactory(settings).create``

    Raises:
        Whatever the client factory raises (``DockerException`` by default)
        when no engine connection can be made.
    """
    settings = settings or default_settings
    if client_factory is None:
        client_factory = DockerClientFactory(settings).create
    return Session(client_factory(), settings=settings, owns_client=True)
