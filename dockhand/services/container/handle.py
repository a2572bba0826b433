"""Handle to a single container started by a session."""

from typing import Optional

import structlog

from ...config import Settings, settings as default_settings
from ...models.container import RemoveOptions
from ...models.errors import ContainerRemovedError
from .client import EngineClient
from .context import ExecutionContext

logger = structlog.get_logger(__name__)


class Handle:
    """Lifecycle operations on one container.

    Handles are only created by ``Session.run``. The container id never
    changes; once ``stop_and_remove`` succeeds the handle refuses further
    use.
    """

    def __init__(
        self,
        container_id: str,
        engine_client: EngineClient,
        context: ExecutionContext,
        settings: Optional[Settings] = None,
    ):
        self._container_id = container_id
        self._engine_client = engine_client
        self._context = context
        self._settings = settings or default_settings
        self._removed = False

    @property
    def container_id(self) -> str:
        return self._container_id

    @property
    def removed(self) -> bool:
        return self._removed

    def _ensure_not_removed(self) -> None:
        if self._removed:
            raise ContainerRemovedError(self._container_id)

    def get_address(self) -> str:
        """Return the container's address on the default network.

        Returns an empty string when the container has no network settings
        (not attached yet, or stopped). Inspect failures propagate unchanged.
        """
        self._ensure_not_removed()
        info = self._engine_client.inspect_container(self._context, self._container_id)
        if info.network_settings is None:
            return ""
        return info.network_settings.ip_address

    def stop_and_remove(self) -> None:
        """Stop the container, then remove it.

        Remove is only attempted after stop succeeds, so a running container
        is never removed. Either failure propagates unchanged.
        """
        self._ensure_not_removed()
        short_id = self._container_id[:12]

        self._engine_client.stop_container(
            self._context, self._container_id, self._settings.docker.stop_timeout
        )
        logger.debug("Stopped container", container_id=short_id)

        self._engine_client.remove_container(
            self._context, self._container_id, RemoveOptions()
        )
        self._removed = True
        logger.info("Stopped and removed container", container_id=short_id)

    def __repr__(self) -> str:
        return f"Handle(container_id={self._container_id!r}, removed={self._removed})"
