"""Exception classes raised by dockhand itself.

Engine failures are never wrapped: the ``docker.errors`` exception raised by
the engine client reaches the caller as-is. The classes here cover the
conditions dockhand detects on its own.
"""

from typing import Optional


class DockhandError(Exception):
    """Base exception for dockhand."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ImagePullError(DockhandError):
    """The engine reported an error inside an image pull progress stream."""

    def __init__(self, reference: str, message: Optional[str] = None):
        self.reference = reference
        super().__init__(message or f"Failed to pull image: {reference}")


class InvalidPortSpecError(DockhandError, ValueError):
    """A port specification string could not be parsed."""

    def __init__(self, spec: str, reason: str):
        self.spec = spec
        self.reason = reason
        super().__init__(f"Invalid port specification {spec!r}: {reason}")


class ContainerRemovedError(DockhandError):
    """A handle was used after its container was stopped and removed."""

    def __init__(self, container_id: str):
        self.container_id = container_id
        super().__init__(f"Container {container_id[:12]} has already been removed")


class OperationCancelledError(DockhandError):
    """An engine call was attempted on a cancelled execution context."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} cancelled: execution context is closed")
