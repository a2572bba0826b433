"""dockhand: run a container, find its address, stop and remove it.

Usage:
    from dockhand import new_session

    with new_session() as session:
        handle = session.run("db", "mongo", ["BANANA=YELLOW"], ["27017/tcp"])
        address = handle.get_address()
        handle.stop_and_remove()
"""

from ._version import __version__
from .models import (
    ContainerRemovedError,
    DockhandError,
    ImagePullError,
    InvalidPortSpecError,
    OperationCancelledError,
)
from .services.container import (
    DockerClientFactory,
    DockerEngineClient,
    EngineClient,
    ExecutionContext,
    Handle,
    PullStream,
    Session,
    new_session,
)
from .utils import setup_logging

__all__ = [
    "__version__",
    "new_session",
    "Session",
    "Handle",
    "EngineClient",
    "DockerEngineClient",
    "DockerClientFactory",
    "ExecutionContext",
    "PullStream",
    "setup_logging",
    "DockhandError",
    "ImagePullError",
    "InvalidPortSpecError",
    "ContainerRemovedError",
    "OperationCancelledError",
]
