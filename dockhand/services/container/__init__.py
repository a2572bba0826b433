"""Container lifecycle services.

This package is split into:
- client.py: Engine client interface, Docker implementation and factory
- context.py: Cancellation context passed to every engine call
- ports.py: Translation of run arguments into container configuration
- session.py: Image resolution, create and start (Session.run)
- handle.py: Address lookup and stop/remove for one container
"""

from .client import DockerClientFactory, DockerEngineClient, EngineClient, PullStream
from .context import ExecutionContext
from .handle import Handle
from .session import Session, new_session

__all__ = [
    "DockerClientFactory",
    "DockerEngineClient",
    "EngineClient",
    "ExecutionContext",
    "Handle",
    "PullStream",
    "Session",
    "new_session",
]
