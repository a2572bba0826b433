"""Execution context shared by a session and its handles."""

import threading

from ...models.errors import OperationCancelledError


class ExecutionContext:
    """Cancellation flag passed to every engine call.

    Once cancelled, a context stays cancelled; engine clients check it
    before contacting the engine.
    """

    def __init__(self):
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def raise_if_cancelled(self, operation: str) -> None:
        """Raise OperationCancelledError if the context was cancelled."""
        if self._cancelled.is_set():
            raise OperationCancelledError(operation)
