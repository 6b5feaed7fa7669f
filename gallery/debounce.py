"""
Trailing-edge debouncer for the search input.

Every pushed value restarts the timer; only the value that survives ``delay``
seconds without being replaced reaches ``settled``. Intermediate values are
dropped, never queued.
"""
import asyncio
import logging
from typing import Generic, Optional, TypeVar

from gallery.observable import Atom, ReadableAtom

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    def __init__(self, initial: T, delay: float = 0.3):
        """
        Args:
            initial: value ``settled`` starts with
            delay: seconds the input must stay unchanged before it settles
        """
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._settled: Atom[T] = Atom(initial)
        self._pending: Optional[T] = None
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def settled(self) -> ReadableAtom[T]:
        return self._settled.readonly()

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def push(self, value: T) -> None:
        """Restart the timer with ``value``. Must be called from inside the running loop."""
        if self._closed:
            logger.debug("Ignoring input %r on a closed debouncer", value)
            return

        self._cancel_task()
        self._pending = value
        self._task = asyncio.get_running_loop().create_task(self._delayed_emit(value))

    def flush(self) -> None:
        """Emit the pending value now instead of waiting for the timer."""
        if not self.pending:
            return
        value = self._pending
        self._cancel_task()
        self._emit(value)

    def reset(self, value: T) -> None:
        """Drop pending input and make ``value`` the settled value right away."""
        self.cancel()
        self._settled.set(value)

    def cancel(self) -> None:
        self._cancel_task()
        self._pending = None

    def close(self) -> None:
        self.cancel()
        self._closed = True

    async def _delayed_emit(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        self._task = None
        self._emit(value)

    def _emit(self, value: T) -> None:
        self._pending = None
        self._settled.set(value)

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
