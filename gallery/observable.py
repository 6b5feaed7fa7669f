"""
Small observable values for the gallery store.

An Atom holds one value and tells its listeners when it changes. A Computed
derives a value from one or more sources and is never set directly. Atoms that
share a NotificationBatch can be written together: inside ``with batch:`` every
write lands immediately but listeners only run once the outermost block exits,
so nobody observes a half-applied update.
"""
import logging
from typing import Any, Callable, Generic, List, Sequence, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[Any], None]
Unsubscribe = Callable[[], None]


def _call_listener(listener: Callable, *args) -> None:
    try:
        listener(*args)
    except Exception:
        logger.exception("Listener %r failed", listener)


class NotificationBatch:
    def __init__(self):
        self._depth = 0
        self._flushing = False
        self._pending: List["Atom"] = []
        self._flush_listeners: List[Callable[[], None]] = []

    @property
    def active(self) -> bool:
        return self._depth > 0

    def defer(self, atom: "Atom") -> None:
        if not any(a is atom for a in self._pending):
            self._pending.append(atom)

    def on_flush(self, listener: Callable[[], None]) -> Unsubscribe:
        """Run ``listener`` once after every flush that delivered at least one change."""
        self._flush_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._flush_listeners:
                self._flush_listeners.remove(listener)

        return unsubscribe

    def __enter__(self) -> "NotificationBatch":
        self._depth += 1
        return self

    def __exit__(self, *exc_info) -> None:
        self._depth -= 1
        if self._depth or self._flushing:
            # writes made by listeners are picked up by the flush already running
            return

        self._flushing = True
        try:
            while self._pending:
                delivered = False
                while self._pending:
                    pending, self._pending = self._pending, []
                    for atom in pending:
                        delivered = atom._notify() or delivered

                if delivered:
                    for listener in list(self._flush_listeners):
                        _call_listener(listener)
        finally:
            self._flushing = False


class Atom(Generic[T]):
    def __init__(self, value: T, batch: Union[NotificationBatch, None] = None):
        self._value = value
        self._delivered = value
        self._batch = batch
        self._listeners: List[Callable[[T], None]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if value == self._value:
            return

        self._value = value
        if self._batch is None:
            self._notify()
            return

        with self._batch:
            self._batch.defer(self)

    def listen(self, listener: Callable[[T], None]) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def subscribe(self, listener: Callable[[T], None]) -> Unsubscribe:
        unsubscribe = self.listen(listener)
        listener(self._value)
        return unsubscribe

    def readonly(self) -> "ReadableAtom[T]":
        return ReadableAtom(self)

    def _notify(self) -> bool:
        # a value written and reverted inside one batch is not a change
        if self._value == self._delivered:
            return False

        self._delivered = value = self._value
        for listener in list(self._listeners):
            _call_listener(listener, value)
        return True


class ReadableAtom(Generic[T]):
    """Read and observe access to an Atom, without ``set``."""

    def __init__(self, atom: Atom[T]):
        self._atom = atom

    def get(self) -> T:
        return self._atom.get()

    def listen(self, listener: Callable[[T], None]) -> Unsubscribe:
        return self._atom.listen(listener)

    def subscribe(self, listener: Callable[[T], None]) -> Unsubscribe:
        return self._atom.subscribe(listener)


Source = Union[Atom, ReadableAtom, "Computed"]


class Computed(Generic[T]):
    def __init__(self, sources: Union[Source, Sequence[Source]], fn: Callable[..., T]):
        if isinstance(sources, (list, tuple)):
            self._sources = list(sources)
        else:
            self._sources = [sources]
        self._fn = fn

    def get(self) -> T:
        return self._fn(*(s.get() for s in self._sources))

    def listen(self, listener: Callable[[T], None]) -> Unsubscribe:
        last = [self.get()]

        def on_source_change(_value: Any) -> None:
            derived = self.get()
            if derived == last[0]:
                return
            last[0] = derived
            listener(derived)

        unsubscribers = [s.listen(on_source_change) for s in self._sources]

        def unsubscribe() -> None:
            for unsub in unsubscribers:
                unsub()

        return unsubscribe

    def subscribe(self, listener: Callable[[T], None]) -> Unsubscribe:
        unsubscribe = self.listen(listener)
        listener(self.get())
        return unsubscribe
