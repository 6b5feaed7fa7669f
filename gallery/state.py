from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from gallery.observable import Atom, Computed, NotificationBatch, Unsubscribe
from gallery.views import total_pages
from models.character import Character


@dataclass(frozen=True)
class QuerySnapshot:
    search: str
    page: int
    loading: bool
    characters: Tuple[Character, ...]
    total_count: int
    result_pair: Optional[Tuple[str, int]] = None

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count)

    @property
    def coherent(self) -> bool:
        """True when the characters belong to the (search, page) on display."""
        return self.result_pair == (self.search, self.page)


class QueryState:
    """
    The observable truth of the gallery: search text, page, loading flag,
    current characters and their total count.

    Fields are written independently and without validation. Writers that touch
    several fields at once wrap them in ``with state.batch():`` so listeners see
    the fields change together.
    """

    def __init__(self, search: str = "", page: int = 1):
        self._batch = NotificationBatch()
        self.search: Atom[str] = Atom(search, self._batch)
        self.page: Atom[int] = Atom(page, self._batch)
        self.loading: Atom[bool] = Atom(False, self._batch)
        self.characters: Atom[List[Character]] = Atom([], self._batch)
        self.total_count: Atom[int] = Atom(0, self._batch)
        # (search, page) the characters were fetched for, None until the first response
        self.result_pair: Atom[Optional[Tuple[str, int]]] = Atom(None, self._batch)
        self.total_pages: Computed[int] = Computed(self.total_count, total_pages)

    def batch(self) -> NotificationBatch:
        return self._batch

    @property
    def pair(self) -> Tuple[str, int]:
        return self.search.get(), self.page.get()

    def snapshot(self) -> QuerySnapshot:
        return QuerySnapshot(
            search=self.search.get(),
            page=self.page.get(),
            loading=self.loading.get(),
            characters=tuple(self.characters.get()),
            total_count=self.total_count.get(),
            result_pair=self.result_pair.get(),
        )

    def subscribe(self, listener: Callable[[QuerySnapshot], None]) -> Unsubscribe:
        """Deliver a snapshot now and after every batch of changes."""
        unsubscribe = self._batch.on_flush(lambda: listener(self.snapshot()))
        listener(self.snapshot())
        return unsubscribe
