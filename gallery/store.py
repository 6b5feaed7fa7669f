from typing import Callable, List, Optional

from gallery import views
from gallery.controller import SyncController
from gallery.debounce import Debouncer
from gallery.observable import Atom, Computed, ReadableAtom, Unsubscribe
from gallery.state import QuerySnapshot, QueryState
from models.bootstrap import GalleryBootstrap
from models.character import Character

DEFAULT_DEBOUNCE_SEC = 0.3


class GalleryStore:
    """
    What the gallery UI talks to.

    Everything readable is exposed as a read-only observable; the only writes are
    ``set_search`` (debounced) and the paging methods. Construct one per gallery
    and hand it to whatever renders; there is no module-level instance.
    """

    def __init__(
            self,
            client,
            debounce_delay: float = DEFAULT_DEBOUNCE_SEC,
            coalesce: bool = True,
            cache_size: int = 0,
            search: str = "",
            page: int = 1,
    ):
        self._state = QueryState(search=search, page=views.clamp_page(page, 0))
        self._controller = SyncController(self._state, client, coalesce=coalesce, cache_size=cache_size)

        self._search_input: Atom[str] = Atom(search)
        self._debouncer: Debouncer[str] = Debouncer(search, delay=debounce_delay)
        self._unsubscribe_input = self._debouncer.settled.listen(self._controller.set_search)

        self.search_input: ReadableAtom[str] = self._search_input.readonly()
        self.search: ReadableAtom[str] = self._state.search.readonly()
        self.page: ReadableAtom[int] = self._state.page.readonly()
        self.loading: ReadableAtom[bool] = self._state.loading.readonly()
        self.characters: ReadableAtom[List[Character]] = self._state.characters.readonly()
        self.total_count: ReadableAtom[int] = self._state.total_count.readonly()
        self.total_pages: Computed[int] = self._state.total_pages

        self.page_label = Computed([self.page, self.total_pages], views.page_label)
        self.can_go_previous = Computed([self.page, self.loading], views.can_go_previous)
        self.can_go_next = Computed([self.page, self.total_pages, self.loading], views.can_go_next)
        self.announcement = Computed(
            [self.loading, self.characters, self.search],
            lambda loading, characters, search: views.announcement(loading, len(characters), search),
        )

    def mount(self, bootstrap: Optional[GalleryBootstrap] = None) -> None:
        already_mounted = self._controller.mounted
        self._controller.mount(bootstrap)
        if bootstrap is not None and not already_mounted:
            self._sync_input(bootstrap.search)

    def hydrate(self, bootstrap: GalleryBootstrap) -> None:
        self._controller.hydrate(bootstrap)
        self._sync_input(bootstrap.search)

    def set_search(self, text: str) -> None:
        self._search_input.set(text)
        self._debouncer.push(text)

    def flush_search(self) -> None:
        self._debouncer.flush()

    def set_page(self, page: int) -> None:
        # the shown total only bounds pages of the search it was fetched for
        result_pair = self._state.result_pair.get()
        pages = 0
        if result_pair is not None and result_pair[0] == self.search.get():
            pages = self.total_pages.get()
        self._controller.set_page(views.clamp_page(page, pages))

    def next_page(self) -> bool:
        if not self.can_go_next.get():
            return False
        self.set_page(self.page.get() + 1)
        return True

    def previous_page(self) -> bool:
        if not self.can_go_previous.get():
            return False
        self.set_page(self.page.get() - 1)
        return True

    def snapshot(self) -> QuerySnapshot:
        return self._state.snapshot()

    def subscribe(self, listener: Callable[[QuerySnapshot], None]) -> Unsubscribe:
        return self._state.subscribe(listener)

    async def wait_idle(self) -> None:
        await self._controller.wait_idle()

    def close(self) -> None:
        self._debouncer.close()
        self._unsubscribe_input()
        self._controller.close()

    def _sync_input(self, search: str) -> None:
        # hydrated search becomes the baseline the debounced input compares against
        self._search_input.set(search)
        self._debouncer.reset(search)
