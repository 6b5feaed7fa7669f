"""
Keeps the characters in QueryState consistent with the current (search, page).

Each fetch is stamped with the pair it was issued for and a generation number.
A response is written to state only if its pair is still the current pair and
nothing newer has been written since. Only the most recently issued fetch may
clear the loading flag. Superseded fetches are never aborted, their results
are simply dropped when they arrive.
"""
import asyncio
import logging
from collections import OrderedDict
from typing import Optional, Set, Tuple

from app.core.exceptions import CatalogError
from gallery.state import QueryState
from models.bootstrap import GalleryBootstrap
from models.character import CharacterPage

logger = logging.getLogger(__name__)

Pair = Tuple[str, int]


class SyncController:

    def __init__(self, state: QueryState, client, coalesce: bool = True, cache_size: int = 0):
        """
        Args:
            state: the QueryState this controller is the only writer of
            client: anything with ``async search(query, page) -> CharacterPage``
            coalesce: skip a fetch when the latest in-flight one targets the same pair
            cache_size: number of successful responses to remember, 0 disables caching
        """
        self._state = state
        self._client = client
        self.coalesce = coalesce
        self.cache_size = max(0, cache_size)
        self._cache: "OrderedDict[Pair, CharacterPage]" = OrderedDict()

        self._issued = 0
        self._applied = 0
        self._inflight_pair: Optional[Pair] = None
        self._tasks: Set[asyncio.Task] = set()
        self._mounted = False
        self._closed = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def mount(self, bootstrap: Optional[GalleryBootstrap] = None) -> None:
        if self._closed or self._mounted:
            return
        self._mounted = True

        if bootstrap is not None:
            self.hydrate(bootstrap)
            return

        with self._state.batch():
            self._issue_fetch()

    def hydrate(self, bootstrap: GalleryBootstrap) -> None:
        """Adopt server-rendered data as-is. Anything still in flight becomes stale."""
        if self._closed:
            return
        self._mounted = True

        self._issued += 1
        self._applied = self._issued
        self._inflight_pair = None
        pair = (bootstrap.search, bootstrap.page)

        with self._state.batch():
            self._state.search.set(bootstrap.search)
            self._state.page.set(bootstrap.page)
            self._state.characters.set(list(bootstrap.results))
            self._state.total_count.set(bootstrap.total_count)
            self._state.result_pair.set(pair)
            self._state.loading.set(False)

        logger.debug(
            "Hydrated search=%r page=%s with %s characters (total %s)",
            bootstrap.search, bootstrap.page, len(bootstrap.results), bootstrap.total_count,
        )

    def set_search(self, text: str) -> None:
        if self._closed or text == self._state.search.get():
            return

        # a new search starts over at page 1, one fetch for the pair
        with self._state.batch():
            self._state.search.set(text)
            self._state.page.set(1)
            self._issue_fetch()

    def set_page(self, page: int) -> None:
        if self._closed:
            return

        with self._state.batch():
            self._state.page.set(max(1, page))
            self._issue_fetch()

    def refresh(self) -> None:
        if self._closed:
            return

        with self._state.batch():
            self._issue_fetch()

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        for task in list(self._tasks):
            task.cancel()
        self._inflight_pair = None
        self._state.loading.set(False)

    def _issue_fetch(self) -> None:
        pair = self._state.pair

        if self.coalesce and pair == self._inflight_pair:
            logger.debug("Fetch for search=%r page=%s already in flight", *pair)
            return

        self._issued += 1
        generation = self._issued

        cached = self._cache_get(pair)
        if cached is not None:
            logger.debug("Serving search=%r page=%s from cache", *pair)
            self._settle(pair, generation, cached)
            return

        self._inflight_pair = pair
        self._state.loading.set(True)

        task = asyncio.get_running_loop().create_task(self._fetch(pair, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, pair: Pair, generation: int) -> None:
        search, page = pair
        logger.debug("Request %s: search=%r page=%s", generation, search, page)

        result: Optional[CharacterPage] = None
        try:
            result = await self._client.search(search, page)
        except CatalogError as e:
            logger.warning(
                "Error loading characters for search=%r page=%s: %s %s",
                search, page, e.code, e.details,
            )
        except Exception:
            logger.exception("Unexpected error loading characters for search=%r page=%s", search, page)

        if result is not None:
            self._cache_put(pair, result)

        # failures land as an empty page, same as a search with no matches
        self._settle(pair, generation, result if result is not None else CharacterPage())

    def _settle(self, pair: Pair, generation: int, result: CharacterPage) -> None:
        if self._closed:
            return

        with self._state.batch():
            if pair == self._state.pair and generation > self._applied:
                self._applied = generation
                self._state.characters.set(list(result.items))
                self._state.total_count.set(result.total)
                self._state.result_pair.set(pair)
            else:
                logger.debug("Discarding stale response %s for search=%r page=%s", generation, *pair)

            if generation == self._issued:
                self._inflight_pair = None
                self._state.loading.set(False)

    def _cache_get(self, pair: Pair) -> Optional[CharacterPage]:
        if not self.cache_size or pair not in self._cache:
            return None
        self._cache.move_to_end(pair)
        return self._cache[pair]

    def _cache_put(self, pair: Pair, result: CharacterPage) -> None:
        if not self.cache_size:
            return
        self._cache[pair] = result
        self._cache.move_to_end(pair)
        while len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
