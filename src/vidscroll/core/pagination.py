"""Accumulates search result pages and decides when to fetch the next one."""

import logging
from concurrent.futures import Executor, Future
from typing import Callable, Iterator, List, Optional, Set, Tuple

from .models import ResultItem, SearchResultPage
from .search_client import SearchClient

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


def _call_now(fn: Callable[[], None]) -> None:
    fn()


def pages_to_render(rendered: List[SearchResultPage],
                    pages: List[SearchResultPage]) -> Tuple[bool, int]:
    """Compare what a view has drawn with the current pages.

    Returns ``(rebuild, start)``: whether existing rows must be thrown away
    first, and the index of the first page that still needs rows.
    """
    if len(pages) < len(rendered) or any(a is not b for a, b in zip(pages, rendered)):
        return True, 0
    return False, len(rendered)


class SearchViewModel:
    """Pagination state shared between the search client and the window.

    Fetches run on ``executor``; their results are handed to ``dispatch`` so
    that ``pages`` is only ever mutated on the UI thread. The window passes
    ``lambda fn: self.after(0, fn)``.
    """

    def __init__(self, client: SearchClient, executor: Executor,
                 dispatch: Optional[Dispatch] = None, page_size: int = 15,
                 reset_on_new_search: bool = True):
        self.client = client
        self.executor = executor
        self.dispatch = dispatch or _call_now
        self.page_size = page_size
        self.reset_on_new_search = reset_on_new_search

        # State
        self.pages: List[SearchResultPage] = []
        self.query = ""
        self._generation = 0
        self._in_flight = 0
        self._pending_tokens: Set[str] = set()

        # Callbacks for UI updates: func(view_model)
        self.observers = []

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def item_count(self) -> int:
        return sum(len(page.items) for page in self.pages)

    @property
    def items(self) -> Iterator[Tuple[int, int, ResultItem]]:
        """Yield ``(page_index, item_index, item)`` grouped by page, then by item."""
        for page_index, page in enumerate(self.pages):
            for item_index, item in enumerate(page.items):
                yield page_index, item_index, item

    def search(self, query: str) -> Future:
        """Start a fresh search for ``query``."""
        self.query = query
        self._generation += 1
        if self.reset_on_new_search and self.pages:
            logger.info(f"New search {query!r}, clearing {len(self.pages)} page(s)")
            self.pages.clear()
            self._pending_tokens.clear()
            self._notify()
        return self.request_page(query)

    def request_page(self, query: str, continuation_token: str = "") -> Future:
        """Fetch a page in the background and append it when it arrives.

        Failed fetches are dropped. The same (query, token) requested twice
        appends two pages.
        """
        generation = self._generation
        self._in_flight += 1
        return self.executor.submit(self._fetch, query, continuation_token, generation)

    def should_prefetch(self, page_index: int, item_index: int) -> bool:
        """True when this row is the second-to-last of the last loaded page."""
        if not self.pages or page_index != len(self.pages) - 1:
            return False
        page = self.pages[page_index]
        if not page.has_next_page:
            return False
        threshold = max(min(self.page_size, len(page.items)) - 2, 0)
        return item_index == threshold

    def item_appeared(self, page_index: int, item_index: int) -> Optional[Future]:
        """Called by the view whenever a row scrolls into view."""
        if not self.should_prefetch(page_index, item_index):
            return None
        page = self.pages[page_index]
        token = page.next_page_token
        if token in self._pending_tokens:
            return None
        self._pending_tokens.add(token)
        logger.debug(f"Prefetching page after item {page_index}:{item_index}")
        return self.request_page(page.query, token)

    def add_observer(self, callback):
        self.observers.append(callback)
        # Notify immediately with current state
        self._call_observer(callback)

    def remove_observer(self, callback):
        if callback in self.observers:
            self.observers.remove(callback)

    def _fetch(self, query: str, continuation_token: str, generation: int) -> Optional[SearchResultPage]:
        # Runs on a worker thread
        page = None
        try:
            page = self.client.fetch_page(query, continuation_token)
        except Exception as e:
            # The returned Future is usually discarded; log here or the failure is lost
            logger.error(f"Fetching {query!r} (pageToken={continuation_token!r}) failed: {e}", exc_info=True)
        finally:
            self.dispatch(lambda: self._on_fetched(page, continuation_token, generation))
        return page

    def _on_fetched(self, page: Optional[SearchResultPage], continuation_token: str, generation: int):
        self._in_flight -= 1
        current = generation == self._generation
        self._pending_tokens.discard(continuation_token)

        if page is None:
            self._notify()
            return
        if not current and self.reset_on_new_search:
            logger.info(f"Discarding page for superseded search {page.query!r}")
            self._notify()
            return

        self.pages.append(page)
        logger.info(f"Appended page {len(self.pages)} ({len(page.items)} items) for {page.query!r}")
        self._notify()

    def _notify(self):
        for cb in list(self.observers):
            self._call_observer(cb)

    def _call_observer(self, callback):
        try:
            callback(self)
        except Exception as e:
            logger.error(f"Observer {callback!r} failed: {e}", exc_info=True)
