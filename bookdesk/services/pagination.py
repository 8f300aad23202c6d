"""
Pagination and search state over the remote book list.

Page index is zero-based. ``total_pages`` is derived display state: it is
recomputed from a fresh count on every load and never set otherwise.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from bookdesk.config import get_settings
from bookdesk.errors import BookServiceError
from bookdesk.schemas.book import Book, PageRequest
from bookdesk.services.book_client import BookClient

logger = structlog.get_logger()


class PaginationController:
    """Tracks the page cursor and search text and loads pages through a :class:`BookClient`.

    State changes only after a load succeeds; on failure the error
    propagates and the previous page, totals and items stay in place.
    Loads are serialized so at most one request is in flight and pages
    arrive in the order they were asked for.
    """

    def __init__(self, client: BookClient, page_size: Optional[int] = None):
        size = get_settings().page_size if page_size is None else page_size
        if size <= 0:
            raise ValueError(f"page_size must be positive, got {size}")
        self._client = client
        self._lock = asyncio.Lock()
        self.page_size = size
        self.current_page = 0
        self.total_pages = 1
        self.total_count = 0
        self.search_text = ""
        self.items: list[Book] = []

    @property
    def has_previous(self) -> bool:
        return self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages - 1

    @property
    def page_label(self) -> str:
        return f"Page {self.current_page + 1} of {self.total_pages}"

    @property
    def lock(self) -> asyncio.Lock:
        """Serializes every request made on behalf of this controller, reads and writes alike."""
        return self._lock

    async def load_current(self) -> list[Book]:
        async with self._lock:
            return await self._load(self.current_page, self.search_text)

    async def reload(self) -> list[Book]:
        """Reload the current page; the caller must already hold :attr:`lock`."""
        return await self._load(self.current_page, self.search_text)

    async def next_page(self) -> bool:
        """Move forward one page; returns ``False`` (and does nothing) on the last page."""
        async with self._lock:
            if not self.has_next:
                return False
            await self._load(self.current_page + 1, self.search_text)
            return True

    async def prev_page(self) -> bool:
        async with self._lock:
            if not self.has_previous:
                return False
            await self._load(self.current_page - 1, self.search_text)
            return True

    async def set_search(self, text: Optional[str]) -> list[Book]:
        """New search text always starts from the first page."""
        async with self._lock:
            return await self._load(0, (text or "").strip())

    async def _load(self, page: int, search: str) -> list[Book]:
        # Clamp against the last known page count; a shrink seen by this
        # load is only applied on the next one.
        page = min(max(page, 0), self.total_pages - 1)
        request = PageRequest(page_index=page, page_size=self.page_size, search_text=search or None)
        try:
            result = await self._client.fetch_page(request)
        except BookServiceError as exc:
            logger.error("page_load_failed", page=page, search=search, error=str(exc))
            raise

        self.current_page = page
        self.search_text = search
        self.total_count = result.total_count
        self.total_pages = result.total_pages(self.page_size)
        self.items = result.items
        logger.info(
            "page_loaded",
            page=page,
            total_pages=self.total_pages,
            total_count=self.total_count,
            search=search,
            items=len(self.items),
        )
        return self.items
