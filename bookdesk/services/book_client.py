"""HTTP client for the remote books REST service."""

from __future__ import annotations

import re
from typing import Any, Optional

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from bookdesk.config import get_settings
from bookdesk.errors import ConnectionFailure, DecodeError, PreconditionError, RemoteError
from bookdesk.schemas.book import Book, PageEnvelope, PageRequest, PageResult
from bookdesk.schemas.results import Rejected, SubmitResult, Success

logger = structlog.get_logger()

_BOOK_LIST = TypeAdapter(list[Book])
_INTEGER = re.compile(r"-?[0-9]+")


class BookClient:
    """Thin async wrapper over ``/api/books``.

    Every call is a single round trip: no caching, no retry. Reads return
    decoded values or raise; create/update return :class:`Success` or, on
    HTTP 400, :class:`Rejected` carrying the untouched body.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        books_path: Optional[str] = None,
        timeout: Optional[httpx.Timeout] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self._books_path = (books_path or settings.books_path).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout or httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "BookClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Reads ──

    async def list_page(self, page: int, size: int, search: Optional[str] = None) -> list[Book]:
        """One page of books; only ``content`` of the response is used."""
        params: dict[str, Any] = {"page": page, "size": size}
        if search and search.strip():
            params["search"] = search
        response = await self._send("list", "GET", params=params)
        self._expect(response, "list", 200)
        try:
            return PageEnvelope.model_validate_json(response.content).content
        except ValidationError as exc:
            raise DecodeError("list", str(exc)) from exc

    async def list_all(self) -> list[Book]:
        response = await self._send("list_all", "GET", "/all")
        self._expect(response, "list_all", 200)
        try:
            return _BOOK_LIST.validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError("list_all", str(exc)) from exc

    async def count_all(self) -> int:
        response = await self._send("count", "GET", "/count")
        return self._parse_count(response, "count")

    async def count_by_search(self, query: str) -> int:
        response = await self._send("count_by_search", "GET", "/search/count", params={"query": query})
        return self._parse_count(response, "count_by_search")

    async def count(self, search: Optional[str] = None) -> int:
        """Total matching ``search``; blank means the unfiltered total."""
        if search is None or not search.strip():
            return await self.count_all()
        return await self.count_by_search(search)

    async def fetch_page(self, request: PageRequest) -> PageResult:
        total = await self.count(request.search_text)
        items = await self.list_page(request.page_index, request.page_size, request.search_text)
        return PageResult(items=items, total_count=total)

    # ── Writes ──

    async def create_book(self, book: Book) -> SubmitResult:
        response = await self._send("create", "POST", json=book.to_payload(include_id=False))
        if response.status_code == 400:
            return Rejected(body=response.text)
        self._expect(response, "create", 200, 201)
        return Success(book=self._parse_book(response, "create"))

    async def update_book(self, book: Book) -> SubmitResult:
        if book.id is None:
            raise PreconditionError("Book ID cannot be null", "update")
        response = await self._send("update", "PUT", f"/{book.id}", json=book.to_payload())
        if response.status_code == 400:
            return Rejected(body=response.text)
        self._expect(response, "update", 200)
        return Success(book=self._parse_book(response, "update"))

    async def delete_book(self, book_id: Optional[int]) -> None:
        if book_id is None:
            raise PreconditionError("Book ID cannot be null", "delete")
        response = await self._send("delete", "DELETE", f"/{book_id}")
        self._expect(response, "delete", 200)

    # ── Internals ──

    async def _send(self, operation: str, method: str, path: str = "", **kwargs: Any) -> httpx.Response:
        url = f"{self._books_path}{path}"
        logger.info("books_request", operation=operation, method=method, url=url, params=kwargs.get("params"))
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.error("books_request_failed", operation=operation, error=str(exc))
            raise ConnectionFailure(operation, str(exc)) from exc
        logger.info("books_response", operation=operation, status_code=response.status_code)
        return response

    @staticmethod
    def _expect(response: httpx.Response, operation: str, *accepted: int) -> None:
        if response.status_code not in accepted:
            logger.warning("books_unexpected_status", operation=operation, status_code=response.status_code)
            raise RemoteError(response.status_code, operation)

    def _parse_count(self, response: httpx.Response, operation: str) -> int:
        self._expect(response, operation, 200)
        text = response.text.strip()
        # int() would also take "1_000", "+5" and non-ASCII digits.
        if not _INTEGER.fullmatch(text):
            raise DecodeError(operation, f"not an integer: {response.text!r}")
        return int(text)

    @staticmethod
    def _parse_book(response: httpx.Response, operation: str) -> Book:
        try:
            return Book.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(operation, str(exc)) from exc


_client: BookClient | None = None


def get_book_client() -> BookClient:
    """Shared client built from settings."""
    global _client
    if _client is None:
        _client = BookClient()
    return _client


async def close_client() -> None:
    global _client
    if _client:
        await _client.aclose()
        _client = None
