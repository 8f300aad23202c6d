"""Shared test configuration and fixtures."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import httpx
import pytest
import pytest_asyncio

# Ensure the project root is on sys.path so `bookdesk` resolves without an install
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bookdesk.services.book_client import BookClient  # noqa: E402

BOOKS_PATH = "/api/books"


class FakeBooksServer:
    """In-memory stand-in for the books REST service, served via httpx.MockTransport."""

    def __init__(self):
        self.books: dict[int, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: dict[str, int] = {}  # operation -> status code
        self.reject_with: Optional[str] = None  # body sent with 400 on writes
        self._next_id = 1

    def add(self, title: str, author: str = "Some Author", isbn: str = "9780000000000",
            publish_date: str = "2001-01-01") -> dict:
        book = {
            "bookId": self._next_id,
            "title": title,
            "author": author,
            "isbn": isbn,
            "publishDate": publish_date,
        }
        self.books[self._next_id] = book
        self._next_id += 1
        return book

    def seed(self, count: int, author: str = "Some Author") -> None:
        for i in range(count):
            self.add(f"Book {i + 1}", author=author)

    def _matching(self, search: Optional[str]) -> list[dict]:
        rows = list(self.books.values())
        if not search:
            return rows
        needle = search.lower()
        return [b for b in rows if needle in b["title"].lower() or needle in b["author"].lower()]

    @staticmethod
    def _route(request: httpx.Request) -> tuple[str, Optional[int]]:
        path = request.url.path
        if path == f"{BOOKS_PATH}/count":
            return "count", None
        if path == f"{BOOKS_PATH}/search/count":
            return "count_by_search", None
        if path == f"{BOOKS_PATH}/all":
            return "list_all", None
        if path == BOOKS_PATH:
            return ("list" if request.method == "GET" else "create"), None
        book_id = int(path.rsplit("/", 1)[1])
        return ("update" if request.method == "PUT" else "delete"), book_id

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        operation, book_id = self._route(request)
        params = request.url.params

        if operation in self.fail_with:
            return httpx.Response(self.fail_with[operation], text="Internal Server Error")
        if operation == "count":
            return httpx.Response(200, text=str(len(self.books)))
        if operation == "count_by_search":
            return httpx.Response(200, text=str(len(self._matching(params["query"]))))
        if operation == "list_all":
            return httpx.Response(200, json=list(self.books.values()))
        if operation == "list":
            page, size = int(params["page"]), int(params["size"])
            rows = self._matching(params.get("search"))
            return httpx.Response(
                200,
                json={"content": rows[page * size:(page + 1) * size], "totalElements": len(rows)},
            )
        if self.reject_with is not None and operation in ("create", "update"):
            return httpx.Response(400, text=self.reject_with)
        if operation == "create":
            payload = json.loads(request.content)
            payload["bookId"] = self._next_id
            self.books[self._next_id] = payload
            self._next_id += 1
            return httpx.Response(201, json=payload)
        if book_id not in self.books:
            return httpx.Response(404, json={"message": "Book not found"})
        if operation == "update":
            payload = json.loads(request.content)
            payload["bookId"] = book_id
            self.books[book_id] = payload
            return httpx.Response(200, json=payload)
        del self.books[book_id]
        return httpx.Response(200)

    def requests_for(self, operation: str) -> list[httpx.Request]:
        return [r for r in self.requests if self._route(r)[0] == operation]


@pytest.fixture
def server() -> FakeBooksServer:
    return FakeBooksServer()


@pytest_asyncio.fixture
async def client(server):
    async with BookClient(base_url="http://test", transport=httpx.MockTransport(server)) as c:
        yield c


def client_for(handler) -> BookClient:
    """Client wired to a one-off request handler."""
    return BookClient(base_url="http://test", transport=httpx.MockTransport(handler))


@pytest.fixture
def make_client():
    return client_for
