"""
Headless book editor: the state a form screen binds to.

Holds the form values, the selected row, per-field error text and the
last user-facing message, and routes every action through the
:class:`BookClient` and :class:`PaginationController`. Widgets only read
these attributes and call the coroutines below.
"""

from __future__ import annotations

from datetime import date
from typing import Awaitable, Callable, Optional

import structlog
from pydantic import BaseModel

from bookdesk.errors import BookServiceError, PreconditionError
from bookdesk.schemas.book import Book
from bookdesk.schemas.results import (
    Rejected,
    SubmitResult,
    TransportFailure,
    ValidationFailure,
    WriteResult,
)
from bookdesk.schemas.validation import FieldErrors
from bookdesk.services.book_client import BookClient
from bookdesk.services.pagination import PaginationController
from bookdesk.services.validation_decoder import decode_validation_error

logger = structlog.get_logger()

ALL_BOOKS_LABEL = "All books loaded"


class BookForm(BaseModel):
    title: str = ""
    author: str = ""
    isbn: str = ""
    publish_date: Optional[date] = None

    def to_book(self, book_id: Optional[int] = None) -> Book:
        return Book(
            id=book_id,
            title=self.title,
            author=self.author,
            isbn=self.isbn,
            publish_date=self.publish_date,
        )


class BookEditor:
    def __init__(self, client: BookClient, pagination: Optional[PaginationController] = None):
        self._client = client
        self.pagination = pagination or PaginationController(client)
        self.form = BookForm()
        self.selected: Optional[Book] = None
        self.rows: list[Book] = []
        self.field_errors = FieldErrors()
        self.message = ""
        self.status_label = self.pagination.page_label
        self.last_error: Optional[BookServiceError] = None

    # ── Form state ──

    def select(self, book: Optional[Book]) -> None:
        self.selected = book
        if book is not None:
            self.form = BookForm(
                title=book.title,
                author=book.author,
                isbn=book.isbn,
                publish_date=book.publish_date,
            )

    def clear_fields(self) -> None:
        self.form = BookForm()

    def clear_validation_messages(self) -> None:
        self.field_errors = FieldErrors()

    # ── Reads ──

    async def load(self) -> bool:
        return await self._read(self.pagination.load_current)

    async def next_page(self) -> bool:
        return await self._read(self.pagination.next_page)

    async def prev_page(self) -> bool:
        return await self._read(self.pagination.prev_page)

    async def search(self, text: str) -> bool:
        return await self._read(lambda: self.pagination.set_search(text))

    async def refresh_all(self) -> bool:
        """Show every record at once, bypassing pagination."""
        async with self.pagination.lock:
            try:
                books = await self._client.list_all()
            except BookServiceError as exc:
                logger.error("refresh_all_failed", error=str(exc))
                self.last_error = exc
                self.message = f"Error refreshing books: {exc}"
                return False
        self.rows = books
        self.clear_fields()
        self.status_label = ALL_BOOKS_LABEL
        return True

    # ── Writes ──
    # Writes hold the pagination lock across the request and the reload that
    # follows it, so they never overlap a page load.

    async def add(self) -> WriteResult:
        self.clear_validation_messages()
        book = self.form.to_book()
        return await self._submit("create", lambda: self._client.create_book(book), "Book added successfully!")

    async def update(self) -> WriteResult:
        """Submit the form as a full replacement of the selected book."""
        self.clear_validation_messages()
        selected = self._require_selection("update")
        book = self.form.to_book(book_id=selected.id)
        return await self._submit("update", lambda: self._client.update_book(book), "Book updated successfully!")

    async def delete(self, confirmed: bool) -> bool:
        selected = self._require_selection("delete")
        if not confirmed:
            return False
        async with self.pagination.lock:
            try:
                await self._client.delete_book(selected.id)
            except BookServiceError as exc:
                logger.error("book_delete_failed", book_id=selected.id, error=str(exc))
                self.last_error = exc
                self.message = f"Error deleting book: {exc}"
                return False
            logger.info("book_deleted", book_id=selected.id)
            self.message = "Book deleted successfully!"
            self.selected = None
            self.clear_fields()
            await self._read(self.pagination.reload)
        return True

    # ── Internals ──

    def _require_selection(self, operation: str) -> Book:
        if self.selected is None:
            self.message = f"Select a book to {operation}!"
            raise PreconditionError(self.message, operation)
        if self.selected.id is None:
            self.message = f"Selected book has no id, cannot {operation} it!"
            raise PreconditionError(self.message, operation)
        return self.selected

    async def _read(self, action: Callable[[], Awaitable[object]]) -> bool:
        try:
            await action()
        except BookServiceError as exc:
            self.last_error = exc
            self.message = f"Error loading books: {exc}"
            return False
        self.rows = self.pagination.items
        self.status_label = self.pagination.page_label
        return True

    async def _submit(
        self,
        operation: str,
        send: Callable[[], Awaitable[SubmitResult]],
        success_message: str,
    ) -> WriteResult:
        async with self.pagination.lock:
            try:
                outcome = await send()
            except BookServiceError as exc:
                logger.error("book_write_failed", operation=operation, error=str(exc))
                self.last_error = exc
                self.message = f"Error saving book: {exc}"
                return TransportFailure(error=exc)

            if isinstance(outcome, Rejected):
                decoded = decode_validation_error(outcome.body)
                logger.info("book_write_rejected", operation=operation, fields=decoded.field_errors.as_dict())
                self.field_errors = decoded.field_errors
                self.message = decoded.summary_message
                return ValidationFailure(outcome=decoded)

            logger.info("book_written", operation=operation, book_id=outcome.book.id)
            self.message = success_message
            self.selected = None
            self.clear_fields()
            await self._read(self.pagination.reload)
        return outcome
