"""
Startup and shutdown hooks for the UI shell.

The shell calls :func:`create_editor` once, binds its widgets to the
returned editor, and awaits :func:`shutdown` when the window closes.
"""

from __future__ import annotations

import structlog

from bookdesk.config import get_settings
from bookdesk.logging_config import setup_logging
from bookdesk.services.book_client import close_client, get_book_client
from bookdesk.services.book_editor import BookEditor
from bookdesk.services.pagination import PaginationController

logger = structlog.get_logger()


def create_editor() -> BookEditor:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("bookdesk_starting", environment=settings.environment, books_url=settings.books_url)

    client = get_book_client()
    return BookEditor(client, PaginationController(client, page_size=settings.page_size))


async def shutdown() -> None:
    logger.info("bookdesk_shutting_down")
    await close_client()
