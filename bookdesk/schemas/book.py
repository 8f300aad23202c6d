"""Book schemas."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def compute_total_pages(total_count: int, page_size: int) -> int:
    """``max(1, ceil(total_count / page_size))``."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, -(-total_count // page_size))


class Book(BaseModel):
    """A book record as exchanged with the server.

    ``id`` stays ``None`` until the server assigns one. Instances are
    immutable; use :meth:`replace` to build the full replacement record
    submitted on update.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("bookId", "id"),
        serialization_alias="bookId",
    )
    title: str = ""
    author: str = ""
    isbn: str = ""
    publish_date: Optional[date] = Field(None, alias="publishDate")

    @field_validator("title", "author", "isbn", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def replace(self, **changes: Any) -> "Book":
        return Book.model_validate({**self.model_dump(), **changes})

    def to_payload(self, include_id: bool = True) -> dict[str, Any]:
        """JSON body for create (no id) or update (with id)."""
        exclude = None if include_id else {"id"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


class PageEnvelope(BaseModel):
    """List-page body; only ``content`` is consumed."""

    content: list[Book]


class PageRequest(BaseModel):
    page_index: int = Field(0, ge=0)
    page_size: int = Field(5, gt=0)
    search_text: Optional[str] = None


class PageResult(BaseModel):
    items: list[Book]
    total_count: int = Field(..., ge=0)

    def total_pages(self, page_size: int) -> int:
        return compute_total_pages(self.total_count, page_size)
