"""Tagged results for write operations."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from bookdesk.errors import BookServiceError
from bookdesk.schemas.book import Book
from bookdesk.schemas.validation import ValidationOutcome


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    book: Book


class Rejected(BaseModel):
    """Raw 400 body, handed upward untouched for the decoder."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rejected"] = "rejected"
    body: str


class ValidationFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["validation_failure"] = "validation_failure"
    outcome: ValidationOutcome


class TransportFailure(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["transport_failure"] = "transport_failure"
    error: BookServiceError


SubmitResult = Union[Success, Rejected]
WriteResult = Union[Success, ValidationFailure, TransportFailure]
