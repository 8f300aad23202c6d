"""Validation error schemas for rejected writes."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VALIDATION_MESSAGE = "Validation failed"


class FieldErrors(BaseModel):
    """Per-field messages for the four editable fields; ``""`` means no error."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    author: str = ""
    isbn: str = ""
    publish_date: str = Field("", alias="publishDate")

    @property
    def has_errors(self) -> bool:
        return any((self.title, self.author, self.isbn, self.publish_date))

    def as_dict(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class ValidationOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_errors: FieldErrors = Field(default_factory=FieldErrors)
    summary_message: str = DEFAULT_VALIDATION_MESSAGE


class ValidationPayload(BaseModel):
    """Structured body the server returns with HTTP 400 on create/update."""

    errors: dict[str, Optional[str]]
    message: Optional[str] = None
