"""Decode the body of a rejected (HTTP 400) create/update into per-field messages."""

from __future__ import annotations

from pydantic import ValidationError

from bookdesk.schemas.validation import (
    DEFAULT_VALIDATION_MESSAGE,
    FieldErrors,
    ValidationOutcome,
    ValidationPayload,
)

FALLBACK_PREFIX = "Error parsing validation response: "


def decode_validation_error(raw_body: str) -> ValidationOutcome:
    """Turn a raw 400 body into a :class:`ValidationOutcome`.

    Never raises: a body that is not ``{"errors": {...}, "message": ...}``
    yields empty field errors and a summary embedding the raw text.
    Unknown keys in ``errors`` are ignored and a null entry means no error.
    """
    try:
        payload = ValidationPayload.model_validate_json(raw_body or "")
    except ValidationError:
        return ValidationOutcome(
            field_errors=FieldErrors(),
            summary_message=f"{FALLBACK_PREFIX}{raw_body}",
        )

    errors = payload.errors
    return ValidationOutcome(
        field_errors=FieldErrors(
            title=errors.get("title") or "",
            author=errors.get("author") or "",
            isbn=errors.get("isbn") or "",
            publish_date=errors.get("publishDate") or "",
        ),
        summary_message=payload.message or DEFAULT_VALIDATION_MESSAGE,
    )
