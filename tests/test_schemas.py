"""Tests for the book and validation schemas."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from bookdesk.schemas.book import Book, PageRequest, PageResult, compute_total_pages
from bookdesk.schemas.validation import FieldErrors


class TestTotalPages:
    @pytest.mark.parametrize(
        "total_count,expected",
        [(0, 1), (1, 1), (4, 1), (5, 1), (6, 2), (23, 5)],
    )
    def test_page_count_for_size_five(self, total_count, expected):
        assert compute_total_pages(total_count, 5) == expected

    def test_rejects_non_positive_page_size(self):
        with pytest.raises(ValueError):
            compute_total_pages(10, 0)

    def test_page_result_uses_same_formula(self):
        assert PageResult(items=[], total_count=11).total_pages(5) == 3


class TestBook:
    def test_decodes_server_field_names(self):
        book = Book.model_validate(
            {"bookId": 7, "title": "Dune", "author": "Frank Herbert",
             "isbn": "9780441013593", "publishDate": "1965-08-01"}
        )
        assert book.id == 7
        assert book.publish_date == date(1965, 8, 1)

    def test_accepts_plain_id(self):
        assert Book.model_validate({"id": 3, "title": "Emma"}).id == 3

    def test_null_text_fields_become_empty(self):
        book = Book.model_validate({"bookId": 1, "title": None, "author": None, "isbn": None})
        assert (book.title, book.author, book.isbn) == ("", "", "")

    def test_create_payload_has_no_id(self):
        book = Book(title="Dune", author="Frank Herbert", isbn="123", publish_date=date(1965, 8, 1))
        payload = book.to_payload(include_id=False)
        assert payload == {
            "title": "Dune",
            "author": "Frank Herbert",
            "isbn": "123",
            "publishDate": "1965-08-01",
        }

    def test_update_payload_carries_id(self):
        payload = Book(id=4, title="Dune").to_payload()
        assert payload["bookId"] == 4
        assert payload["publishDate"] is None

    def test_is_immutable(self):
        book = Book(id=1, title="Dune")
        with pytest.raises(ValidationError):
            book.title = "Children of Dune"

    def test_replace_builds_new_record(self):
        book = Book(id=1, title="Dune", author="Herbert")
        renamed = book.replace(title="Dune Messiah")
        assert renamed.title == "Dune Messiah"
        assert renamed.id == 1
        assert renamed.author == "Herbert"
        assert book.title == "Dune"


class TestPageRequest:
    def test_rejects_negative_index(self):
        with pytest.raises(ValidationError):
            PageRequest(page_index=-1, page_size=5)

    def test_rejects_zero_size(self):
        with pytest.raises(ValidationError):
            PageRequest(page_index=0, page_size=0)


class TestFieldErrors:
    def test_empty_by_default(self):
        errors = FieldErrors()
        assert not errors.has_errors
        assert errors.as_dict() == {"title": "", "author": "", "isbn": "", "publishDate": ""}

    def test_any_field_counts(self):
        assert FieldErrors(publish_date="must be in the past").has_errors
