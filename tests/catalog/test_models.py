"""
Unit tests for Pydantic models.
"""

import pytest
from pydantic import ValidationError

from catalog.models import Book, BookCreate, BookUpdate, FilterSpec, PageSpec


@pytest.fixture
def book():
    return Book(
        id=1,
        title="Clean Code",
        author="Robert Martin",
        year=2008,
        isbn="978-0132350884",
        available=True,
    )


class TestBook:
    """Test cases for the stored Book model."""

    def test_available_defaults_to_false(self):
        book = Book(id=1, title="T", author="A", year=2000, isbn="9780132350884")
        assert book.available is False

    def test_records_are_immutable(self, book):
        with pytest.raises(ValidationError):
            book.title = "Changed"

    def test_json_shape(self, book):
        assert book.model_dump() == {
            "id": 1,
            "title": "Clean Code",
            "author": "Robert Martin",
            "year": 2008,
            "isbn": "978-0132350884",
            "available": True,
        }


class TestBookCreate:
    """Test cases for the create payload."""

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            BookCreate(title="T", author="A", year=2000)

    def test_non_integer_year_rejected(self):
        with pytest.raises(ValidationError):
            BookCreate(title="T", author="A", year="recent", isbn="9780132350884")


class TestBookUpdate:
    """Test cases for partial update payloads."""

    def test_changes_only_include_supplied_fields(self):
        assert BookUpdate(title="New").changes() == {"title": "New"}

    def test_null_fields_are_dropped(self):
        update = BookUpdate.model_validate({"title": None, "available": False})
        assert update.changes() == {"available": False}

    def test_empty_update(self):
        assert BookUpdate().changes() == {}


class TestFilterSpec:
    """Test cases for filter predicates."""

    def test_empty_filter_matches_everything(self, book):
        assert FilterSpec().matches(book)

    def test_author_substring(self, book):
        assert FilterSpec(author="MART").matches(book)
        assert not FilterSpec(author="doe").matches(book)

    def test_year_and_availability(self, book):
        assert FilterSpec(year=2008, available=True).matches(book)
        assert not FilterSpec(year=2008, available=False).matches(book)
        assert not FilterSpec(year=2009).matches(book)


class TestPageSpec:
    """Test cases for the pagination window."""

    def test_offset(self):
        assert PageSpec().offset == 0
        assert PageSpec(page=3, limit=20).offset == 40

    def test_limit_bounds(self):
        with pytest.raises(ValidationError):
            PageSpec(limit=101)
        with pytest.raises(ValidationError):
            PageSpec(page=0)
