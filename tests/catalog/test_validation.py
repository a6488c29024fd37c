"""
Unit tests for book field validation.
"""

import pytest

from catalog.errors import BookValidationError
from catalog.models import BookCreate, ViolationRule
from catalog.validation import (
    check_isbn, check_year, current_year, ensure_valid, isbn13_checksum_is_valid,
    normalize_isbn, validate_changes, validate_new_book,
)


class TestTitleAndAuthor:
    """Test cases for blank-field checks."""

    def test_empty_title_rejected(self, sample_book_payload):
        payload = BookCreate(**{**sample_book_payload, "title": ""})
        violations = validate_new_book(payload)
        assert len(violations) == 1
        assert violations[0].field == "title"
        assert violations[0].rule == ViolationRule.EMPTY_FIELD

    def test_whitespace_author_rejected(self, sample_book_payload):
        payload = BookCreate(**{**sample_book_payload, "author": "   "})
        violations = validate_new_book(payload)
        assert [v.field for v in violations] == ["author"]

    def test_valid_payload_has_no_violations(self, sample_book):
        assert validate_new_book(sample_book) == []


class TestYear:
    """Test cases for the publication year range."""

    def test_year_3000_rejected(self):
        violation = check_year(3000)
        assert violation is not None
        assert violation.rule == ViolationRule.INVALID_YEAR

    def test_year_below_1000_rejected(self):
        assert check_year(999) is not None

    def test_bounds_accepted(self):
        assert check_year(1000) is None
        assert check_year(current_year()) is None

    def test_next_year_rejected(self):
        assert check_year(current_year() + 1) is not None

    def test_explicit_max_year(self):
        assert check_year(2001, max_year=2000) is not None


class TestISBN:
    """Test cases for ISBN-13 format checks."""

    def test_twelve_digits_rejected(self):
        violation = check_isbn("978-013235088")
        assert violation is not None
        assert violation.field == "isbn"
        assert violation.rule == ViolationRule.INVALID_ISBN

    def test_hyphenated_thirteen_digits_accepted(self):
        assert check_isbn("978-0132350884") is None

    def test_plain_digits_accepted(self):
        assert check_isbn("9781593278281") is None

    def test_letters_rejected(self):
        assert check_isbn("bad-isbn") is not None
        assert check_isbn("978013235088X") is not None

    def test_non_ascii_digits_rejected(self):
        assert check_isbn("９７８" + "０" * 10) is not None
        assert check_isbn("٩" * 13) is not None
        assert check_isbn("９７８" + "０" * 10, verify_checksum=True) is not None

    def test_normalize_strips_hyphens(self):
        assert normalize_isbn("978-0-13-235088-4") == "9780132350884"

    def test_checksum(self):
        assert isbn13_checksum_is_valid("9780132350884")
        assert not isbn13_checksum_is_valid("9780132350885")

    def test_checksum_only_enforced_when_requested(self):
        assert check_isbn("9780132350885") is None
        assert check_isbn("9780132350885", verify_checksum=True) is not None
        assert check_isbn("9780132350884", verify_checksum=True) is None


class TestPartialValidation:
    """Test cases for validating update payloads."""

    def test_absent_fields_not_checked(self):
        assert validate_changes({}) == []
        assert validate_changes({"available": True}) == []

    def test_only_supplied_fields_reported(self):
        violations = validate_changes({"year": 3000, "title": "Fine"})
        assert [v.field for v in violations] == ["year"]

    def test_multiple_violations_reported(self):
        violations = validate_changes({"title": "", "author": "", "isbn": "123"})
        assert {v.field for v in violations} == {"title", "author", "isbn"}

    def test_ensure_valid_raises(self):
        with pytest.raises(BookValidationError) as exc_info:
            ensure_valid(validate_changes({"title": " "}))

        assert "title must not be empty" in str(exc_info.value)
        assert exc_info.value.violations[0].field == "title"

    def test_ensure_valid_passes(self):
        ensure_valid([])
