"""
Field validation for book payloads.

Validators never raise on bad input; they return a list of
``FieldViolation`` objects so callers can report every problem at once.
Use ``ensure_valid`` to turn a non-empty list into ``BookValidationError``.
"""

import re
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from catalog.errors import BookValidationError
from catalog.models import BookCreate, FieldViolation, ViolationRule

MIN_YEAR = 1000

_ISBN13_PATTERN = re.compile(r"[0-9]{13}")


def current_year() -> int:
    return datetime.now(timezone.utc).year


def normalize_isbn(isbn: str) -> str:
    """Strip hyphens from an ISBN."""
    return isbn.replace("-", "")


def isbn13_checksum_is_valid(digits: str) -> bool:
    """
    Verify the ISBN-13 check digit.

    Args:
        digits: 13 decimal digits, hyphens already removed

    Returns:
        True if the weighted digit sum is divisible by 10
    """
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(digits))
    return total % 10 == 0


def check_not_blank(field: str, value: str) -> Optional[FieldViolation]:
    if not value.strip():
        return FieldViolation(
            field=field,
            rule=ViolationRule.EMPTY_FIELD,
            message=f"{field} must not be empty",
        )
    return None


def check_year(year: int, max_year: Optional[int] = None) -> Optional[FieldViolation]:
    upper = max_year if max_year is not None else current_year()
    if year < MIN_YEAR or year > upper:
        return FieldViolation(
            field="year",
            rule=ViolationRule.INVALID_YEAR,
            message=f"year must be between {MIN_YEAR} and {upper}, got {year}",
        )
    return None


def check_isbn(isbn: str, verify_checksum: bool = False) -> Optional[FieldViolation]:
    digits = normalize_isbn(isbn)
    if not _ISBN13_PATTERN.fullmatch(digits):
        return FieldViolation(
            field="isbn",
            rule=ViolationRule.INVALID_ISBN,
            message=f"isbn must contain exactly 13 digits (hyphens allowed), got '{isbn}'",
        )
    if verify_checksum and not isbn13_checksum_is_valid(digits):
        return FieldViolation(
            field="isbn",
            rule=ViolationRule.INVALID_ISBN,
            message=f"isbn '{isbn}' has an invalid ISBN-13 check digit",
        )
    return None


def validate_changes(changes: Mapping[str, Any], verify_checksum: bool = False) -> List[FieldViolation]:
    """
    Validate only the fields present in ``changes``.

    Args:
        changes: Mapping of field name to new value; absent fields are skipped
        verify_checksum: Also verify the ISBN-13 check digit

    Returns:
        List of violations, empty when every supplied field is valid
    """
    results = []
    for field in ("title", "author"):
        if field in changes:
            results.append(check_not_blank(field, changes[field]))
    if "year" in changes:
        results.append(check_year(changes["year"]))
    if "isbn" in changes:
        results.append(check_isbn(changes["isbn"], verify_checksum))
    return [violation for violation in results if violation is not None]


def validate_new_book(payload: BookCreate, verify_checksum: bool = False) -> List[FieldViolation]:
    """Validate every field of a create payload."""
    return validate_changes(payload.model_dump(), verify_checksum)


def ensure_valid(violations: List[FieldViolation]) -> None:
    if violations:
        raise BookValidationError(violations)
