"""
Query-string parsing, filtering and pagination for book listings.
"""

import math
import re
from typing import Iterable, List, Mapping, NamedTuple, Optional, Tuple

from catalog.errors import InvalidQueryParamError
from catalog.models import Book, FilterSpec, PageSpec

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class PageResult(NamedTuple):
    items: List[Book]
    total_items: int
    total_pages: int


def _parse_int(name: str, value: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(value):
        raise InvalidQueryParamError(name, value, "an integer")
    return int(value)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise InvalidQueryParamError(name, value, "'true' or 'false'")


def parse_query(params: Mapping[str, Optional[str]]) -> Tuple[FilterSpec, PageSpec]:
    """
    Turn raw query parameters into normalized filter and page specs.

    Args:
        params: Raw query-string values keyed by name; missing or ``None``
            values mean the parameter was not supplied

    Returns:
        Tuple of (FilterSpec, PageSpec)

    Raises:
        InvalidQueryParamError: If ``available``, ``year``, ``page`` or
            ``limit`` cannot be parsed
    """
    author = params.get("author")
    year = params.get("year")
    available = params.get("available")
    page = params.get("page")
    limit = params.get("limit")

    filters = FilterSpec(
        author=author,
        year=_parse_int("year", year) if year is not None else None,
        available=_parse_bool("available", available) if available is not None else None,
    )

    page_number = _parse_int("page", page) if page is not None else DEFAULT_PAGE
    page_size = _parse_int("limit", limit) if limit is not None else DEFAULT_LIMIT
    pages = PageSpec(
        page=max(1, page_number),
        limit=min(max(1, page_size), MAX_LIMIT),
    )
    return filters, pages


def count_pages(total_items: int, limit: int) -> int:
    return max(1, math.ceil(total_items / limit))


def apply_query(records: Iterable[Book], filters: FilterSpec, pages: PageSpec) -> PageResult:
    """
    Filter records and cut out the requested page.

    Input order is preserved. A page past the end yields an empty item
    list with the same totals.
    """
    matching = [book for book in records if filters.matches(book)]
    total_items = len(matching)
    items = matching[pages.offset:pages.offset + pages.limit]
    return PageResult(items=items, total_items=total_items, total_pages=count_pages(total_items, pages.limit))
