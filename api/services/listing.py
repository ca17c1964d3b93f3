"""Shared bounds for list and lookup endpoints: ids, pagination, search."""

from core.errors import BadRequestError

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Ids and page numbers are 32-bit; larger values never reach the driver
MAX_ROW_ID = 2**31 - 1
MAX_PAGE = MAX_ROW_ID


def validate_pagination(page: int, page_size: int) -> int:
    """Check page bounds and return the row offset for the page."""
    if page < 1:
        raise BadRequestError("Page must be greater than 0")
    if page > MAX_PAGE:
        raise BadRequestError(f"Page must not exceed {MAX_PAGE}")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise BadRequestError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
    return (page - 1) * page_size


def require_search_query(query: str) -> str:
    """Trimmed search text; blank queries are rejected."""
    cleaned = query.strip()
    if not cleaned:
        raise BadRequestError("Search query cannot be empty")
    return cleaned
