"""Offset and page-count arithmetic for paginated listings."""


def total_pages(total_rows: int, limit: int) -> int:
    """Number of pages needed to show total_rows at limit rows per page."""
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    if total_rows <= 0:
        return 0
    return -(-total_rows // limit)


def page_offset(page: int, limit: int) -> int:
    """Row offset of the first row on a 1-based page."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    return (page - 1) * limit
