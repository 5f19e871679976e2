"""
Listing parameters: raw query-string values in, an immutable QuerySpec out.

Pure transformation; nothing here touches the database.
"""
from typing import Mapping, Optional

from pydantic import BaseModel

from newsdesk.core.exceptions import InvalidParameter
from newsdesk.models.enums import ContentStatus, OrderType

ADMIN_DEFAULT_LIMIT = 10
PUBLIC_DEFAULT_LIMIT = 6
DEFAULT_PAGE = 1
DEFAULT_ORDER_BY = "created_at"
DEFAULT_ORDER_TYPE = OrderType.desc.value

# Columns a listing may be ordered by
SORTABLE_COLUMNS = ("id", "title", "status", "created_at", "updated_at")


class QuerySpec(BaseModel):
    limit: int = ADMIN_DEFAULT_LIMIT
    page: int = DEFAULT_PAGE
    order_by: str = DEFAULT_ORDER_BY
    order_type: str = DEFAULT_ORDER_TYPE
    search: str = ""
    status: str = ""
    category_id: int = 0

    class Config:
        frozen = True


def _present(value: Optional[str]) -> bool:
    return value is not None and value != ""


def _parse_int(params: Mapping[str, Optional[str]], key: str, label: str, stage: str) -> Optional[int]:
    raw = params.get(key)
    if not _present(raw):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidParameter(key, f"Invalid {label} number", stage=stage)


def normalize_query(params: Mapping[str, Optional[str]], public: bool = False) -> QuerySpec:
    """
    Build a QuerySpec from query-string values.

    public=True is the reader-facing listing: default limit 6 and status forced
    to PUBLISH. Otherwise the admin listing: default limit 10 and an optional
    `status` filter.

    Raises InvalidParameter for a non-numeric page/limit/categoryID or an
    unknown orderBy/orderType.
    """
    stage = "[QUERY] normalize_query = 1"
    default_limit = PUBLIC_DEFAULT_LIMIT if public else ADMIN_DEFAULT_LIMIT

    page = _parse_int(params, "page", "page", stage)
    limit = _parse_int(params, "limit", "limit", stage)
    category_id = _parse_int(params, "categoryID", "categoryID", stage)

    order_by = params.get("orderBy") or DEFAULT_ORDER_BY
    if order_by not in SORTABLE_COLUMNS:
        raise InvalidParameter("orderBy", f"Invalid orderBy, must be one of: {', '.join(SORTABLE_COLUMNS)}", stage=stage)

    order_type = (params.get("orderType") or DEFAULT_ORDER_TYPE).upper()
    if order_type not in (OrderType.asc.value, OrderType.desc.value):
        raise InvalidParameter("orderType", "Invalid orderType, must be ASC or DESC", stage=stage)

    if public:
        status = ContentStatus.publish.value
    else:
        status = params.get("status") or ""

    return QuerySpec(
        limit=limit if limit and limit > 0 else default_limit,
        page=page if page and page > 0 else DEFAULT_PAGE,
        order_by=order_by,
        order_type=order_type,
        search=params.get("search") or "",
        status=status,
        category_id=category_id if category_id and category_id > 0 else 0,
    )
