import math
from dataclasses import dataclass
from fastapi import Query

MAX_LIMIT = 100
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_LIMIT, description="Items per page (max 100)"),
) -> PageParams:
    # Out of range values are clamped rather than rejected
    page = max(1, page)
    limit = min(MAX_LIMIT, max(1, limit))
    return PageParams(page=page, limit=limit)


def page_meta(total: int, params: PageParams) -> dict:
    return {
        "total": total,
        "page": params.page,
        "limit": params.limit,
        "totalPages": math.ceil(total / params.limit),
    }


def paginate(query, params: PageParams):
    """Run ``query`` for one page; return (items, total)."""
    total = query.order_by(None).count()
    items = query.offset(params.skip).limit(params.limit).all()
    return items, total
