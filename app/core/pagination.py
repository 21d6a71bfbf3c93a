import math
from fastapi import Query

from app.core.config import settings


class PageParams:
    """page/limit query parameters shared by every list endpoint"""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    ):
        self.page = page
        self.limit = limit


def build_pagination(page: int, limit: int, total: int) -> dict:
    return {
        "currentPage": page,
        "totalPages": math.ceil(total / limit) if limit else 0,
        "total": total,
        "hasMore": page * limit < total,
    }
