import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from app.core.config import settings


DEFAULT_PAGE = 1

T = TypeVar('T')


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    current_page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1


def normalize_pagination(page: int | None, limit: int | None) -> tuple[int, int]:
    page = page if page is not None and page >= 1 else DEFAULT_PAGE
    limit = limit if limit is not None and limit >= 1 else settings.DEFAULT_PAGE_SIZE
    return page, limit


def paginate(db: Session, query: Select[Any], *, page: int | None, limit: int | None) -> Page[Any]:
    page, limit = normalize_pagination(page, limit)

    total = int(db.scalar(select(func.count()).select_from(query.order_by(None).subquery())) or 0)
    items = list(db.scalars(query.offset((page - 1) * limit).limit(limit)).all())
    total_pages = max(1, math.ceil(total / limit))

    return Page(
        items=items,
        current_page=page,
        page_size=limit,
        total_items=total,
        total_pages=total_pages,
    )
