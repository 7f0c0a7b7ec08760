import math

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def clamp(page: int | None, limit: int | None) -> tuple[int, int]:
    page = max(int(page or 1), 1)
    limit = min(max(int(limit or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)
    return page, limit


def order_by(stmt: Select, model, sort_by: str | None, sort_order: str | None, allowed: set[str]) -> Select:
    column_name = sort_by if sort_by in allowed else "created_at"
    column = getattr(model, column_name)
    if (sort_order or "desc").lower() == "asc":
        return stmt.order_by(column.asc(), model.id.asc())
    return stmt.order_by(column.desc(), model.id.desc())


def paginate(db: Session, stmt: Select, page: int, limit: int) -> tuple[list, int]:
    total = db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0
    items = db.execute(stmt.offset((page - 1) * limit).limit(limit)).scalars().all()
    return list(items), int(total)


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
