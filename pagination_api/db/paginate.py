from typing import Any, Final, TypeVar
from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from pagination_api.schemas.pagination import Number, Page, PaginationResult

S = TypeVar("S", bound=Select[Any])

# Largest OFFSET a 64-bit SQL integer can hold
MAX_SQL_INT: Final[int] = 2**63 - 1


def _as_sql_int(value: Number) -> int:
    # OFFSET/LIMIT take whole rows; anything past MAX_SQL_INT (inf included)
    # is past the end of any table
    if value >= MAX_SQL_INT:
        return MAX_SQL_INT
    return int(value)


def apply_pagination(stmt: S, pagination: PaginationResult) -> S:
    """Apply skip/limit to a select statement."""
    limit = max(1, _as_sql_int(pagination.limit))
    return stmt.offset(_as_sql_int(pagination.skip)).limit(limit)


def count_rows(db: Session, stmt: Select[Any]) -> int:
    count_stmt = select(func.count()).select_from(
        stmt.order_by(None).subquery()
    )
    return db.scalar(count_stmt) or 0


def paginate(
    db: Session,
    stmt: Select[Any],
    pagination: PaginationResult,
) -> Page[Any]:
    """
    Run `stmt` for one page and wrap the rows with the total count.
    Single-entity selects yield entities, others yield Row objects.
    """
    total = count_rows(db, stmt)

    # Huge or infinite pages are past the end of any result set
    if pagination.skip >= MAX_SQL_INT:
        return Page[Any].build([], total, pagination)

    result = db.execute(apply_pagination(stmt, pagination))
    if len(stmt.column_descriptions) == 1:
        items = list(result.scalars().all())
    else:
        items = list(result.all())
    return Page[Any].build(items, total, pagination)
